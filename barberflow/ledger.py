# barberflow/ledger.py
#
# Cash-flow records. An appointment whose end time has passed gets one
# pending income record; staff confirm it once paid. Cancelling an
# appointment later does not touch its record.

import logging
from datetime import date, datetime, time
from typing import List, Optional

from sqlmodel import Session, select

from barberflow.core import parse_time
from barberflow.errors import TransactionNotFound
from barberflow.models import Appointment, Client, Service, Transaction

logger = logging.getLogger(__name__)

INCOME = "income"
EXPENSE = "expense"
AWAITING_PAYMENT = "awaiting"


def appointment_transaction_id(appointment_id: int) -> str:
    return f"#APP{appointment_id:03d}"


def appointment_end(appt: Appointment) -> datetime:
    end = parse_time(appt.end_time)
    return datetime.combine(appt.date, time(end // 60, end % 60))


class Ledger:
    def __init__(self, session: Session):
        self.session = session

    def list_transactions(self, now: Optional[datetime] = None) -> List[Transaction]:
        self.sync_pending_transactions(now or datetime.now())
        return self.session.exec(
            select(Transaction).order_by(Transaction.date.desc(), Transaction.id)
        ).all()

    def sync_pending_transactions(self, now: datetime) -> List[Transaction]:
        """Create a pending record for every finished appointment that lacks one."""
        recorded = set(
            self.session.exec(
                select(Transaction.appointment_id).where(Transaction.appointment_id.is_not(None))
            ).all()
        )

        created = []
        for appt in self.session.exec(select(Appointment)).all():
            if appt.id in recorded or appointment_end(appt) >= now:
                continue
            client = self.session.get(Client, appt.client_id)
            service = self.session.get(Service, appt.service_id)
            if client is None or service is None:
                continue
            tx = Transaction(
                id=appointment_transaction_id(appt.id),
                date=appt.date,
                name=f"{service.name} - {client.name}",
                method=AWAITING_PAYMENT,
                type=INCOME,
                value=service.price,
                appointment_id=appt.id,
                payment_status="pending",
            )
            self.session.add(tx)
            created.append(tx)

        if created:
            self.session.commit()
            logger.info("Derived %d pending transactions from finished appointments", len(created))
        return created

    def create_transaction(self, name: str, method: str, type: str, value: float, created_by: str,
                           on_date: Optional[date] = None) -> Transaction:
        tx = Transaction(
            id=self._next_order_id(),
            date=on_date or date.today(),
            name=name,
            method=method,
            type=type,
            value=value,
            payment_status="completed",
            completed_by=created_by,
        )
        self.session.add(tx)
        self.session.commit()
        self.session.refresh(tx)
        return tx

    def confirm_payment(self, transaction_id: str, method: str, completed_by: str) -> Transaction:
        tx = self.session.get(Transaction, transaction_id)
        if tx is None:
            raise TransactionNotFound(transaction_id)
        tx.method = method
        tx.payment_status = "completed"
        tx.completed_by = completed_by
        self.session.add(tx)
        self.session.commit()
        self.session.refresh(tx)
        logger.info("Payment %s confirmed by %s", transaction_id, completed_by)
        return tx

    def delete_transaction(self, transaction_id: str) -> None:
        tx = self.session.get(Transaction, transaction_id)
        if tx is None:
            raise TransactionNotFound(transaction_id)
        self.session.delete(tx)
        self.session.commit()

    def _next_order_id(self) -> str:
        number = len(self.session.exec(select(Transaction.id).where(Transaction.id.startswith("#ORD"))).all()) + 1
        while self.session.get(Transaction, f"#ORD{number:03d}") is not None:
            number += 1
        return f"#ORD{number:03d}"
