# barberflow/routers/transactions_routes.py

from typing import List

from fastapi import APIRouter, Depends, Response

from barberflow.deps import get_ledger, require_admin
from barberflow.ledger import Ledger
from barberflow.schemas import PaymentConfirm, TransactionCreate, TransactionPublic

router = APIRouter(
    prefix="/transactions",
    tags=["transactions"],
)


@router.get("", response_model=List[TransactionPublic])
def list_transactions(
    ledger: Ledger = Depends(get_ledger),
    admin: dict = Depends(require_admin),
):
    # pending records for finished appointments are derived on read
    return ledger.list_transactions()


@router.post("", response_model=TransactionPublic, status_code=201)
def create_transaction(
    tx: TransactionCreate,
    ledger: Ledger = Depends(get_ledger),
    admin: dict = Depends(require_admin),
):
    return ledger.create_transaction(
        name=tx.name,
        method=tx.method,
        type=tx.type.value,
        value=tx.value,
        created_by=admin["email"],
        on_date=tx.date,
    )


@router.post("/{transaction_id}/confirm", response_model=TransactionPublic)
def confirm_payment(
    transaction_id: str,
    payment: PaymentConfirm,
    ledger: Ledger = Depends(get_ledger),
    admin: dict = Depends(require_admin),
):
    return ledger.confirm_payment(transaction_id, payment.method, completed_by=admin["email"])


@router.delete("/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: str,
    ledger: Ledger = Depends(get_ledger),
    admin: dict = Depends(require_admin),
):
    ledger.delete_transaction(transaction_id)
    return Response(status_code=204)
