import logging
from typing import Dict, List

from fastapi import APIRouter, status

from finance_dashboard.core.exceptions import NotFoundError
from finance_dashboard.db import dynamo
from finance_dashboard.models.transaction import (
    Transaction,
    TransactionCreate,
    TransactionUpdate,
    utc_now_iso,
)
from finance_dashboard.routers._validation import ensure_valid_id, revalidate

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[Transaction])
def list_transactions():
    return dynamo.list_transactions()


@router.post("/", response_model=Transaction, status_code=status.HTTP_201_CREATED)
def create_transaction(transaction: TransactionCreate):
    transaction_db = Transaction(**transaction.model_dump())
    dynamo.put_transaction(transaction_db.model_dump())
    logger.info(f"Created {transaction_db.type} transaction {transaction_db.transaction_id}")
    return transaction_db


@router.put("/{transaction_id}", response_model=Transaction)
def update_transaction(transaction_id: str, transaction_update: TransactionUpdate):
    ensure_valid_id(transaction_id, "transaction")
    existing = dynamo.get_transaction(transaction_id)
    if existing is None:
        raise NotFoundError("Transaction not found", details={"transaction_id": transaction_id})

    changes = transaction_update.model_dump(exclude_unset=True)
    merged = revalidate(Transaction, {**existing, **changes, "updated_at": utc_now_iso()})

    # Category may have been rewritten to "Income" during validation
    mutable_fields = {
        key: getattr(merged, key)
        for key in ("amount", "date", "description", "type", "category", "updated_at")
        if getattr(merged, key) != existing.get(key)
    }
    return dynamo.update_transaction(transaction_id, mutable_fields)


@router.delete("/{transaction_id}")
def delete_transaction(transaction_id: str) -> Dict:
    ensure_valid_id(transaction_id, "transaction")
    dynamo.delete_transaction(transaction_id)
    logger.info(f"Deleted transaction {transaction_id}")
    return {"message": "Transaction deleted successfully"}
