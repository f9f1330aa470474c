import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query, status

from finance_dashboard.core.exceptions import NotFoundError
from finance_dashboard.db import dynamo
from finance_dashboard.models.budget import MONTH_PATTERN, Budget, BudgetCreate, BudgetUpdate
from finance_dashboard.models.transaction import utc_now_iso
from finance_dashboard.routers._validation import ensure_valid_id, revalidate

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[Budget])
def list_budgets(month: Optional[str] = Query(default=None, pattern=MONTH_PATTERN)):
    """
    month must follow YYYY-MM format. Example: 2024-05
    """
    return dynamo.list_budgets(month)


@router.post("/", response_model=Budget, status_code=status.HTTP_201_CREATED)
def create_budget(budget: BudgetCreate):
    budget_db = Budget(**budget.model_dump())
    dynamo.put_budget(budget_db.model_dump())
    logger.info(f"Created budget {budget_db.budget_id} for {budget_db.category} in {budget_db.month}")
    return budget_db


@router.put("/{budget_id}", response_model=Budget)
def update_budget(budget_id: str, budget_update: BudgetUpdate):
    ensure_valid_id(budget_id, "budget")
    changes = budget_update.model_dump(exclude_unset=True, exclude_none=True)
    if not changes:
        raise HTTPException(status_code=400, detail="No fields to update")

    existing = dynamo.get_budget(budget_id)
    if existing is None:
        raise NotFoundError("Budget not found", details={"budget_id": budget_id})

    changes["updated_at"] = utc_now_iso()
    revalidate(Budget, {**existing, **changes})
    return dynamo.update_budget(budget_id, changes)


@router.delete("/{budget_id}")
def delete_budget(budget_id: str) -> Dict:
    ensure_valid_id(budget_id, "budget")
    dynamo.delete_budget(budget_id)
    logger.info(f"Deleted budget {budget_id}")
    return {"message": "Budget deleted successfully"}
