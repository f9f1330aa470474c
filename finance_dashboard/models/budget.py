from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from finance_dashboard.models.transaction import utc_now_iso
from finance_dashboard.utils.months import MONTH_PATTERN


class BudgetCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    category: str = Field(min_length=1)
    amount: float = Field(ge=0.01)
    month: str = Field(pattern=MONTH_PATTERN)  # YYYY-MM


class BudgetUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    category: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[float] = Field(default=None, ge=0.01)
    month: Optional[str] = Field(default=None, pattern=MONTH_PATTERN)


class Budget(BudgetCreate):
    budget_id: str = Field(default_factory=lambda: str(uuid4()))
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)
