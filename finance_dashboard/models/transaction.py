from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from finance_dashboard.core.categories import INCOME_CATEGORY

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class TransactionCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=True)

    amount: float = Field(ge=0.01)
    date: str = Field(pattern=DATE_PATTERN)  # YYYY-MM-DD, optional time suffix
    description: str = Field(min_length=1, max_length=200)
    type: TransactionType
    category: str = ""

    @model_validator(mode="after")
    def normalize_category(self):
        # Income always lands in the sentinel category
        if self.type == TransactionType.INCOME:
            self.category = INCOME_CATEGORY
        elif not self.category:
            raise ValueError("category is required for expense transactions")
        return self


class TransactionUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=True)

    amount: Optional[float] = Field(default=None, ge=0.01)
    date: Optional[str] = Field(default=None, pattern=DATE_PATTERN)
    description: Optional[str] = Field(default=None, min_length=1, max_length=200)
    type: Optional[TransactionType] = None
    category: Optional[str] = None


class Transaction(TransactionCreate):
    transaction_id: str = Field(default_factory=lambda: str(uuid4()))
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)
