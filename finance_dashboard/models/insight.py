from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class BudgetStatus(str, Enum):
    UNDER = "under"
    ON_TRACK = "on-track"
    OVER = "over"


class InsightType(str, Enum):
    TREND = "trend"
    WARNING = "warning"
    ACHIEVEMENT = "achievement"
    TIP = "tip"


class BudgetComparison(BaseModel):
    """Budget cap against actual spend for one category in one month."""

    model_config = ConfigDict(use_enum_values=True)

    category: str
    budgeted: float
    actual: float
    remaining: float
    percentage: float
    status: BudgetStatus


class SpendingInsight(BaseModel):
    """A human-readable observation about spending behaviour."""

    model_config = ConfigDict(use_enum_values=True)

    type: InsightType
    title: str
    description: str
    category: Optional[str] = None
    value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        # Remove None values for cleaner JSON responses
        return self.model_dump(exclude_none=True)
