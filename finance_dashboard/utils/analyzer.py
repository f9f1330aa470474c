from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Optional, Sequence

from finance_dashboard.core.config import settings
from finance_dashboard.models.budget import Budget
from finance_dashboard.models.insight import (
    BudgetComparison,
    BudgetStatus,
    InsightType,
    SpendingInsight,
)
from finance_dashboard.models.transaction import Transaction, TransactionType
from finance_dashboard.utils.currency import format_currency
from finance_dashboard.utils.months import current_month, in_month, previous_month, utc_today

OVER_BUDGET_PERCENT = 100.0
ON_TRACK_PERCENT = 80.0

STAYING_ON_TRACK_MESSAGE = (
    "You're managing your budget well! Consider setting aside extra savings for future goals."
)


@dataclass(frozen=True)
class InsightThresholds:
    """Tunable heuristics behind the generated spending insights."""

    increase_percent: float = 20.0
    decrease_percent: float = -10.0
    budget_alert_percent: float = 90.0
    spike_percent: float = 50.0
    # Absolute floor in the stored currency unit; keeps tiny categories quiet
    spike_min_amount: float = 100.0
    max_insights: int = 5

    @classmethod
    def from_settings(cls) -> InsightThresholds:
        return cls(
            increase_percent=settings.INSIGHT_INCREASE_PERCENT,
            decrease_percent=settings.INSIGHT_DECREASE_PERCENT,
            budget_alert_percent=settings.INSIGHT_BUDGET_ALERT_PERCENT,
            spike_percent=settings.INSIGHT_SPIKE_PERCENT,
            spike_min_amount=settings.INSIGHT_SPIKE_MIN_AMOUNT,
            max_insights=settings.INSIGHT_MAX_COUNT,
        )


def classify_status(percentage: float) -> BudgetStatus:
    if percentage > OVER_BUDGET_PERCENT:
        return BudgetStatus.OVER
    if percentage >= ON_TRACK_PERCENT:
        return BudgetStatus.ON_TRACK
    return BudgetStatus.UNDER


def percent_change(current: float, previous: float) -> float:
    return (current - previous) / previous * 100


def month_expenses(transactions: Sequence[Transaction], month: str) -> List[Transaction]:
    return [
        t for t in transactions
        if t.type == TransactionType.EXPENSE and in_month(t.date, month)
    ]


class BudgetAnalyzer:
    """
    Derives budget-vs-actual comparisons and spending insights from a snapshot
    of transactions and budgets. Holds configuration only, so one instance can
    be shared by every request.
    """

    def __init__(
        self,
        thresholds: Optional[InsightThresholds] = None,
        formatter: Callable[[float], str] = format_currency,
    ) -> None:
        self._thresholds = thresholds or InsightThresholds()
        self._format = formatter

    @property
    def thresholds(self) -> InsightThresholds:
        return self._thresholds

    def compare_budgets(
        self,
        budgets: Sequence[Budget],
        transactions: Sequence[Transaction],
        month: str,
    ) -> List[BudgetComparison]:
        """One comparison per budget, in the order the budgets were given."""
        actual_spending: Dict[str, float] = defaultdict(float)
        for t in month_expenses(transactions, month):
            actual_spending[t.category] += t.amount

        comparisons = []
        for budget in budgets:
            actual = actual_spending.get(budget.category, 0.0)
            percentage = actual / budget.amount * 100 if budget.amount > 0 else 0.0
            comparisons.append(
                BudgetComparison(
                    category=budget.category,
                    budgeted=budget.amount,
                    actual=actual,
                    remaining=budget.amount - actual,
                    percentage=percentage,
                    status=classify_status(percentage),
                )
            )
        return comparisons

    def generate_insights(
        self,
        transactions: Sequence[Transaction],
        comparisons: Sequence[BudgetComparison],
        reference_date: Optional[date] = None,
    ) -> List[SpendingInsight]:
        """
        Build at most ``max_insights`` insights relative to the month of
        ``reference_date`` (today, UTC, when omitted) and the month before it.
        """
        this_month = current_month(reference_date or utc_today())
        last_month = previous_month(this_month)
        current_expenses = month_expenses(transactions, this_month)
        previous_expenses = month_expenses(transactions, last_month)

        insights: List[SpendingInsight] = []
        insights.extend(self._trend_insights(current_expenses, previous_expenses))
        insights.extend(self._budget_insights(comparisons))
        insights.extend(self._spike_insights(current_expenses, previous_expenses))

        if not any(i.type == InsightType.WARNING for i in insights):
            insights.append(
                SpendingInsight(
                    type=InsightType.TIP,
                    title="Staying on Track",
                    description=STAYING_ON_TRACK_MESSAGE,
                )
            )

        return insights[: self._thresholds.max_insights]

    def _trend_insights(
        self,
        current_expenses: List[Transaction],
        previous_expenses: List[Transaction],
    ) -> List[SpendingInsight]:
        current_total = sum(t.amount for t in current_expenses)
        previous_total = sum(t.amount for t in previous_expenses)
        if previous_total <= 0:
            return []

        change = percent_change(current_total, previous_total)
        if change > self._thresholds.increase_percent:
            return [
                SpendingInsight(
                    type=InsightType.WARNING,
                    title="Spending Increased",
                    description=f"Your spending is {change:.1f}% higher than last month",
                    value=self._format(current_total - previous_total),
                )
            ]
        if change < self._thresholds.decrease_percent:
            return [
                SpendingInsight(
                    type=InsightType.ACHIEVEMENT,
                    title="Great Savings!",
                    description=f"You've reduced spending by {abs(change):.1f}% compared to last month",
                    value=self._format(previous_total - current_total),
                )
            ]
        return []

    def _budget_insights(self, comparisons: Sequence[BudgetComparison]) -> List[SpendingInsight]:
        insights = []
        for comparison in comparisons:
            if comparison.status == BudgetStatus.OVER:
                insights.append(
                    SpendingInsight(
                        type=InsightType.WARNING,
                        title="Budget Exceeded",
                        description=(
                            f"You've exceeded your {comparison.category} budget by "
                            f"{comparison.percentage - 100:.1f}%"
                        ),
                        category=comparison.category,
                        value=self._format(comparison.actual - comparison.budgeted),
                    )
                )
            elif (
                comparison.status == BudgetStatus.ON_TRACK
                and comparison.percentage >= self._thresholds.budget_alert_percent
            ):
                insights.append(
                    SpendingInsight(
                        type=InsightType.WARNING,
                        title="Budget Alert",
                        description=f"You're close to your {comparison.category} budget limit",
                        category=comparison.category,
                        value=self._format(comparison.remaining),
                    )
                )
        return insights

    def _spike_insights(
        self,
        current_expenses: List[Transaction],
        previous_expenses: List[Transaction],
    ) -> List[SpendingInsight]:
        # Categories keep first-seen order, current month before previous
        category_spending: Dict[str, Dict[str, float]] = {}
        for t in current_expenses:
            category_spending.setdefault(t.category, {"current": 0.0, "last": 0.0})["current"] += t.amount
        for t in previous_expenses:
            category_spending.setdefault(t.category, {"current": 0.0, "last": 0.0})["last"] += t.amount

        insights = []
        for category, amounts in category_spending.items():
            if amounts["last"] <= 0:
                continue
            change = percent_change(amounts["current"], amounts["last"])
            if change > self._thresholds.spike_percent and amounts["current"] > self._thresholds.spike_min_amount:
                insights.append(
                    SpendingInsight(
                        type=InsightType.TREND,
                        title="Category Spike",
                        description=f"{category} spending increased by {change:.1f}% this month",
                        category=category,
                        value=self._format(amounts["current"] - amounts["last"]),
                    )
                )
        return insights
