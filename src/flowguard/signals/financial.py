"""Financial health of the budget sheet."""

from typing import List

from flowguard.models import BudgetItem, BudgetStatus, FinancialSummary, RiskLevel
from flowguard.utils import clamp_score, round_half_up


def compute_financial_health(
    items: List[BudgetItem],
    time_remaining_percent: int,
) -> FinancialSummary:
    """Roll up budget items against the share of time already used.

    Spend on ``Cut`` items counts as waste; spend on ``Blocked`` items is
    money burning with no output.
    """
    total_budgeted = 0.0
    total_spent = 0.0
    wasted_hours = 0.0
    wasted_cost = 0.0
    blocked_cost = 0.0
    top_waste_item = ""
    max_waste = 0.0

    for item in items:
        total_budgeted += item.budgeted_cost
        total_spent += item.spent_cost

        if item.status == BudgetStatus.CUT:
            waste = item.spent_cost
            wasted_hours += item.spent_hours
            wasted_cost += waste
            if waste > max_waste:
                max_waste = waste
                top_waste_item = item.item

        if item.status == BudgetStatus.BLOCKED:
            blocked_cost += item.spent_cost

    burn_percent = round_half_up(total_spent / total_budgeted * 100) if total_budgeted > 0 else 0
    over_burn = burn_percent - (100 - time_remaining_percent)

    if over_burn > 20 or wasted_cost > total_budgeted * 0.1:
        risk = RiskLevel.HIGH
    elif over_burn > 10 or blocked_cost > total_budgeted * 0.05:
        risk = RiskLevel.MEDIUM
    else:
        risk = RiskLevel.LOW

    return FinancialSummary(
        total_budgeted_cost=total_budgeted,
        total_spent_cost=total_spent,
        burn_percent=burn_percent,
        over_burn=over_burn,
        wasted_hours=wasted_hours,
        wasted_cost=wasted_cost,
        blocked_cost=blocked_cost,
        financial_risk=risk,
        top_waste_item=top_waste_item,
    )


def compute_budget_burn_score(summary: FinancialSummary) -> int:
    """Twice the burn in excess of elapsed time, clamped to 0-100."""
    return clamp_score(max(0, summary.over_burn) * 2)
