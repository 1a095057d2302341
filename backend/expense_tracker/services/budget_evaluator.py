from decimal import Decimal, InvalidOperation

import structlog

from ..config import WARNING_THRESHOLD
from ..errors import ValidationFailure
from ..models import Budget, Category, Expense
from ..money import from_cents, format_amount, to_cents
from ..schemas.budget import BudgetCheck, BudgetState, BudgetStatus, CategoryBudgetStatus
from ..schemas.expense import ExpenseCandidate
from ..store import RecordStore

logger = structlog.get_logger(__name__)


def utilization_percent(budget_cents: int, spent_cents: int) -> float:
    """
    Spent as a percentage of the budget.

    A zero budget counts as 100% used once anything is spent, 0% otherwise.
    """
    if budget_cents == 0:
        return 100.0 if spent_cents > 0 else 0.0
    return spent_cents / budget_cents * 100.0


def classify(
    budget_cents: int,
    spent_cents: int,
    warning_threshold: float = WARNING_THRESHOLD,
) -> BudgetState:
    """
    Classify spend against a budget. First match wins:

    1. remaining < 0                      -> EXCEEDED
    2. utilization >= warning threshold   -> WARNING
    3. otherwise                          -> OK

    remaining == 0 is never EXCEEDED.
    """
    if budget_cents - spent_cents < 0:
        return BudgetState.EXCEEDED

    # Compare in exact arithmetic so 90.00% of a budget lands on WARNING
    threshold = Decimal(str(warning_threshold))
    if budget_cents == 0:
        reached = spent_cents > 0
    else:
        reached = Decimal(spent_cents) >= threshold * budget_cents
    if reached:
        return BudgetState.WARNING
    return BudgetState.OK


def no_budget_status() -> BudgetStatus:
    zero = from_cents(0)
    return BudgetStatus(
        status=BudgetState.NO_BUDGET,
        budget_amount=zero,
        spent_amount=zero,
        remaining_amount=zero,
        utilization=0.0,
    )


class BudgetEvaluator:
    """
    Derives budget status from stored budgets and expenses.

    Every call reads the store afresh; nothing is cached.
    """

    def __init__(self, store: RecordStore, warning_threshold: float = WARNING_THRESHOLD):
        self.store = store
        self.warning_threshold = warning_threshold

    def _find_budget(self, category_id: int, month: int, year: int) -> Budget | None:
        return self.store.find_one(
            Budget,
            Budget.category_id == category_id,
            Budget.month == month,
            Budget.year == year,
        )

    def evaluate(self, category_id: int, month: int, year: int) -> BudgetStatus:
        """Spent vs allocated for one category-month. NO_BUDGET when none is configured."""
        budget = self._find_budget(category_id, month, year)
        if budget is None:
            return no_budget_status()

        spent_cents = self.store.sum_amount(category_id, month, year)
        return self._status_for(budget, spent_cents)

    def _status_for(self, budget: Budget, spent_cents: int) -> BudgetStatus:
        return BudgetStatus(
            status=classify(budget.amount_cents, spent_cents, self.warning_threshold),
            budget_amount=budget.amount,
            spent_amount=from_cents(spent_cents),
            remaining_amount=from_cents(budget.amount_cents - spent_cents),
            utilization=utilization_percent(budget.amount_cents, spent_cents),
        )

    def utilization(self, category_id: int, month: int, year: int) -> float:
        """Utilization percentage; 0.0 when no budget is configured."""
        return self.evaluate(category_id, month, year).utilization

    def validate_against_budget(self, candidate: ExpenseCandidate) -> BudgetCheck:
        """
        Advisory check run before saving an expense.

        The candidate is not yet persisted, so its amount is added to the
        current spend. When it edits a stored expense in the same
        category-month, the stored amount is taken out first.
        """
        try:
            candidate_cents = to_cents(candidate.amount)
        except InvalidOperation:
            raise ValidationFailure(f"Invalid expense amount: {candidate.amount}", field="amount")

        month = candidate.expense_date.month
        year = candidate.expense_date.year

        budget = self._find_budget(candidate.category_id, month, year)
        if budget is None:
            return BudgetCheck(
                accepted=True,
                message="No budget configured for this category and month",
            )

        current_cents = self.store.sum_amount(candidate.category_id, month, year)
        if candidate.id is not None:
            stored = self.store.find_by_id(Expense, candidate.id)
            if (
                stored is not None
                and stored.category_id == candidate.category_id
                and stored.expense_date.month == month
                and stored.expense_date.year == year
            ):
                current_cents -= stored.amount_cents

        projected_cents = current_cents + candidate_cents
        projected = from_cents(projected_cents)

        if projected_cents > budget.amount_cents:
            overage = from_cents(projected_cents - budget.amount_cents)
            return BudgetCheck(
                accepted=False,
                message=f"This expense will exceed the budget by ${format_amount(overage)}",
                projected_total=projected,
                overage=overage,
            )

        return BudgetCheck(
            accepted=True,
            message="Budget validation passed",
            projected_total=projected,
        )

    def month_overview(self, month: int, year: int) -> list[CategoryBudgetStatus]:
        """Status of every category that has a budget for the month, by category name."""
        budgets = {
            b.category_id: b
            for b in self.store.find_by_filter(Budget, Budget.month == month, Budget.year == year)
        }
        if not budgets:
            return []

        overview = []
        for category in self.store.find_all(Category, order_by=(Category.name,)):
            budget = budgets.get(category.id)
            if budget is None:
                continue
            status = self._status_for(budget, self.store.sum_amount(category.id, month, year))
            overview.append(CategoryBudgetStatus(
                category_id=category.id,
                category_name=category.name,
                color=category.color,
                **status.model_dump(),
            ))
        return overview
