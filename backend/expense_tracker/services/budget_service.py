from decimal import Decimal, InvalidOperation

import structlog

from ..errors import StoreFailure, ValidationFailure
from ..models import Budget, Category
from ..money import to_cents
from ..store import RecordStore

logger = structlog.get_logger(__name__)

MIN_YEAR = 1900
MAX_YEAR = 2100


def validate_period(month: int, year: int) -> None:
    if not 1 <= month <= 12:
        raise ValidationFailure(f"Invalid month: {month}", field="month")
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationFailure(f"Invalid year: {year}", field="year")


class BudgetService:
    def __init__(self, store: RecordStore):
        self.store = store

    def list_budgets(self) -> list[Budget]:
        return self.store.find_all(
            Budget, order_by=(Budget.year.desc(), Budget.month.desc(), Budget.category_id)
        )

    def budgets_by_month(self, month: int, year: int) -> list[Budget]:
        return self.store.find_by_filter(
            Budget,
            Budget.month == month,
            Budget.year == year,
            order_by=(Budget.category_id,),
        )

    def get_budget(self, budget_id: int) -> Budget | None:
        return self.store.find_by_id(Budget, budget_id)

    def get_budget_for(self, category_id: int, month: int, year: int) -> Budget | None:
        return self.store.find_one(
            Budget,
            Budget.category_id == category_id,
            Budget.month == month,
            Budget.year == year,
        )

    def budget_exists(self, category_id: int, month: int, year: int) -> bool:
        return self.get_budget_for(category_id, month, year) is not None

    def _validate(
        self,
        category_id: int,
        amount: Decimal,
        month: int,
        year: int,
        budget_id: int | None = None,
    ) -> int:
        """Validate budget fields; returns the amount in cents."""
        try:
            amount = Decimal(str(amount))
            amount_cents = to_cents(amount)
        except InvalidOperation:
            logger.warning("budget_rejected", reason="invalid amount", amount=str(amount))
            raise ValidationFailure(f"Invalid budget amount: {amount}", field="amount")
        if amount < 0:
            logger.warning("budget_rejected", reason="negative amount", amount=str(amount))
            raise ValidationFailure(f"Budget amount cannot be negative: {amount}", field="amount")

        validate_period(month, year)

        if self.store.find_by_id(Category, category_id) is None:
            logger.warning("budget_rejected", reason="unknown category", category_id=category_id)
            raise ValidationFailure(f"Category not found: {category_id}", field="category_id")

        existing = self.get_budget_for(category_id, month, year)
        if existing is not None and existing.id != budget_id:
            raise ValidationFailure(
                f"A budget already exists for this category in {year}-{month:02d}",
                field="category_id",
            )
        return amount_cents

    def create_budget(self, category_id: int, amount: Decimal, month: int, year: int) -> Budget:
        amount_cents = self._validate(category_id, amount, month, year)
        budget = Budget(category_id=category_id, amount_cents=amount_cents, month=month, year=year)
        if not self.store.save(budget):
            raise StoreFailure("insert budget")
        return budget

    def update_budget(
        self,
        budget: Budget,
        category_id: int | None = None,
        amount: Decimal | None = None,
        month: int | None = None,
        year: int | None = None,
    ) -> Budget:
        category_id = category_id if category_id is not None else budget.category_id
        month = month if month is not None else budget.month
        year = year if year is not None else budget.year
        amount = amount if amount is not None else budget.amount

        amount_cents = self._validate(category_id, amount, month, year, budget_id=budget.id)

        budget.category_id = category_id
        budget.amount_cents = amount_cents
        budget.month = month
        budget.year = year
        if not self.store.save(budget):
            raise StoreFailure(f"update budget {budget.id}")
        return budget

    def delete_budget(self, budget: Budget) -> None:
        if not self.store.delete(Budget, budget.id):
            raise StoreFailure(f"delete budget {budget.id}")
