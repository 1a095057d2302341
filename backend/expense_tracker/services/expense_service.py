from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Callable

import structlog

from ..errors import StoreFailure, ValidationFailure
from ..models import Category, Expense
from ..money import from_cents, to_cents
from ..schemas.budget import BudgetCheck
from ..schemas.expense import ExpenseCandidate
from ..store import RecordStore, in_month
from .budget_evaluator import BudgetEvaluator

logger = structlog.get_logger(__name__)

NEWEST_FIRST = (Expense.expense_date.desc(), Expense.id.desc())

# Default for update fields where None is a meaningful value
UNSET = object()


@dataclass
class SavedExpense:
    """A persisted expense and the advisory budget check made before saving it."""
    expense: Expense
    budget_check: BudgetCheck


class ExpenseService:
    """
    Validates and persists expenses and answers total/search queries over them.

    ``today`` is injectable so the no-future-dates rule can be tested.
    """

    def __init__(
        self,
        store: RecordStore,
        evaluator: BudgetEvaluator | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.store = store
        self.evaluator = evaluator or BudgetEvaluator(store)
        self.today = today

    # --- Queries ---

    def list_expenses(self) -> list[Expense]:
        return self.store.find_all(Expense, order_by=NEWEST_FIRST)

    def expenses_by_month(self, month: int, year: int) -> list[Expense]:
        return self.store.find_by_filter(Expense, *in_month(month, year), order_by=NEWEST_FIRST)

    def expenses_by_category(self, category_id: int) -> list[Expense]:
        return self.store.find_by_filter(
            Expense, Expense.category_id == category_id, order_by=NEWEST_FIRST
        )

    def expenses_by_date_range(self, start_date: date, end_date: date) -> list[Expense]:
        return self.store.find_by_filter(
            Expense,
            Expense.expense_date >= start_date,
            Expense.expense_date <= end_date,
            order_by=NEWEST_FIRST,
        )

    def get_expense(self, expense_id: int) -> Expense | None:
        return self.store.find_by_id(Expense, expense_id)

    def total_by_month(self, month: int, year: int) -> Decimal:
        return from_cents(sum(e.amount_cents for e in self.expenses_by_month(month, year)))

    def total_by_category_and_month(self, category_id: int, month: int, year: int) -> Decimal:
        return from_cents(self.store.sum_amount(category_id, month, year))

    def search(self, text: str, month: int | None = None, year: int | None = None) -> list[Expense]:
        """
        Case-insensitive match on category name or notes, or a substring of the
        amount as written with two decimals (e.g. "12.5" matches 12.50).
        """
        if month is not None and year is not None:
            expenses = self.expenses_by_month(month, year)
        else:
            expenses = self.list_expenses()

        needle = (text or "").strip().lower()
        if not needle:
            return expenses

        names = {c.id: c.name.lower() for c in self.store.find_all(Category)}
        matches = []
        for expense in expenses:
            if needle in names.get(expense.category_id, ""):
                matches.append(expense)
            elif expense.notes and needle in expense.notes.lower():
                matches.append(expense)
            elif needle in str(expense.amount):
                matches.append(expense)
        return matches

    # --- Mutations ---

    def _validate(self, amount, category_id: int, expense_date: date | None) -> int:
        """Validate expense fields; returns the amount in cents."""
        try:
            amount_cents = to_cents(amount)
        except InvalidOperation:
            logger.warning("expense_rejected", reason="invalid amount", amount=str(amount))
            raise ValidationFailure(f"Invalid expense amount: {amount}", field="amount")
        if amount_cents <= 0:
            logger.warning("expense_rejected", reason="non-positive amount", amount=str(amount))
            raise ValidationFailure(f"Expense amount must be positive: {amount}", field="amount")

        if expense_date is None:
            raise ValidationFailure("Expense date is required", field="expense_date")
        if expense_date > self.today():
            logger.warning("expense_rejected", reason="future date", expense_date=str(expense_date))
            raise ValidationFailure(
                f"Expense date is in the future: {expense_date}", field="expense_date"
            )

        if self.store.find_by_id(Category, category_id) is None:
            logger.warning("expense_rejected", reason="unknown category", category_id=category_id)
            raise ValidationFailure(f"Invalid category ID: {category_id}", field="category_id")

        return amount_cents

    def _check_budget(self, candidate: ExpenseCandidate) -> BudgetCheck:
        check = self.evaluator.validate_against_budget(candidate)
        if not check.accepted:
            # Advisory only: the expense is still saved
            logger.warning(
                "budget_validation_failed",
                category_id=candidate.category_id,
                message=check.message,
            )
        return check

    def create_expense(
        self,
        amount: Decimal,
        category_id: int,
        expense_date: date,
        notes: str | None = None,
    ) -> SavedExpense:
        amount_cents = self._validate(amount, category_id, expense_date)
        check = self._check_budget(ExpenseCandidate(
            amount=from_cents(amount_cents),
            category_id=category_id,
            expense_date=expense_date,
            notes=notes,
        ))

        expense = Expense(
            amount_cents=amount_cents,
            category_id=category_id,
            expense_date=expense_date,
            notes=notes,
        )
        if not self.store.save(expense):
            raise StoreFailure("insert expense")
        return SavedExpense(expense=expense, budget_check=check)

    def update_expense(
        self,
        expense: Expense,
        amount: Decimal | None = None,
        category_id: int | None = None,
        expense_date: date | None = None,
        notes: str | None = UNSET,
    ) -> SavedExpense:
        """Change the given fields; passing notes=None clears the notes."""
        amount = amount if amount is not None else expense.amount
        category_id = category_id if category_id is not None else expense.category_id
        expense_date = expense_date if expense_date is not None else expense.expense_date
        notes = expense.notes if notes is UNSET else notes

        amount_cents = self._validate(amount, category_id, expense_date)
        # Checked before the record changes so the stored amount can be taken out
        check = self._check_budget(ExpenseCandidate(
            id=expense.id,
            amount=from_cents(amount_cents),
            category_id=category_id,
            expense_date=expense_date,
            notes=notes,
        ))

        expense.amount_cents = amount_cents
        expense.category_id = category_id
        expense.expense_date = expense_date
        expense.notes = notes
        if not self.store.save(expense):
            raise StoreFailure(f"update expense {expense.id}")
        return SavedExpense(expense=expense, budget_check=check)

    def delete_expense(self, expense: Expense) -> None:
        if not self.store.delete(Expense, expense.id):
            raise StoreFailure(f"delete expense {expense.id}")
