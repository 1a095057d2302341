from datetime import date
from decimal import Decimal

import pytest

from expense_tracker.errors import ValidationFailure
from expense_tracker.models import Expense
from expense_tracker.schemas import BudgetState

from .conftest import TODAY


class TestCreateExpense:
    def test_saved_with_passing_check(self, expense_service, food):
        saved = expense_service.create_expense(Decimal("12.34"), food.id, date(2024, 6, 2), "lunch")

        assert saved.expense.id is not None
        assert saved.expense.amount == Decimal("12.34")
        assert saved.expense.amount_cents == 1234
        assert saved.budget_check.accepted

    def test_amount_rounded_to_cents(self, expense_service, food):
        saved = expense_service.create_expense(Decimal("10.005"), food.id, date(2024, 6, 2))
        assert saved.expense.amount == Decimal("10.01")

    def test_today_is_allowed(self, expense_service, food):
        assert expense_service.create_expense(Decimal("1"), food.id, TODAY).expense.id

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5"), Decimal("0.004"), "abc", Decimal("NaN")])
    def test_non_positive_amount_rejected(self, expense_service, store, food, amount):
        with pytest.raises(ValidationFailure) as exc_info:
            expense_service.create_expense(amount, food.id, date(2024, 6, 2))
        assert exc_info.value.field == "amount"
        assert store.count(Expense) == 0

    @pytest.mark.parametrize("amount", ["1e30", Decimal("Infinity"), Decimal("1e17")])
    def test_unstorable_amount_rejected(self, expense_service, store, food, amount):
        with pytest.raises(ValidationFailure) as exc_info:
            expense_service.create_expense(amount, food.id, date(2024, 6, 2))
        assert exc_info.value.field == "amount"
        assert store.count(Expense) == 0

    def test_future_date_rejected(self, expense_service, store, food):
        with pytest.raises(ValidationFailure) as exc_info:
            expense_service.create_expense(Decimal("5"), food.id, date(2024, 7, 1))
        assert exc_info.value.field == "expense_date"
        assert store.count(Expense) == 0

    def test_unknown_category_rejected(self, expense_service, store):
        with pytest.raises(ValidationFailure) as exc_info:
            expense_service.create_expense(Decimal("5"), 999, date(2024, 6, 1))
        assert exc_info.value.field == "category_id"
        assert store.count(Expense) == 0

    def test_over_budget_is_still_saved(self, expense_service, evaluator, food, add_budget):
        add_budget(food, 20, 6, 2024)

        saved = expense_service.create_expense(Decimal("25"), food.id, date(2024, 6, 2))

        assert saved.expense.id is not None
        assert saved.budget_check.accepted is False
        assert "5.00" in saved.budget_check.message
        assert evaluator.evaluate(food.id, 6, 2024).status == BudgetState.EXCEEDED


class TestUpdateExpense:
    def test_partial_update(self, expense_service, food, transport):
        saved = expense_service.create_expense(Decimal("10"), food.id, date(2024, 6, 2), "bus")

        updated = expense_service.update_expense(saved.expense, category_id=transport.id)

        assert updated.expense.category_id == transport.id
        assert updated.expense.amount == Decimal("10.00")
        assert updated.expense.notes == "bus"

    def test_notes_can_be_cleared(self, expense_service, food):
        saved = expense_service.create_expense(Decimal("10"), food.id, date(2024, 6, 2), "bus")

        updated = expense_service.update_expense(saved.expense, notes=None)

        assert updated.expense.notes is None
        assert expense_service.get_expense(saved.expense.id).notes is None

    def test_invalid_update_leaves_record_untouched(self, expense_service, food):
        saved = expense_service.create_expense(Decimal("10"), food.id, date(2024, 6, 2))

        with pytest.raises(ValidationFailure):
            expense_service.update_expense(saved.expense, amount=Decimal("-1"))

        assert expense_service.get_expense(saved.expense.id).amount == Decimal("10.00")

    def test_raising_amount_checks_against_other_spend_only(self, expense_service, food, add_budget):
        add_budget(food, 100, 6, 2024)
        saved = expense_service.create_expense(Decimal("60"), food.id, date(2024, 6, 2))

        updated = expense_service.update_expense(saved.expense, amount=Decimal("100"))

        assert updated.budget_check.accepted
        assert updated.expense.amount == Decimal("100.00")


class TestQueries:
    def test_month_listing_newest_first(self, expense_service, food, add_expense):
        add_expense(food, 1, date(2024, 6, 1))
        add_expense(food, 2, date(2024, 6, 30))
        add_expense(food, 3, date(2024, 6, 15))
        add_expense(food, 4, date(2024, 7, 1))

        days = [e.expense_date.day for e in expense_service.expenses_by_month(6, 2024)]
        assert days == [30, 15, 1]

    def test_date_range_is_inclusive(self, expense_service, food, add_expense):
        add_expense(food, 1, date(2024, 6, 1))
        add_expense(food, 2, date(2024, 6, 10))
        add_expense(food, 3, date(2024, 6, 11))

        found = expense_service.expenses_by_date_range(date(2024, 6, 1), date(2024, 6, 10))
        assert sorted(e.amount for e in found) == [Decimal("1.00"), Decimal("2.00")]

    def test_by_category(self, expense_service, food, transport, add_expense):
        add_expense(food, 1, date(2024, 6, 1))
        add_expense(transport, 2, date(2024, 6, 1))

        assert [e.category_id for e in expense_service.expenses_by_category(transport.id)] == [transport.id]

    def test_totals(self, expense_service, food, transport, add_expense):
        add_expense(food, "10.10", date(2024, 6, 1))
        add_expense(transport, "0.20", date(2024, 6, 2))
        add_expense(food, 99, date(2024, 5, 2))

        assert expense_service.total_by_month(6, 2024) == Decimal("10.30")
        assert expense_service.total_by_category_and_month(food.id, 6, 2024) == Decimal("10.10")

    def test_delete(self, expense_service, food, add_expense):
        expense = add_expense(food, 1, date(2024, 6, 1))
        expense_service.delete_expense(expense)
        assert expense_service.get_expense(expense.id) is None


class TestSearch:
    @pytest.fixture
    def expenses(self, food, transport, add_expense):
        return [
            add_expense(food, "12.50", date(2024, 6, 1), "Pizza night"),
            add_expense(transport, 40, date(2024, 6, 2), "Train ticket"),
            add_expense(food, 8, date(2024, 5, 3), "coffee"),
        ]

    def test_matches_category_name(self, expense_service, expenses):
        assert len(expense_service.search("food")) == 2

    def test_matches_notes_case_insensitive(self, expense_service, expenses):
        assert [e.notes for e in expense_service.search("TICKET")] == ["Train ticket"]

    def test_matches_amount_text(self, expense_service, expenses):
        assert [e.notes for e in expense_service.search("12.5")] == ["Pizza night"]

    def test_limited_to_month(self, expense_service, expenses):
        assert [e.notes for e in expense_service.search("food", month=5, year=2024)] == ["coffee"]

    def test_blank_returns_everything(self, expense_service, expenses):
        assert len(expense_service.search("  ")) == 3
