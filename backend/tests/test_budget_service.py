from decimal import Decimal

import pytest

from expense_tracker.errors import ValidationFailure
from expense_tracker.models import Budget


class TestCreateBudget:
    def test_create(self, budget_service, food):
        budget = budget_service.create_budget(food.id, Decimal("250.5"), 6, 2024)

        assert budget.id is not None
        assert budget.amount == Decimal("250.50")
        assert budget_service.budget_exists(food.id, 6, 2024)
        assert not budget_service.budget_exists(food.id, 7, 2024)

    def test_zero_amount_allowed(self, budget_service, food):
        assert budget_service.create_budget(food.id, Decimal("0"), 6, 2024).amount_cents == 0

    @pytest.mark.parametrize("amount, month, year, field", [
        (Decimal("-1"), 6, 2024, "amount"),
        ("1e30", 6, 2024, "amount"),
        (Decimal("1e17"), 6, 2024, "amount"),
        (Decimal("10"), 0, 2024, "month"),
        (Decimal("10"), 13, 2024, "month"),
        (Decimal("10"), 6, 1899, "year"),
        (Decimal("10"), 6, 2101, "year"),
    ])
    def test_invalid_fields(self, budget_service, store, food, amount, month, year, field):
        with pytest.raises(ValidationFailure) as exc_info:
            budget_service.create_budget(food.id, amount, month, year)
        assert exc_info.value.field == field
        assert store.count(Budget) == 0

    def test_unknown_category(self, budget_service):
        with pytest.raises(ValidationFailure) as exc_info:
            budget_service.create_budget(42, Decimal("10"), 6, 2024)
        assert exc_info.value.field == "category_id"

    def test_duplicate_period_rejected_not_overwritten(self, budget_service, food):
        budget_service.create_budget(food.id, Decimal("100"), 6, 2024)

        with pytest.raises(ValidationFailure, match="already exists"):
            budget_service.create_budget(food.id, Decimal("500"), 6, 2024)

        assert budget_service.get_budget_for(food.id, 6, 2024).amount == Decimal("100.00")

    def test_same_month_other_category_allowed(self, budget_service, food, transport):
        budget_service.create_budget(food.id, Decimal("100"), 6, 2024)
        budget_service.create_budget(transport.id, Decimal("100"), 6, 2024)

        assert len(budget_service.budgets_by_month(6, 2024)) == 2


class TestUpdateBudget:
    def test_change_amount_keeps_own_period(self, budget_service, food):
        budget = budget_service.create_budget(food.id, Decimal("100"), 6, 2024)

        budget_service.update_budget(budget, amount=Decimal("120"))

        assert budget_service.get_budget(budget.id).amount == Decimal("120.00")

    def test_move_onto_taken_period_rejected(self, budget_service, food):
        budget_service.create_budget(food.id, Decimal("100"), 6, 2024)
        july = budget_service.create_budget(food.id, Decimal("100"), 7, 2024)

        with pytest.raises(ValidationFailure):
            budget_service.update_budget(july, month=6)
        assert budget_service.get_budget(july.id).month == 7


def test_list_newest_period_first(budget_service, food):
    budget_service.create_budget(food.id, Decimal("1"), 12, 2023)
    budget_service.create_budget(food.id, Decimal("1"), 2, 2024)
    budget_service.create_budget(food.id, Decimal("1"), 11, 2023)

    assert [(b.year, b.month) for b in budget_service.list_budgets()] == [(2024, 2), (2023, 12), (2023, 11)]


def test_delete(budget_service, food):
    budget = budget_service.create_budget(food.id, Decimal("1"), 1, 2024)
    budget_service.delete_budget(budget)
    assert budget_service.get_budget(budget.id) is None
