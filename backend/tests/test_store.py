from datetime import date

import pytest

from expense_tracker.errors import StoreFailure
from expense_tracker.models import Base, Budget, Category, Expense


class TestSave:
    def test_insert_assigns_id(self, store):
        category = Category(name="Books", color="#123456")
        assert category.id is None

        assert store.save(category) is True
        assert category.id is not None
        assert store.find_by_id(Category, category.id).name == "Books"

    def test_update_existing_record(self, store, food):
        food.color = "#ABCDEF"
        assert store.save(food) is True

        assert store.find_by_id(Category, food.id).color == "#ABCDEF"
        assert store.count(Category) == 1

    def test_duplicate_category_name_fails_without_insert(self, store, food):
        assert store.save(Category(name="Food", color="#000000")) is False
        assert store.count(Category) == 1

    def test_duplicate_budget_key_fails_without_overwrite(self, store, food, add_budget):
        add_budget(food, 200, 6, 2024)

        duplicate = Budget(category_id=food.id, amount_cents=99900, month=6, year=2024)
        assert store.save(duplicate) is False

        budgets = store.find_all(Budget)
        assert len(budgets) == 1
        assert budgets[0].amount_cents == 20000

    def test_failed_update_leaves_row_unchanged(self, store, food, transport):
        transport.name = "Food"
        assert store.save(transport) is False

        assert store.find_by_id(Category, transport.id).name == "Transport"


class TestFind:
    def test_find_by_id_missing_returns_none(self, store):
        assert store.find_by_id(Category, 404) is None

    def test_find_by_filter_with_order(self, store, food, add_expense):
        add_expense(food, 5, date(2024, 6, 1))
        add_expense(food, 7, date(2024, 6, 20))

        newest_first = store.find_by_filter(
            Expense,
            Expense.category_id == food.id,
            order_by=(Expense.expense_date.desc(),),
        )
        assert [e.expense_date.day for e in newest_first] == [20, 1]

    def test_find_one(self, store, food):
        assert store.find_one(Category, Category.name == "Food").id == food.id
        assert store.find_one(Category, Category.name == "food") is None


class TestDelete:
    def test_delete_existing(self, store, food):
        assert store.delete(Category, food.id) is True
        assert store.find_by_id(Category, food.id) is None

    def test_delete_missing_returns_false(self, store):
        assert store.delete(Expense, 12345) is False


class TestSumAmount:
    def test_whole_calendar_month_counts(self, store, food, add_expense):
        add_expense(food, "10.10", date(2024, 6, 1))
        add_expense(food, "20.20", date(2024, 6, 30))
        add_expense(food, 1000, date(2024, 5, 31))
        add_expense(food, 1000, date(2024, 7, 1))
        add_expense(food, 1000, date(2023, 6, 15))

        assert store.sum_amount(food.id, 6, 2024) == 3030

    def test_only_matching_category(self, store, food, transport, add_expense):
        add_expense(food, 12, date(2024, 6, 3))
        add_expense(transport, 30, date(2024, 6, 3))

        assert store.sum_amount(food.id, 6, 2024) == 1200
        assert store.sum_amount(transport.id, 6, 2024) == 3000

    def test_no_expenses_is_zero(self, store, food):
        assert store.sum_amount(food.id, 1, 2024) == 0

    def test_daily_sums(self, store, food, transport, add_expense):
        add_expense(food, 3, date(2024, 6, 10))
        add_expense(transport, 4, date(2024, 6, 10))
        add_expense(food, 5, date(2024, 6, 12))

        assert store.daily_sums(date(2024, 6, 10), date(2024, 6, 11)) == {date(2024, 6, 10): 700}


class TestReadFailures:
    def test_database_error_is_not_an_empty_result(self, store, database):
        Base.metadata.drop_all(database.engine)

        with pytest.raises(StoreFailure):
            store.find_all(Category)
        with pytest.raises(StoreFailure):
            store.sum_amount(1, 6, 2024)

    def test_write_error_returns_false(self, store, database):
        Base.metadata.drop_all(database.engine)

        assert store.save(Category(name="Books", color="#123456")) is False
