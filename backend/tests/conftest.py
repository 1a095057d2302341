from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from expense_tracker.config import Settings
from expense_tracker.database import Database
from expense_tracker.main import create_app
from expense_tracker.models import Budget, Category, Expense
from expense_tracker.money import to_cents
from expense_tracker.services import (
    BudgetEvaluator,
    BudgetService,
    CategoryService,
    ExpenseService,
    ReportService,
)
from expense_tracker.store import RecordStore

# Every service-level test runs as if today were this date
TODAY = date(2024, 6, 30)


@pytest.fixture
def database():
    db = Database.in_memory()
    yield db
    db.close()


@pytest.fixture
def session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def store(session):
    return RecordStore(session)


@pytest.fixture
def category_service(store):
    return CategoryService(store)


@pytest.fixture
def budget_service(store):
    return BudgetService(store)


@pytest.fixture
def evaluator(store):
    return BudgetEvaluator(store)


@pytest.fixture
def expense_service(store, evaluator):
    return ExpenseService(store, evaluator, today=lambda: TODAY)


@pytest.fixture
def report_service(store):
    return ReportService(store)


@pytest.fixture
def food(category_service):
    return category_service.create_category("Food", "#FF0000")


@pytest.fixture
def transport(category_service):
    return category_service.create_category("Transport", "#00FF00")


@pytest.fixture
def add_expense(store):
    """Insert an expense directly, bypassing ledger validation."""
    def _add(category, amount, day, notes=None):
        expense = Expense(
            amount_cents=to_cents(Decimal(str(amount))),
            category_id=category.id if isinstance(category, Category) else category,
            expense_date=day,
            notes=notes,
        )
        assert store.save(expense)
        return expense
    return _add


@pytest.fixture
def add_budget(store):
    """Insert a budget directly, bypassing budget validation."""
    def _add(category, amount, month, year):
        budget = Budget(
            category_id=category.id,
            amount_cents=to_cents(Decimal(str(amount))),
            month=month,
            year=year,
        )
        assert store.save(budget)
        return budget
    return _add


@pytest.fixture
def client(database, tmp_path):
    settings = Settings(database_path=tmp_path / "unused.db")
    app = create_app(settings=settings, database=database)
    with TestClient(app) as test_client:
        yield test_client
