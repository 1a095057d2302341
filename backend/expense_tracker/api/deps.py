from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import ValidationFailure
from ..services import BudgetEvaluator, BudgetService, CategoryService, ExpenseService, ReportService
from ..store import RecordStore


def get_store(db: Session = Depends(get_db)) -> RecordStore:
    return RecordStore(db)


def get_evaluator(request: Request, store: RecordStore = Depends(get_store)) -> BudgetEvaluator:
    return BudgetEvaluator(store, warning_threshold=request.app.state.settings.warning_threshold)


def get_category_service(store: RecordStore = Depends(get_store)) -> CategoryService:
    return CategoryService(store)


def get_budget_service(store: RecordStore = Depends(get_store)) -> BudgetService:
    return BudgetService(store)


def get_expense_service(
    store: RecordStore = Depends(get_store),
    evaluator: BudgetEvaluator = Depends(get_evaluator),
) -> ExpenseService:
    return ExpenseService(store, evaluator)


def get_report_service(store: RecordStore = Depends(get_store)) -> ReportService:
    return ReportService(store)


def has_period(month: int | None, year: int | None) -> bool:
    """True when both month and year were given; rejects only one of the two."""
    if (month is None) != (year is None):
        missing = "year" if year is None else "month"
        raise ValidationFailure("month and year must be given together", field=missing)
    return month is not None
