from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query

from ..schemas import (
    BudgetCheck,
    ExpenseCandidate,
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
    ExpenseSaveResponse,
)
from ..services import BudgetEvaluator, ExpenseService, SavedExpense
from .deps import get_evaluator, get_expense_service, has_period

router = APIRouter()


def _save_response(saved: SavedExpense) -> dict:
    return {
        "expense": ExpenseResponse.model_validate(saved.expense),
        "budget_check": saved.budget_check,
    }


@router.get("/", response_model=list[ExpenseResponse])
def list_expenses(
    year: int | None = None,
    month: int | None = Query(None, ge=1, le=12),
    category_id: int | None = None,
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    q: str | None = Query(None),
    service: ExpenseService = Depends(get_expense_service),
):
    """
    Get expenses, newest first, with optional filters.

    q searches category names, notes and amounts (within the month when
    year/month are given). Otherwise year/month, category_id or a
    start_date/end_date range select the expenses.
    """
    by_month = has_period(month, year)
    if q:
        return service.search(q, month=month, year=year)
    if by_month:
        return service.expenses_by_month(month, year)
    if category_id is not None:
        return service.expenses_by_category(category_id)
    if start_date and end_date:
        return service.expenses_by_date_range(start_date, end_date)
    return service.list_expenses()


@router.post("/check", response_model=BudgetCheck)
def check_expense(
    candidate: ExpenseCandidate,
    evaluator: BudgetEvaluator = Depends(get_evaluator),
):
    """Advisory budget check for an expense that has not been saved yet."""
    return evaluator.validate_against_budget(candidate)


@router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(expense_id: int, service: ExpenseService = Depends(get_expense_service)):
    expense = service.get_expense(expense_id)
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.post("/", response_model=ExpenseSaveResponse, status_code=201)
def create_expense(data: ExpenseCreate, service: ExpenseService = Depends(get_expense_service)):
    """Record an expense. The budget check in the response is advisory; the expense is saved either way."""
    saved = service.create_expense(
        amount=data.amount,
        category_id=data.category_id,
        expense_date=data.expense_date,
        notes=data.notes,
    )
    return _save_response(saved)


@router.patch("/{expense_id}", response_model=ExpenseSaveResponse)
def update_expense(
    expense_id: int,
    data: ExpenseUpdate,
    service: ExpenseService = Depends(get_expense_service),
):
    expense = service.get_expense(expense_id)
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    saved = service.update_expense(expense, **data.model_dump(exclude_unset=True))
    return _save_response(saved)


@router.delete("/{expense_id}", status_code=204)
def delete_expense(expense_id: int, service: ExpenseService = Depends(get_expense_service)):
    expense = service.get_expense(expense_id)
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    service.delete_expense(expense)
