from fastapi import APIRouter, Depends, HTTPException, Query

from ..schemas import (
    BudgetCreate,
    BudgetUpdate,
    BudgetResponse,
    BudgetStatus,
    CategoryBudgetStatus,
)
from ..services import BudgetEvaluator, BudgetService
from ..services.budget_service import validate_period
from .deps import get_budget_service, get_evaluator, has_period

router = APIRouter()


@router.get("/", response_model=list[BudgetResponse])
def list_budgets(
    month: int | None = Query(None, ge=1, le=12),
    year: int | None = Query(None),
    service: BudgetService = Depends(get_budget_service),
):
    """Get budgets, optionally only those for one month."""
    if has_period(month, year):
        return service.budgets_by_month(month, year)
    return service.list_budgets()


@router.get("/status", response_model=BudgetStatus)
def budget_status(
    category_id: int = Query(...),
    month: int = Query(..., ge=1, le=12),
    year: int = Query(...),
    evaluator: BudgetEvaluator = Depends(get_evaluator),
):
    """Spent vs allocated for one category-month."""
    validate_period(month, year)
    return evaluator.evaluate(category_id, month, year)


@router.get("/overview", response_model=list[CategoryBudgetStatus])
def budget_overview(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(...),
    evaluator: BudgetEvaluator = Depends(get_evaluator),
):
    """Status of every budgeted category for a month."""
    validate_period(month, year)
    return evaluator.month_overview(month, year)


@router.get("/{budget_id}", response_model=BudgetResponse)
def get_budget(budget_id: int, service: BudgetService = Depends(get_budget_service)):
    budget = service.get_budget(budget_id)
    if not budget:
        raise HTTPException(status_code=404, detail="Budget not found")
    return budget


@router.post("/", response_model=BudgetResponse, status_code=201)
def create_budget(data: BudgetCreate, service: BudgetService = Depends(get_budget_service)):
    return service.create_budget(
        category_id=data.category_id,
        amount=data.amount,
        month=data.month,
        year=data.year,
    )


@router.patch("/{budget_id}", response_model=BudgetResponse)
def update_budget(
    budget_id: int,
    data: BudgetUpdate,
    service: BudgetService = Depends(get_budget_service),
):
    budget = service.get_budget(budget_id)
    if not budget:
        raise HTTPException(status_code=404, detail="Budget not found")
    return service.update_budget(budget, **data.model_dump(exclude_unset=True))


@router.delete("/{budget_id}", status_code=204)
def delete_budget(budget_id: int, service: BudgetService = Depends(get_budget_service)):
    budget = service.get_budget(budget_id)
    if not budget:
        raise HTTPException(status_code=404, detail="Budget not found")
    service.delete_budget(budget)
