from datetime import date, datetime
from decimal import Decimal
from pydantic import BaseModel

from .budget import BudgetCheck


class ExpenseBase(BaseModel):
    """Base expense fields."""
    amount: Decimal
    category_id: int
    expense_date: date
    notes: str | None = None


class ExpenseCreate(ExpenseBase):
    """Fields for creating an expense."""
    pass


class ExpenseUpdate(BaseModel):
    """Fields for updating an expense (all optional)."""
    amount: Decimal | None = None
    category_id: int | None = None
    expense_date: date | None = None
    notes: str | None = None


class ExpenseCandidate(ExpenseBase):
    """An expense about to be saved; id is set when it edits a stored expense."""
    id: int | None = None


class ExpenseResponse(ExpenseBase):
    """Expense response with all fields."""
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ExpenseSaveResponse(BaseModel):
    """A saved expense plus the advisory budget check made before saving it."""
    expense: ExpenseResponse
    budget_check: BudgetCheck
