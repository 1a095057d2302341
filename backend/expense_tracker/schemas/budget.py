import enum
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel


class BudgetState(str, enum.Enum):
    """Where a category stands against its budget for a month."""
    OK = "OK"
    WARNING = "WARNING"
    EXCEEDED = "EXCEEDED"
    NO_BUDGET = "NO_BUDGET"


# --- Input schemas ---

class BudgetCreate(BaseModel):
    category_id: int
    amount: Decimal
    month: int
    year: int


class BudgetUpdate(BaseModel):
    category_id: int | None = None
    amount: Decimal | None = None
    month: int | None = None
    year: int | None = None


# --- Response schemas ---

class BudgetResponse(BaseModel):
    id: int
    category_id: int
    amount: Decimal
    month: int
    year: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# --- Derived, never persisted ---

class BudgetStatus(BaseModel):
    status: BudgetState
    budget_amount: Decimal
    spent_amount: Decimal
    remaining_amount: Decimal
    utilization: float

    @property
    def has_budget(self) -> bool:
        return self.status != BudgetState.NO_BUDGET

    @property
    def is_exceeded(self) -> bool:
        return self.status == BudgetState.EXCEEDED

    @property
    def is_warning(self) -> bool:
        return self.status == BudgetState.WARNING


class CategoryBudgetStatus(BudgetStatus):
    """Budget status of one category, as listed in the month overview."""
    category_id: int
    category_name: str
    color: str


class BudgetCheck(BaseModel):
    """Outcome of the advisory pre-save check. Never blocks a save."""
    accepted: bool
    message: str
    projected_total: Decimal | None = None
    overage: Decimal | None = None
