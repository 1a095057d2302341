from .category import CategoryCreate, CategoryUpdate, CategoryResponse
from .budget import (
    BudgetState,
    BudgetCreate,
    BudgetUpdate,
    BudgetResponse,
    BudgetStatus,
    CategoryBudgetStatus,
    BudgetCheck,
)
from .expense import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseCandidate,
    ExpenseResponse,
    ExpenseSaveResponse,
)
from .report import (
    CategoryBreakdown,
    MonthlyReport,
    DailyTotal,
    ExportRequest,
    ExportResponse,
)

__all__ = [
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "BudgetState",
    "BudgetCreate",
    "BudgetUpdate",
    "BudgetResponse",
    "BudgetStatus",
    "CategoryBudgetStatus",
    "BudgetCheck",
    "ExpenseCreate",
    "ExpenseUpdate",
    "ExpenseCandidate",
    "ExpenseResponse",
    "ExpenseSaveResponse",
    "CategoryBreakdown",
    "MonthlyReport",
    "DailyTotal",
    "ExportRequest",
    "ExportResponse",
]
