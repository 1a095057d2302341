from .category_service import CategoryService, DEFAULT_CATEGORIES, normalize_color
from .budget_evaluator import BudgetEvaluator, classify, utilization_percent
from .budget_service import BudgetService
from .expense_service import ExpenseService, SavedExpense
from .report_service import ReportService

__all__ = [
    "CategoryService",
    "DEFAULT_CATEGORIES",
    "normalize_color",
    "BudgetEvaluator",
    "classify",
    "utilization_percent",
    "BudgetService",
    "ExpenseService",
    "SavedExpense",
    "ReportService",
]
