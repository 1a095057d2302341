from .base import Base
from .category import Category
from .budget import Budget
from .expense import Expense

__all__ = [
    "Base",
    "Category",
    "Budget",
    "Expense",
]
