from __future__ import annotations
from datetime import date
from decimal import Decimal
from pydantic import BaseModel, Field

from .expense import ExpenseResponse


class CategoryBreakdown(BaseModel):
    category_id: int
    category_name: str
    amount: Decimal
    percentage: float
    color: str


class MonthlyReport(BaseModel):
    month: int
    year: int
    expenses: list[ExpenseResponse]
    breakdown: list[CategoryBreakdown]
    grand_total: Decimal

    @property
    def expense_count(self) -> int:
        return len(self.expenses)


class DailyTotal(BaseModel):
    day: date
    amount: Decimal


class ExportRequest(BaseModel):
    month: int = Field(ge=1, le=12)
    year: int
    path: str


class ExportResponse(BaseModel):
    success: bool
    path: str
