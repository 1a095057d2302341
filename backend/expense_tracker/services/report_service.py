from datetime import date, timedelta
from pathlib import Path
from typing import Mapping

import structlog

from ..models import Category, Expense
from ..money import format_currency, from_cents
from ..schemas.expense import ExpenseResponse
from ..schemas.report import CategoryBreakdown, DailyTotal, MonthlyReport
from ..store import RecordStore, in_month
from .budget_service import validate_period

logger = structlog.get_logger(__name__)

UNKNOWN_CATEGORY = "Unknown"


def month_title(month: int, year: int) -> str:
    """'June 2024' style label for a month."""
    return date(year, month, 1).strftime("%B %Y")


class ReportService:
    def __init__(self, store: RecordStore):
        self.store = store

    def build_report(self, month: int, year: int) -> MonthlyReport:
        """
        Aggregate one month of spending.

        Category totals come from the same per-category sum the budget
        evaluator uses. Categories with no spend are left out; the rest are
        ranked by amount, ties keeping category name order. Raises
        ValidationFailure for a month or year outside the supported range.
        """
        validate_period(month, year)
        expenses = self.store.find_by_filter(
            Expense,
            *in_month(month, year),
            order_by=(Expense.expense_date.desc(), Expense.id.desc()),
        )
        categories = self.store.find_all(Category, order_by=(Category.name,))

        totals: list[tuple[Category, int]] = []
        for category in categories:
            category_cents = self.store.sum_amount(category.id, month, year)
            if category_cents > 0:
                totals.append((category, category_cents))

        grand_total_cents = sum(cents for _, cents in totals)

        breakdown = [
            CategoryBreakdown(
                category_id=category.id,
                category_name=category.name,
                amount=from_cents(cents),
                percentage=(cents / grand_total_cents * 100) if grand_total_cents > 0 else 0.0,
                color=category.color,
            )
            for category, cents in totals
        ]
        # sorted() is stable, so equal amounts keep their order
        breakdown = sorted(breakdown, key=lambda item: item.amount, reverse=True)

        return MonthlyReport(
            month=month,
            year=year,
            expenses=[ExpenseResponse.model_validate(e) for e in expenses],
            breakdown=breakdown,
            grand_total=from_cents(grand_total_cents),
        )

    def render_csv(
        self,
        report: MonthlyReport,
        category_lookup: Mapping[int, str] | None = None,
    ) -> str:
        """
        Render a report as human-readable comma separated text.

        Sections, in order: title, summary, category breakdown, detailed
        expenses. Not strict CSV: notes have commas swapped for semicolons
        rather than being quoted. ``category_lookup`` maps category id to
        name and defaults to the categories currently in the store.
        """
        if category_lookup is None:
            category_lookup = {c.id: c.name for c in self.store.find_all(Category)}

        lines = [
            f"Monthly Expense Report - {month_title(report.month, report.year)}",
            "",
            "Summary:",
            f"Total Expenses: {format_currency(report.grand_total)}",
            f"Number of Expenses: {report.expense_count}",
            "",
            "Category Breakdown:",
            "Category,Amount,Percentage",
        ]
        for item in report.breakdown:
            lines.append(f"{item.category_name},{format_currency(item.amount)},{item.percentage:.1f}%")

        lines += [
            "",
            "Detailed Expenses:",
            "Date,Category,Amount,Notes",
        ]
        for expense in report.expenses:
            category_name = category_lookup.get(expense.category_id, UNKNOWN_CATEGORY)
            notes = expense.notes.replace(",", ";") if expense.notes else ""
            lines.append(
                f"{expense.expense_date.isoformat()},{category_name},"
                f"{format_currency(expense.amount)},{notes}"
            )

        return "\n".join(lines) + "\n"

    def export_csv(self, month: int, year: int, path: str | Path) -> bool:
        """Write the month's report to path. Returns False if the file could not be written."""
        report = self.build_report(month, year)
        text = self.render_csv(report)
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(text)
        except OSError:
            logger.error("csv_export_failed", path=str(path), exc_info=True)
            return False

        logger.info("csv_export_completed", path=str(path), expenses=report.expense_count)
        return True

    def daily_trend(self, days: int = 7, end: date | None = None) -> list[DailyTotal]:
        """Total spend for each of the last ``days`` days up to ``end`` (default today), oldest first."""
        end = end or date.today()
        start = end - timedelta(days=days - 1)
        sums = self.store.daily_sums(start, end)

        trend = []
        for offset in range(days):
            day = start + timedelta(days=offset)
            trend.append(DailyTotal(day=day, amount=from_cents(sums.get(day, 0))))
        return trend
