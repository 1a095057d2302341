from datetime import date
from decimal import Decimal

from sqlalchemy import String, Integer, Date, ForeignKey, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin
from ..money import from_cents, to_cents


class Expense(Base, TimestampMixin):
    """
    A single dated spending record against one category.

    Amounts are stored as integer cents so that monthly sums are exact.
    The category reference is not cascaded: deleting a category leaves its
    expenses in place, reported under "Unknown".
    """

    __tablename__ = "expenses"
    __table_args__ = (
        CheckConstraint("amount_cents > 0", name="ck_expense_amount_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    amount_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id"), nullable=False, index=True
    )
    expense_date: Mapped[date] = mapped_column("date", Date, nullable=False, index=True)
    notes: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    @property
    def amount(self) -> Decimal:
        """Get amount as decimal dollars."""
        return from_cents(self.amount_cents)

    @amount.setter
    def amount(self, value: Decimal) -> None:
        """Set amount from decimal dollars."""
        self.amount_cents = to_cents(value)

    def __repr__(self) -> str:
        return (
            f"<Expense(id={self.id}, date={self.expense_date}, "
            f"amount=${self.amount}, category={self.category_id})>"
        )
