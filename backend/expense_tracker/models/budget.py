from decimal import Decimal

from sqlalchemy import Integer, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin
from ..money import from_cents, to_cents


class Budget(Base, TimestampMixin):
    """Monthly spending ceiling for a single category."""

    __tablename__ = "budgets"
    __table_args__ = (
        UniqueConstraint("category_id", "month", "year", name="uq_budget_category_month"),
        CheckConstraint("amount_cents >= 0", name="ck_budget_amount_non_negative"),
        CheckConstraint("month BETWEEN 1 AND 12", name="ck_budget_month"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id"), nullable=False, index=True
    )
    amount_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)

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
            f"<Budget(id={self.id}, category={self.category_id}, "
            f"period={self.year}-{self.month:02d}, amount=${self.amount})>"
        )
