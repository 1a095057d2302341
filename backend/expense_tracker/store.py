from datetime import date
from typing import Any, TypeVar

import structlog
from sqlalchemy import extract, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import StoreFailure
from .models import Base, Expense

logger = structlog.get_logger(__name__)

RecordT = TypeVar("RecordT", bound=Base)


def in_month(month: int, year: int):
    """Filter criteria selecting expenses dated in the given calendar month."""
    return (
        extract("year", Expense.expense_date) == year,
        extract("month", Expense.expense_date) == month,
    )


class RecordStore:
    """
    Key-addressed access to persisted records over a single session.

    Reads raise StoreFailure when the database errors, so an empty result
    always means "nothing there". Writes follow the boolean contract: they
    commit on success and return True, or roll back, log and return False
    on a constraint violation or database error.
    """

    def __init__(self, db: Session):
        self.db = db

    # --- Reads ---

    def find_all(self, model: type[RecordT], order_by: tuple = ()) -> list[RecordT]:
        return self.find_by_filter(model, order_by=order_by)

    def find_by_id(self, model: type[RecordT], record_id: int) -> RecordT | None:
        try:
            return self.db.get(model, record_id)
        except SQLAlchemyError as exc:
            self._read_failed(f"find {model.__name__} {record_id}", exc)

    def find_by_filter(
        self,
        model: type[RecordT],
        *criteria: Any,
        order_by: tuple = (),
    ) -> list[RecordT]:
        stmt = select(model).where(*criteria).order_by(*order_by)
        try:
            return list(self.db.scalars(stmt).all())
        except SQLAlchemyError as exc:
            self._read_failed(f"filter {model.__name__}", exc)

    def find_one(self, model: type[RecordT], *criteria: Any) -> RecordT | None:
        stmt = select(model).where(*criteria).limit(1)
        try:
            return self.db.scalars(stmt).first()
        except SQLAlchemyError as exc:
            self._read_failed(f"find one {model.__name__}", exc)

    def count(self, model: type[RecordT], *criteria: Any) -> int:
        stmt = select(func.count()).select_from(model).where(*criteria)
        try:
            return int(self.db.scalar(stmt) or 0)
        except SQLAlchemyError as exc:
            self._read_failed(f"count {model.__name__}", exc)

    def sum_amount(self, category_id: int, month: int, year: int) -> int:
        """Total spend in cents for one category in one calendar month."""
        stmt = select(func.coalesce(func.sum(Expense.amount_cents), 0)).where(
            Expense.category_id == category_id,
            *in_month(month, year),
        )
        try:
            return int(self.db.scalar(stmt) or 0)
        except SQLAlchemyError as exc:
            self._read_failed(f"sum category {category_id} {year}-{month:02d}", exc)

    def daily_sums(self, start: date, end: date) -> dict[date, int]:
        """Total spend in cents per day for start..end inclusive (days with spend only)."""
        stmt = (
            select(Expense.expense_date, func.sum(Expense.amount_cents))
            .where(Expense.expense_date >= start, Expense.expense_date <= end)
            .group_by(Expense.expense_date)
        )
        try:
            return {day: int(total) for day, total in self.db.execute(stmt).all()}
        except SQLAlchemyError as exc:
            self._read_failed(f"daily sums {start}..{end}", exc)

    # --- Writes ---

    def save(self, record: Base) -> bool:
        """Insert the record if it has no id yet, otherwise update it."""
        action = "insert" if record.id is None else "update"
        try:
            self.db.add(record)
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning(
                "store_constraint_violation",
                action=action,
                record=type(record).__name__,
                error=str(exc.orig),
            )
            return False
        except SQLAlchemyError:
            self.db.rollback()
            logger.error("store_write_failed", action=action, record=type(record).__name__, exc_info=True)
            return False
        self.db.refresh(record)
        return True

    def delete(self, model: type[RecordT], record_id: int) -> bool:
        """Delete by id. Returns False when nothing was deleted."""
        try:
            record = self.db.get(model, record_id)
            if record is None:
                return False
            self.db.delete(record)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.error("store_delete_failed", record=model.__name__, record_id=record_id, exc_info=True)
            return False
        return True

    def _read_failed(self, operation: str, exc: SQLAlchemyError):
        logger.error("store_read_failed", operation=operation, exc_info=exc)
        raise StoreFailure(operation) from exc
