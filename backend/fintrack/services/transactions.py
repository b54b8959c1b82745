# fintrack/services/transactions.py
"""Income / expense CRUD, always scoped to the owning user."""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fintrack.core.errors import InternalError, NotFoundError, ValidationError
from fintrack.db import models
from fintrack.schemas.transactions import ExpenseIn, IncomeIn
from fintrack.services.periods import month_window

logger = logging.getLogger(__name__)

Record = Union[models.Income, models.Expense]

_LABELS = {models.Income: "Income", models.Expense: "Expense"}


def to_amount(value: Optional[Decimal]) -> float:
    """JSON-friendly money value; ``None`` (an empty SUM) becomes 0."""
    if value is None:
        return 0.0
    return float(Decimal(value).quantize(Decimal("0.01")))


def _timestamp(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def income_to_dict(row: models.Income) -> Dict[str, Any]:
    return {
        "id": row.id,
        "userId": row.user_id,
        "amount": to_amount(row.amount),
        "source": row.source,
        "date": row.date.isoformat() if row.date else None,
        "createdAt": _timestamp(getattr(row, "created_at", None)),
    }


def expense_to_dict(row: models.Expense) -> Dict[str, Any]:
    return {
        "id": row.id,
        "userId": row.user_id,
        "amount": to_amount(row.amount),
        "category": row.category.value if row.category is not None else None,
        "description": row.description or "",
        "date": row.date.isoformat() if row.date else None,
        "createdAt": _timestamp(getattr(row, "created_at", None)),
    }


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise InternalError(f"database error while {action}: {exc}") from exc


def get_owned(db: Session, model: Type[Record], user_id: int, record_id: int) -> Record:
    row = db.query(model).filter(model.id == record_id, model.user_id == user_id).first()
    if row is None:
        raise NotFoundError(f"{_LABELS[model]} not found")
    return row


def create_income(db: Session, user_id: int, payload: IncomeIn) -> models.Income:
    row = models.Income(
        user_id=user_id,
        amount=payload.amount,
        source=payload.source,
        date=payload.date,
    )
    db.add(row)
    _commit(db, "adding income")
    db.refresh(row)
    logger.info("user %s added income %s", user_id, row.id)
    return row


def create_expense(db: Session, user_id: int, payload: ExpenseIn) -> models.Expense:
    row = models.Expense(
        user_id=user_id,
        amount=payload.amount,
        category=payload.category,
        description=payload.description or "",
        date=payload.date,
    )
    db.add(row)
    _commit(db, "adding expense")
    db.refresh(row)
    logger.info("user %s added expense %s", user_id, row.id)
    return row


def update_income(db: Session, user_id: int, income_id: int, payload: IncomeIn) -> models.Income:
    row = get_owned(db, models.Income, user_id, income_id)
    row.amount = payload.amount
    row.source = payload.source
    row.date = payload.date
    _commit(db, "updating income")
    db.refresh(row)
    return row


def update_expense(db: Session, user_id: int, expense_id: int, payload: ExpenseIn) -> models.Expense:
    row = get_owned(db, models.Expense, user_id, expense_id)
    row.amount = payload.amount
    row.category = payload.category
    row.description = payload.description or ""
    row.date = payload.date
    _commit(db, "updating expense")
    db.refresh(row)
    return row


def delete_record(db: Session, model: Type[Record], user_id: int, record_id: int) -> None:
    row = get_owned(db, model, user_id, record_id)
    db.delete(row)
    _commit(db, f"deleting {_LABELS[model].lower()}")
    logger.info("user %s deleted %s %s", user_id, _LABELS[model].lower(), record_id)


def parse_category(label: Optional[str]) -> Optional[models.ExpenseCategory]:
    if not label:
        return None
    try:
        return models.ExpenseCategory.from_label(label)
    except ValueError:
        raise ValidationError("Please select a valid category")


def list_records(
    db: Session,
    model: Type[Record],
    user_id: int,
    month: Optional[int] = None,
    year: Optional[int] = None,
    category: Optional[models.ExpenseCategory] = None,
    limit: int = 50,
) -> Tuple[List[Record], Decimal]:
    """
    Newest-first records for a user plus the amount total of the whole filtered set.
    month and year must come together; category only applies to expenses.
    """
    if (month is None) != (year is None):
        raise ValidationError("month and year must be provided together")

    filters = [model.user_id == user_id]
    if month is not None:
        start, end = month_window(year, month)
        filters.append(model.date >= start)
        filters.append(model.date <= end)
    if category is not None:
        if model is not models.Expense:
            raise ValidationError("category filter only applies to expenses")
        filters.append(models.Expense.category == category)

    rows = (
        db.query(model)
        .filter(*filters)
        .order_by(model.date.desc(), model.id.desc())
        .limit(limit)
        .all()
    )
    total = db.query(func.sum(model.amount)).filter(*filters).scalar()
    return rows, (total if total is not None else Decimal("0"))
