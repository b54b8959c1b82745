# fintrack/services/aggregation.py
"""Dashboard and report computations.

Every figure is a grouped SUM over one user's incomes/expenses inside an
inclusive date window. Series (days of a month, months of a trend or year)
are built from the full key sequence first and then filled from the sparse
query results, so a bucket with no activity shows up as zero instead of
disappearing.
"""
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple, Type

from sqlalchemy import extract, func
from sqlalchemy.orm import Session

from fintrack.core.errors import ValidationError
from fintrack.db import models
from fintrack.services.periods import (
    Window,
    days_in_month,
    month_label,
    month_name,
    month_window,
    resolve_month,
    trailing_months,
    year_window,
)
from fintrack.services.transactions import Record, expense_to_dict, income_to_dict, to_amount

ZERO = Decimal("0")
MONTHS_PER_YEAR = 12


def _in_window(model: Type[Record], user_id: int, window: Window):
    start, end = window
    return (model.user_id == user_id, model.date >= start, model.date <= end)


def sum_amount(db: Session, model: Type[Record], user_id: int, window: Window) -> Decimal:
    total = db.query(func.sum(model.amount)).filter(*_in_window(model, user_id, window)).scalar()
    return Decimal(total) if total is not None else ZERO


def _sum_by(db: Session, model: Type[Record], user_id: int, window: Window, *keys) -> Dict[Any, Decimal]:
    """SUM(amount) grouped by the given SQL expressions, keyed by int tuple (or int for one key)."""
    rows = (
        db.query(*keys, func.sum(model.amount))
        .filter(*_in_window(model, user_id, window))
        .group_by(*keys)
        .all()
    )
    out: Dict[Any, Decimal] = {}
    for row in rows:
        key = tuple(int(k) for k in row[:-1])
        out[key[0] if len(key) == 1 else key] = Decimal(row[-1]) if row[-1] is not None else ZERO
    return out


def sum_by_day(db: Session, model: Type[Record], user_id: int, window: Window) -> Dict[int, Decimal]:
    return _sum_by(db, model, user_id, window, extract("day", model.date))


def sum_by_month(db: Session, model: Type[Record], user_id: int, window: Window) -> Dict[Tuple[int, int], Decimal]:
    return _sum_by(db, model, user_id, window, extract("year", model.date), extract("month", model.date))


def category_breakdown(db: Session, user_id: int, window: Window) -> List[Dict[str, Any]]:
    """Expense total and row count per category present in the window, largest total first."""
    total = func.sum(models.Expense.amount)
    rows = (
        db.query(models.Expense.category, total, func.count(models.Expense.id))
        .filter(*_in_window(models.Expense, user_id, window))
        .group_by(models.Expense.category)
        .order_by(total.desc())
        .all()
    )
    return [
        {"category": category.value, "total": to_amount(amount), "count": int(count)}
        for category, amount, count in rows
    ]


def monthly_summary(db: Session, user_id: int, today: Optional[date] = None) -> Dict[str, Any]:
    today = today or date.today()
    window = month_window(today.year, today.month)
    income = sum_amount(db, models.Income, user_id, window)
    expenses = sum_amount(db, models.Expense, user_id, window)
    return {
        "totalIncome": to_amount(income),
        "totalExpenses": to_amount(expenses),
        "balance": to_amount(income - expenses),
        "month": month_label(today.year, today.month),
    }


def recent_transactions(db: Session, user_id: int, limit: int = 10) -> List[Dict[str, Any]]:
    """The newest ``limit`` incomes and expenses combined, tagged by kind, newest first."""
    items: List[Dict[str, Any]] = []
    for model, to_dict, kind in (
        (models.Income, income_to_dict, models.TransactionKind.income),
        (models.Expense, expense_to_dict, models.TransactionKind.expense),
    ):
        rows = (
            db.query(model)
            .filter(model.user_id == user_id)
            .order_by(model.date.desc(), model.id.desc())
            .limit(limit)
            .all()
        )
        for row in rows:
            item = to_dict(row)
            item["type"] = kind.value
            items.append(item)

    items.sort(key=lambda item: (item["date"], item["createdAt"] or ""), reverse=True)
    return items[:limit]


def current_month_categories(db: Session, user_id: int, today: Optional[date] = None) -> List[Dict[str, Any]]:
    today = today or date.today()
    return category_breakdown(db, user_id, month_window(today.year, today.month))


def monthly_trend(db: Session, user_id: int, months: int = 6, today: Optional[date] = None) -> List[Dict[str, Any]]:
    """Income/expense/balance for the ``months`` calendar months ending with the current one."""
    if months < 1:
        raise ValidationError("months must be at least 1")
    today = today or date.today()
    keys = trailing_months(today, months)
    first_year, first_month = keys[0]
    window = (month_window(first_year, first_month)[0], month_window(today.year, today.month)[1])

    income = sum_by_month(db, models.Income, user_id, window)
    expenses = sum_by_month(db, models.Expense, user_id, window)

    trend = []
    for year, month in keys:
        inc = income.get((year, month), ZERO)
        exp = expenses.get((year, month), ZERO)
        trend.append({
            "year": year,
            "month": month,
            "monthName": month_label(year, month, short=True),
            "income": to_amount(inc),
            "expenses": to_amount(exp),
            "balance": to_amount(inc - exp),
        })
    return trend


def period_report(
    db: Session,
    user_id: int,
    month: Optional[int] = None,
    year: Optional[int] = None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """Daily series, category breakdown and totals for one calendar month."""
    month, year = resolve_month(month, year, today or date.today())
    window = month_window(year, month)

    income_by_day = sum_by_day(db, models.Income, user_id, window)
    expenses_by_day = sum_by_day(db, models.Expense, user_id, window)
    daily = [
        {
            "day": day,
            "income": to_amount(income_by_day.get(day, ZERO)),
            "expenses": to_amount(expenses_by_day.get(day, ZERO)),
        }
        for day in range(1, days_in_month(year, month) + 1)
    ]

    total_income = sum_amount(db, models.Income, user_id, window)
    total_expenses = sum_amount(db, models.Expense, user_id, window)
    return {
        "monthlyData": daily,
        "categoryData": category_breakdown(db, user_id, window),
        "totalIncome": to_amount(total_income),
        "totalExpenses": to_amount(total_expenses),
        "balance": to_amount(total_income - total_expenses),
        "period": {"month": month, "year": year, "monthName": month_label(year, month)},
    }


def yearly_report(db: Session, user_id: int, year: Optional[int] = None, today: Optional[date] = None) -> Dict[str, Any]:
    """
    January..December series plus yearly totals.
    Averages always divide by 12, so a partial year understates them.
    """
    year = year or (today or date.today()).year
    window = year_window(year)

    income = sum_by_month(db, models.Income, user_id, window)
    expenses = sum_by_month(db, models.Expense, user_id, window)

    monthly = []
    total_income = ZERO
    total_expenses = ZERO
    for month in range(1, MONTHS_PER_YEAR + 1):
        inc = income.get((year, month), ZERO)
        exp = expenses.get((year, month), ZERO)
        total_income += inc
        total_expenses += exp
        monthly.append({
            "month": month,
            "monthName": month_name(month),
            "income": to_amount(inc),
            "expenses": to_amount(exp),
            "balance": to_amount(inc - exp),
        })

    income_total = to_amount(total_income)
    expense_total = to_amount(total_expenses)
    return {
        "year": year,
        "monthlyData": monthly,
        "totalIncome": income_total,
        "totalExpenses": expense_total,
        "totalBalance": to_amount(total_income - total_expenses),
        "averageMonthlyIncome": income_total / MONTHS_PER_YEAR,
        "averageMonthlyExpenses": expense_total / MONTHS_PER_YEAR,
    }
