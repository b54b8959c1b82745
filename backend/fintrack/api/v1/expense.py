# fintrack/api/v1/expense.py
from fastapi import APIRouter, Depends, Query, status
from typing import Optional, Dict, Any
from sqlalchemy.orm import Session

from fintrack.api.v1.deps import get_current_user
from fintrack.core.config import settings
from fintrack.db import models
from fintrack.db.session import get_db
from fintrack.schemas.transactions import ExpenseIn
from fintrack.services import transactions as svc

router = APIRouter(tags=["expense"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Dict[str, Any])
def add_expense(payload: ExpenseIn, current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    row = svc.create_expense(db, current_user.id, payload)
    return {"success": True, "message": "Expense added successfully", "data": svc.expense_to_dict(row)}


@router.get("", response_model=Dict[str, Any])
def list_expenses(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1, le=9999),
    category: Optional[str] = Query(None, description="e.g. 'Food & Dining'"),
    limit: int = Query(settings.DEFAULT_LIST_LIMIT, ge=1, le=1000),
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    rows, total = svc.list_records(
        db,
        models.Expense,
        current_user.id,
        month=month,
        year=year,
        category=svc.parse_category(category),
        limit=limit,
    )
    return {
        "success": True,
        "data": [svc.expense_to_dict(r) for r in rows],
        "total": svc.to_amount(total),
        "count": len(rows),
    }


@router.get("/{expense_id}", response_model=Dict[str, Any])
def get_expense(expense_id: int, current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    row = svc.get_owned(db, models.Expense, current_user.id, expense_id)
    return {"success": True, "data": svc.expense_to_dict(row)}


@router.put("/{expense_id}", response_model=Dict[str, Any])
def update_expense(
    expense_id: int,
    payload: ExpenseIn,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    row = svc.update_expense(db, current_user.id, expense_id, payload)
    return {"success": True, "message": "Expense updated successfully", "data": svc.expense_to_dict(row)}


@router.delete("/{expense_id}", response_model=Dict[str, Any])
def delete_expense(expense_id: int, current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    svc.delete_record(db, models.Expense, current_user.id, expense_id)
    return {"success": True, "message": "Expense deleted successfully"}
