# fintrack/api/v1/income.py
from fastapi import APIRouter, Depends, Query, status
from typing import Optional, Dict, Any
from sqlalchemy.orm import Session

from fintrack.api.v1.deps import get_current_user
from fintrack.core.config import settings
from fintrack.db import models
from fintrack.db.session import get_db
from fintrack.schemas.transactions import IncomeIn
from fintrack.services import transactions as svc

router = APIRouter(tags=["income"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Dict[str, Any])
def add_income(payload: IncomeIn, current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    row = svc.create_income(db, current_user.id, payload)
    return {"success": True, "message": "Income added successfully", "data": svc.income_to_dict(row)}


@router.get("", response_model=Dict[str, Any])
def list_income(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1, le=9999),
    limit: int = Query(settings.DEFAULT_LIST_LIMIT, ge=1, le=1000),
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Newest-first incomes for the current user, optionally limited to one month.
    `total` covers every matching row, not just the returned page.
    """
    rows, total = svc.list_records(db, models.Income, current_user.id, month=month, year=year, limit=limit)
    return {
        "success": True,
        "data": [svc.income_to_dict(r) for r in rows],
        "total": svc.to_amount(total),
        "count": len(rows),
    }


@router.get("/{income_id}", response_model=Dict[str, Any])
def get_income(income_id: int, current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    row = svc.get_owned(db, models.Income, current_user.id, income_id)
    return {"success": True, "data": svc.income_to_dict(row)}


@router.put("/{income_id}", response_model=Dict[str, Any])
def update_income(
    income_id: int,
    payload: IncomeIn,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    row = svc.update_income(db, current_user.id, income_id, payload)
    return {"success": True, "message": "Income updated successfully", "data": svc.income_to_dict(row)}


@router.delete("/{income_id}", response_model=Dict[str, Any])
def delete_income(income_id: int, current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    svc.delete_record(db, models.Income, current_user.id, income_id)
    return {"success": True, "message": "Income deleted successfully"}
