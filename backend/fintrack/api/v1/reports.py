# fintrack/api/v1/reports.py
from fastapi import APIRouter, Depends, Query
from typing import Optional, Dict, Any
from sqlalchemy.orm import Session

from fintrack.api.v1.deps import get_current_user
from fintrack.db import models
from fintrack.db.session import get_db
from fintrack.services import aggregation

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
def period_report(
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1, le=9999),
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Daily series, category breakdown and totals; month/year default to the current ones."""
    return {"success": True, "data": aggregation.period_report(db, current_user.id, month=month, year=year)}


@router.get("/yearly", response_model=Dict[str, Any])
def yearly_report(
    year: Optional[int] = Query(None, ge=1, le=9999),
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {"success": True, "data": aggregation.yearly_report(db, current_user.id, year=year)}
