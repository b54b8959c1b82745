# fintrack/api/v1/dashboard.py
from fastapi import APIRouter, Depends, Query
from typing import Dict, Any
from sqlalchemy.orm import Session

from fintrack.api.v1.deps import get_current_user
from fintrack.core.config import settings
from fintrack.db import models
from fintrack.db.session import get_db
from fintrack.services import aggregation

router = APIRouter()


@router.get("/summary", response_model=Dict[str, Any])
def summary(current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"success": True, "data": aggregation.monthly_summary(db, current_user.id)}


@router.get("/recent-transactions", response_model=Dict[str, Any])
def recent_transactions(
    limit: int = Query(settings.RECENT_TRANSACTIONS_LIMIT, ge=1, le=100),
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {"success": True, "data": aggregation.recent_transactions(db, current_user.id, limit=limit)}


@router.get("/expense-categories", response_model=Dict[str, Any])
def expense_categories(current_user: models.User = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"success": True, "data": aggregation.current_month_categories(db, current_user.id)}


@router.get("/monthly-trend", response_model=Dict[str, Any])
def monthly_trend(
    months: int = Query(settings.TREND_MONTHS, ge=1, le=120),
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {"success": True, "data": aggregation.monthly_trend(db, current_user.id, months=months)}
