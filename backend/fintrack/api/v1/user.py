# fintrack/api/v1/user.py
from fastapi import APIRouter, Depends
from typing import Dict, Any
from sqlalchemy.orm import Session

from fintrack.api.v1.deps import get_current_user
from fintrack.db import models
from fintrack.db.session import get_db
from fintrack.schemas.user import AccountDelete, PasswordChange, ProfileUpdate
from fintrack.services import users

router = APIRouter()


@router.get("/profile", response_model=Dict[str, Any])
def get_profile(current_user: models.User = Depends(get_current_user)):
    return {"success": True, "data": users.user_to_dict(current_user)}


@router.put("/profile", response_model=Dict[str, Any])
def update_profile(
    payload: ProfileUpdate,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = users.update_profile(db, current_user.id, payload)
    return {"success": True, "message": "Profile updated successfully", "data": users.user_to_dict(user)}


@router.put("/change-password", response_model=Dict[str, Any])
def change_password(
    payload: PasswordChange,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    users.change_password(db, current_user.id, payload.currentPassword, payload.newPassword)
    return {"success": True, "message": "Password changed successfully"}


@router.delete("/account", response_model=Dict[str, Any])
def delete_account(
    payload: AccountDelete,
    current_user: models.User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    users.delete_account(db, current_user.id, payload.password)
    return {"success": True, "message": "Account deleted successfully"}
