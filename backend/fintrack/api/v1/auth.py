# fintrack/api/v1/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fintrack.api.v1.deps import get_current_user
from fintrack.db import models
from fintrack.db.session import get_db
from fintrack.schemas.auth import UserCreate, UserLogin
from fintrack.services.security import create_access_token
from fintrack.services.users import authenticate, register_user, user_to_dict

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    user = register_user(db, payload)
    return {
        "success": True,
        "message": "User registered successfully",
        "token": create_access_token(user.id),
        "user": user_to_dict(user),
    }


@router.post("/login")
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user = authenticate(db, payload)
    return {
        "success": True,
        "message": "Login successful",
        "token": create_access_token(user.id),
        "user": user_to_dict(user),
    }


@router.get("/verify")
def verify(current_user: models.User = Depends(get_current_user)):
    return {"success": True, "user": user_to_dict(current_user)}
