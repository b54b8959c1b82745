# fintrack/services/users.py
"""Registration, login and account management."""
import logging
from typing import Any, Dict

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from fintrack.core.errors import AuthenticationError, ConflictError, InternalError, NotFoundError, ValidationError
from fintrack.db import models
from fintrack.schemas.auth import UserCreate, UserLogin
from fintrack.schemas.user import ProfileUpdate
from fintrack.services.security import hash_password, verify_password

logger = logging.getLogger(__name__)


def user_to_dict(user: models.User) -> Dict[str, Any]:
    # never expose hashed_password
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }


def get_user(db: Session, user_id: int) -> models.User:
    user = db.query(models.User).filter(models.User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def _taken(db: Session, username: str, email: str, exclude_id: int = None) -> bool:
    q = db.query(models.User.id).filter(or_(models.User.username == username, models.User.email == email))
    if exclude_id is not None:
        q = q.filter(models.User.id != exclude_id)
    return q.first() is not None


def register_user(db: Session, payload: UserCreate) -> models.User:
    if _taken(db, payload.username, payload.email):
        raise ConflictError("User already exists with this email or username")
    user = models.User(
        username=payload.username,
        email=payload.email,
        hashed_password=hash_password(payload.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration
        db.rollback()
        raise ConflictError("User already exists with this email or username")
    db.refresh(user)
    logger.info("registered user %s", user.id)
    return user


def authenticate(db: Session, payload: UserLogin) -> models.User:
    user = db.query(models.User).filter(models.User.email == payload.email).first()
    if not user or not verify_password(payload.password, user.hashed_password):
        logger.warning("failed login for %s", payload.email)
        raise AuthenticationError("Invalid credentials")
    return user


def update_profile(db: Session, user_id: int, payload: ProfileUpdate) -> models.User:
    user = get_user(db, user_id)
    if _taken(db, payload.username, payload.email, exclude_id=user_id):
        raise ConflictError("Username or email already exists")
    user.username = payload.username
    user.email = payload.email
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Username or email already exists")
    db.refresh(user)
    return user


def change_password(db: Session, user_id: int, current_password: str, new_password: str) -> None:
    user = get_user(db, user_id)
    if not verify_password(current_password, user.hashed_password):
        raise ValidationError("Current password is incorrect")
    user.hashed_password = hash_password(new_password)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise InternalError(f"database error while changing password: {exc}") from exc
    logger.info("user %s changed password", user_id)


def delete_account(db: Session, user_id: int, password: str) -> None:
    """
    Remove a user and everything they own in one transaction.

    Incomes and expenses are deleted first, then the user row, then a single
    commit. If any step fails the transaction is rolled back, so the user is
    never removed while their transactions survive (nor the reverse).
    """
    user = get_user(db, user_id)
    if not verify_password(password, user.hashed_password):
        raise ValidationError("Password is incorrect")
    try:
        incomes = db.query(models.Income).filter(models.Income.user_id == user_id).delete(synchronize_session=False)
        expenses = db.query(models.Expense).filter(models.Expense.user_id == user_id).delete(synchronize_session=False)
        db.delete(user)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise InternalError(f"database error while deleting account {user_id}: {exc}") from exc
    logger.info("deleted user %s with %s incomes and %s expenses", user_id, incomes, expenses)
