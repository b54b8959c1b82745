# fintrack/api/v1/deps.py
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from fintrack.core.errors import AuthenticationError
from fintrack.db import models
from fintrack.db.session import get_db
from fintrack.services.security import token_subject

logger = logging.getLogger(__name__)

# reads "Authorization: Bearer <token>"; missing headers are reported by us, not by FastAPI
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> models.User:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authorized, no token")

    try:
        user_id = token_subject(credentials.credentials)
    except JWTError as exc:
        logger.warning("rejected bearer token: %s", exc)
        raise AuthenticationError("Could not validate credentials")

    user = db.query(models.User).filter(models.User.id == user_id).first()
    if not user:
        raise AuthenticationError("User not found")
    return user
