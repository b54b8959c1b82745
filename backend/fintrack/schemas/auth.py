# fintrack/schemas/auth.py
from pydantic import BaseModel, EmailStr, field_validator


def _check_username(value: str) -> str:
    value = (value or "").strip()
    if len(value) < 3:
        raise ValueError("Username must be at least 3 characters long")
    if len(value) > 100:
        raise ValueError("Username cannot exceed 100 characters")
    return value


def _check_new_password(value: str, label: str = "Password") -> str:
    if value is None or len(value) < 6:
        raise ValueError(f"{label} must be at least 6 characters long")
    return value


class UserCreate(BaseModel):
    username: str
    email: EmailStr
    password: str

    @field_validator("username")
    @classmethod
    def username_length(cls, v: str) -> str:
        return _check_username(v)

    @field_validator("password")
    @classmethod
    def password_length(cls, v: str) -> str:
        return _check_new_password(v)


class UserLogin(BaseModel):
    email: EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def password_present(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v
