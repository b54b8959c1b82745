# fintrack/schemas/user.py
from pydantic import BaseModel, EmailStr, field_validator

from fintrack.schemas.auth import _check_new_password, _check_username


class ProfileUpdate(BaseModel):
    username: str
    email: EmailStr

    @field_validator("username")
    @classmethod
    def username_length(cls, v: str) -> str:
        return _check_username(v)


class PasswordChange(BaseModel):
    currentPassword: str
    newPassword: str

    @field_validator("currentPassword")
    @classmethod
    def current_present(cls, v: str) -> str:
        if not v:
            raise ValueError("Current password is required")
        return v

    @field_validator("newPassword")
    @classmethod
    def new_length(cls, v: str) -> str:
        return _check_new_password(v, "New password")


class AccountDelete(BaseModel):
    password: str

    @field_validator("password")
    @classmethod
    def password_present(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required to delete account")
        return v
