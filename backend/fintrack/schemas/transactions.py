# fintrack/schemas/transactions.py
from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from fintrack.db.models import ExpenseCategory

CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("10000000000")


class TransactionBase(BaseModel):
    # user_id is never read from the body; it comes from the bearer token
    amount: Decimal
    date: date

    @field_validator("amount")
    @classmethod
    def amount_positive(cls, v: Decimal) -> Decimal:
        # stored as NUMERIC(12, 2)
        if v >= MAX_AMOUNT:
            raise ValueError("Amount is too large")
        if v > 0:
            v = v.quantize(CENT, rounding=ROUND_HALF_UP)
        if v <= 0:
            raise ValueError("Amount must be greater than 0")
        return v


class IncomeIn(TransactionBase):
    source: str

    @field_validator("source")
    @classmethod
    def source_length(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Please provide income source")
        if len(v) > 100:
            raise ValueError("Source cannot exceed 100 characters")
        return v


class ExpenseIn(TransactionBase):
    category: ExpenseCategory
    description: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def known_category(cls, v):
        if isinstance(v, ExpenseCategory):
            return v
        try:
            return ExpenseCategory.from_label(v)
        except ValueError:
            raise ValueError("Please select a valid category")

    @field_validator("description")
    @classmethod
    def description_length(cls, v: Optional[str]) -> str:
        v = (v or "").strip()
        if len(v) > 200:
            raise ValueError("Description cannot exceed 200 characters")
        return v
