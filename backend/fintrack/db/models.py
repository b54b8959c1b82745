# fintrack/db/models.py — User, Income, Expense
from sqlalchemy import Column, Integer, String, DateTime, func, Numeric, Date, ForeignKey, Enum, Index
from sqlalchemy.orm import relationship
from .base import Base
import enum


class ExpenseCategory(enum.Enum):
    food_dining = "Food & Dining"
    transportation = "Transportation"
    housing_rent = "Housing & Rent"
    utilities = "Utilities"
    healthcare = "Healthcare"
    entertainment = "Entertainment"
    shopping = "Shopping"
    education = "Education"
    savings = "Savings"
    other = "Other"

    @classmethod
    def from_label(cls, label: str) -> "ExpenseCategory":
        """Look up a category by its display label; raises ValueError for unknown labels."""
        return cls(label)


class TransactionKind(enum.Enum):
    income = "income"
    expense = "expense"


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(100), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    # relationships
    incomes = relationship(
        "Income", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    expenses = relationship(
        "Expense", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )


class Income(Base):
    __tablename__ = "incomes"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    source = Column(String(100), nullable=False)
    date = Column(Date, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="incomes")

    __table_args__ = (
        Index("ix_incomes_user_date", "user_id", "date"),
    )


class Expense(Base):
    __tablename__ = "expenses"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(
        Enum(ExpenseCategory, name="expense_category", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    description = Column(String(200), nullable=False, default="")
    date = Column(Date, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="expenses")

    __table_args__ = (
        Index("ix_expenses_user_date", "user_id", "date"),
        Index("ix_expenses_user_category", "user_id", "category"),
    )
