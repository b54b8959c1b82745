# fintrack.api.v1 package - exports the router modules so
# "from fintrack.api.v1 import auth, income, ..." works.
from . import auth, dashboard, expense, health, income, reports, user

__all__ = ["auth", "dashboard", "expense", "health", "income", "reports", "user"]
