# fintrack/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fintrack.api.v1 import auth, dashboard, expense, health, income, reports, user
from fintrack.core.config import settings
from fintrack.core.errors import register_exception_handlers
from fintrack.core.logging_config import setup_logging
from fintrack.db.session import init_db

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        init_db()
        logger.info("database tables ready")
    yield


app = FastAPI(title="Personal Finance API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
  CORSMiddleware,
  allow_origins=settings.CORS_ORIGINS,
  allow_credentials=True,
  allow_methods=["*"],
  allow_headers=["*"],
)

register_exception_handlers(app)

prefix = settings.API_PREFIX
app.include_router(health.router, prefix=prefix, tags=["health"])
app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["auth"])
app.include_router(income.router, prefix=f"{prefix}/income", tags=["income"])
app.include_router(expense.router, prefix=f"{prefix}/expense", tags=["expense"])
app.include_router(dashboard.router, prefix=f"{prefix}/dashboard", tags=["dashboard"])
app.include_router(reports.router, prefix=f"{prefix}/reports", tags=["reports"])
app.include_router(user.router, prefix=f"{prefix}/user", tags=["user"])


@app.get("/")
def root():
    return {"success": True, "message": f"Personal Finance API - visit {prefix}/health"}
