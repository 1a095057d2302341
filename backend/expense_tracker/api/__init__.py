from fastapi import APIRouter

from .categories import router as categories_router
from .budgets import router as budgets_router
from .expenses import router as expenses_router
from .reports import router as reports_router

api_router = APIRouter()

api_router.include_router(categories_router, prefix="/categories", tags=["categories"])
api_router.include_router(budgets_router, prefix="/budgets", tags=["budgets"])
api_router.include_router(expenses_router, prefix="/expenses", tags=["expenses"])
api_router.include_router(reports_router, prefix="/reports", tags=["reports"])
