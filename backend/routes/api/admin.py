"""Admin read models: full ledger and analytics."""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from core.dependencies import get_db_session
from repositories.transaction_repo import TransactionRepository
from services.analytics_service import get_analytics

from .schemas import AnalyticsOut, TransactionOut

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/transactions", response_model=List[TransactionOut], summary="All transactions, newest first")
async def get_transactions(session: AsyncSession = Depends(get_db_session)):
    return await TransactionRepository(session).list_all()


@router.get("/analytics", response_model=AnalyticsOut, summary="Platform analytics over the last N days")
async def get_admin_analytics(
    days: int = Query(default=30, ge=1, le=3650),
    session: AsyncSession = Depends(get_db_session),
):
    return AnalyticsOut.model_validate(await get_analytics(session, days=days))
