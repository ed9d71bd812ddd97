"""Wallet deposits/withdrawals and the transaction ledger."""

from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import Field, field_validator
from sqlalchemy.ext.asyncio import AsyncSession

from core.dependencies import get_db_session
from models.transaction import TRANSACTION_STATUSES, TRANSACTION_TYPES
from repositories.transaction_repo import TransactionRepository
from services.wallet_service import create_transaction, deposit, settle_withdrawal, withdraw

from .schemas import BalanceOut, CamelModel, TransactionOut

router = APIRouter(tags=["wallet"])


class AmountBody(CamelModel):
    user_id: int
    amount: Decimal = Field(..., gt=0)


class SettleBody(CamelModel):
    status: str


class TransactionCreateBody(CamelModel):
    user_id: int
    type: str
    amount: Decimal
    description: Optional[str] = None
    status: str = "completed"

    @field_validator("type")
    @classmethod
    def _known_type(cls, v: str) -> str:
        if v not in TRANSACTION_TYPES:
            raise ValueError(f"type must be one of: {', '.join(TRANSACTION_TYPES)}")
        return v

    @field_validator("status")
    @classmethod
    def _known_status(cls, v: str) -> str:
        if v not in TRANSACTION_STATUSES:
            raise ValueError(f"status must be one of: {', '.join(TRANSACTION_STATUSES)}")
        return v


@router.post("/wallet/add-money", response_model=BalanceOut, summary="Deposit into a wallet")
async def post_add_money(body: AmountBody, session: AsyncSession = Depends(get_db_session)):
    user = await deposit(session, body.user_id, body.amount)
    return BalanceOut(message="Money added successfully", balance=user.wallet_balance)


@router.post("/wallet/withdraw", response_model=BalanceOut, summary="Request a withdrawal")
async def post_withdraw(body: AmountBody, session: AsyncSession = Depends(get_db_session)):
    user = await withdraw(session, body.user_id, body.amount)
    return BalanceOut(message="Withdrawal request submitted", balance=user.wallet_balance)


@router.put(
    "/wallet/transactions/{transaction_id}",
    response_model=TransactionOut,
    summary="Approve or reject a pending withdrawal",
)
async def put_settle(
    transaction_id: int,
    body: SettleBody,
    session: AsyncSession = Depends(get_db_session),
):
    return await settle_withdrawal(session, transaction_id, body.status)


@router.get("/transactions", response_model=List[TransactionOut], summary="All transactions, newest first")
async def get_transactions(session: AsyncSession = Depends(get_db_session)):
    return await TransactionRepository(session).list_all()


@router.post("/transactions", response_model=TransactionOut, summary="Create a ledger entry")
async def post_transaction(body: TransactionCreateBody, session: AsyncSession = Depends(get_db_session)):
    return await create_transaction(
        session,
        body.user_id,
        body.type,
        body.amount,
        body.description,
        body.status,
    )
