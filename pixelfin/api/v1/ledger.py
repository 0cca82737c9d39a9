"""Read endpoints - ledger snapshot, transactions, balance and trend"""

from typing import List

from fastapi import APIRouter, Depends

from pixelfin.api.dependencies import get_store
from pixelfin.api.v1.schemas import (
    BalanceResponse,
    LedgerResponse,
    TransactionSchema,
    TrendSummarySchema,
)
from pixelfin.config import settings
from pixelfin.services.ledger_store import LedgerStore

router = APIRouter()


@router.get("/ledger", response_model=LedgerResponse)
def get_ledger(store: LedgerStore = Depends(get_store)):
    """
    Everything the presentation layer renders in one call.

    Returns:
        loading/error flags, balance, 7-day trend and the full transaction list
    """
    return LedgerResponse.model_validate(store.snapshot())


@router.get("/transactions", response_model=List[TransactionSchema])
def list_transactions(store: LedgerStore = Depends(get_store)):
    """Full ledger, oldest first"""
    return [TransactionSchema.model_validate(t) for t in store.transactions]


@router.get("/balance", response_model=BalanceResponse)
def get_balance(store: LedgerStore = Depends(get_store)):
    return BalanceResponse(
        balance=store.balance,
        balance_cents=store.balance_cents,
        currency=settings.default_currency,
    )


@router.get("/trend", response_model=TrendSummarySchema)
def get_trend(store: LedgerStore = Depends(get_store)):
    return TrendSummarySchema.model_validate(store.trend())
