"""Pydantic schemas for API request/response validation"""

import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EntryRequest(BaseModel):
    """Request body for POST /v1/savings and POST /v1/expenses"""

    amount: float = Field(..., description="Amount in currency units; must round to at least one cent")
    note: Optional[str] = Field(None, max_length=500)


class TransactionSchema(BaseModel):
    """Single recorded transaction"""

    model_config = ConfigDict(from_attributes=True)

    id: str
    kind: str
    amount: float
    amount_cents: int
    note: Optional[str] = None
    created_at: datetime.datetime


class TrendPointSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime.date
    savings: float
    expenses: float
    net: float


class TrendSummarySchema(BaseModel):
    """Response for GET /v1/trend"""

    model_config = ConfigDict(from_attributes=True)

    points: List[TrendPointSchema]
    window_days: int
    total_savings: float
    total_expenses: float
    net: float
    average_daily_net: float
    direction: str
    mood: str
    background_tint: str
    change_from_previous_window: float
    previous_window_net: float


class BalanceResponse(BaseModel):
    """Response for GET /v1/balance"""

    balance: float
    balance_cents: int
    currency: str


class LedgerResponse(BaseModel):
    """Full presentation snapshot for GET /v1/ledger and mutation responses"""

    model_config = ConfigDict(from_attributes=True)

    loading: bool
    error: Optional[str] = None
    balance: float
    trend: TrendSummarySchema
    transactions: List[TransactionSchema]
