"""Mutation endpoints - record savings/expenses, refresh and clear"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from pixelfin.api.dependencies import get_store
from pixelfin.api.v1.schemas import EntryRequest, LedgerResponse
from pixelfin.domain.models import OperationResult
from pixelfin.services.ledger_store import LedgerStore

router = APIRouter()

logger = logging.getLogger(__name__)

_STATUS_BY_REASON = {
    "invalid_amount": 422,
    "invalid_kind": 422,
    "storage": 503,
}


def ensure_ok(result: OperationResult, request: Request) -> None:
    """Translate a failed store operation into an HTTP error"""
    if result.ok:
        return
    status_code = _STATUS_BY_REASON.get(result.reason or "", 500)
    logger.warning(
        f"Ledger operation failed: {result.error}",
        extra={"method": request.method, "path": request.url.path, "reason": result.reason},
    )
    raise HTTPException(status_code=status_code, detail=result.error)


@router.post("/savings", response_model=LedgerResponse, status_code=201)
async def add_saving(
    request_body: EntryRequest,
    request: Request,
    store: LedgerStore = Depends(get_store),
):
    """Record a saving and return the updated ledger"""
    result = await store.add_saving(request_body.amount, request_body.note)
    ensure_ok(result, request)
    return LedgerResponse.model_validate(store.snapshot())


@router.post("/expenses", response_model=LedgerResponse, status_code=201)
async def add_expense(
    request_body: EntryRequest,
    request: Request,
    store: LedgerStore = Depends(get_store),
):
    """Record an expense and return the updated ledger"""
    result = await store.add_expense(request_body.amount, request_body.note)
    ensure_ok(result, request)
    return LedgerResponse.model_validate(store.snapshot())


@router.post("/refresh", response_model=LedgerResponse)
async def refresh_ledger(request: Request, store: LedgerStore = Depends(get_store)):
    """
    Re-read the persisted ledger.

    On a read failure the in-memory ledger is emptied and 503 is returned.
    """
    result = await store.refresh()
    ensure_ok(result, request)
    return LedgerResponse.model_validate(store.snapshot())


@router.delete("/transactions", response_model=LedgerResponse)
async def clear_ledger(request: Request, store: LedgerStore = Depends(get_store)):
    """Erase every transaction, persisted and in memory"""
    result = await store.clear()
    ensure_ok(result, request)
    return LedgerResponse.model_validate(store.snapshot())
