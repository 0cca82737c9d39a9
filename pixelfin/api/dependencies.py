"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from pixelfin.services.ledger_store import LedgerStore


def get_store(request: Request) -> LedgerStore:
    """Provide the application's single ledger store"""
    return request.app.state.store
