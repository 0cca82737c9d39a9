"""
Ledger store - owner of the in-memory transaction ledger.

The store reads and writes the whole ledger through a key/value storage
backend. In-memory state only advances after the backend confirms a write,
so what callers see always matches what is durably persisted. Failures never
raise out of the public operations; they come back as an OperationResult and
are mirrored in the `error` attribute until the next successful operation.
"""

import asyncio
import bisect
import logging
import secrets
import string
from datetime import datetime, timezone, tzinfo
from enum import Enum
from typing import Callable, List, Optional, Tuple

from pixelfin.config import settings
from pixelfin.domain.codec import decode_ledger, dumps_ledger, loads_ledger, normalize_note
from pixelfin.domain.models import (
    EXPENSE,
    SAVING,
    TRANSACTION_KINDS,
    LedgerSnapshot,
    OperationResult,
    Transaction,
    TrendSummary,
    cents_to_currency,
)
from pixelfin.domain.money import entry_amount_cents
from pixelfin.domain.trend import analyze, compute_balance_cents
from pixelfin.infrastructure.observability.logging import log_transaction_recorded
from pixelfin.infrastructure.observability.metrics import (
    record_storage_failure,
    records_rejected_counter,
    transactions_recorded_counter,
    validation_failures_counter,
)
from pixelfin.infrastructure.storage.base import KeyValueStorage
from pixelfin.utils.date_utils import calendar_day, resolve_timezone, truncate_to_millis, utc_now

logger = logging.getLogger(__name__)

LOAD_ERROR = "Unable to load your saved transactions."
REFRESH_ERROR = "Unable to refresh your saved transactions."
INVALID_AMOUNT_ERROR = "Transaction amount must be greater than zero."
INVALID_KIND_ERROR = "Transaction type must be 'saving' or 'expense'."
SAVE_ERROR = "Unable to save your latest change."
CLEAR_ERROR = "Unable to clear saved transactions."

_ID_ALPHABET = string.digits + string.ascii_lowercase


class StoreState(str, Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


def generate_transaction_id(now: datetime) -> str:
    """Epoch milliseconds plus 8 random base36 characters"""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(8))
    return f"{int(now.timestamp() * 1000)}-{suffix}"


class LedgerStore:
    """Single logical writer over the persisted ledger"""

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: Optional[str] = None,
        window_days: Optional[int] = None,
        tz: Optional[tzinfo] = None,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[datetime], str]] = None,
    ):
        self.storage = storage
        self.key = key or settings.storage_key
        self.window_days = window_days or settings.trend_window_days
        self.tz = tz or resolve_timezone(settings.trend_timezone)
        self._clock = clock or utc_now
        self._id_factory = id_factory or generate_transaction_id

        self._transactions: Tuple[Transaction, ...] = ()
        self._loaded = False
        self._pending = 0
        self._error: Optional[str] = None
        # Serializes every read-modify-persist sequence
        self._lock = asyncio.Lock()
        self._trend_cache: Optional[Tuple[Tuple[Transaction, ...], object, TrendSummary]] = None

    # -- state ---------------------------------------------------------------

    @property
    def state(self) -> StoreState:
        if self._pending:
            return StoreState.LOADING
        return StoreState.READY if self._loaded else StoreState.UNINITIALIZED

    @property
    def loading(self) -> bool:
        return self._pending > 0

    @property
    def error(self) -> Optional[str]:
        return self._error

    def _begin(self) -> None:
        self._pending += 1

    def _finish(self) -> None:
        self._pending -= 1
        self._loaded = True

    def _fail(self, message: str, reason: str) -> OperationResult:
        self._error = message
        return OperationResult(ok=False, error=message, reason=reason)

    # -- reads ---------------------------------------------------------------

    @property
    def transactions(self) -> List[Transaction]:
        return list(self._transactions)

    @property
    def balance_cents(self) -> int:
        return compute_balance_cents(self._transactions)

    @property
    def balance(self) -> float:
        return cents_to_currency(self.balance_cents)

    def trend(self, now: Optional[datetime] = None) -> TrendSummary:
        """Trend summary for the window ending on now's calendar day"""
        now = now or self._clock()
        snapshot = self._transactions
        day = calendar_day(now, self.tz)

        cached = self._trend_cache
        if cached is not None and cached[0] is snapshot and cached[1] == day:
            return cached[2]

        summary = analyze(snapshot, now, window_days=self.window_days, tz=self.tz)
        self._trend_cache = (snapshot, day, summary)
        return summary

    def snapshot(self, now: Optional[datetime] = None) -> LedgerSnapshot:
        return LedgerSnapshot(
            loading=self.loading,
            error=self._error,
            balance_cents=self.balance_cents,
            trend=self.trend(now),
            transactions=self.transactions,
        )

    # -- loading -------------------------------------------------------------

    async def load(self) -> OperationResult:
        """Replace the in-memory ledger with the persisted one"""
        return await self._reload(LOAD_ERROR)

    async def refresh(self) -> OperationResult:
        """Pick up out-of-band changes to the persisted ledger"""
        return await self._reload(REFRESH_ERROR)

    async def _reload(self, failure_message: str) -> OperationResult:
        async with self._lock:
            self._begin()
            try:
                blob = await self.storage.get(self.key)
                decoded = decode_ledger(loads_ledger(blob))
            except Exception:
                logger.error("Unable to read stored ledger", exc_info=True, extra={"key": self.key})
                record_storage_failure("read")
                self._transactions = ()
                return self._fail(failure_message, "storage")
            finally:
                self._finish()

            if decoded.rejected_count:
                records_rejected_counter.inc(decoded.rejected_count)
            if blob is None:
                logger.info("No stored ledger yet", extra={"key": self.key})

            self._transactions = tuple(decoded.transactions)
            self._error = None
            return OperationResult(ok=True)

    # -- mutations -----------------------------------------------------------

    async def add_saving(self, amount: float, note: Optional[str] = None) -> OperationResult:
        return await self.record(SAVING, amount, note)

    async def add_expense(self, amount: float, note: Optional[str] = None) -> OperationResult:
        return await self.record(EXPENSE, amount, note)

    def _new_id(self, now: datetime) -> str:
        taken = {t.id for t in self._transactions}
        candidate = self._id_factory(now)
        while candidate in taken:
            candidate = self._id_factory(now)
        return candidate

    async def record(self, kind: str, amount: float, note: Optional[str] = None) -> OperationResult:
        """
        Append a transaction and persist the full ledger.

        The ledger is only replaced after the write succeeds; on failure the
        in-memory ledger is left exactly as it was.
        """
        if kind not in TRANSACTION_KINDS:
            return self._fail(INVALID_KIND_ERROR, "invalid_kind")

        amount_cents = entry_amount_cents(amount)
        if amount_cents <= 0:
            validation_failures_counter.inc()
            return self._fail(INVALID_AMOUNT_ERROR, "invalid_amount")

        async with self._lock:
            now = truncate_to_millis(self._clock().astimezone(timezone.utc))
            entry = Transaction(
                id=self._new_id(now),
                kind=kind,
                amount_cents=amount_cents,
                created_at=now,
                note=normalize_note(note),
            )
            updated = list(self._transactions)
            bisect.insort_right(updated, entry, key=lambda t: t.created_at)

            try:
                await self.storage.set(self.key, dumps_ledger(updated))
            except Exception:
                logger.error(
                    "Failed to persist new transaction",
                    exc_info=True,
                    extra={"key": self.key, "kind": kind},
                )
                record_storage_failure("write")
                return self._fail(SAVE_ERROR, "storage")

            self._transactions = tuple(updated)
            self._error = None

        transactions_recorded_counter.labels(kind=kind).inc()
        log_transaction_recorded(entry.id, kind, amount_cents, self.balance_cents)
        return OperationResult(ok=True, transaction=entry)

    async def clear(self) -> OperationResult:
        """Erase the persisted ledger, then the in-memory one"""
        async with self._lock:
            self._begin()
            try:
                await self.storage.remove(self.key)
            except Exception:
                logger.error("Failed to clear stored ledger", exc_info=True, extra={"key": self.key})
                record_storage_failure("remove")
                return self._fail(CLEAR_ERROR, "storage")
            finally:
                self._finish()

            self._transactions = ()
            self._error = None

        logger.info("Ledger cleared", extra={"key": self.key})
        return OperationResult(ok=True)
