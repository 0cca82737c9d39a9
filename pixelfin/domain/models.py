"""Domain models - pure Python dataclasses representing ledger entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

SAVING = "saving"
EXPENSE = "expense"
TRANSACTION_KINDS = (SAVING, EXPENSE)


def cents_to_currency(cents: int) -> float:
    """Convert integer cents to currency units (exact for any cent value)"""
    return cents / 100


@dataclass(frozen=True)
class Transaction:
    """Single saving or expense event, immutable once recorded"""

    id: str
    kind: str  # "saving" or "expense"
    amount_cents: int  # always > 0
    created_at: datetime  # UTC, millisecond precision
    note: Optional[str] = None

    @property
    def amount(self) -> float:
        return cents_to_currency(self.amount_cents)

    @property
    def signed_cents(self) -> int:
        """Savings count positive, expenses negative"""
        return self.amount_cents if self.kind == SAVING else -self.amount_cents


@dataclass
class DailyBucket:
    """Per-day savings/expense totals used while analyzing a window"""

    savings_cents: int = 0
    expenses_cents: int = 0

    def add(self, transaction: Transaction) -> None:
        if transaction.kind == SAVING:
            self.savings_cents += transaction.amount_cents
        else:
            self.expenses_cents += transaction.amount_cents


@dataclass(frozen=True)
class TrendPoint:
    """One calendar day of the trend window"""

    date: date
    savings_cents: int
    expenses_cents: int

    @property
    def net_cents(self) -> int:
        return self.savings_cents - self.expenses_cents

    @property
    def savings(self) -> float:
        return cents_to_currency(self.savings_cents)

    @property
    def expenses(self) -> float:
        return cents_to_currency(self.expenses_cents)

    @property
    def net(self) -> float:
        return cents_to_currency(self.net_cents)


@dataclass(frozen=True)
class TrendSummary:
    """Windowed view over the ledger driving presentation mood"""

    points: List[TrendPoint]
    window_days: int
    total_savings_cents: int
    total_expenses_cents: int
    average_daily_net_cents: int
    previous_window_net_cents: int
    direction: str  # "up" | "down" | "flat"
    mood: str  # "happy" | "neutral" | "sad"
    background_tint: str

    @property
    def net_cents(self) -> int:
        return self.total_savings_cents - self.total_expenses_cents

    @property
    def change_from_previous_window_cents(self) -> int:
        return self.net_cents - self.previous_window_net_cents

    @property
    def total_savings(self) -> float:
        return cents_to_currency(self.total_savings_cents)

    @property
    def total_expenses(self) -> float:
        return cents_to_currency(self.total_expenses_cents)

    @property
    def net(self) -> float:
        return cents_to_currency(self.net_cents)

    @property
    def average_daily_net(self) -> float:
        return cents_to_currency(self.average_daily_net_cents)

    @property
    def previous_window_net(self) -> float:
        return cents_to_currency(self.previous_window_net_cents)

    @property
    def change_from_previous_window(self) -> float:
        return cents_to_currency(self.change_from_previous_window_cents)


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a ledger store operation; errors never propagate as exceptions"""

    ok: bool
    error: Optional[str] = None
    reason: Optional[str] = None  # "invalid_amount" | "invalid_kind" | "storage"
    transaction: Optional[Transaction] = None


@dataclass(frozen=True)
class LedgerSnapshot:
    """Everything the presentation layer reads from the store at one moment"""

    loading: bool
    error: Optional[str]
    balance_cents: int
    trend: TrendSummary
    transactions: List[Transaction]

    @property
    def balance(self) -> float:
        return cents_to_currency(self.balance_cents)


@dataclass(frozen=True)
class RecordRejection:
    """Why a persisted record was dropped while decoding"""

    index: int
    reason: str


@dataclass(frozen=True)
class DecodeResult:
    """Accepted transactions plus the records that were dropped"""

    transactions: List[Transaction] = field(default_factory=list)
    rejected: List[RecordRejection] = field(default_factory=list)

    @property
    def rejected_count(self) -> int:
        return len(self.rejected)
