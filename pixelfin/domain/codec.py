"""
Ledger codec - turns the persisted blob into a clean, ordered transaction list.

Decoding is total: every candidate record is validated on its own and a bad
record is dropped without affecting the others. Callers get the accepted
transactions plus a rejection list they may report as diagnostics.
"""

import json
import logging
import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pixelfin.domain.exceptions import LedgerParseError
from pixelfin.domain.models import (
    TRANSACTION_KINDS,
    DecodeResult,
    RecordRejection,
    Transaction,
)
from pixelfin.domain.money import sanitize_amount_cents
from pixelfin.utils.date_utils import format_instant, parse_instant

logger = logging.getLogger(__name__)


def normalize_note(value: Any) -> Optional[str]:
    """Keep a note only when it is a string with visible content"""
    if isinstance(value, str) and value.strip():
        return value
    return None


class StoredTransaction(BaseModel):
    """Wire shape of one persisted transaction record"""

    # Wire names only: a record keyed by "kind"/"created_at" is malformed
    model_config = ConfigDict(extra="ignore")

    id: str
    kind: str = Field(alias="type")
    amount: float
    created_at: datetime = Field(alias="createdAt")
    note: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _check_id(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("id must be a non-empty string")
        return value

    @field_validator("kind", mode="before")
    @classmethod
    def _check_kind(cls, value: Any) -> str:
        if not isinstance(value, str) or value not in TRANSACTION_KINDS:
            raise ValueError("type must be 'saving' or 'expense'")
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def _check_amount(cls, value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("amount must be a number")
        try:
            numeric = float(value)
        except OverflowError as e:
            raise ValueError("amount must be finite") from e
        if not math.isfinite(numeric):
            raise ValueError("amount must be finite")
        return numeric

    @field_validator("created_at", mode="before")
    @classmethod
    def _check_created_at(cls, value: Any) -> datetime:
        if not isinstance(value, str):
            raise ValueError("createdAt must be a string")
        try:
            return parse_instant(value)
        except (ValueError, OverflowError) as e:
            raise ValueError("createdAt is not a valid instant") from e

    @field_validator("note", mode="before")
    @classmethod
    def _normalize_note(cls, value: Any) -> Optional[str]:
        return normalize_note(value)


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "record"
    return f"{location}: {first.get('msg', 'invalid')}"


def decode_ledger(raw: Any) -> DecodeResult:
    """
    Decode an arbitrary deserialized value into a DecodeResult.

    Rules per record: must be a mapping; id non-empty and not already accepted
    (first occurrence wins); type is saving/expense; amount is a finite number
    that sanitizes to more than zero cents; createdAt parses as an instant.
    Input that is not a list yields an empty result.
    """
    if not isinstance(raw, (list, tuple)):
        if raw is not None:
            logger.warning(
                "Stored ledger is not a list; treating as empty",
                extra={"payload_type": type(raw).__name__},
            )
        return DecodeResult()

    accepted: List[Transaction] = []
    rejected: List[RecordRejection] = []
    seen_ids = set()

    for index, item in enumerate(raw):
        if not isinstance(item, Mapping):
            rejected.append(RecordRejection(index, "record is not an object"))
            continue

        try:
            record = StoredTransaction.model_validate(dict(item))
        except ValidationError as e:
            rejected.append(RecordRejection(index, _describe(e)))
            continue

        if record.id in seen_ids:
            rejected.append(RecordRejection(index, f"duplicate id {record.id!r}"))
            continue

        amount_cents = sanitize_amount_cents(record.amount)
        if amount_cents <= 0:
            rejected.append(RecordRejection(index, "amount rounds to zero"))
            continue

        seen_ids.add(record.id)
        accepted.append(
            Transaction(
                id=record.id,
                kind=record.kind,
                amount_cents=amount_cents,
                created_at=record.created_at,
                note=record.note,
            )
        )

    if rejected:
        logger.warning(
            "Ignored invalid transaction(s) while decoding ledger",
            extra={"rejected": len(rejected), "accepted": len(accepted)},
        )
        for rejection in rejected:
            logger.debug("Rejected record %d: %s", rejection.index, rejection.reason)

    # sorted() is stable, so equal timestamps keep their stored order
    accepted = sorted(accepted, key=lambda t: t.created_at)
    return DecodeResult(transactions=accepted, rejected=rejected)


def decode(raw: Any) -> List[Transaction]:
    """Decode and return only the accepted transactions"""
    return decode_ledger(raw).transactions


def encode_transaction(transaction: Transaction) -> Dict[str, Any]:
    record: Dict[str, Any] = {
        "id": transaction.id,
        "type": transaction.kind,
        "amount": transaction.amount,
        "createdAt": format_instant(transaction.created_at),
    }
    if transaction.note is not None:
        record["note"] = transaction.note
    return record


def encode(transactions: Sequence[Transaction]) -> List[Dict[str, Any]]:
    """Wire form of a transaction sequence"""
    return [encode_transaction(t) for t in transactions]


def loads_ledger(blob: Optional[str]) -> Any:
    """
    Parse a persisted blob into its raw JSON value.

    An absent or empty blob means no ledger yet and parses to an empty list.

    Raises:
        LedgerParseError: If the blob is not valid JSON
    """
    if not blob:
        return []
    try:
        return json.loads(blob)
    except (ValueError, RecursionError) as e:
        raise LedgerParseError(f"Stored ledger is not valid JSON: {e}") from e


def dumps_ledger(transactions: Sequence[Transaction]) -> str:
    return json.dumps(encode(transactions))
