"""Trend analysis engine - windowed savings/expense summary and mood"""

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Dict, Iterable, List

from pixelfin.domain.models import SAVING, DailyBucket, Transaction, TrendPoint, TrendSummary
from pixelfin.domain.money import round_half_up
from pixelfin.utils.date_utils import calendar_day, generate_date_range

DEFAULT_WINDOW_DAYS = 7

BACKGROUND_TINT_BY_MOOD: Dict[str, str] = {
    "happy": "#163b2a",
    "neutral": "#0b0d0f",
    "sad": "#3b1f29",
}


def determine_direction(net_cents: int, previous_net_cents: int) -> str:
    """Compare this window's net to the preceding window's net"""
    if net_cents > previous_net_cents:
        return "up"
    if net_cents < previous_net_cents:
        return "down"
    return "flat"


def classify_mood(
    net_cents: int,
    direction: str,
    total_savings_cents: int,
    total_expenses_cents: int,
) -> str:
    """
    Classify the window mood. Rules are evaluated in order, first match wins:

    1. net <= 0 and trending down          -> sad
    2. net >= 0 and trending up            -> happy
    3. savings > expenses and not down     -> happy
    4. expenses > savings * 1.25           -> sad
    5. otherwise                           -> neutral
    """
    if net_cents <= 0 and direction == "down":
        return "sad"
    if net_cents >= 0 and direction == "up":
        return "happy"
    if total_savings_cents > total_expenses_cents and direction != "down":
        return "happy"
    # expenses > savings * 1.25, kept in integers
    if total_expenses_cents * 4 > total_savings_cents * 5:
        return "sad"
    return "neutral"


def analyze(
    transactions: Iterable[Transaction],
    now: datetime,
    window_days: int = DEFAULT_WINDOW_DAYS,
    tz: tzinfo = timezone.utc,
) -> TrendSummary:
    """
    Summarize the trailing window of calendar days ending on now's day.

    Requirements:
    - One zero-filled point per day of the window, oldest first
    - Preceding window of equal length contributes only its net total
    - Transactions outside both windows are ignored
    - All arithmetic in integer cents; currency conversion happens on read
    """
    if window_days < 1:
        raise ValueError("window_days must be at least 1")

    window_end = calendar_day(now, tz)
    window_start = window_end - timedelta(days=window_days - 1)
    previous_start = window_start - timedelta(days=window_days)
    previous_end = window_start - timedelta(days=1)

    buckets: Dict = {}
    previous_net_cents = 0

    for txn in transactions:
        day = calendar_day(txn.created_at, tz)
        if window_start <= day <= window_end:
            buckets.setdefault(day, DailyBucket()).add(txn)
        elif previous_start <= day <= previous_end:
            previous_net_cents += txn.signed_cents

    points: List[TrendPoint] = []
    total_savings = 0
    total_expenses = 0

    for day in generate_date_range(window_start, window_end):
        bucket = buckets.get(day, DailyBucket())
        total_savings += bucket.savings_cents
        total_expenses += bucket.expenses_cents
        points.append(
            TrendPoint(
                date=day,
                savings_cents=bucket.savings_cents,
                expenses_cents=bucket.expenses_cents,
            )
        )

    net_cents = total_savings - total_expenses
    direction = determine_direction(net_cents, previous_net_cents)
    mood = classify_mood(net_cents, direction, total_savings, total_expenses)

    return TrendSummary(
        points=points,
        window_days=window_days,
        total_savings_cents=total_savings,
        total_expenses_cents=total_expenses,
        average_daily_net_cents=round_half_up(net_cents / window_days),
        previous_window_net_cents=previous_net_cents,
        direction=direction,
        mood=mood,
        background_tint=BACKGROUND_TINT_BY_MOOD[mood],
    )


def compute_balance_cents(transactions: Iterable[Transaction]) -> int:
    """Signed sum over the full history: savings positive, expenses negative"""
    return sum(t.signed_cents for t in transactions)
