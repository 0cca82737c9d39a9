"""Unit tests for trend analysis logic"""

from datetime import date, datetime, timedelta, timezone

import pytest

from pixelfin.domain.models import Transaction
from pixelfin.domain.trend import (
    BACKGROUND_TINT_BY_MOOD,
    analyze,
    classify_mood,
    compute_balance_cents,
    determine_direction,
)


def test_analyze_empty_ledger(now):
    """Empty ledger: 7 zero points, flat, neutral"""
    summary = analyze([], now)

    assert summary.window_days == 7
    assert len(summary.points) == 7
    assert all(p.savings == 0 and p.expenses == 0 and p.net == 0 for p in summary.points)
    assert summary.total_savings == 0
    assert summary.total_expenses == 0
    assert summary.net == 0
    assert summary.direction == "flat"
    assert summary.mood == "neutral"
    assert summary.background_tint == BACKGROUND_TINT_BY_MOOD["neutral"]


def test_analyze_points_cover_window_oldest_first(now):
    summary = analyze([], now)

    assert summary.points[0].date == date(2024, 5, 9)
    assert summary.points[-1].date == date(2024, 5, 15)
    assert [p.date for p in summary.points] == [
        date(2024, 5, 9) + timedelta(days=i) for i in range(7)
    ]


def test_analyze_single_saving_today(now, make_transaction):
    """One saving of 100.00 today: up and happy"""
    summary = analyze([make_transaction("saving", 10000)], now)

    assert summary.net == 100.0
    assert summary.previous_window_net == 0
    assert summary.change_from_previous_window == 100.0
    assert summary.direction == "up"
    assert summary.mood == "happy"
    assert summary.background_tint == "#163b2a"
    assert summary.points[-1].savings == 100.0


def test_analyze_overspending_trending_down_is_sad(now, make_transaction):
    """Expenses 130.00 vs savings 100.00, trending down"""
    transactions = [
        make_transaction("saving", 10000, days_ago=1),
        make_transaction("expense", 13000, days_ago=2),
        make_transaction("saving", 500, days_ago=9),
    ]

    summary = analyze(transactions, now)

    assert summary.total_expenses == 130.0
    assert summary.total_savings == 100.0
    assert summary.direction == "down"
    assert summary.mood == "sad"
    assert summary.background_tint == "#3b1f29"


def test_analyze_window_boundaries(now, make_transaction):
    """Day 6 back is in window, days 7-13 are the previous window, day 14 is ignored"""
    transactions = [
        make_transaction("saving", 100, days_ago=6),
        make_transaction("saving", 1000, days_ago=7),
        make_transaction("expense", 300, days_ago=13),
        make_transaction("saving", 99999, days_ago=14),
    ]

    summary = analyze(transactions, now)

    assert summary.points[0].savings_cents == 100
    assert summary.total_savings_cents == 100
    assert summary.previous_window_net_cents == 700
    assert summary.direction == "down"


def test_analyze_ignores_future_days(now, make_transaction):
    summary = analyze([make_transaction("saving", 500, days_ago=-1)], now)

    assert summary.total_savings_cents == 0
    assert summary.direction == "flat"


def test_analyze_buckets_by_calendar_day_in_zone(now):
    """A late-evening local transaction lands on the local calendar day"""
    eastern = timezone(timedelta(hours=-5))
    txn = Transaction(
        id="t1",
        kind="saving",
        amount_cents=2500,
        created_at=datetime(2024, 5, 15, 2, 0, tzinfo=timezone.utc),  # 21:00 on the 14th locally
    )

    utc_summary = analyze([txn], now)
    local_summary = analyze([txn], now, tz=eastern)

    assert utc_summary.points[-1].savings_cents == 2500
    assert local_summary.points[-1].savings_cents == 0
    assert local_summary.points[-2].date == date(2024, 5, 14)
    assert local_summary.points[-2].savings_cents == 2500


def test_analyze_sum_properties(now, make_transaction):
    transactions = [
        make_transaction("saving", 10, days_ago=0),
        make_transaction("saving", 20, days_ago=1),
        make_transaction("expense", 30, days_ago=1),
        make_transaction("expense", 1, days_ago=3),
        make_transaction("saving", 99999, days_ago=5),
        make_transaction("expense", 12345, days_ago=6),
    ]

    summary = analyze(transactions, now)

    assert summary.total_savings_cents - summary.total_expenses_cents == summary.net_cents
    assert summary.net_cents == sum(p.net_cents for p in summary.points)
    assert summary.total_savings_cents == sum(p.savings_cents for p in summary.points)
    assert summary.total_expenses_cents == sum(p.expenses_cents for p in summary.points)
    assert summary.net == round(summary.total_savings - summary.total_expenses, 2)


def test_analyze_no_float_drift(now, make_transaction):
    """Ten savings of 0.10 total exactly 1.00"""
    summary = analyze([make_transaction("saving", 10) for _ in range(10)], now)

    assert summary.total_savings == 1.0
    assert summary.net == 1.0


def test_analyze_average_daily_net(now, make_transaction):
    summary = analyze([make_transaction("saving", 10000)], now)
    assert summary.average_daily_net == 14.29

    summary = analyze([make_transaction("expense", 10000)], now)
    assert summary.average_daily_net == -14.29


def test_analyze_is_pure(now, make_transaction):
    transactions = [
        make_transaction("saving", 1234, days_ago=2),
        make_transaction("expense", 999, days_ago=8),
    ]

    assert analyze(transactions, now) == analyze(list(transactions), now)


def test_analyze_custom_window_length(now, make_transaction):
    summary = analyze([make_transaction("saving", 100, days_ago=2)], now, window_days=3)

    assert len(summary.points) == 3
    assert summary.points[0].date == date(2024, 5, 13)
    assert summary.total_savings_cents == 100


def test_analyze_rejects_empty_window(now):
    with pytest.raises(ValueError):
        analyze([], now, window_days=0)


def test_determine_direction():
    assert determine_direction(100, 0) == "up"
    assert determine_direction(-100, 0) == "down"
    assert determine_direction(50, 50) == "flat"


@pytest.mark.parametrize(
    "net, direction, savings, expenses, expected",
    [
        (0, "down", 100, 100, "sad"),  # rule 1 at zero net
        (-3000, "down", 10000, 13000, "sad"),  # rule 1
        (0, "up", 100, 100, "happy"),  # rule 2 at zero net
        (500, "up", 1000, 500, "happy"),  # rule 2
        (3000, "flat", 5000, 2000, "happy"),  # rule 3
        (3000, "down", 5000, 2000, "neutral"),  # rule 3 blocked by down, rule 4 not met
        (-3000, "up", 10000, 13000, "sad"),  # rule 4 after rules 1-3 miss
        (-1000, "flat", 10000, 11000, "neutral"),  # under the 1.25x threshold
        (-2500, "flat", 10000, 12500, "neutral"),  # exactly 1.25x is not above
        (-2501, "flat", 10000, 12501, "sad"),
        (0, "flat", 0, 0, "neutral"),
    ],
)
def test_classify_mood_rule_order(net, direction, savings, expenses, expected):
    assert classify_mood(net, direction, savings, expenses) == expected


def test_analyze_rule_four_fires_when_trending_up(now, make_transaction):
    """Still overspending, but less than last week: sad via the 1.25x rule"""
    transactions = [
        make_transaction("saving", 10000, days_ago=1),
        make_transaction("expense", 13000, days_ago=1),
        make_transaction("expense", 10000, days_ago=10),
    ]

    summary = analyze(transactions, now)

    assert summary.direction == "up"
    assert summary.mood == "sad"


def test_compute_balance_cents_spans_full_history(make_transaction):
    transactions = [
        make_transaction("saving", 10000, days_ago=400),
        make_transaction("expense", 2550, days_ago=30),
        make_transaction("saving", 5, days_ago=0),
    ]

    assert compute_balance_cents(transactions) == 7455
    assert compute_balance_cents([]) == 0
