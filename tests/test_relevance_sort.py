from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from daybook.models import ModeOfPay, PayType
from daybook.services import query
from daybook.services.query import recency_bonus, score_entry, sort_entries
from tests.factories import NOW, make_entry

OLD = NOW - timedelta(days=400)  # past the recency window


def test_exact_amount_match_scores_sixty():
    entry = make_entry(1, amount="500.00", description="Client fee", created_at=OLD)

    assert score_entry(entry, "500", NOW) == query.AMOUNT_EXACT_WEIGHT


@pytest.mark.parametrize(
    "entry_id, term, expected",
    [
        (42, "42", query.ID_EXACT_WEIGHT),
        (421, "42", query.ID_PREFIX_WEIGHT),
        (142, "42", query.ID_SUBSTRING_WEIGHT),
    ],
)
def test_id_tiers_are_mutually_exclusive(entry_id, term, expected):
    entry = make_entry(entry_id, amount="1.00", created_at=OLD)
    assert score_entry(entry, term, NOW) == expected


@pytest.mark.parametrize(
    "description, expected",
    [
        ("rent", query.DESCRIPTION_EXACT_WEIGHT),
        ("Rent for June", query.DESCRIPTION_PREFIX_WEIGHT),
        ("June rent", query.DESCRIPTION_SUBSTRING_WEIGHT),
        (None, 0),
    ],
)
def test_description_tiers(description, expected):
    entry = make_entry(9, amount="1.00", description=description, created_at=OLD)
    assert score_entry(entry, "rent", NOW) == expected


def test_signals_add_up():
    entry = make_entry(
        7,
        amount="7.00",
        description="7",
        payment_type=PayType.OUTGOING,
        created_at=NOW,
    )
    # id exact + description exact + amount exact + full recency bonus
    assert score_entry(entry, "7", NOW) == 100 + 80 + 60 + 10


def test_payment_type_and_mode_signals():
    entry = make_entry(5, amount="1.00", mode_of_pay=ModeOfPay.UPI, created_at=OLD)
    assert score_entry(entry, "incoming", NOW) == query.PAYMENT_TYPE_EXACT_WEIGHT
    assert score_entry(entry, "up", NOW) == query.MODE_OF_PAY_SUBSTRING_WEIGHT


def test_recency_bonus_decays_to_zero():
    assert recency_bonus(NOW, NOW) == 10.0
    assert recency_bonus(NOW - timedelta(days=150), NOW) == pytest.approx(5.0)
    assert recency_bonus(NOW - timedelta(days=300), NOW) == 0.0
    assert recency_bonus(NOW - timedelta(days=900), NOW) == 0.0
    # Entries dated in the future never exceed the maximum.
    assert recency_bonus(NOW + timedelta(days=3), NOW) == 10.0


def test_relevance_orders_by_descending_score():
    rows = [
        make_entry(1, amount="10.00", description="office rent", created_at=OLD),
        make_entry(2, amount="10.00", description="rent", created_at=OLD),
        make_entry(3, amount="10.00", description="rental deposit", created_at=OLD),
    ]

    ordered = sort_entries(rows, "relevance", "desc", "rent", now=NOW)

    assert [e.id for e in ordered] == [2, 3, 1]


def test_relevance_ignores_sort_order():
    rows = [
        make_entry(1, amount="10.00", description="office rent", created_at=OLD),
        make_entry(2, amount="10.00", description="rent", created_at=OLD),
    ]
    assert sort_entries(rows, "relevance", "asc", "rent", now=NOW) == sort_entries(
        rows, "relevance", "desc", "rent", now=NOW
    )


def test_relevance_ties_keep_input_order():
    rows = [make_entry(i, amount="10.00", description="rent", created_at=OLD) for i in (5, 6, 8)]
    ordered = sort_entries(rows, "relevance", "desc", "rent", now=NOW)
    assert [e.id for e in ordered] == [5, 6, 8]


def test_relevance_is_deterministic():
    rows = [
        make_entry(i, amount=f"{i * 10}.00", description=f"item {i}", created_at=NOW - timedelta(days=i))
        for i in range(1, 30)
    ]
    first = sort_entries(rows, "relevance", "desc", "1", now=NOW)
    second = sort_entries(rows, "relevance", "desc", "1", now=NOW)
    assert [e.id for e in first] == [e.id for e in second]


def test_relevance_without_term_falls_back_to_newest_first():
    rows = [
        make_entry(1, created_at=NOW - timedelta(days=3)),
        make_entry(2, created_at=NOW - timedelta(days=1)),
        make_entry(3, created_at=NOW - timedelta(days=2)),
    ]
    assert [e.id for e in sort_entries(rows, "relevance", "asc", "  ")] == [2, 3, 1]


def test_date_and_amount_sorting():
    rows = [
        make_entry(1, amount="30.00", created_at=NOW - timedelta(days=3)),
        make_entry(2, amount="10.00", created_at=NOW - timedelta(days=1)),
        make_entry(3, amount="20.00", created_at=NOW - timedelta(days=2)),
    ]
    assert [e.id for e in sort_entries(rows, "date", "asc")] == [1, 3, 2]
    assert [e.id for e in sort_entries(rows, "date", "desc")] == [2, 3, 1]
    assert [e.id for e in sort_entries(rows, "amount", "asc")] == [2, 3, 1]
    assert [e.id for e in sort_entries(rows, "amount", "desc")] == [1, 3, 2]


def test_sort_returns_new_list():
    rows = [make_entry(1, amount="2.00"), make_entry(2, amount="1.00")]
    ordered = sort_entries(rows, "amount", "asc")
    assert ordered is not rows
    assert [e.id for e in rows] == [1, 2]


def test_unknown_sort_key_is_rejected():
    with pytest.raises(ValueError):
        sort_entries([], "name", "asc")
    with pytest.raises(ValueError):
        sort_entries([], "date", "sideways")


def test_date_sort_handles_mixed_and_missing_timestamps():
    naive = make_entry(1, created_at=datetime(2024, 6, 10, 9))
    aware = make_entry(2, created_at=datetime(2024, 6, 12, 9, tzinfo=timezone.utc))
    undated = make_entry(3)
    undated.created_at = None

    newest_first = sort_entries([undated, naive, aware], "date", "desc")
    oldest_first = sort_entries([undated, naive, aware], "date", "asc")

    assert [e.id for e in newest_first] == [2, 1, 3]
    assert [e.id for e in oldest_first] == [3, 1, 2]


def test_relevance_tolerates_undated_and_garbage_entries():
    undated = make_entry(1, description="rent")
    undated.created_at = None
    garbage = make_entry(2, description="rent", created_at=NOW)
    garbage.amount = "oops"

    ranked = sort_entries([undated, garbage], "relevance", "desc", "rent", now=NOW)

    assert [e.id for e in ranked] == [2, 1]
    assert score_entry(undated, "rent", NOW) == query.DESCRIPTION_EXACT_WEIGHT
