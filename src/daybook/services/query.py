"""Entry query engine: filtering, relevance scoring and ordering.

Everything here runs against an entry collection that has already been
fetched; nothing touches a store. Functions never mutate their inputs and
always return new lists, so the same collection can back several screens.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..errors import ValidationError
from ..logging_config import get_logger
from ..models.bank import BankTransaction
from ..models.directory import Client, Nurse
from ..models.entry import Entry
from ..models.enums import PayStatus
from ._values import align, amount_text, money, text_of

logger = get_logger(__name__)

ALL = "all"
SORT_FIELDS = ("date", "amount", "relevance")
SORT_ORDERS = ("asc", "desc")

# Relevance signal weights. Within each tier group only the best tier counts.
ID_EXACT_WEIGHT = 100
ID_PREFIX_WEIGHT = 50
ID_SUBSTRING_WEIGHT = 25
DESCRIPTION_EXACT_WEIGHT = 80
DESCRIPTION_PREFIX_WEIGHT = 40
DESCRIPTION_SUBSTRING_WEIGHT = 20
AMOUNT_EXACT_WEIGHT = 60
PAYMENT_TYPE_EXACT_WEIGHT = 30
MODE_OF_PAY_SUBSTRING_WEIGHT = 15
RECENCY_MAX_BONUS = 10.0
RECENCY_DECAY_DAYS = 30.0


@dataclass
class EntryFilters:
    """Criteria for :func:`filter_entries`.

    Every option defaults to "no constraint":

    * ``search_term``: ``None``/blank matches everything.
    * ``date_from`` / ``date_to``: inclusive calendar-day bounds on ``created_at``.
    * ``min_amount`` / ``max_amount``: inclusive; ``None`` or ``0`` mean unset.
    * ``pay_type``: ``incoming`` | ``outgoing`` | ``all``.
    * ``pay_status``: ``paid`` | ``un_paid`` | ``all``.
    * ``category``: a ``payment_type_specific`` value or ``all``.
    * ``nurse_id`` / ``client_id``: exact directory ids.
    """

    search_term: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None
    pay_type: str = ALL
    pay_status: str = ALL
    category: str = ALL
    nurse_id: Optional[str] = None
    client_id: Optional[str] = None

    @property
    def term(self) -> str:
        return (self.search_term or "").strip().lower()

    @property
    def lower_amount(self) -> Optional[Decimal]:
        return _amount_bound(self.min_amount, "min_amount")

    @property
    def upper_amount(self) -> Optional[Decimal]:
        return _amount_bound(self.max_amount, "max_amount")

    @property
    def start_day(self) -> Optional[date]:
        return _day_bound(self.date_from, "date_from")

    @property
    def end_day(self) -> Optional[date]:
        return _day_bound(self.date_to, "date_to")

    def validate(self) -> None:
        """Raise :class:`ValidationError` for criteria that can never match."""

        lower, upper = self.lower_amount, self.upper_amount
        if lower is not None and upper is not None and lower > upper:
            raise ValidationError(f"min_amount {lower} exceeds max_amount {upper}")
        start, end = self.start_day, self.end_day
        if start is not None and end is not None and start > end:
            raise ValidationError(f"date_from {start} is after date_to {end}")


def _amount_bound(value: Any, name: str) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        bound = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"{name} is not a number: {value!r}") from exc
    if bound.is_nan() or bound == 0:
        return None
    return bound


def _day_bound(value: Any, name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise ValidationError(f"{name} is not an ISO date: {value!r}") from exc


def _choice(value: Any) -> str:
    text = text_of(value).strip().lower()
    return text or ALL


def has_active_filters(filters: EntryFilters) -> bool:
    """True when any option would constrain the result."""

    try:
        amount_set = filters.lower_amount is not None or filters.upper_amount is not None
        dates_set = filters.start_day is not None or filters.end_day is not None
    except ValidationError:
        # Malformed bounds are still something the user typed.
        return True
    return bool(
        filters.term
        or dates_set
        or amount_set
        or _choice(filters.pay_type) != ALL
        or _choice(filters.pay_status) != ALL
        or _choice(filters.category) != ALL
        or filters.nurse_id
        or filters.client_id
    )


def _contains(haystack: Any, term: str) -> bool:
    text = text_of(haystack)
    return bool(text) and term in text.lower()


def matches_search(
    entry: Entry,
    term: str,
    nurses: Optional[Mapping[str, Nurse]] = None,
    clients: Optional[Mapping[str, Client]] = None,
) -> bool:
    """Case-insensitive OR match of ``term`` across the entry's searchable fields."""

    basic_fields = (
        entry.description,
        entry.id,
        entry.payment_type,
        entry.mode_of_pay,
        entry.tenant,
        entry.payment_type_specific,
        entry.payment_description,
    )
    if any(_contains(value, term) for value in basic_fields):
        return True
    if term in amount_text(entry.amount):
        return True

    if entry.nurse_id and nurses:
        nurse = nurses.get(entry.nurse_id)
        if nurse is not None and any(term in v.lower() for v in nurse.searchable_values()):
            return True

    if entry.client_id and clients:
        client = clients.get(entry.client_id)
        if client is not None and any(term in v.lower() for v in client.searchable_values()):
            return True

    return False


def filter_entries(
    entries: Iterable[Entry],
    filters: EntryFilters,
    nurses: Optional[Mapping[str, Nurse]] = None,
    clients: Optional[Mapping[str, Client]] = None,
) -> list[Entry]:
    """Return the entries satisfying every constraint in ``filters``, input order kept.

    Malformed criteria produce an empty list instead of an exception.
    """

    try:
        filters.validate()
    except ValidationError as exc:
        logger.warning(f"Rejected entry filters: {exc}")
        return []

    term = filters.term
    start, end = filters.start_day, filters.end_day
    lower, upper = filters.lower_amount, filters.upper_amount
    pay_type = _choice(filters.pay_type)
    pay_status = _choice(filters.pay_status)
    wanted_status = PayStatus.parse(pay_status) if pay_status != ALL else None
    category = _choice(filters.category)

    result: list[Entry] = []
    for entry in entries:
        if term and not matches_search(entry, term, nurses, clients):
            continue
        if start is not None or end is not None:
            if entry.created_at is None:
                continue
            day = entry.created_at.date()
            if start is not None and day < start:
                continue
            if end is not None and day > end:
                continue
        if lower is not None and money(entry.amount) < lower:
            continue
        if upper is not None and money(entry.amount) > upper:
            continue
        if pay_type != ALL and text_of(entry.payment_type) != pay_type:
            continue
        if pay_status != ALL and (
            wanted_status is None or entry.effective_pay_status is not wanted_status
        ):
            continue
        if category != ALL and text_of(entry.payment_type_specific).lower() != category:
            continue
        if filters.nurse_id and entry.nurse_id != filters.nurse_id:
            continue
        if filters.client_id and entry.client_id != filters.client_id:
            continue
        result.append(entry)
    return result


def recency_bonus(created_at: datetime, now: datetime) -> float:
    """Up to ``RECENCY_MAX_BONUS`` points, losing one point per 30 days of age."""

    age_days = (align(now, created_at) - created_at).total_seconds() / 86400
    age_days = max(0.0, age_days)
    return max(0.0, RECENCY_MAX_BONUS - age_days / RECENCY_DECAY_DAYS)


def score_entry(entry: Entry, term: str, now: datetime) -> float:
    """Additive relevance of ``entry`` for the (lowercased) search ``term``."""

    score = 0.0

    entry_id = text_of(entry.id)
    if entry_id == term:
        score += ID_EXACT_WEIGHT
    elif entry_id.startswith(term):
        score += ID_PREFIX_WEIGHT
    elif term in entry_id:
        score += ID_SUBSTRING_WEIGHT

    if entry.description:
        description = entry.description.lower()
        if description == term:
            score += DESCRIPTION_EXACT_WEIGHT
        elif description.startswith(term):
            score += DESCRIPTION_PREFIX_WEIGHT
        elif term in description:
            score += DESCRIPTION_SUBSTRING_WEIGHT

    if amount_text(entry.amount) == term:
        score += AMOUNT_EXACT_WEIGHT

    if text_of(entry.payment_type).lower() == term:
        score += PAYMENT_TYPE_EXACT_WEIGHT

    if _contains(entry.mode_of_pay, term):
        score += MODE_OF_PAY_SUBSTRING_WEIGHT

    if entry.created_at is None:
        return score
    return score + recency_bonus(entry.created_at, now)


def sort_entries(
    entries: Sequence[Entry],
    sort_by: str = "date",
    sort_order: str = "desc",
    search_term: Optional[str] = None,
    *,
    now: Optional[datetime] = None,
) -> list[Entry]:
    """Return a new, stably ordered list.

    ``relevance`` always ranks highest score first and ignores ``sort_order``;
    without a search term it falls back to newest first.
    """

    if sort_by not in SORT_FIELDS:
        raise ValueError(f"sort_by must be one of {SORT_FIELDS}, got {sort_by!r}")
    if sort_order not in SORT_ORDERS:
        raise ValueError(f"sort_order must be one of {SORT_ORDERS}, got {sort_order!r}")

    descending = sort_order == "desc"
    if sort_by == "amount":
        return sorted(entries, key=lambda e: money(e.amount), reverse=descending)
    if sort_by == "date":
        return sorted(entries, key=_date_key(entries), reverse=descending)

    term = (search_term or "").strip().lower()
    if not term:
        return sorted(entries, key=_date_key(entries), reverse=True)

    moment = now or datetime.now()
    scores = {id(entry): score_entry(entry, term, moment) for entry in entries}
    return sorted(entries, key=lambda e: scores[id(e)], reverse=True)


def _date_key(entries: Sequence[Entry]):
    # Mixed naive/aware timestamps are normalised against the first dated
    # entry; undated entries sort as oldest.
    reference = next((e.created_at for e in entries if e.created_at is not None), None)

    def key(entry: Entry):
        if entry.created_at is None or reference is None:
            return (0, datetime.min)
        return (1, align(entry.created_at, reference))

    return key


def filter_bank_transactions(
    transactions: Iterable[BankTransaction],
    search_term: Optional[str] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    min_amount: Optional[Decimal] = None,
    max_amount: Optional[Decimal] = None,
    transaction_type: str = ALL,
) -> list[BankTransaction]:
    """Filter a bank account's transaction list for the ledger screen."""

    term = (search_term or "").strip().lower()
    try:
        start = _day_bound(date_from, "date_from")
        end = _day_bound(date_to, "date_to")
    except ValidationError as exc:
        logger.warning(f"Rejected transaction filters: {exc}")
        return []
    wanted_type = _choice(transaction_type)

    result = []
    for txn in transactions:
        if term and not (
            _contains(txn.description, term)
            or _contains(txn.transaction_type, term)
            or _contains(txn.cheque_number, term)
            or term in amount_text(txn.amount)
        ):
            continue
        day = txn.created_at.date()
        if start is not None and day < start:
            continue
        if end is not None and day > end:
            continue
        if min_amount is not None and money(txn.amount) < money(min_amount):
            continue
        if max_amount is not None and money(txn.amount) > money(max_amount):
            continue
        if wanted_type != ALL and text_of(txn.transaction_type).lower() != wanted_type:
            continue
        result.append(txn)
    return result
