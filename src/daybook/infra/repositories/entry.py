"""SQLModel implementation of the entry store."""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Mapping, Optional

from sqlmodel import Session, select

from ...errors import EntryNotFound, ValidationError
from ...models.entry import Entry
from ...models.enums import ModeOfPay, PayStatus, PayType
from ._errors import store_errors

_IMMUTABLE_FIELDS = frozenset({"id", "created_at"})
_ENUM_FIELDS = {
    "payment_type": PayType,
    "pay_status": PayStatus,
    "mode_of_pay": ModeOfPay,
}


def coerce_amount(value: Any) -> Decimal:
    """Return ``value`` as a positive two-place Decimal."""

    try:
        amount = Decimal(str(value)).quantize(Decimal("0.01"))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid amount: {value!r}") from exc
    if amount <= 0:
        raise ValidationError("Amount must be positive")
    return amount


def _coerce_field(name: str, value: Any) -> Any:
    if name == "amount":
        return coerce_amount(value)
    enum_cls = _ENUM_FIELDS.get(name)
    if enum_cls is not None and value is not None:
        try:
            return enum_cls(value)
        except ValueError as exc:
            raise ValidationError(f"Invalid {name}: {value!r}") from exc
    if name == "custom_paid_date" and isinstance(value, str):
        return date.fromisoformat(value)
    return value


class SQLModelEntryRepository:
    """SQLModel-based entry store implementation."""

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list(self, *, tenant: Optional[str] = None) -> list[Entry]:
        """Return entries newest first, optionally scoped to a tenant."""
        with store_errors("list entries"), self.session_factory() as session:
            statement = select(Entry)
            if tenant is not None:
                statement = statement.where(Entry.tenant == tenant)
            statement = statement.order_by(Entry.created_at.desc(), Entry.id.desc())  # type: ignore
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get(self, entry_id: int) -> Entry:
        with store_errors("get entry"), self.session_factory() as session:
            entry = session.get(Entry, entry_id)
            if entry is None:
                raise EntryNotFound(entry_id)
            session.expunge(entry)
            return entry

    def create(self, draft: Entry) -> Entry:
        """Persist a new entry."""
        if draft.id is not None:
            raise ValidationError("New entries must not carry an id")
        draft.amount = coerce_amount(draft.amount)
        if not draft.tenant:
            raise ValidationError("Entries must belong to a tenant")
        with store_errors("create entry"), self.session_factory() as session:
            session.add(draft)
            session.commit()
            session.refresh(draft)
            session.expunge(draft)
            return draft

    def update(self, entry_id: int, changes: Mapping[str, Any]) -> Entry:
        """Apply ``changes`` to the stored entry.

        Only model fields are accepted; ``id`` and ``created_at`` are immutable.
        """
        unknown = set(changes) - set(Entry.model_fields)
        if unknown:
            raise ValidationError(f"Unknown entry fields: {', '.join(sorted(unknown))}")
        frozen = set(changes) & _IMMUTABLE_FIELDS
        if frozen:
            raise ValidationError(f"Immutable entry fields: {', '.join(sorted(frozen))}")
        coerced = {name: _coerce_field(name, value) for name, value in changes.items()}

        with store_errors("update entry"), self.session_factory() as session:
            entry = session.get(Entry, entry_id)
            if entry is None:
                raise EntryNotFound(entry_id)
            for name, value in coerced.items():
                setattr(entry, name, value)
            session.add(entry)
            session.commit()
            session.refresh(entry)
            session.expunge(entry)
            return entry

    def delete(self, entry_id: int) -> None:
        """Delete an entry by ID."""
        with store_errors("delete entry"), self.session_factory() as session:
            entry = session.get(Entry, entry_id)
            if entry is None:
                raise EntryNotFound(entry_id)
            session.delete(entry)
            session.commit()

