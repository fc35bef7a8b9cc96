"""Keep the bank ledger in step with entries that become paid.

The entry store and the ledger are separate services, so the two writes cannot
be committed together. The entry is always persisted first; the ledger write
is a follow-up side effect whose failure is reported as a partial failure and
never rolled back or hidden.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from ..domain.repositories.ledger import LedgerRequest, LedgerService
from ..logging_config import get_logger
from ..models.bank import BankTransaction
from ..models.entry import Entry
from ..models.enums import PayStatus, PayType
from ._values import money, text_of

logger = get_logger(__name__)

REFERENCE_PREFIX = "DAYBOOK-"
PARTIAL_FAILURE_MESSAGE = (
    "Entry updated but failed to create bank transaction. "
    "You may need to create it manually."
)


class SyncStatus(str, Enum):
    APPLIED = "applied"
    SKIPPED = "skipped"
    PARTIAL_FAILURE = "partial_failure"


@dataclass(frozen=True)
class SyncResult:
    """Outcome of one synchronization attempt."""

    status: SyncStatus
    request: Optional[LedgerRequest] = None
    transaction: Optional[BankTransaction] = None
    reason: Optional[str] = None

    @classmethod
    def applied(cls, request: LedgerRequest, transaction: Optional[BankTransaction]) -> "SyncResult":
        return cls(SyncStatus.APPLIED, request=request, transaction=transaction)

    @classmethod
    def skipped(cls, reason: str) -> "SyncResult":
        return cls(SyncStatus.SKIPPED, reason=reason)

    @classmethod
    def partial_failure(cls, request: LedgerRequest, reason: str) -> "SyncResult":
        return cls(SyncStatus.PARTIAL_FAILURE, request=request, reason=reason)

    @property
    def is_partial_failure(self) -> bool:
        return self.status is SyncStatus.PARTIAL_FAILURE

    @property
    def user_message(self) -> Optional[str]:
        """Text to show the user, ``None`` when there is nothing to report."""
        return PARTIAL_FAILURE_MESSAGE if self.is_partial_failure else None


def ledger_reference(entry_id: int) -> str:
    return f"{REFERENCE_PREFIX}{entry_id}"


def skip_reason(previous: Entry, updated: Entry) -> Optional[str]:
    """Why the edit does not qualify for a ledger write, or ``None`` if it does."""

    before = previous.effective_pay_status
    if before is None:
        return f"unrecognised previous pay status {previous.pay_status!r}"
    if before is not PayStatus.UNPAID:
        return "entry was already paid"
    if PayStatus.parse(updated.pay_status) is not PayStatus.PAID:
        return "entry is still unpaid"
    if updated.bank_account_id is None:
        return "no bank account linked"
    if not updated.affects_bank_balance:
        return "entry does not affect bank balance"
    return None


def should_synchronize(previous: Entry, updated: Entry) -> bool:
    """True only for an unpaid -> paid edit on a ledger-bound entry."""

    return skip_reason(previous, updated) is None


def build_ledger_request(entry: Entry) -> LedgerRequest:
    if entry.id is None or entry.bank_account_id is None:
        raise ValueError("Ledger requests need a persisted entry with a bank account")
    return LedgerRequest(
        account_id=entry.bank_account_id,
        amount=money(entry.amount),
        description=entry.description or f"Daybook Entry #{entry.id}",
        reference=ledger_reference(entry.id),
        tenant=entry.tenant,
    )


def synchronize(
    previous: Entry,
    updated: Entry,
    edited_fields: Iterable[str] = (),
    *,
    ledger: LedgerService,
) -> SyncResult:
    """Issue at most one ledger write for a persisted entry edit.

    ``updated`` must already be stored. Incoming entries become deposits,
    outgoing ones withdrawals. Any failure of the ledger call, timeouts
    included, is returned as ``PARTIAL_FAILURE``.
    """

    fields = sorted(set(edited_fields))
    reason = skip_reason(previous, updated)
    if reason is not None:
        logger.debug(
            f"Ledger sync skipped for entry {updated.id}: {reason}",
            extra={"entry_id": updated.id, "edited_fields": fields},
        )
        return SyncResult.skipped(reason)

    request = build_ledger_request(updated)
    incoming = text_of(updated.payment_type) == PayType.INCOMING.value
    call = ledger.deposit if incoming else ledger.withdraw
    try:
        transaction = call(request)
    except Exception as exc:
        logger.error(
            f"Entry {updated.id} updated but ledger write failed: {exc}",
            exc_info=True,
            extra={
                "entry_id": updated.id,
                "account_id": request.account_id,
                "reference": request.reference,
            },
        )
        return SyncResult.partial_failure(request, str(exc) or type(exc).__name__)

    logger.info(
        f"Ledger {'deposit' if incoming else 'withdraw'} created for entry {updated.id}",
        extra={
            "entry_id": updated.id,
            "account_id": request.account_id,
            "amount": str(request.amount),
            "reference": request.reference,
            "edited_fields": fields,
        },
    )
    return SyncResult.applied(request, transaction)
