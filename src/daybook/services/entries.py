"""Entry edit workflow: persist the change, then synchronize the ledger."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..domain.repositories.entry import EntryStore
from ..domain.repositories.ledger import LedgerService
from ..logging_config import get_logger
from ..models.entry import Entry
from .ledger_sync import SyncResult, synchronize

logger = get_logger(__name__)


@dataclass(frozen=True)
class EditOutcome:
    """Result of one edit submission."""

    entry: Entry
    sync: SyncResult

    @property
    def succeeded(self) -> bool:
        """True when both the entry update and any ledger write went through."""
        return not self.sync.is_partial_failure

    @property
    def message(self) -> Optional[str]:
        return self.sync.user_message


def edit_entry(
    store: EntryStore,
    ledger: LedgerService,
    entry_id: int,
    changes: Mapping[str, Any],
) -> EditOutcome:
    """Apply ``changes`` to an entry and run the ledger synchronizer once.

    Store errors propagate unchanged because nothing has been written yet.
    A ledger failure after the update is reported on the outcome.
    """

    previous = store.get(entry_id)
    updated = store.update(entry_id, changes)
    logger.info(f"Entry updated: {entry_id}", extra={"fields": sorted(changes)})

    result = synchronize(previous, updated, changes.keys(), ledger=ledger)
    if result.is_partial_failure:
        logger.warning(
            f"Entry {entry_id} saved without its bank transaction",
            extra={"reason": result.reason},
        )
    return EditOutcome(entry=updated, sync=result)


def mark_paid(store: EntryStore, ledger: LedgerService, entry_id: int) -> EditOutcome:
    """Shortcut for the most common edit: flip an entry to paid."""

    return edit_entry(store, ledger, entry_id, {"pay_status": "paid"})


def list_entries(store: EntryStore, tenant: Optional[str] = None) -> list[Entry]:
    """Fetch the collection the query engine and aggregator work from."""

    return store.list(tenant=tenant)
