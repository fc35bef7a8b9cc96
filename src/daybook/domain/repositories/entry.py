"""Entry store protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ...models.entry import Entry


class EntryStore(Protocol):
    """Authoritative store for daybook entries."""

    def list(self, *, tenant: Optional[str] = None) -> list[Entry]:
        """Return every entry, optionally scoped to one tenant."""
        ...

    def get(self, entry_id: int) -> Entry:
        """Return one entry or raise ``EntryNotFound``."""
        ...

    def create(self, draft: Entry) -> Entry:
        """Persist a new entry and return it with its assigned id."""
        ...

    def update(self, entry_id: int, changes: Mapping[str, Any]) -> Entry:
        """Apply a partial update and return the stored entry."""
        ...

    def delete(self, entry_id: int) -> None:
        """Delete an entry by ID."""
        ...
