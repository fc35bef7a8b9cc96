"""Exception types raised by the daybook core."""

from __future__ import annotations


class DaybookError(Exception):
    """Base class for daybook failures."""


class ValidationError(DaybookError, ValueError):
    """Filter criteria or edit payload that cannot be satisfied."""


class RemoteUnavailable(DaybookError):
    """An external store (entries, accounts, ledger) could not be reached."""


class EntryNotFound(DaybookError, LookupError):
    def __init__(self, entry_id: int):
        super().__init__(f"Entry {entry_id} not found")
        self.entry_id = entry_id


class AccountNotFound(DaybookError, LookupError):
    def __init__(self, account_id: int):
        super().__init__(f"Bank account {account_id} not found")
        self.account_id = account_id


class PageOutOfRange(DaybookError, ValueError):
    """Requested page lies outside ``1..total_pages``."""

    def __init__(self, page: int, total_pages: int):
        super().__init__(f"Page {page} is outside 1..{total_pages}")
        self.page = page
        self.total_pages = total_pages
