"""Service module exports."""

from . import entries, ledger_sync, pagination, query, reports, summary

__all__ = [
    "entries",
    "ledger_sync",
    "pagination",
    "query",
    "reports",
    "summary",
]
