"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from sqlmodel import Session

from .config import BaseConfig
from .infra.database import create_db_engine, create_session_factory, init_database
from .infra.repositories import (
    SQLModelBankAccountRepository,
    SQLModelEntryRepository,
    SQLModelLedgerService,
)


@dataclass
class AppContext:
    """Configuration plus the stores every command works against."""

    config: BaseConfig
    session_factory: Callable[[], Session]

    entry_repo: SQLModelEntryRepository
    bank_account_repo: SQLModelBankAccountRepository
    ledger: SQLModelLedgerService

    tenant: Optional[str] = None


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)

    return AppContext(
        config=config,
        session_factory=session_factory,
        entry_repo=SQLModelEntryRepository(session_factory),
        bank_account_repo=SQLModelBankAccountRepository(session_factory),
        ledger=SQLModelLedgerService(session_factory),
        tenant=config.TENANT,
    )
