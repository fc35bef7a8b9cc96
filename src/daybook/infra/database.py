"""Engine and session wiring for the entry and ledger stores."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, ContextManager, Iterator, Tuple

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig

IN_MEMORY_URLS = frozenset({"sqlite://", "sqlite:///:memory:"})

SessionFactory = Callable[[], ContextManager[Session]]


def create_db_engine(config: BaseConfig) -> Engine:
    """Engine for ``config.DATABASE_URL`` with the configured pool options."""

    options = config.sqlalchemy_engine_options()
    if config.DATABASE_URL in IN_MEMORY_URLS:
        # One shared connection, otherwise every session sees an empty database.
        options["poolclass"] = StaticPool
    return create_engine(config.DATABASE_URL, **options)


def init_database(engine: Engine) -> None:
    """Create the entry and bank tables if they are missing."""

    from .. import models  # noqa: F401  registers the table metadata

    SQLModel.metadata.create_all(engine)


def create_session_factory(engine: Engine) -> SessionFactory:
    """Return a callable yielding one unit of work per ``with`` block.

    The block commits on success and rolls back on any exception, which is
    re-raised. Loaded objects stay usable after the block exits.
    """

    @contextmanager
    def unit_of_work() -> Iterator[Session]:
        session = Session(engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return unit_of_work


def bootstrap_database(config: BaseConfig | None = None) -> Tuple[Engine, SessionFactory]:
    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    init_database(engine)
    return engine, create_session_factory(engine)
