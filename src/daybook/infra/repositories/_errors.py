"""Translate storage driver failures into ``RemoteUnavailable``."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError

from ...errors import RemoteUnavailable
from ...logging_config import get_logger

logger = get_logger(__name__)


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.error(f"Store operation failed: {operation}", exc_info=True)
        raise RemoteUnavailable(f"{operation} failed: {exc}") from exc
