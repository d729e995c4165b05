"""Durable key-value storage.

Every value is kept as text in the ``kv_store`` table. Structured values go
through JSON (``save_json`` / ``load_json``); scalar flags are written as
plain strings by their owners. A key that was never saved loads as ``None``.

Writes are committed immediately and never raise: a failed write is logged
and the caller carries on with its in-memory state.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from .db import get_engine, get_session
from .models import Base, KVEntry

logger = logging.getLogger(__name__)


class PersistentStore:
    def __init__(self, database_url: str, *, echo: bool = False):
        self.database_url = database_url
        self.init_db(echo=echo)

    def init_db(self, *, echo: bool = False) -> None:
        """Create the table if it doesn't exist. Safe to call multiple times."""
        engine = get_engine(self.database_url, echo=echo)
        Base.metadata.create_all(engine)

    # -------------------- raw text --------------------
    def load(self, key: str) -> Optional[str]:
        try:
            with get_session(self.database_url) as s:
                row = s.get(KVEntry, key)
                return row.value if row is not None else None
        except SQLAlchemyError:
            logger.exception("Failed to read key %r; treating it as absent", key)
            return None

    def save(self, key: str, value: str) -> bool:
        try:
            with get_session(self.database_url) as s:
                row = s.get(KVEntry, key)
                if row is None:
                    s.add(KVEntry(key=key, value=value))
                else:
                    row.value = value
                s.commit()
        except SQLAlchemyError:
            logger.exception("Failed to write key %r; keeping in-memory state", key)
            return False
        logger.debug("Saved key %r (%d chars)", key, len(value))
        return True

    def keys(self) -> List[str]:
        try:
            with get_session(self.database_url) as s:
                return list(s.execute(select(KVEntry.key).order_by(KVEntry.key)).scalars())
        except SQLAlchemyError:
            logger.exception("Failed to list keys")
            return []

    # -------------------- JSON --------------------
    def load_json(self, key: str, default: Any = None) -> Any:
        raw = self.load(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Stored value for %r is not valid JSON; using default", key)
            return default

    def save_json(self, key: str, value: Any) -> bool:
        return self.save(key, json.dumps(value))
