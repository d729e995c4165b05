"""Engine and session management for the tracker's key-value table."""

from __future__ import annotations

import threading
from typing import Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


# One engine per database URL, shared by every store pointing at it.
_ENGINES: Dict[str, Engine] = {}
_SESSIONMAKERS: Dict[str, sessionmaker] = {}


def get_engine(database_url: str, *, echo: bool = False) -> Engine:
    if database_url in _ENGINES:
        return _ENGINES[database_url]

    kwargs = {}
    if database_url.startswith("sqlite:"):
        # Streamlit serves each session from its own script thread.
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
            # Keep a single connection so every session sees the same data.
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(database_url, future=True, echo=echo, **kwargs)
    _ENGINES[database_url] = engine
    _SESSIONMAKERS[database_url] = sessionmaker(
        bind=engine, autoflush=False, expire_on_commit=False, future=True
    )
    return engine


def get_session(database_url: str) -> Session:
    if database_url not in _SESSIONMAKERS:
        get_engine(database_url)
    return _SESSIONMAKERS[database_url]()


def dispose_engine(database_url: str) -> None:
    """Close pooled connections and forget the cached engine."""
    engine = _ENGINES.pop(database_url, None)
    _SESSIONMAKERS.pop(database_url, None)
    if engine is not None:
        engine.dispose()


_LOCKS: Dict[str, threading.Lock] = {}
_LOCKS_GUARD = threading.Lock()


def get_write_lock(database_url: str) -> threading.Lock:
    """Lock serializing read-modify-write cycles against one database.

    Streamlit runs every browser session in its own thread of one process.
    """
    with _LOCKS_GUARD:
        return _LOCKS.setdefault(database_url, threading.Lock())
