from __future__ import annotations

import pytest

from tracker.db import dispose_engine
from tracker.store import PersistentStore


@pytest.fixture()
def db_url(tmp_path):
    url = f"sqlite:///{(tmp_path / 'tracker.db').as_posix()}"
    yield url
    dispose_engine(url)


@pytest.fixture()
def store(db_url) -> PersistentStore:
    return PersistentStore(db_url)
