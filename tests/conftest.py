from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from gymlog.store import InMemoryStore, RecordStore, SQLiteStore


@pytest.fixture(params=["memory", "sqlite"])
def store(request: pytest.FixtureRequest, tmp_path: Path) -> Iterator[RecordStore]:
    if request.param == "memory":
        s: RecordStore = InMemoryStore()
    else:
        s = SQLiteStore(tmp_path / "gym.db")
    yield s
    s.close()
