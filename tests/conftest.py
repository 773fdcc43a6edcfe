from types import SimpleNamespace
from typing import Any

import pytest


class FakeQuery:
    """Records a postgrest-style call chain and returns canned rows on ``execute``."""

    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self.client = client
        self.table = table
        self.calls: list[tuple[str, tuple, dict]] = []

    def _record(self, name: str):
        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self

        return method

    def __getattr__(self, name: str):
        return self._record(name)

    @property
    def not_(self) -> "FakeQuery":
        self.calls.append(("not_", (), {}))
        return self

    def execute(self):
        self.client.executed.append(self)
        operation = self.calls[0][0] if self.calls else "select"
        result = self.client.results.get((self.table, operation), [])
        if isinstance(result, Exception):
            raise result
        return SimpleNamespace(data=result, count=len(result))


class FakeSupabase:
    def __init__(self, results: dict[tuple[str, str], Any] | None = None) -> None:
        self.results = results or {}
        self.executed: list[FakeQuery] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


class RecordingBroadcaster:
    def __init__(self) -> None:
        self.events: list[tuple[str, Any, str | None]] = []

    async def emit(self, event: str, data: Any, room: str | None = None) -> None:
        self.events.append((event, data, room))


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def broadcaster() -> RecordingBroadcaster:
    return RecordingBroadcaster()


@pytest.fixture(autouse=True)
def clear_scoring_tables_cache():
    from src.emergewise.data.scoring_tables import get_scoring_tables

    get_scoring_tables.cache_clear()
    yield
    get_scoring_tables.cache_clear()
