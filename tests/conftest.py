"""Pytest configuration and shared fixtures."""

import asyncio
from pathlib import Path

import pytest


class RecordingSleep:
    """Stands in for asyncio.sleep and remembers every requested delay."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
        await asyncio.sleep(0)


class FakePageSource:
    """Page-numbered source serving `total` items, optionally held by a gate."""

    def __init__(self, total: int):
        self.total = total
        self.calls = []
        self.gate = None

    async def fetch_data(self, page: int, page_size: int):
        self.calls.append((page, page_size))
        if self.gate is not None:
            await self.gate.wait()
        start = page * page_size
        end = min(start + page_size, self.total)
        return [f"item-{i}" for i in range(start, end)]


class FakeCursorSource:
    """Cursor source answering from a {cursor: response} table."""

    pagination_mode = "cursor"

    def __init__(self, responses: dict):
        self.responses = responses
        self.calls = []

    async def fetch_cursor(self, cursor, page_size: int):
        self.calls.append((cursor, page_size))
        return self.responses[cursor]


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def page_source_factory():
    return FakePageSource


@pytest.fixture
def cursor_source_factory():
    return FakeCursorSource


@pytest.fixture
def temp_config_path(tmp_path: Path) -> Path:
    return tmp_path / "scrollpager.yml"
