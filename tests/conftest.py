from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from sqlmigrate.exceptions import NoChangeError

here = Path(__file__).parent
root_path = here.parent


class RecordingEngine:
    """In-memory migration engine that records every call."""

    def __init__(self, version: int = 0, dirty: bool = False, latest: int = 5) -> None:
        self.current = version
        self.dirty = dirty
        self.latest = latest
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.closed = False
        self.fail_with: Exception | None = None

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if self.fail_with is not None:
            raise self.fail_with

    def steps(self, n: int) -> None:
        self._record("steps", n)
        target = max(0, min(self.latest, self.current + n))
        if target == self.current:
            raise NoChangeError
        self.current = target

    def up(self) -> None:
        self._record("up")
        if self.current == self.latest:
            raise NoChangeError
        self.current = self.latest

    def down(self) -> None:
        self._record("down")
        if self.current == 0:
            raise NoChangeError
        self.current = 0

    def migrate(self, version: int) -> None:
        self._record("migrate", version)
        if version == self.current:
            raise NoChangeError
        self.current = version

    def force(self, version: int) -> None:
        self._record("force", version)
        self.current = version
        self.dirty = False

    def drop(self) -> None:
        self._record("drop")
        self.current = 0

    def version(self) -> tuple[int, bool]:
        self._record("version")
        return self.current, self.dirty

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def engine() -> RecordingEngine:
    return RecordingEngine(version=2)


@pytest.fixture
def engine_factory() -> type[RecordingEngine]:
    return RecordingEngine
