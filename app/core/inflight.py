"""
In-process guard against overlapping saves of the same editor target.

A portal process may receive the same save twice (double click, retried
request); the second one is refused while the first is still running.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Hashable, Set

from app.core.exceptions import EditorBusyError


class InflightGuard:
    def __init__(self) -> None:
        self._keys: Set[Hashable] = set()

    def is_busy(self, key: Hashable) -> bool:
        return key in self._keys

    @asynccontextmanager
    async def claim(self, key: Hashable) -> AsyncIterator[None]:
        # single event loop: check-and-add has no await in between
        if key in self._keys:
            raise EditorBusyError()
        self._keys.add(key)
        try:
            yield
        finally:
            self._keys.discard(key)


inflight = InflightGuard()
