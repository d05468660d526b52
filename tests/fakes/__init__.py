"""Shared test doubles: re-exported memory backends plus a controllable clock."""

from __future__ import annotations

from printlink.persistence.memory_backend import (
    MemoryCatalog,
    MemoryMappingStore,
    MemoryPrintQueue,
    MemorySettingsStore,
    MemoryUnmatchedStore,
)


class FakeClock:
    """Callable monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


__all__ = [
    "FakeClock",
    "MemoryCatalog",
    "MemoryMappingStore",
    "MemoryPrintQueue",
    "MemorySettingsStore",
    "MemoryUnmatchedStore",
]
