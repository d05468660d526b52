"""Re-export persistence protocols from core for convenience."""

from __future__ import annotations

from printlink.core.protocols import IMappingStore, ISettingsStore, IUnmatchedStore

__all__ = ["IMappingStore", "ISettingsStore", "IUnmatchedStore"]
