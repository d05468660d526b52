"""Time-bounded cache of the SimplyPrint destination queue group id."""

from __future__ import annotations

import time

import structlog

from printlink.core.protocols import ICatalog, ISettingsStore
from printlink.core.types import Clock

logger = structlog.get_logger(__name__)

QUEUE_GROUP_SETTING = "simplyprintQueueGroupId"
NO_GROUP = 0
DEFAULT_TTL = 300.0  # 5 minutes


def parse_group_id(raw: str | None) -> int | None:
    """Return a positive integer id from a stored setting, else None."""
    if raw is None:
        return None
    try:
        value = int(str(raw).strip())
    except ValueError:
        return None
    return value if value > 0 else None


class QueueGroupCache:
    """Resolves the queue group: operator override, then lookup by name.

    Concurrent refreshes are not locked; the worst case is one extra
    upstream call.
    """

    def __init__(
        self,
        settings: ISettingsStore,
        catalog: ICatalog,
        group_name: str = "Shopify",
        ttl: float = DEFAULT_TTL,
        clock: Clock = time.monotonic,
    ) -> None:
        self._settings = settings
        self._catalog = catalog
        self._group_name = group_name
        self._ttl = ttl
        self._clock = clock
        self._entry: tuple[int, float] | None = None  # (group_id, fetched_at)

    def get_group_id(self) -> int:
        now = self._clock()
        entry = self._entry
        if entry is not None and now - entry[1] < self._ttl:
            return entry[0]

        override = parse_group_id(self._settings.get(QUEUE_GROUP_SETTING))
        if override is not None:
            return self._store(override, now, source="setting")

        target = self._group_name.lower()
        match = next(
            (g for g in self._catalog.list_groups() if str(g.name).lower() == target),
            None,
        )
        if match is None:
            logger.warning("queue_group_not_found", group_name=self._group_name)
            return self._store(NO_GROUP, now, source="lookup")
        return self._store(match.id, now, source="lookup")

    def invalidate(self) -> None:
        self._entry = None

    def get_override(self) -> int | None:
        return parse_group_id(self._settings.get(QUEUE_GROUP_SETTING))

    def set_override(self, group_id: int | None) -> int | None:
        """Persist or clear the operator override; the next lookup re-resolves."""
        if group_id is None:
            self._settings.delete(QUEUE_GROUP_SETTING)
        else:
            self._settings.set(QUEUE_GROUP_SETTING, str(group_id))
        self.invalidate()
        logger.info("queue_group_override_changed", group_id=group_id)
        return group_id

    def _store(self, group_id: int, now: float, source: str) -> int:
        self._entry = (group_id, now)
        logger.info("queue_group_resolved", group_id=group_id, source=source)
        return group_id
