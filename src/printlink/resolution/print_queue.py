"""Resolve a filename and submit it to the SimplyPrint queue."""

from __future__ import annotations

import structlog

from printlink.core.exceptions import NotFoundError, ValidationError
from printlink.core.protocols import IPrintQueue
from printlink.matching.file_resolver import FileIdResolver
from printlink.models.pipeline import FileCheck
from printlink.resolution.queue_group import QueueGroupCache

logger = structlog.get_logger(__name__)


class PrintQueueService:
    def __init__(self, resolver: FileIdResolver, queue: IPrintQueue,
                 groups: QueueGroupCache) -> None:
        self._resolver = resolver
        self._queue = queue
        self._groups = groups

    def enqueue(self, file_name: str, quantity: int) -> str:
        """Queue ``quantity`` copies of ``file_name``; returns the file id.

        Raises NotFoundError, UpstreamError or ConfigurationError.
        """
        if quantity < 1:
            raise ValidationError(f"Quantity must be positive, got {quantity}")
        file_id = self._resolver.resolve_file_id(file_name)
        group_id = self._groups.get_group_id()
        self._queue.add_item(file_id, quantity, group_id)
        logger.info("file_queued", file_name=file_name, file_id=file_id,
                    quantity=quantity, group_id=group_id)
        return file_id

    def check_files(self, file_names: list[str], dry_run: bool = True,
                    quantity: int = 1) -> list[FileCheck]:
        """Report whether each filename resolves; queue it too unless ``dry_run``.

        Unknown files are reported, not raised. UpstreamError propagates.
        """
        checks: list[FileCheck] = []
        for file_name in file_names:
            try:
                file_id = self._resolver.resolve_file_id(file_name)
            except (NotFoundError, ValidationError) as exc:
                checks.append(FileCheck(file_name=file_name, resolvable=False, error=str(exc)))
                continue

            queued = False
            if not dry_run:
                self._queue.add_item(file_id, quantity, self._groups.get_group_id())
                queued = True
            checks.append(FileCheck(file_name=file_name, resolvable=True,
                                    file_id=file_id, queued=queued))
        logger.info("files_checked", count=len(checks), dry_run=dry_run,
                    unresolved=sum(1 for c in checks if not c.resolvable))
        return checks
