"""Construction of the resolution services from their collaborators."""

from __future__ import annotations

import time
from dataclasses import dataclass

from printlink.core.config import AppSettings
from printlink.core.protocols import (
    ICatalog,
    IMappingStore,
    IPrintQueue,
    ISettingsStore,
    IUnmatchedStore,
)
from printlink.core.types import Clock
from printlink.matching.file_resolver import FileIdResolver
from printlink.matching.suggest import SuggestionService
from printlink.resolution.mapping_resolver import MappingResolver
from printlink.resolution.pipeline import LineItemPipeline
from printlink.resolution.print_queue import PrintQueueService
from printlink.resolution.queue_group import QueueGroupCache
from printlink.resolution.unmatched import UnmatchedRecorder


@dataclass
class Services:
    """Everything the API layer needs; one instance per process."""

    catalog: ICatalog
    mappings: MappingResolver
    files: FileIdResolver
    queue_groups: QueueGroupCache
    print_queue: PrintQueueService
    unmatched: UnmatchedRecorder
    pipeline: LineItemPipeline
    suggestions: SuggestionService


def build_services(
    *,
    settings: AppSettings,
    mapping_store: IMappingStore,
    unmatched_store: IUnmatchedStore,
    settings_store: ISettingsStore,
    catalog: ICatalog,
    queue: IPrintQueue,
    clock: Clock = time.monotonic,
) -> Services:
    sp = settings.simplyprint
    mappings = MappingResolver(mapping_store)
    files = FileIdResolver(catalog)
    queue_groups = QueueGroupCache(
        settings_store, catalog,
        group_name=sp.queue_group_name, ttl=sp.queue_group_ttl, clock=clock,
    )
    print_queue = PrintQueueService(files, queue, queue_groups)
    unmatched = UnmatchedRecorder(unmatched_store, mapping_store, print_queue)
    return Services(
        catalog=catalog,
        mappings=mappings,
        files=files,
        queue_groups=queue_groups,
        print_queue=print_queue,
        unmatched=unmatched,
        pipeline=LineItemPipeline(mappings, print_queue, unmatched),
        suggestions=SuggestionService(catalog, fan_out=sp.suggest_fan_out, limit=sp.suggest_limit),
    )
