"""Shared fixtures: in-memory collaborators wired into the resolution services."""

from __future__ import annotations

import pytest

from printlink.core.config import AppSettings
from printlink.models.catalog import CatalogFile, QueueGroup
from printlink.services import build_services
from tests.fakes import (
    FakeClock,
    MemoryCatalog,
    MemoryMappingStore,
    MemoryPrintQueue,
    MemorySettingsStore,
    MemoryUnmatchedStore,
)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mapping_store():
    return MemoryMappingStore()


@pytest.fixture
def unmatched_store():
    return MemoryUnmatchedStore()


@pytest.fixture
def settings_store():
    return MemorySettingsStore()


@pytest.fixture
def catalog():
    return MemoryCatalog(
        files=[
            CatalogFile(id="f-widget", name="Widget", ext="gcode"),
            CatalogFile(id="f-gadget", name="Gadget Large", ext="gcode"),
            CatalogFile(id="f-bracket", name="Bracket_v2", ext="3mf"),
        ],
        groups=[QueueGroup(id=7, name="Shopify"), QueueGroup(id=9, name="Internal")],
    )


@pytest.fixture
def queue():
    return MemoryPrintQueue()


@pytest.fixture
def services(mapping_store, unmatched_store, settings_store, catalog, queue, clock):
    return build_services(
        settings=AppSettings(),
        mapping_store=mapping_store,
        unmatched_store=unmatched_store,
        settings_store=settings_store,
        catalog=catalog,
        queue=queue,
        clock=clock,
    )
