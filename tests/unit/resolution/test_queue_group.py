"""Tests for the queue-group cache."""

from __future__ import annotations

import threading

import pytest

from printlink.models.catalog import QueueGroup
from printlink.resolution.queue_group import (
    NO_GROUP,
    QUEUE_GROUP_SETTING,
    QueueGroupCache,
    parse_group_id,
)
from tests.fakes import FakeClock, MemoryCatalog, MemorySettingsStore


@pytest.fixture
def catalog():
    return MemoryCatalog(groups=[QueueGroup(id=3, name="Internal"), QueueGroup(id=7, name="SHOPIFY")])


@pytest.fixture
def settings():
    return MemorySettingsStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(settings, catalog, clock):
    return QueueGroupCache(settings, catalog, group_name="Shopify", ttl=300, clock=clock)


class TestGetGroupId:
    def test_looks_up_group_by_name_case_insensitively(self, cache):
        assert cache.get_group_id() == 7

    def test_cached_within_ttl(self, cache, catalog, clock):
        cache.get_group_id()
        clock.advance(4 * 60)
        assert cache.get_group_id() == 7
        assert catalog.group_calls == 1

    def test_refreshes_after_ttl(self, cache, catalog, clock):
        cache.get_group_id()
        clock.advance(4 * 60)
        cache.get_group_id()
        clock.advance(6 * 60)
        cache.get_group_id()
        assert catalog.group_calls == 2

    def test_sentinel_when_no_group_matches(self, settings, clock):
        cache = QueueGroupCache(settings, MemoryCatalog(groups=[QueueGroup(id=1, name="Other")]),
                                group_name="Shopify", clock=clock)
        assert cache.get_group_id() == NO_GROUP

    def test_sentinel_is_cached(self, settings, clock):
        catalog = MemoryCatalog()
        cache = QueueGroupCache(settings, catalog, clock=clock)
        cache.get_group_id()
        cache.get_group_id()
        assert catalog.group_calls == 1

    def test_override_setting_skips_lookup(self, cache, settings, catalog):
        settings.set(QUEUE_GROUP_SETTING, "42")
        assert cache.get_group_id() == 42
        assert catalog.group_calls == 0

    def test_non_numeric_override_ignored(self, cache, settings):
        settings.set(QUEUE_GROUP_SETTING, "shopify")
        assert cache.get_group_id() == 7


class TestInvalidation:
    def test_set_override_takes_effect_immediately(self, cache, catalog):
        assert cache.get_group_id() == 7
        cache.set_override(11)
        assert cache.get_group_id() == 11
        assert cache.get_override() == 11

    def test_clearing_override_re_resolves_by_name(self, cache, settings):
        cache.set_override(11)
        assert cache.get_group_id() == 11
        cache.set_override(None)
        assert settings.get(QUEUE_GROUP_SETTING) is None
        assert cache.get_group_id() == 7

    def test_invalidate_forces_upstream_call(self, cache, catalog):
        cache.get_group_id()
        cache.invalidate()
        cache.get_group_id()
        assert catalog.group_calls == 2


class TestParseGroupId:
    @pytest.mark.parametrize("raw,expected", [
        ("12", 12), (" 5 ", 5), ("0", None), ("-3", None), ("abc", None), (None, None), ("", None),
    ])
    def test_parse(self, raw, expected):
        assert parse_group_id(raw) == expected


class TestConcurrentInvalidation:
    def test_invalidate_during_clock_read_still_returns_id(self, settings, catalog):
        calls = []

        def clock():
            calls.append(1)
            if len(calls) == 2:
                cache.invalidate()
            return 1000.0

        cache = QueueGroupCache(settings, catalog, group_name="Shopify", ttl=300, clock=clock)
        assert cache.get_group_id() == 7
        assert cache.get_group_id() == 7
        assert catalog.group_calls == 2

    def test_invalidate_during_refresh_still_returns_id(self, cache, catalog):
        original = catalog.list_groups

        def list_groups():
            cache.invalidate()
            return original()

        catalog.list_groups = list_groups
        assert cache.get_group_id() == 7

    def test_reader_threads_never_see_a_missing_group(self, cache):
        errors: list[object] = []
        stop = threading.Event()

        def reader():
            while not stop.is_set():
                try:
                    group_id = cache.get_group_id()
                except Exception as exc:
                    errors.append(exc)
                    return
                if not isinstance(group_id, int):
                    errors.append(group_id)
                    return

        def invalidator():
            while not stop.is_set():
                cache.invalidate()

        threads = [threading.Thread(target=reader) for _ in range(3)]
        threads.append(threading.Thread(target=invalidator))
        for t in threads:
            t.start()
        stop.wait(0.3)
        stop.set()
        for t in threads:
            t.join()
        assert errors == []
