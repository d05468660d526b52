"""HTTP tests for the FastAPI routes over in-memory services."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from printlink.api.app import create_app
from printlink.core.exceptions import ConfigurationError
from printlink.models.mapping import Mapping
from printlink.models.unmatched import UnmatchedReason
from printlink.resolution.queue_group import QUEUE_GROUP_SETTING

ORDER = {
    "id": 820982911946154500,
    "name": "#9999",
    "line_items": [
        {"product_id": 632910392, "variant_id": 808950810, "quantity": 3, "sku": "W-1"},
        {"product_id": 111, "variant_id": None, "quantity": 1},
    ],
}


@pytest.fixture
def client(services):
    return TestClient(create_app(services))


class TestHealth:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestWebhook:
    def test_order_processed(self, client, mapping_store, queue, unmatched_store):
        mapping_store.upsert(Mapping(product_id="632910392", variant_id="808950810",
                                     file_names=["Widget.gcode"]))

        resp = client.post("/api/webhooks/shopify/orders/create", json=ORDER)

        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}
        assert queue.items == [("f-widget", 3, 7)]
        records = unmatched_store.list_all()
        assert [(r.product_id, r.reason) for r in records] == [
            ("111", UnmatchedReason.NO_MAPPING),
        ]
        assert records[0].order_id == "820982911946154500"

    def test_invalid_json_still_200(self, client, queue):
        resp = client.post("/api/webhooks/shopify/orders/create", content=b"{not json",
                           headers={"content-type": "application/json"})
        assert resp.status_code == 200
        assert resp.json() == {"status": "error"}
        assert queue.items == []

    def test_non_object_still_200(self, client):
        resp = client.post("/api/webhooks/shopify/orders/create", json=[1, 2])
        assert resp.status_code == 200
        assert resp.json() == {"status": "error"}

    def test_unexpected_failure_still_200(self, client, services, monkeypatch):
        def boom(order):
            raise RuntimeError("bug")

        monkeypatch.setattr(services.pipeline, "process_order", boom)
        resp = client.post("/api/webhooks/shopify/orders/create", json=ORDER)
        assert resp.status_code == 200
        assert resp.json() == {"status": "error"}


class TestSimplyPrint:
    def test_files(self, client):
        resp = client.get("/api/simplyprint/files", params={"search": "gadget"})
        assert resp.status_code == 200
        assert resp.json()["files"] == [{
            "id": "f-gadget", "name": "Gadget Large", "ext": "gcode", "type": None,
            "fullName": "Gadget Large.gcode",
        }]

    def test_suggest(self, client):
        resp = client.get("/api/simplyprint/suggest", params={"query": "widget"})
        files = resp.json()["files"]
        assert files[0]["id"] == "f-widget"
        assert files[0]["score"] > 0

    def test_suggest_empty_query(self, client, catalog):
        resp = client.get("/api/simplyprint/suggest", params={"query": "  "})
        assert resp.json() == {"files": []}
        assert catalog.searches == []

    def test_queue_groups(self, client):
        resp = client.get("/api/simplyprint/queue-groups")
        assert resp.json() == {"groups": [{"id": 7, "name": "Shopify"}, {"id": 9, "name": "Internal"}]}

    def test_validate_dry_run(self, client, queue):
        resp = client.post("/api/simplyprint/validate",
                           json={"fileNames": ["Widget.gcode", "Nope.gcode"]})
        body = resp.json()
        assert resp.status_code == 200
        assert body["dryRun"] is True
        assert [f["resolvable"] for f in body["files"]] == [True, False]
        assert body["files"][0]["fileId"] == "f-widget"
        assert body["files"][0]["error"] is None
        assert queue.items == []

    def test_validate_live(self, client, queue):
        resp = client.post("/api/simplyprint/validate",
                           json={"fileNames": ["Widget.gcode"], "dryRun": False, "quantity": 2})
        assert resp.json()["files"][0]["queued"] is True
        assert queue.items == [("f-widget", 2, 7)]

    def test_validate_requires_files(self, client):
        resp = client.post("/api/simplyprint/validate", json={"fileNames": []})
        assert resp.status_code == 422

    def test_upstream_error_is_502(self, client, catalog):
        catalog.fail_on("boom")
        resp = client.get("/api/simplyprint/files", params={"search": "boom"})
        assert resp.status_code == 502
        assert "boom" in resp.json()["error"]

    def test_configuration_error_is_503(self, client, services, monkeypatch):
        def unconfigured():
            raise ConfigurationError("SimplyPrint company id and API key are required")

        monkeypatch.setattr(services.catalog, "list_groups", unconfigured)
        resp = client.get("/api/simplyprint/queue-groups")
        assert resp.status_code == 503


class TestUnmatched:
    def _seed(self, services):
        return services.unmatched.record(order_id="1", product_id="P2", variant_id="V2",
                                         quantity=2, reason=UnmatchedReason.NO_MAPPING.value)

    def test_list(self, client, services):
        item = self._seed(services)
        items = client.get("/api/unmatched").json()["items"]
        assert [i["id"] for i in items] == [item.id]
        assert items[0]["queued_at"] is None

    def test_queue_with_saved_mapping(self, client, services, queue, mapping_store):
        item = self._seed(services)

        resp = client.post(f"/api/unmatched/{item.id}/queue",
                           json={"fileName": "Widget.gcode", "saveMapping": True})

        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "queued"
        assert body["item"]["queued_at"] is not None
        assert queue.items == [("f-widget", 2, 7)]
        assert mapping_store.get("P2", "V2").file_names == ["Widget.gcode"]

    def test_queue_unknown_file_is_404(self, client, services):
        item = self._seed(services)
        resp = client.post(f"/api/unmatched/{item.id}/queue", json={"fileName": "Nope.gcode"})
        assert resp.status_code == 404

    def test_queue_twice_is_400(self, client, services):
        item = self._seed(services)
        client.post(f"/api/unmatched/{item.id}/queue", json={"fileName": "Widget.gcode"})
        resp = client.post(f"/api/unmatched/{item.id}/queue", json={"fileName": "Widget.gcode"})
        assert resp.status_code == 400

    def test_delete(self, client, services, unmatched_store):
        item = self._seed(services)
        resp = client.delete(f"/api/unmatched/{item.id}")
        assert resp.json() == {"status": "deleted"}
        assert unmatched_store.get(item.id) is None

    def test_delete_unknown_is_404(self, client):
        assert client.delete("/api/unmatched/missing").status_code == 404


class TestQueueGroupSetting:
    def test_get_unset(self, client):
        assert client.get("/api/settings/queue-group").json() == {"groupId": None}

    def test_set_and_clear(self, client, settings_store):
        resp = client.post("/api/settings/queue-group", json={"groupId": 42})
        assert resp.json() == {"groupId": 42}
        assert settings_store.get(QUEUE_GROUP_SETTING) == "42"

        resp = client.post("/api/settings/queue-group", json={"groupId": None})
        assert resp.json() == {"groupId": None}
        assert settings_store.get(QUEUE_GROUP_SETTING) is None
