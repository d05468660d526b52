"""SimplyPrint REST client implementing ICatalog and IPrintQueue."""

from __future__ import annotations

from typing import Any, TypeVar

import httpx
import pydantic
import structlog

from printlink.core.exceptions import ConfigurationError, UpstreamError
from printlink.models.catalog import (
    AddItemResponse,
    CatalogFile,
    GetFilesResponse,
    GetGroupsResponse,
    QueueGroup,
)

logger = structlog.get_logger(__name__)

M = TypeVar("M", bound=pydantic.BaseModel)


class SimplyPrintClient:
    """Blocking client with a per-call timeout.

    Credentials are checked on each call rather than at construction so that
    unrelated endpoints keep working when SimplyPrint is not configured.
    """

    def __init__(
        self,
        company_id: str,
        api_key: str,
        base_url: str = "https://api.simplyprint.io",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._company_id = company_id
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    # ---- ICatalog ----

    def search(self, query: str) -> list[CatalogFile]:
        params = {"global_search": "true"}
        if query:
            params["search"] = query
        data = self._request("GET", "files/GetFiles", params=params)
        return self._parse(GetFilesResponse, data, "files/GetFiles").files

    def list_groups(self) -> list[QueueGroup]:
        data = self._request("GET", "queue/groups/Get")
        return self._parse(GetGroupsResponse, data, "queue/groups/Get").groups

    # ---- IPrintQueue ----

    def add_item(self, file_id: str, quantity: int, group_id: int) -> None:
        data = self._request(
            "POST",
            "queue/AddItem",
            json={"filesystem": file_id, "amount": quantity, "group": group_id},
        )
        resp = self._parse(AddItemResponse, data, "queue/AddItem")
        if not resp.status:
            raise UpstreamError(f"SimplyPrint rejected queue item {file_id}: {resp.message}")

    # ---- internals ----

    def _ensure_configured(self) -> None:
        if not self._company_id or not self._api_key:
            raise ConfigurationError("SimplyPrint company id and API key are required")

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        self._ensure_configured()
        url = f"{self._base_url}/{self._company_id}/{path}"
        try:
            resp = self._client.request(
                method, url, headers={"X-API-KEY": self._api_key}, **kwargs,
            )
        except httpx.TimeoutException as exc:
            logger.warning("simplyprint_timeout", path=path)
            raise UpstreamError(f"SimplyPrint {path} timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning("simplyprint_transport_error", path=path, error=str(exc))
            raise UpstreamError(f"SimplyPrint {path} failed: {exc}") from exc

        if resp.status_code >= 400:
            logger.warning("simplyprint_http_error", path=path, status_code=resp.status_code)
            raise UpstreamError(
                f"SimplyPrint {path} returned HTTP {resp.status_code}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamError(f"SimplyPrint {path} returned non-JSON body") from exc

    @staticmethod
    def _parse(model: type[M], data: Any, path: str) -> M:
        try:
            return model.model_validate(data)
        except pydantic.ValidationError as exc:
            raise UpstreamError(f"Unexpected SimplyPrint {path} response: {exc}") from exc
