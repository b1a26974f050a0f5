"""Smoke checks against a deployed Mumpa backend."""

import logging
from typing import Any

import httpx
from pydantic import BaseModel, Field

from mumpa_admin.config import get_settings

logger = logging.getLogger(__name__)

HEALTH_PATH = "/api/health"
DETAIL_LIMIT = 100


class EndpointStatus(BaseModel):
    """Outcome of one request. Transport failures have status_code None."""

    url: str
    status_code: int | None = None
    ok: bool = False
    detail: str = Field(default="", description="Truncated body or error message")


class MumpaApiClient:
    """Async HTTP client. Never raises on HTTP or transport errors."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._base_url = (base_url or settings.api_base_url).rstrip("/")
        self._token = token
        self._timeout = timeout if timeout is not None else settings.api_timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _request(self, method: str, path: str, **kwargs: Any) -> EndpointStatus:
        url = f"{self._base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                resp = await client.request(method, url, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            return EndpointStatus(url=url, detail=str(e) or type(e).__name__)
        return EndpointStatus(
            url=url,
            status_code=resp.status_code,
            ok=resp.status_code < 400,
            detail=resp.text[:DETAIL_LIMIT],
        )

    async def check_health(self) -> EndpointStatus:
        return await self._request("GET", HEALTH_PATH)

    async def probe(self, path: str) -> EndpointStatus:
        """
        OPTIONS request to learn whether a route exists.
        404 -> missing; 405 -> exists but rejects OPTIONS; anything else -> exists.
        """
        status = await self._request("OPTIONS", path)
        if status.status_code is None:
            return status
        if status.status_code == 404:
            return status.model_copy(update={"ok": False, "detail": "not found"})
        if status.status_code == 405:
            return status.model_copy(update={"ok": True, "detail": "exists, OPTIONS not allowed"})
        return status.model_copy(update={"ok": True})

    async def post_json(self, path: str, payload: dict[str, Any] | None = None) -> EndpointStatus:
        return await self._request("POST", path, json=payload or {})
