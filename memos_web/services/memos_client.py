"""HTTP client for a remote memos server's shortcut and tag endpoints."""

import logging
from typing import Any

import httpx

from memos_web.config import get_settings
from memos_web.exceptions import ConfigurationError, PersistenceError
from memos_web.models.memo import RowStatus
from memos_web.services.shortcut_payload import ShortcutData

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class MemosClient:
    """PersistenceAPI backed by the memos v1 REST API."""

    def __init__(
        self,
        base_url: str,
        access_token: str = "",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        headers = {"Authorization": f"Bearer {access_token}"} if access_token else {}
        self._client = httpx.Client(
            base_url=base_url.rstrip("/") + API_PREFIX,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def list_shortcuts(self) -> list[ShortcutData]:
        data = self._request("GET", "/shortcut")
        return [ShortcutData.from_api(item) for item in data or []]

    def create_shortcut(self, title: str, payload: str) -> ShortcutData:
        data = self._request("POST", "/shortcut", json={"title": title, "payload": payload})
        return ShortcutData.from_api(data)

    def update_shortcut(
        self,
        shortcut_id: int,
        title: str | None = None,
        payload: str | None = None,
        pinned: bool | None = None,
    ) -> ShortcutData:
        patch: dict[str, Any] = {"id": shortcut_id}
        if title is not None:
            patch["title"] = title
        if payload is not None:
            patch["payload"] = payload
        if pinned is not None:
            patch["rowStatus"] = (RowStatus.ARCHIVED if pinned else RowStatus.NORMAL).value
        data = self._request("PATCH", f"/shortcut/{shortcut_id}", json=patch)
        return ShortcutData.from_api(data)

    def delete_shortcut(self, shortcut_id: int) -> None:
        self._request("DELETE", f"/shortcut/{shortcut_id}")

    def list_tags(self) -> list[str]:
        data = self._request("GET", "/tag")
        return sorted(set(data or []))

    def upsert_tag(self, name: str) -> None:
        self._request("POST", "/tag", json={"name": name})

    def delete_tag(self, name: str) -> None:
        self._request("POST", "/tag/delete", json={"name": name})

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send a request and return the decoded JSON body (None when empty)."""
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("memos API %s %s failed: %s", method, path, e)
            raise PersistenceError(str(e) or type(e).__name__) from e

        if response.is_error:
            message = _error_message(response)
            logger.error(
                "memos API %s %s returned %s: %s", method, path, response.status_code, message
            )
            raise PersistenceError(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise PersistenceError(f"Invalid JSON from memos API: {path}") from e


def _error_message(response: httpx.Response) -> str:
    """Prefer the server's ``message`` field, fall back to the raw body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text or response.reason_phrase


def get_memos_client() -> MemosClient:
    """Get a client configured from settings."""
    settings = get_settings()
    if not settings.memos_api_url:
        raise ConfigurationError("MEMOS_API_URL is not configured")
    return MemosClient(
        settings.memos_api_url,
        access_token=settings.memos_access_token,
        timeout=settings.memos_api_timeout,
    )
