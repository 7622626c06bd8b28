from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .core.config import settings
from .schemas.library import (
    FolderDetailResponse,
    FolderResponse,
    FolderSummaryResponse,
    PromptResponse,
)
from .utils.updates import UNCHANGED, Unchanged


log = logging.getLogger("prompt_cloud.client")


class ApiError(RuntimeError):
    """Raised for every failed call; carries the server's message when it sent one."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return f"HTTP error! status: {resp.status_code} {resp.reason_phrase}"


class PromptCloudClient:
    """Typed accessors for the folders/prompts REST API, one method per endpoint.

    ``http`` lets callers hand in a preconfigured ``httpx.Client`` (or a
    Starlette ``TestClient``); otherwise one is created and owned here.
    """

    def __init__(
        self,
        *,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        http: Optional[httpx.Client] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._owns_client = http is None
        self.client = http or httpx.Client(timeout=timeout_s or settings.client_timeout_s)

    def __enter__(self) -> "PromptCloudClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def _request(
        self,
        method: str,
        endpoint: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        url = f"{self.base_url}{endpoint}"
        log.debug("%s %s params=%s", method, url, params)
        try:
            resp = self.client.request(method, url, json=json, params=params)
        except httpx.HTTPError as exc:
            log.error("Prompt Cloud API unreachable at %s: %s", url, exc)
            raise ApiError(f"Unable to reach the Prompt Cloud API ({self.base_url}).") from exc
        if resp.is_error:
            message = _error_message(resp)
            log.error("API error %s for %s %s: %s", resp.status_code, method, url, message)
            raise ApiError(message, status_code=resp.status_code)
        if resp.status_code == 204:
            return None
        return resp.json()

    # --- Folders -------------------------------------------------------
    def get_folders(self) -> List[FolderSummaryResponse]:
        data = self._request("GET", "/folders")
        return [FolderSummaryResponse.model_validate(item) for item in data]

    def create_folder(self, name: str, emoji: Optional[str] = None) -> FolderResponse:
        payload: Dict[str, Any] = {"name": name}
        if emoji is not None:
            payload["emoji"] = emoji
        return FolderResponse.model_validate(self._request("POST", "/folders", json=payload))

    def get_folder(self, folder_id: str) -> FolderDetailResponse:
        return FolderDetailResponse.model_validate(self._request("GET", f"/folders/{folder_id}"))

    def update_folder(
        self,
        folder_id: str,
        *,
        name: str | Unchanged = UNCHANGED,
        emoji: Optional[str] | Unchanged = UNCHANGED,
    ) -> FolderResponse:
        payload = _present({"name": name, "emoji": emoji})
        return FolderResponse.model_validate(self._request("PUT", f"/folders/{folder_id}", json=payload))

    def delete_folder(self, folder_id: str) -> None:
        self._request("DELETE", f"/folders/{folder_id}")

    # --- Prompts -------------------------------------------------------
    def get_prompts(
        self,
        folder_id: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> List[PromptResponse]:
        params: Dict[str, str] = {}
        if folder_id:
            params["folderId"] = folder_id
        if search and search.strip():
            params["search"] = search.strip()
        if sort_by:
            params["sortBy"] = sort_by
            params["sortOrder"] = "asc" if sort_order == "asc" else "desc"
        data = self._request("GET", "/prompts", params=params or None)
        return [PromptResponse.model_validate(item) for item in data]

    def create_prompt(
        self,
        title: str,
        content: str,
        *,
        emoji: Optional[str] = None,
        folder_id: Optional[str] = None,
    ) -> PromptResponse:
        payload: Dict[str, Any] = {"title": title, "content": content}
        if emoji is not None:
            payload["emoji"] = emoji
        if folder_id is not None:
            payload["folderId"] = folder_id
        return PromptResponse.model_validate(self._request("POST", "/prompts", json=payload))

    def get_prompt(self, prompt_id: str) -> PromptResponse:
        return PromptResponse.model_validate(self._request("GET", f"/prompts/{prompt_id}"))

    def update_prompt(
        self,
        prompt_id: str,
        *,
        title: str | Unchanged = UNCHANGED,
        content: str | Unchanged = UNCHANGED,
        emoji: Optional[str] | Unchanged = UNCHANGED,
        folder_id: Optional[str] | Unchanged = UNCHANGED,
    ) -> PromptResponse:
        """Send only the given fields; ``folder_id=None`` detaches the prompt."""
        payload = _present({"title": title, "content": content, "emoji": emoji, "folderId": folder_id})
        return PromptResponse.model_validate(self._request("PUT", f"/prompts/{prompt_id}", json=payload))

    def delete_prompt(self, prompt_id: str) -> None:
        self._request("DELETE", f"/prompts/{prompt_id}")


def _present(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if not isinstance(value, Unchanged)}
