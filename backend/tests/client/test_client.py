from __future__ import annotations

from typing import Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from prompt_cloud.client import ApiError, PromptCloudClient
from prompt_cloud.core.config import settings
from prompt_cloud.core.database import get_session
from prompt_cloud.main import app


@pytest.fixture()
def api(session_factory) -> Iterator[PromptCloudClient]:
    def _session():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = _session
    try:
        yield PromptCloudClient(
            base_url=f"http://testserver{settings.api_prefix}/v1",
            http=TestClient(app),
        )
    finally:
        app.dependency_overrides.clear()


def _mock_client(handler) -> PromptCloudClient:
    return PromptCloudClient(
        base_url="http://prompt-cloud.test/api/v1",
        http=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def test_folder_and_prompt_lifecycle(api: PromptCloudClient) -> None:
    work = api.create_folder("Work", emoji="💼")
    hello = api.create_prompt("Hello", "World", folder_id=work.id)

    assert hello.folder is not None and hello.folder.id == work.id
    assert [(f.name, f.prompt_count) for f in api.get_folders()] == [("Work", 1)]
    assert [p.id for p in api.get_folder(work.id).prompts] == [hello.id]

    renamed = api.update_folder(work.id, name="Office")
    assert (renamed.name, renamed.emoji) == ("Office", "💼")

    api.delete_folder(work.id)

    with pytest.raises(ApiError) as excinfo:
        api.get_prompt(hello.id)
    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "Prompt not found"


def test_update_prompt_distinguishes_omitted_from_null(api: PromptCloudClient) -> None:
    folder = api.create_folder("Work")
    prompt = api.create_prompt("Hello", "World", folder_id=folder.id)

    kept = api.update_prompt(prompt.id, content="Everyone")
    assert (kept.content, kept.folder_id) == ("Everyone", folder.id)

    detached = api.update_prompt(prompt.id, folder_id=None)
    assert detached.folder_id is None
    assert api.get_prompts(folder_id=folder.id) == []


def test_get_prompts_search_and_sort(api: PromptCloudClient) -> None:
    api.create_prompt("beta", "foo inside")
    api.create_prompt("alpha", "FOO upper")
    api.create_prompt("gamma", "unrelated")

    titles = [p.title for p in api.get_prompts(search=" foo ", sort_by="title", sort_order="asc")]

    assert titles == ["alpha", "beta"]


def test_server_validation_message_is_surfaced(api: PromptCloudClient) -> None:
    with pytest.raises(ApiError) as excinfo:
        api.create_prompt("Hello", "World", folder_id="nonexistent")
    assert excinfo.value.status_code == 400
    assert str(excinfo.value) == "Invalid folderId provided"


def test_get_prompts_query_string() -> None:
    seen: list[httpx.URL] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url)
        return httpx.Response(200, json=[])

    client = _mock_client(handler)
    client.get_prompts(folder_id="f1", search="   ", sort_by="title", sort_order="ASC")
    client.get_prompts()

    assert dict(seen[0].params) == {"folderId": "f1", "sortBy": "title", "sortOrder": "desc"}
    assert dict(seen[1].params) == {}


def test_non_json_error_body_falls_back_to_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>bad gateway</html>")

    with pytest.raises(ApiError) as excinfo:
        _mock_client(handler).get_folders()

    assert excinfo.value.status_code == 502
    assert excinfo.value.message == "HTTP error! status: 502 Bad Gateway"


def test_transport_failure_is_an_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ApiError) as excinfo:
        _mock_client(handler).get_folders()

    assert excinfo.value.status_code is None


def test_delete_returns_none_on_204() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        return httpx.Response(204)

    assert _mock_client(handler).delete_prompt("p1") is None
