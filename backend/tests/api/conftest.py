from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from prompt_cloud.core.database import get_session
from prompt_cloud.main import app


@pytest.fixture()
def client(session_factory) -> Iterator[TestClient]:
    def _session():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_session] = _session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
