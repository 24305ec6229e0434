"""Shared fixtures: the FastAPI app with a mocked Ungfritid upstream."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from src.main import app
from src.ungfritid.client import get_ungfritid_client

UpstreamHandler = Callable[[httpx.Request], httpx.Response]
InstallUpstream = Callable[[UpstreamHandler], list[httpx.Request]]


def _unexpected_call(request: httpx.Request) -> httpx.Response:
    return httpx.Response(599, text=f"unexpected upstream call to {request.url}")


@pytest.fixture()
def mock_upstream() -> Iterator[InstallUpstream]:
    """Route the app's Ungfritid client through ``httpx.MockTransport``.

    Calling the fixture with a handler installs it and returns the list the
    handled requests are recorded into.
    """

    def install(handler: UpstreamHandler) -> list[httpx.Request]:
        seen: list[httpx.Request] = []

        def recording(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        async def override():
            async with httpx.AsyncClient(transport=httpx.MockTransport(recording)) as client:
                yield client

        app.dependency_overrides[get_ungfritid_client] = override
        return seen

    yield install
    app.dependency_overrides.pop(get_ungfritid_client, None)


@pytest.fixture()
def client(mock_upstream: InstallUpstream) -> Iterator[TestClient]:
    mock_upstream(_unexpected_call)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def upstream_records() -> list[dict]:
    return [
        {
            "_id": f"act-{index}",
            "slug": f"aktivitet-nummer-{index}",
            "tags": ["Sport"],
        }
        for index in range(10)
    ]
