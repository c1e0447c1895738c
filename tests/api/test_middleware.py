"""Tests for security headers, CORS and access logging."""
import logging
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from api.middleware import SECURITY_HEADERS


async def test__security_headers__present_on_responses(client: AsyncClient) -> None:
    response = await client.get("/api/bookmarks")
    for name, value in SECURITY_HEADERS.items():
        assert response.headers[name] == value


async def test__security_headers__present_on_error_responses(client: AsyncClient) -> None:
    response = await client.get("/api/bookmarks/1")
    assert response.status_code == 404
    assert response.headers["X-Content-Type-Options"] == "nosniff"


async def test__security_headers__present_on_server_error_responses(
    client: AsyncClient,
) -> None:
    error = OperationalError("SELECT", {}, Exception("connection refused"))
    with patch(
        "services.bookmark_service.get_bookmarks",
        new_callable=AsyncMock,
        side_effect=error,
    ):
        response = await client.get("/api/bookmarks")
    assert response.status_code == 500
    for name, value in SECURITY_HEADERS.items():
        assert response.headers[name] == value


async def test__cors__allowed_origin_is_echoed(client: AsyncClient) -> None:
    response = await client.get(
        "/api/bookmarks", headers={"Origin": "http://localhost:5173"},
    )
    assert response.headers["access-control-allow-origin"] == "http://localhost:5173"


async def test__cors__unknown_origin_not_allowed(client: AsyncClient) -> None:
    response = await client.get(
        "/api/bookmarks", headers={"Origin": "https://evil.example"},
    )
    assert "access-control-allow-origin" not in response.headers


async def test__access_log__common_format_outside_production(
    client: AsyncClient, caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.INFO, logger="api.access"):
        await client.get("/api/bookmarks")
    lines = [r.getMessage() for r in caplog.records if r.name == "api.access"]
    assert any('"GET /api/bookmarks HTTP/1.1" 200' in line for line in lines)


async def test__access_log__tiny_format_in_production(
    production_client: AsyncClient, caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.INFO, logger="api.access"):
        await production_client.get("/api/bookmarks")
    lines = [r.getMessage() for r in caplog.records if r.name == "api.access"]
    assert any(line.startswith("GET /api/bookmarks 200 - ") for line in lines)


async def test__access_log__server_error_is_logged(
    client: AsyncClient, caplog: pytest.LogCaptureFixture,
) -> None:
    error = OperationalError("SELECT", {}, Exception("connection refused"))
    with patch(
        "services.bookmark_service.get_bookmarks",
        new_callable=AsyncMock,
        side_effect=error,
    ), caplog.at_level(logging.INFO, logger="api.access"):
        response = await client.get("/api/bookmarks")
    assert response.status_code == 500
    lines = [r.getMessage() for r in caplog.records if r.name == "api.access"]
    assert any('"GET /api/bookmarks HTTP/1.1" 500 -' in line for line in lines)



async def test__create_and_delete__logged(
    client: AsyncClient, caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.INFO, logger="api.routers.bookmarks"):
        response = await client.post(
            "/api/bookmarks",
            json={"title": "Logged", "url": "https://log.example", "rating": 2},
        )
        bookmark_id = response.json()["id"]
        await client.delete(f"/api/bookmarks/{bookmark_id}")
    messages = [r.getMessage() for r in caplog.records]
    assert f"Bookmark with id {bookmark_id} created." in messages
    assert f"Bookmark with id {bookmark_id} deleted" in messages
