"""
Zogakzip Backend — Application Wiring Tests
=============================================

What we test:
    ✅ The package and the ASGI entry point import cleanly
    ✅ /health reports database connectivity
    ✅ Every response carries X-Request-ID; a safe client-sent id is echoed
    ✅ The access log names the route template and logs gate refusals as warnings
    ✅ Error bodies share one shape
"""

import logging

import pytest

# Imported at module level so a broken package fails collection outright
import zogakzip.middleware  # noqa: F401
from zogakzip.main import app, create_app, run
from zogakzip.middleware.logging import level_for
from zogakzip.middleware.request_id import accept_request_id


def test_entry_points():
    assert callable(run)
    paths = {route.path for route in app.routes}
    assert "/api/groups" in paths
    assert "/api/posts/{post_id}" in paths
    assert "/health" in paths
    assert create_app() is not app


@pytest.mark.asyncio
async def test_health(test_client):
    response = await test_client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["database"] == "connected"
    assert "uptimeSeconds" in body


@pytest.mark.asyncio
async def test_request_id_generated(test_client):
    response = await test_client.get("/api/groups")
    assert response.headers.get("X-Request-ID")


@pytest.mark.asyncio
async def test_request_id_echoed(test_client):
    response = await test_client.get("/api/groups", headers={"X-Request-ID": "trace-42"})
    assert response.headers["X-Request-ID"] == "trace-42"


@pytest.mark.asyncio
async def test_unsafe_request_id_replaced(test_client):
    response = await test_client.get("/api/groups", headers={"X-Request-ID": "a b;c"})

    rid = response.headers["X-Request-ID"]
    assert rid != "a b;c"
    assert len(rid) == 8


class TestAcceptRequestId:

    def test_plain_token_kept(self):
        assert accept_request_id("req_1.A-b") == "req_1.A-b"

    def test_too_long_replaced(self):
        assert accept_request_id("x" * 65) != "x" * 65

    def test_missing_generated(self):
        assert len(accept_request_id(None)) == 8


class TestAccessLog:

    def test_levels(self):
        assert level_for(200) == logging.INFO
        assert level_for(404) == logging.INFO
        assert level_for(401) == logging.WARNING
        assert level_for(403) == logging.WARNING
        assert level_for(500) == logging.ERROR

    @pytest.mark.asyncio
    async def test_logs_route_template(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="zogakzip.access")

        await test_client.get("/api/groups/4242", headers={"X-Request-ID": "log-1"})

        records = [r for r in caplog.records if r.name == "zogakzip.access"]
        assert len(records) == 1
        assert records[0].route == "/api/groups/{group_id}"
        assert records[0].path_params == {"group_id": "4242"}
        assert records[0].status == 404
        assert records[0].request_id == "log-1"

    @pytest.mark.asyncio
    async def test_password_refusal_is_warning(self, test_client, make_group, caplog):
        group = await make_group(isPublic=False)
        caplog.set_level(logging.INFO, logger="zogakzip.access")

        await test_client.get(f"/api/groups/{group['id']}")

        record = [r for r in caplog.records if r.name == "zogakzip.access"][-1]
        assert record.status == 403
        assert record.levelno == logging.WARNING

    @pytest.mark.asyncio
    async def test_health_not_logged(self, test_client, caplog):
        caplog.set_level(logging.INFO, logger="zogakzip.access")

        await test_client.get("/health")

        assert not [r for r in caplog.records if r.name == "zogakzip.access"]


@pytest.mark.asyncio
async def test_error_body_shape(test_client):
    response = await test_client.get("/api/groups/424242", headers={"X-Request-ID": "trace-7"})

    assert response.status_code == 404
    body = response.json()
    assert body["message"]
    assert body["request_id"] == "trace-7"
