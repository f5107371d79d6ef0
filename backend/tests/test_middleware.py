"""Tests for the middleware chain: gzip, timing/logging, static fallback."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from railfare.core.config import Settings
from railfare.core.middleware import (
    GZipMiddleware,
    RequestTimingMiddleware,
    StaticFallbackMiddleware,
)
from railfare.main import create_app

from conftest import RecordingFareService

QUERY = "/fares?origin=EUS&destination=MAN&outwardDate=2024-06-01&adults=1&children=0"
TIME_HEADER = re.compile(r"^\d+ms$")


def test_registration_order(app) -> None:
    # outermost first
    assert [m.cls for m in app.user_middleware] == [
        GZipMiddleware,
        RequestTimingMiddleware,
        StaticFallbackMiddleware,
    ]


class TestTiming:
    @pytest.mark.parametrize("path", [QUERY, "/health", "/", "/app.js", "/other"])
    def test_header_on_every_response(self, client: TestClient, path: str) -> None:
        response = client.get(path)
        assert TIME_HEADER.match(response.headers["X-Response-Time"])

    def test_header_on_validation_error(self, client: TestClient) -> None:
        response = client.get("/fares")
        assert response.status_code == 400
        assert TIME_HEADER.match(response.headers["X-Response-Time"])

    def test_access_log_line(self, client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="railfare.access")
        client.get(QUERY)
        records = [r for r in caplog.records if r.name == "railfare.access"]
        assert len(records) == 1
        record = records[0]
        assert re.match(r"^GET /fares\?origin=EUS.* - \d+$", record.getMessage())
        assert record.method == "GET"
        assert record.path == "/fares"
        assert record.status_code == 200
        assert record.elapsed_ms >= 0

    def test_failure_is_logged(self, settings, lookups, caplog: pytest.LogCaptureFixture) -> None:
        class Broken:
            name = "broken"

            async def get_fares(self, request):
                raise RuntimeError("boom")

        caplog.set_level(logging.INFO, logger="railfare.access")
        app = create_app(settings=settings, fare_service=Broken(), lookups=lookups)
        with TestClient(app, raise_server_exceptions=False) as c:
            c.get(QUERY)
        failed = [r for r in caplog.records if r.name == "railfare.access"]
        assert failed and failed[0].levelno == logging.ERROR
        assert failed[0].status_code == 500


class TestStatic:
    def test_index(self, client: TestClient, fare_service: RecordingFareService) -> None:
        response = client.get("/")
        assert response.status_code == 200
        assert "fares" in response.text
        assert fare_service.requests == []

    def test_asset(self, client: TestClient) -> None:
        response = client.get("/app.js")
        assert response.status_code == 200
        assert response.text == "console.log('fares');"

    def test_head_asset(self, client: TestClient) -> None:
        assert client.head("/app.js").status_code == 200

    def test_file_named_like_route_short_circuits(
        self, client: TestClient, static_root: Path, fare_service: RecordingFareService,
    ) -> None:
        (static_root / "fares").write_text("static")
        response = client.get(QUERY)
        assert response.text == "static"
        assert fare_service.requests == []

    def test_no_traversal(self, client: TestClient, static_root: Path) -> None:
        (static_root.parent / "secret.txt").write_text("nope")
        assert client.get("/../secret.txt").status_code == 404

    def test_missing_root_passes_through(self, tmp_path: Path, fare_service, lookups) -> None:
        settings = Settings(STATIC_ROOT=str(tmp_path / "absent"))
        app = create_app(settings=settings, fare_service=fare_service, lookups=lookups)
        with TestClient(app) as c:
            assert c.get("/app.js").status_code == 404
            assert c.get(QUERY).status_code == 200


class TestCompression:
    def test_large_body_gzipped(self, settings, fare_service, lookups) -> None:
        app = create_app(
            settings=settings.model_copy(update={"GZIP_MINIMUM_SIZE": 1}),
            fare_service=fare_service,
            lookups=lookups,
        )
        with TestClient(app) as c:
            response = c.get(QUERY, headers={"Accept-Encoding": "gzip"})
        assert response.headers["content-encoding"] == "gzip"
        assert TIME_HEADER.match(response.headers["X-Response-Time"])
        assert response.json()["fares"][0]["price"] == 12345

    def test_small_body_not_gzipped(self, client: TestClient) -> None:
        response = client.get("/health", headers={"Accept-Encoding": "gzip"})
        assert "content-encoding" not in response.headers

    def test_no_gzip_without_accept_encoding(self, settings, fare_service, lookups) -> None:
        app = create_app(
            settings=settings.model_copy(update={"GZIP_MINIMUM_SIZE": 1}),
            fare_service=fare_service,
            lookups=lookups,
        )
        with TestClient(app) as c:
            response = c.get(QUERY, headers={"Accept-Encoding": "identity"})
        assert "content-encoding" not in response.headers


class TestTimingKeepsBodyIntact:
    """Timing sits inside GZip, the size threshold must still apply."""

    def _app(self, minimum_size: int):
        from fastapi import FastAPI

        app = FastAPI()

        @app.get("/small")
        def small():
            return {"ok": True}

        @app.get("/large")
        def large():
            return {"items": ["x" * 100] * 50}

        app.add_middleware(RequestTimingMiddleware)
        app.add_middleware(GZipMiddleware, minimum_size=minimum_size)
        return app

    def test_small_body_below_threshold(self) -> None:
        with TestClient(self._app(1024)) as c:
            response = c.get("/small", headers={"Accept-Encoding": "gzip"})
        assert "content-encoding" not in response.headers
        assert TIME_HEADER.match(response.headers["X-Response-Time"])
        assert response.json() == {"ok": True}

    def test_large_body_above_threshold(self) -> None:
        with TestClient(self._app(1024)) as c:
            response = c.get("/large", headers={"Accept-Encoding": "gzip"})
        assert response.headers["content-encoding"] == "gzip"
        assert TIME_HEADER.match(response.headers["X-Response-Time"])
        assert len(response.json()["items"]) == 50
