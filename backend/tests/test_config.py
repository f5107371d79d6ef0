"""Tests for Settings and the fare service loader."""

from __future__ import annotations

import asyncio

import pytest

from railfare.core.config import Settings
from railfare.providers.base import FareService
from railfare.providers.dummy import DummyFareService
from railfare.providers.remote import RemoteFareService
from railfare.services.providers import build_fare_service


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PORT", "STATIC_ROOT", "FARE_SERVICE", "GZIP_MINIMUM_SIZE"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.PORT == 8000
    assert s.STATIC_ROOT == "www"
    assert s.GZIP_MINIMUM_SIZE == 1024
    assert s.FARE_SERVICE == "dummy"
    assert s.FARE_SERVICE_TIMEOUT is None


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setenv("FARE_SERVICE", "remote")
    s = Settings(_env_file=None)
    assert s.PORT == 9090
    assert s.FARE_SERVICE == "remote"


def test_invalid_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PORT", "70000")
    with pytest.raises(ValueError):
        Settings(_env_file=None)


class TestBuildFareService:
    def test_dummy(self) -> None:
        service = build_fare_service(Settings(_env_file=None, FARE_SERVICE="dummy"))
        assert isinstance(service, DummyFareService)
        assert isinstance(service, FareService)

    def test_remote(self) -> None:
        service = build_fare_service(Settings(
            _env_file=None, FARE_SERVICE="remote", FARE_SERVICE_URL="http://fares.test", FARE_SERVICE_TIMEOUT=2.5,
        ))
        assert isinstance(service, RemoteFareService)
        assert service.base_url == "http://fares.test"
        asyncio.run(service.aclose())

    def test_remote_without_url_falls_back(self) -> None:
        service = build_fare_service(Settings(_env_file=None, FARE_SERVICE="remote", FARE_SERVICE_URL=""))
        assert isinstance(service, DummyFareService)

    def test_unknown_name_falls_back(self) -> None:
        service = build_fare_service(Settings(_env_file=None, FARE_SERVICE="oracle"))
        assert isinstance(service, DummyFareService)
