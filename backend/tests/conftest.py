"""Shared pytest fixtures for the railfare backend."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from railfare.core.config import Settings
from railfare.main import create_app
from railfare.models.domain import FareRequest, Location, Railcard, PUBLIC_RAILCARD
from railfare.providers.base import FareOption, FareResult
from railfare.services.lookups import Lookups, build_lookups

EUSTON = Location(nlc="1444", crs="EUS", name="LONDON EUSTON")
MANCHESTER = Location(nlc="2968", crs="MAN", name="MANCHESTER PICCADILLY")
LONDON_TERMINALS = Location(nlc="1072", crs="", name="LONDON TERMINALS")

YOUNG_PERSONS = Railcard(code="YNG", name="16-25 Railcard", min_adults=1, max_adults=1, max_children=0)
FAMILY = Railcard(code="FAM", name="Family & Friends", min_adults=1, max_adults=4, min_children=1, max_children=4)


class RecordingFareService:
    """Fare collaborator double: remembers every request, returns one fare."""

    name = "recording"

    def __init__(self) -> None:
        self.requests: List[FareRequest] = []

    async def get_fares(self, request: FareRequest) -> FareResult:
        self.requests.append(request)
        return FareResult(request=request, fares=[
            FareOption(
                route_code="00000",
                ticket_code="SDS",
                ticket_name="Anytime Single",
                fare_class="standard",
                journey="single",
                advance=False,
                railcard_code="",
                price=12345,
            ),
        ])


@pytest.fixture
def lookups() -> Lookups:
    return build_lookups(
        [EUSTON, MANCHESTER, LONDON_TERMINALS],
        [PUBLIC_RAILCARD, YOUNG_PERSONS, FAMILY],
    )


@pytest.fixture
def fare_service() -> RecordingFareService:
    return RecordingFareService()


@pytest.fixture
def static_root(tmp_path: Path) -> Path:
    root = tmp_path / "www"
    root.mkdir()
    (root / "index.html").write_text("<html><body>fares</body></html>")
    (root / "app.js").write_text("console.log('fares');")
    return root


@pytest.fixture
def settings(static_root: Path) -> Settings:
    return Settings(STATIC_ROOT=str(static_root), GZIP_MINIMUM_SIZE=1024, LOG_LEVEL="INFO")


@pytest.fixture
def app(settings: Settings, fare_service: RecordingFareService, lookups: Lookups) -> FastAPI:
    return create_app(settings=settings, fare_service=fare_service, lookups=lookups)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    with TestClient(app) as c:
        yield c
