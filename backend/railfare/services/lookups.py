# backend/railfare/services/lookups.py
"""
Read-only reference data shared by every request.

Loaded once at startup from the database, then wrapped in MappingProxyType so
no request handler can mutate it. Concurrent requests read it without locks.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from sqlalchemy.orm import Session

from ..models.domain import Location, Railcard, PUBLIC_RAILCARD, PUBLIC_RAILCARD_CODE
from ..models.location import LocationRow
from ..models.railcard import RailcardRow

logger = logging.getLogger(__name__)

CRSMap = Mapping[str, Location]
NLCMap = Mapping[str, Location]
RailcardMap = Mapping[str, Railcard]


@dataclass(frozen=True)
class Lookups:
    locations_by_crs: CRSMap
    locations_by_nlc: NLCMap
    railcards: RailcardMap


def build_lookups(locations: Iterable[Location], railcards: Iterable[Railcard]) -> Lookups:
    """
    Index locations by CRS and NLC and railcards by code.
    Locations without a CRS code are only reachable by NLC.
    The public railcard is added when missing.
    """
    by_crs = {}
    by_nlc = {}
    for loc in locations:
        by_nlc[loc.nlc] = loc
        if loc.crs:
            by_crs[loc.crs] = loc

    cards = {r.code: r for r in railcards}
    cards.setdefault(PUBLIC_RAILCARD_CODE, PUBLIC_RAILCARD)

    return Lookups(
        locations_by_crs=MappingProxyType(by_crs),
        locations_by_nlc=MappingProxyType(by_nlc),
        railcards=MappingProxyType(cards),
    )


def load_lookups(db: Session) -> Lookups:
    locations = [
        Location(nlc=row.nlc, crs=(row.crs or "").strip(), name=row.name)
        for row in db.query(LocationRow).all()
    ]
    railcards = [
        Railcard(
            code=row.code.strip(),
            name=row.name,
            min_adults=row.min_adults,
            max_adults=row.max_adults,
            min_children=row.min_children,
            max_children=row.max_children,
        )
        for row in db.query(RailcardRow).all()
    ]
    lookups = build_lookups(locations, railcards)
    logger.info(
        "lookups: %d locations (%d with CRS), %d railcards",
        len(lookups.locations_by_nlc),
        len(lookups.locations_by_crs),
        len(lookups.railcards),
    )
    return lookups
