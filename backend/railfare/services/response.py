# backend/railfare/services/response.py
from __future__ import annotations
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.domain import Location
from ..providers.base import FareOption, FareResult

# ====== I/O models ======

class LocationOut(BaseModel):
    nlc: str
    crs: str
    name: str

class FareOut(BaseModel):
    routeCode: str
    ticketCode: str
    ticketName: str
    fareClass: str
    journey: str
    advance: bool
    railcard: str
    price: int = Field(..., description="pence, whole party")

class FaresResponse(BaseModel):
    origin: LocationOut
    destination: LocationOut
    outwardDate: str
    returnDate: Optional[str] = None
    adults: int
    children: int
    railcards: List[str]
    fares: List[FareOut]

# ====== factory ======

def _location(loc: Location) -> LocationOut:
    return LocationOut(nlc=loc.nlc, crs=loc.crs, name=loc.name)

def _fare(f: FareOption) -> FareOut:
    return FareOut(
        routeCode=f.route_code,
        ticketCode=f.ticket_code,
        ticketName=f.ticket_name,
        fareClass=f.fare_class,
        journey=f.journey,
        advance=f.advance,
        railcard=f.railcard_code,
        price=f.price,
    )

class FareResponseFactory:
    """Turns a FareResult into the JSON body of /fares (cheapest first)."""

    def get_response(self, result: FareResult) -> FaresResponse:
        req = result.request
        return FaresResponse(
            origin=_location(req.origin),
            destination=_location(req.destination),
            outwardDate=req.outward_date.isoformat(),
            returnDate=req.return_date.map(date.isoformat).get_or_else(None),
            adults=req.passengers.adults,
            children=req.passengers.children,
            railcards=[r.code for r in req.passengers.railcards],
            fares=[_fare(f) for f in sorted(result.fares, key=lambda f: f.price)],
        )
