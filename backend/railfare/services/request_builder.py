# backend/railfare/services/request_builder.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Mapping, Optional, TypeVar

from ..models.domain import FarePreferences, FareRequest, Location, PassengerSet
from ..utils.option import Option, Some, NOTHING
from .errors import FareRequestError
from .lookups import Lookups
from .resolvers import resolve_location, resolve_railcards

T = TypeVar("T")

Params = Mapping[str, str]

# query parameter -> FarePreferences attribute
PREFERENCE_PARAMS = {
    "firstClass": "first_class",
    "standardClass": "standard_class",
    "singles": "singles",
    "returns": "returns",
    "advance": "advance",
}


@dataclass(frozen=True)
class BuildResult:
    """Either a FareRequest (ok) or the list of every parameter that failed."""
    request: Optional[FareRequest] = None
    errors: List[FareRequestError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.request is not None and not self.errors


# ---------- field parsers ----------

def _valid_date(d: str) -> bool:
    return (
        len(d) == 10
        and d[4] == "-"
        and d[7] == "-"
        and d[:4].isdigit()
        and d[5:7].isdigit()
        and d[8:10].isdigit()
    )


def parse_local_date(name: str, raw: Optional[str]) -> date:
    if raw is None or raw == "":
        raise FareRequestError(name, "required, expected YYYY-MM-DD", raw)
    if not _valid_date(raw):
        raise FareRequestError(name, "invalid date, expected YYYY-MM-DD", raw)
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise FareRequestError(name, "invalid date, expected YYYY-MM-DD", raw)


def parse_optional_date(name: str, raw: Optional[str]) -> Option[date]:
    if raw is None or raw == "":
        return NOTHING
    return Some(parse_local_date(name, raw))


def parse_count(name: str, raw: Optional[str]) -> int:
    if raw is None or raw.strip() == "":
        raise FareRequestError(name, "required, expected a non-negative integer", raw)
    value = raw.strip()
    if not (value.isascii() and value.isdigit()):
        raise FareRequestError(name, "expected a non-negative integer", raw)
    return int(value)


def parse_flag(raw: Optional[str]) -> bool:
    # absent or exactly "true" -> True, anything else -> False
    return raw is None or raw == "true"


def parse_preferences(params: Params) -> FarePreferences:
    return FarePreferences(**{
        attr: parse_flag(params.get(name)) for name, attr in PREFERENCE_PARAMS.items()
    })


def parse_location(name: str, raw: Optional[str], lookups: Lookups) -> Location:
    if raw is None or raw == "":
        raise FareRequestError(name, "required, expected a CRS or NLC code", raw)
    found = resolve_location(raw, lookups.locations_by_crs, lookups.locations_by_nlc)
    if isinstance(found, Some):
        return found.value
    raise FareRequestError(name, "unknown location", raw)


# ---------- builder ----------

def build_fare_request(params: Params, lookups: Lookups) -> BuildResult:
    """
    Turn raw query parameters into a FareRequest.

    Every field is parsed even after a failure so the caller gets the complete
    list of problems in one go. Optional flags default to True, a missing
    returnDate becomes NOTHING, the public railcard is always appended.
    """
    errors: List[FareRequestError] = []

    def attempt(fn: Callable[[], T]) -> Optional[T]:
        try:
            return fn()
        except FareRequestError as e:
            errors.append(e)
            return None

    origin = attempt(lambda: parse_location("origin", params.get("origin"), lookups))
    destination = attempt(lambda: parse_location("destination", params.get("destination"), lookups))
    outward_date = attempt(lambda: parse_local_date("outwardDate", params.get("outwardDate")))
    return_date = attempt(lambda: parse_optional_date("returnDate", params.get("returnDate")))
    adults = attempt(lambda: parse_count("adults", params.get("adults")))
    children = attempt(lambda: parse_count("children", params.get("children")))
    railcards = attempt(lambda: resolve_railcards(params.get("railcards"), lookups.railcards))
    preferences = parse_preferences(params)

    if errors:
        return BuildResult(errors=errors)

    return BuildResult(request=FareRequest(
        origin=origin,
        destination=destination,
        outward_date=outward_date,
        return_date=return_date,
        passengers=PassengerSet(adults=adults, children=children, railcards=railcards),
        preferences=preferences,
    ))
