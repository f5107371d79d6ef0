from __future__ import annotations
from dataclasses import dataclass, asdict, field
from datetime import date
from typing import Any, Dict, Tuple

from ..utils.option import Option, NOTHING

# Code of the no-discount railcard, present in every passenger set.
PUBLIC_RAILCARD_CODE = ""


@dataclass(frozen=True)
class Location:
    nlc: str
    crs: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Railcard:
    code: str
    name: str
    min_adults: int = 0
    max_adults: int = 9
    min_children: int = 0
    max_children: int = 9

    @property
    def is_public(self) -> bool:
        return self.code == PUBLIC_RAILCARD_CODE


PUBLIC_RAILCARD = Railcard(code=PUBLIC_RAILCARD_CODE, name="Public")


@dataclass(frozen=True)
class PassengerSet:
    adults: int
    children: int
    railcards: Tuple[Railcard, ...] = (PUBLIC_RAILCARD,)

    def __post_init__(self) -> None:
        if self.adults < 0 or self.children < 0:
            raise ValueError("passenger counts must be non-negative")
        if not self.railcards:
            raise ValueError("railcards must contain at least the public railcard")


@dataclass(frozen=True)
class FarePreferences:
    first_class: bool = True
    standard_class: bool = True
    singles: bool = True
    returns: bool = True
    advance: bool = True


@dataclass(frozen=True)
class FareRequest:
    origin: Location
    destination: Location
    outward_date: date
    return_date: Option[date] = NOTHING
    passengers: PassengerSet = field(default_factory=lambda: PassengerSet(1, 0))
    preferences: FarePreferences = field(default_factory=FarePreferences)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view, the Option is flattened to an ISO string or None."""
        return {
            "origin": self.origin.to_dict(),
            "destination": self.destination.to_dict(),
            "outwardDate": self.outward_date.isoformat(),
            "returnDate": self.return_date.map(date.isoformat).get_or_else(None),
            "adults": self.passengers.adults,
            "children": self.passengers.children,
            "railcards": [r.code for r in self.passengers.railcards],
            "firstClass": self.preferences.first_class,
            "standardClass": self.preferences.standard_class,
            "singles": self.preferences.singles,
            "returns": self.preferences.returns,
            "advance": self.preferences.advance,
        }
