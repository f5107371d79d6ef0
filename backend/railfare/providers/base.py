from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Protocol, runtime_checkable

from ..models.domain import FareRequest

@dataclass(frozen=True)
class FareOption:
    route_code: str
    ticket_code: str
    ticket_name: str
    fare_class: str          # "first" | "standard"
    journey: str             # "single" | "return"
    advance: bool
    railcard_code: str
    price: int               # pence, whole party

@dataclass(frozen=True)
class FareResult:
    request: FareRequest
    fares: List[FareOption] = field(default_factory=list)

@runtime_checkable
class FareService(Protocol):
    """
    Fare collaborator: prices a validated FareRequest.
    """
    name: str

    async def get_fares(self, request: FareRequest) -> FareResult:
        ...
