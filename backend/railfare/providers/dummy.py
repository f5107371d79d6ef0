# backend/railfare/providers/dummy.py
"""
Built-in fare collaborator, no external API.
Prices are derived *deterministically* from a hash of the route (no random),
then filtered by the request preferences and discounted per railcard.
Same (origin, destination, date, passengers) -> same fares.
"""
from __future__ import annotations
from typing import List, Tuple
import hashlib

from ..models.domain import FareRequest, PassengerSet, Railcard
from .base import FareOption, FareResult

def _hash_int(*parts: str) -> int:
    base = "|".join(parts).encode("utf-8")
    h = hashlib.sha1(base).hexdigest()
    return int(h[:16], 16)

def _lcg(n: int) -> int:
    # deterministic 64-bit LCG
    return (1103515245 * n + 12345) & 0x7FFFFFFFFFFFFFFF

def _lcg_float01(n: int) -> float:
    return (_lcg(n) % 10_000_000) / 10_000_000.0

# code, name, class, journey, advance, multiplier of the route base price
TICKETS: List[Tuple[str, str, str, str, bool, float]] = [
    ("SDS", "Anytime Single",        "standard", "single", False, 1.00),
    ("SVS", "Off-Peak Single",       "standard", "single", False, 0.70),
    ("SDR", "Anytime Return",        "standard", "return", False, 1.90),
    ("SOR", "Off-Peak Return",       "standard", "return", False, 1.05),
    ("FDS", "Anytime Single",        "first",    "single", False, 1.60),
    ("FDR", "Anytime Return",        "first",    "return", False, 3.00),
    ("FOR", "Off-Peak Return",       "first",    "return", False, 1.90),
    ("AVS", "Advance Single",        "standard", "single", True,  0.35),
    ("AVF", "Advance Single (1st)",  "first",    "single", True,  0.60),
]

ROUTE_ANY_PERMITTED = "00000"
RAILCARD_DISCOUNT = 1 / 3
CHILD_RATE = 0.5

def _base_price(seed: int) -> int:
    # route base price in pence (between ~5 and ~150 GBP)
    return 500 + int(14500 * _lcg_float01(seed))

def _advance_factor(seed: int) -> float:
    # advance prices move with the travel date, 0.8..1.2
    return 0.8 + 0.4 * _lcg_float01(seed + 41)

def _railcard_applies(card: Railcard, passengers: PassengerSet) -> bool:
    if card.is_public:
        return True
    return (
        card.min_adults <= passengers.adults <= card.max_adults
        and card.min_children <= passengers.children <= card.max_children
    )

def _wanted(request: FareRequest, fare_class: str, journey: str, advance: bool) -> bool:
    prefs = request.preferences
    if fare_class == "first" and not prefs.first_class:
        return False
    if fare_class == "standard" and not prefs.standard_class:
        return False
    if journey == "single" and not prefs.singles:
        return False
    if journey == "return" and not prefs.returns:
        return False
    if advance and not prefs.advance:
        return False
    return True

def price_fares(request: FareRequest) -> List[FareOption]:
    passengers = request.passengers
    if passengers.adults + passengers.children == 0:
        return []

    route_seed = _hash_int(request.origin.nlc, request.destination.nlc)
    date_seed = _hash_int(request.origin.nlc, request.destination.nlc, request.outward_date.isoformat())
    base = _base_price(route_seed)

    # duplicates in the request price once
    cards = list({c.code: c for c in passengers.railcards}.values())

    out: List[FareOption] = []
    for code, name, fare_class, journey, advance, mul in TICKETS:
        if not _wanted(request, fare_class, journey, advance):
            continue
        adult = base * mul * (_advance_factor(date_seed) if advance else 1.0)
        for card in cards:
            if not _railcard_applies(card, passengers):
                continue
            card_adult = adult if card.is_public else adult * (1 - RAILCARD_DISCOUNT)
            child = card_adult * CHILD_RATE
            total = round(card_adult) * passengers.adults + round(child) * passengers.children
            out.append(FareOption(
                route_code=ROUTE_ANY_PERMITTED,
                ticket_code=code,
                ticket_name=name,
                fare_class=fare_class,
                journey=journey,
                advance=advance,
                railcard_code=card.code,
                price=total,
            ))

    out.sort(key=lambda f: f.price)
    return out

class DummyFareService:
    name = "dummy"

    async def get_fares(self, request: FareRequest) -> FareResult:
        return FareResult(request=request, fares=price_fares(request))
