from __future__ import annotations
from typing import List, Optional, Tuple

from ..models.domain import Location, Railcard, PUBLIC_RAILCARD_CODE
from ..utils.option import Option, Some, NOTHING
from .errors import FareRequestError
from .lookups import CRSMap, NLCMap, RailcardMap


def resolve_location(identifier: str, by_crs: CRSMap, by_nlc: NLCMap) -> Option[Location]:
    # CRS first, NLC only when the CRS map has no entry
    if identifier in by_crs:
        return Some(by_crs[identifier])
    if identifier in by_nlc:
        return Some(by_nlc[identifier])
    return NOTHING


def resolve_railcards(codes: Optional[str], railcards: RailcardMap) -> Tuple[Railcard, ...]:
    """
    "YNG,YNG,FAM" -> (YNG, YNG, FAM, public). Order and duplicates are kept,
    blank tokens are ignored. Unknown codes are reported together.
    """
    out: List[Railcard] = []
    unknown: List[str] = []
    for token in (codes or "").split(","):
        code = token.strip()
        if not code:
            continue
        card = railcards.get(code)
        if card is None:
            unknown.append(code)
        else:
            out.append(card)

    if unknown:
        raise FareRequestError("railcards", "unknown railcard code(s): " + ",".join(unknown), codes)

    out.append(railcards[PUBLIC_RAILCARD_CODE])
    return tuple(out)
