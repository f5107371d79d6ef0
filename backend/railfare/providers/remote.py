# backend/railfare/providers/remote.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..models.domain import FareRequest
from ..services.errors import FareServiceError
from .base import FareOption, FareResult

logger = logging.getLogger(__name__)


def _parse_bool(value: Any) -> bool:
    # real JSON booleans, or the literal string "true"
    if isinstance(value, bool):
        return value
    return value == "true"


def _parse_fare(item: Dict[str, Any]) -> FareOption:
    return FareOption(
        route_code=str(item.get("route_code") or item.get("routeCode") or ""),
        ticket_code=str(item.get("ticket_code") or item.get("ticketCode") or ""),
        ticket_name=str(item.get("ticket_name") or item.get("ticketName") or ""),
        fare_class=str(item.get("fare_class") or item.get("fareClass") or "standard"),
        journey=str(item.get("journey") or "single"),
        advance=_parse_bool(item.get("advance", False)),
        railcard_code=str(item.get("railcard_code") or item.get("railcardCode") or ""),
        price=int(item["price"]),
    )


class RemoteFareService:
    """
    Delegates pricing to an HTTP fares API:
      POST <base_url>/fares  (FareRequest.to_dict() as JSON)
      -> { "fares": [ { ticket_code, ticket_name, fare_class, journey, advance, railcard_code, price }, ... ] }

    No retry. Timeout defaults to None (the call may hang, only this request waits).
    """
    name = "remote"

    def __init__(self, base_url: str, timeout: Optional[float] = None, client: Optional[httpx.AsyncClient] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def get_fares(self, request: FareRequest) -> FareResult:
        url = f"{self.base_url}/fares"
        try:
            r = await self._client.post(url, json=request.to_dict())
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning("remote: %s answered %s", url, e.response.status_code)
            raise FareServiceError(f"fare service answered {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.warning("remote: %s failed: %s", url, e)
            raise FareServiceError(f"fare service unreachable: {e}") from e

        try:
            data = r.json()
            fares: List[FareOption] = [_parse_fare(item) for item in (data.get("fares") or [])]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise FareServiceError(f"malformed fare service response: {e}") from e
        return FareResult(request=request, fares=fares)

    async def aclose(self) -> None:
        await self._client.aclose()
