# backend/railfare/routers/fares.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from ..providers.base import FareService
from ..services.lookups import Lookups
from ..services.request_builder import build_fare_request
from ..services.response import FareResponseFactory, FaresResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["fares"])

# ====== dependencies (filled at startup, see main.create_app) ======

def get_lookups(request: Request) -> Lookups:
    return request.app.state.lookups

def get_fare_service(request: Request) -> FareService:
    return request.app.state.fare_service

def get_response_factory(request: Request) -> FareResponseFactory:
    return request.app.state.response_factory

# ====== route ======

@router.get("/fares", response_model=FaresResponse)
async def get_fares(
    request: Request,
    lookups: Lookups = Depends(get_lookups),
    fare_service: FareService = Depends(get_fare_service),
    response_factory: FareResponseFactory = Depends(get_response_factory),
):
    """
    Query string -> FareRequest -> fare service -> JSON.

    Parameters are read raw (not as typed FastAPI Query) so that the defaulting
    rules of build_fare_request apply, e.g. firstClass=banana -> False.
    Invalid input -> 400 listing every bad parameter. Fare service failures
    are not caught here (-> 500).
    """
    result = build_fare_request(request.query_params, lookups)
    if not result.ok:
        logger.info("fares: rejected %s", ", ".join(e.field for e in result.errors))
        raise HTTPException(status_code=400, detail={"errors": [e.to_dict() for e in result.errors]})

    fares = await fare_service.get_fares(result.request)
    return response_factory.get_response(fares)
