# backend/railfare/services/providers.py
from __future__ import annotations

import logging
from typing import Optional

from ..core.config import Settings
from ..providers.base import FareService

logger = logging.getLogger(__name__)


def _load_fare_service(settings: Settings) -> Optional[FareService]:
    n = settings.FARE_SERVICE.strip().lower()
    if n == "remote":
        # missing URL: log and let the fallback kick in
        if not settings.FARE_SERVICE_URL:
            logger.warning("fare service: 'remote' requested but FARE_SERVICE_URL is empty -> skip")
            return None
        from ..providers.remote import RemoteFareService
        return RemoteFareService(settings.FARE_SERVICE_URL, timeout=settings.FARE_SERVICE_TIMEOUT)
    if n == "dummy":
        from ..providers.dummy import DummyFareService
        return DummyFareService()

    logger.warning("fare service: unknown name '%s' -> ignored", settings.FARE_SERVICE)
    return None


def build_fare_service(settings: Settings) -> FareService:
    """
    Reads FARE_SERVICE ('dummy' | 'remote') and returns the instance.
    Always returns a service (dummy fallback).
    """
    service = _load_fare_service(settings)
    if service is None:
        from ..providers.dummy import DummyFareService
        service = DummyFareService()
        logger.info("fare service: falling back to dummy")
    logger.info("fare service: using %s", service.name)
    return service
