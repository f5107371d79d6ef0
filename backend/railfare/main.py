# backend/railfare/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .core.config import Settings, settings as default_settings
from .core.logging import configure_logging
from .core.middleware import install_middleware
from .providers.base import FareService
from .routers.fares import router as fares_router
from .services.lookups import Lookups
from .services.providers import build_fare_service
from .services.response import FareResponseFactory

logger = logging.getLogger(__name__)


def _load_lookups_from_db() -> Lookups:
    # late import: the engine is only needed when lookups are not injected
    from .core.db import init_db, session_scope
    from .services.lookups import load_lookups

    init_db()
    with session_scope() as db:
        return load_lookups(db)


def create_app(
    settings: Optional[Settings] = None,
    fare_service: Optional[FareService] = None,
    lookups: Optional[Lookups] = None,
    response_factory: Optional[FareResponseFactory] = None,
) -> FastAPI:
    """
    Build the app. Collaborators can be injected (tests); otherwise the
    fare service comes from FARE_SERVICE and lookups from the database.
    """
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.lookups is None:
            app.state.lookups = _load_lookups_from_db()
        # only a service built here is closed here, injected ones belong to the caller
        owned = None
        if app.state.fare_service is None:
            owned = app.state.fare_service = build_fare_service(settings)
        yield
        aclose = getattr(owned, "aclose", None)
        if aclose is not None:
            await aclose()

    app = FastAPI(title="Railfare", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.lookups = lookups
    app.state.fare_service = fare_service
    app.state.response_factory = response_factory or FareResponseFactory()

    install_middleware(app, settings)
    app.include_router(fares_router)   # /fares

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


app = create_app()


def run() -> None:
    import uvicorn

    logger.info("listening on %s:%s", default_settings.HOST, default_settings.PORT)
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT, log_level=default_settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
