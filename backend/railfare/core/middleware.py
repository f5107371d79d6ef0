# backend/railfare/core/middleware.py
"""
Middleware chain applied to every request.

Execution order (outermost first):
    GZip -> RequestTiming -> StaticFallback -> routes

Starlette runs middleware in reverse registration order, so install_middleware
registers them from the innermost to the outermost.
"""
from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from starlette.datastructures import MutableHeaders
from starlette.exceptions import HTTPException
from starlette.middleware.gzip import GZipMiddleware
from starlette.responses import PlainTextResponse
from starlette.staticfiles import StaticFiles
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .config import Settings

access_logger = logging.getLogger("railfare.access")

RESPONSE_TIME_HEADER = "X-Response-Time"


class RequestTimingMiddleware:
    """
    Logs '<METHOD> <url> - <ms>' and sets X-Response-Time on every response.

    Plain ASGI: the body is passed on untouched, so the outer GZip stage still
    sees the real response size.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status_code = 500

        async def send_with_timing(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                headers = MutableHeaders(scope=message)
                headers[RESPONSE_TIME_HEADER] = f"{_elapsed_ms(start)}ms"
            await send(message)

        request = Request(scope)
        try:
            await self.app(scope, receive, send_with_timing)
        except Exception:
            ms = _elapsed_ms(start)
            access_logger.error(
                "%s %s - %s (failed)", request.method, _url(request), ms,
                extra={"method": request.method, "path": request.url.path, "elapsed_ms": ms, "status_code": 500},
            )
            raise
        ms = _elapsed_ms(start)

        access_logger.info(
            "%s %s - %s", request.method, _url(request), ms,
            extra={"method": request.method, "path": request.url.path, "elapsed_ms": ms, "status_code": status_code},
        )


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _url(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


class StaticFallbackMiddleware:
    """
    Serves GET/HEAD requests that match a regular file under `directory`
    ("/" -> index.html) and stops there. Anything else goes to the app.
    """

    def __init__(self, app: ASGIApp, directory: str, index: str = "index.html") -> None:
        self.app = app
        self.index = index
        # check_dir=False: a missing root just means nothing is served
        self.static = StaticFiles(directory=directory, check_dir=False)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] not in ("GET", "HEAD"):
            await self.app(scope, receive, send)
            return

        path = self.static.get_path(scope)
        if path in (".", ""):
            path = self.index

        try:
            response = await self.static.get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code in (404, 405):
                await self.app(scope, receive, send)
                return
            response = PlainTextResponse(exc.detail, status_code=exc.status_code)

        await response(scope, receive, send)


def install_middleware(app: FastAPI, settings: Settings) -> None:
    # innermost first
    app.add_middleware(StaticFallbackMiddleware, directory=settings.STATIC_ROOT)
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MINIMUM_SIZE)
