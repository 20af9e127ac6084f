from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
from fastapi.staticfiles import StaticFiles

from .api.routing import UNHANDLED
from .backend import Backend, build_backend
from .exceptions import TrackedError
from .log import close_file_handlers, setup_logging
from .schemas.envelope import ListEnvelope, error_response
from .services.currency import BASE_CURRENCY, UnsupportedCurrencyError

logger = logging.getLogger(__name__)


def _render(result: Any) -> Any:
    if isinstance(result, ListEnvelope):
        return result.to_dict()
    return result


def create_app(backend: Optional[Backend] = None) -> FastAPI:
    embedded = backend or build_backend()
    setup_logging(embedded.settings.log_dir, embedded.settings.log_level)

    @asynccontextmanager
    async def _lifespan(_: FastAPI):
        try:
            yield
        finally:
            embedded.overlay.database.dispose()
            close_file_handlers()

    app = FastAPI(title="Storefront Embedded Backend", lifespan=_lifespan)
    app.state.backend = embedded

    app.add_middleware(
        CORSMiddleware,
        allow_origins=embedded.settings.cors_allow_origins or ["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TrackedError)
    async def _tracked_error(_: Request, exc: TrackedError) -> JSONResponse:
        logger.error("Request failed: %s", exc.with_trace())
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": str(exc),
                "error_type": exc.error_type,
                "trace_id": exc.trace_id,
            },
        )

    @app.get("/health")
    def health() -> dict:
        checks: dict[str, str] = {}
        overall = "ok"
        try:
            embedded.overlay.database.ping()
            checks["database"] = "ok"
        except Exception as exc:
            checks["database"] = f"error: {exc}"
            overall = "degraded"
        source = embedded.settings.data_source
        if source.startswith("http"):
            checks["data_source"] = "remote"
        else:
            checks["data_source"] = "ok" if Path(source).is_dir() else "missing"
            if checks["data_source"] == "missing":
                overall = "degraded"
        return {"status": overall, "checks": checks}

    @app.get("/events")
    def events(since: int = Query(0, ge=0)) -> dict:
        items, next_index = embedded.emitter.events_since(since)
        return {"events": [item.model_dump(mode="json") for item in items], "next": next_index}

    @app.get("/events/stream")
    async def events_stream() -> StreamingResponse:
        return StreamingResponse(embedded.emitter.stream(), media_type="text/event-stream")

    @app.get("/currency/rates")
    async def currency_rates(refresh: bool = False) -> dict:
        service = embedded.currency
        rates = await (service.refresh_rates() if refresh else service.get_rates())
        return {
            "base": BASE_CURRENCY,
            "rates": rates,
            "currencies": [asdict(info) for info in service.supported_currencies()],
        }

    @app.get("/currency/convert", response_model=None)
    async def currency_convert(
        amount: float,
        to: str,
        source: str = Query(BASE_CURRENCY, alias="from"),
    ) -> Any:
        target = to.upper()
        try:
            converted = await embedded.currency.convert(amount, source.upper(), target)
        except UnsupportedCurrencyError as exc:
            return JSONResponse(status_code=400, content=error_response(str(exc)))
        return {
            "success": True,
            "amount": converted,
            "currency": target,
            "formatted": embedded.currency.format(converted, target),
        }

    @app.api_route("/api/{path:path}", methods=["GET", "POST", "PUT", "DELETE"], response_model=None)
    async def embedded_api(path: str, request: Request) -> Any:
        target = f"{path}?{request.url.query}" if request.url.query else path
        body = await request.body()
        result = await embedded.router.request(
            target,
            method=request.method,
            body=body or None,
            headers=dict(request.headers),
        )
        if result is UNHANDLED:
            return JSONResponse(status_code=404, content=error_response(f"No embedded route for {path}"))
        return _render(result)

    asset_dir = Path(embedded.settings.asset_dir)
    if asset_dir.is_dir():
        app.mount("/assets", StaticFiles(directory=asset_dir), name="assets")

    return app


__all__ = ["create_app"]
