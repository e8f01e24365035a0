from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.parcels import router as parcels_router
from parcels.errors import (
    InvalidAttributes,
    InvalidGeometry,
    InvalidRadius,
    ParcelError,
    ParcelNotFound,
)
from session.map_session import MapSession
from settings.loader import cors_origins, get_settings, log_level
from settings.types import MapSettings

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: dict[type[ParcelError], int] = {
    InvalidAttributes: 422,
    InvalidGeometry: 422,
    InvalidRadius: 422,
    ParcelNotFound: 404,
}


def configure_logging() -> None:
    logging.basicConfig(
        level=log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def parcel_error_handler(request: Request, exc: ParcelError) -> JSONResponse:
    status = _STATUS_BY_ERROR.get(type(exc), 400)
    logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc)
    return JSONResponse(status_code=status, content={"error": exc.kind, "detail": str(exc)})


def create_app(settings: MapSettings | None = None) -> FastAPI:
    """
    One app, one map session. The session lives as long as the app and is
    disposed on shutdown.
    """
    session = MapSession(settings or get_settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        session.dispose()

    app = FastAPI(title="Land parcel map API", lifespan=lifespan)
    app.state.session = session

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ParcelError, parcel_error_handler)  # type: ignore[arg-type]
    app.include_router(parcels_router)
    return app


configure_logging()
app = create_app()
