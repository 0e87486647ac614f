"""ASGI entry point: ``virelia.main:app``."""

import logging
import os
from typing import List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from . import __version__
from .config import log_env_warnings
from .routers import catalog, inquiry, site

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"


def cors_origins() -> List[str]:
    raw = os.environ.get("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def create_app() -> FastAPI:
    application = FastAPI(title="Virelia Catalog API", version=__version__)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    application.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
    application.include_router(inquiry.router, prefix="/api", tags=["inquiry"])
    application.include_router(site.router, prefix="/api", tags=["site"])

    @application.get("/", include_in_schema=False)
    def index() -> dict:
        return {
            "message": "Virelia Catalog API",
            "docs": "/docs",
            "health": "/api/health",
            "products": "/catalog/products",
        }

    @application.get("/favicon.ico", include_in_schema=False)
    def no_favicon() -> Response:
        return Response(status_code=204)

    log_env_warnings()
    return application


logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))
app = create_app()
