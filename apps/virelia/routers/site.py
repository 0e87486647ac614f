"""Operational and SEO endpoints: health, version, sitemap."""

from __future__ import annotations

import os
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import Response

from .. import __version__, config
from ..core import provider
from ..core.sitemap import generate_sitemap
from ..schemas import HealthResponse, VersionResponse

router = APIRouter()

_COMMIT_VARS = ("VERCEL_GIT_COMMIT_SHA", "GIT_COMMIT", "COMMIT_SHA")


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Liveness check for monitoring and uptime checks."""
    return HealthResponse(
        status="ok",
        environment=config.app_environment(),
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )


@router.get("/version", response_model=VersionResponse, response_model_exclude_none=True)
def version() -> VersionResponse:
    commit = config.get_env_value(_COMMIT_VARS)
    return VersionResponse(
        version=__version__,
        commit=commit[:7] if commit else None,
        build_time=os.environ.get("BUILD_TIME") or None,
    )


@router.get("/sitemap.xml", include_in_schema=False)
def sitemap() -> Response:
    slugs = provider.fetch_sitemap_slugs()
    body = generate_sitemap(config.site_url(), slugs.products, slugs.categories)
    return Response(
        content=body,
        media_type="application/xml",
        headers={"Cache-Control": "public, s-maxage=86400, stale-while-revalidate"},
    )
