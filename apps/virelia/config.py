"""Environment configuration for the site API.

Every setting is read from the process environment at call time so that a
missing variable degrades a feature instead of failing the app: no Sanity
project id means local catalog data, no SMTP credentials means inquiries are
only persisted (or logged in development).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

ENV_REQUIREMENTS: Dict[str, Dict[str, Sequence[str]]] = {
    "sanity": {
        "project_id": ("SANITY_PROJECT_ID", "NEXT_PUBLIC_SANITY_PROJECT_ID"),
        "dataset": ("SANITY_DATASET", "NEXT_PUBLIC_SANITY_DATASET"),
        "read_token": ("SANITY_READ_TOKEN", "SANITY_API_READ_TOKEN"),
        "write_token": ("SANITY_WRITE_TOKEN",),
    },
    "smtp": {
        "host": ("SMTP_HOST",),
        "port": ("SMTP_PORT",),
        "user": ("SMTP_USER",),
        "password": ("SMTP_PASS",),
        "sender": ("SMTP_FROM",),
    },
    "site": {
        "url": ("NEXT_PUBLIC_SITE_URL", "SITE_URL"),
        "base_url": ("NEXT_PUBLIC_BASE_URL",),
    },
}

DEFAULT_SITE_URL = "https://frezya.nl"
DEFAULT_INQUIRY_EMAIL = "batinhincer@frezya.nl"
DEFAULT_SANITY_API_VERSION = "2024-01-01"
PLACEHOLDER_IMAGE = "/placeholder.jpg"


def get_env_value(names: Sequence[str], default: Optional[str] = None) -> Optional[str]:
    """Return the first non-empty value among ``names``."""
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return default


def has_env_value(names: Sequence[str]) -> bool:
    return any(os.environ.get(name) for name in names)


@dataclass(frozen=True)
class SanitySettings:
    project_id: str
    dataset: str = "production"
    api_version: str = DEFAULT_SANITY_API_VERSION
    read_token: Optional[str] = None
    write_token: Optional[str] = None
    use_cdn: bool = False


@dataclass(frozen=True)
class SmtpSettings:
    host: str
    port: int
    user: str
    password: str
    sender: str
    recipient: str


def sanity_settings() -> Optional[SanitySettings]:
    """Sanity connection settings, or None when no project id is set."""
    sanity = ENV_REQUIREMENTS["sanity"]
    project_id = get_env_value(sanity["project_id"])
    if not project_id:
        return None
    use_cdn_raw = os.environ.get("SANITY_USE_CDN")
    if use_cdn_raw is None:
        use_cdn = app_environment() == "production"
    else:
        use_cdn = use_cdn_raw.lower() in ("1", "true", "yes")
    return SanitySettings(
        project_id=project_id,
        dataset=get_env_value(sanity["dataset"], "production") or "production",
        api_version=os.environ.get("SANITY_API_VERSION", DEFAULT_SANITY_API_VERSION),
        read_token=get_env_value(sanity["read_token"]),
        write_token=get_env_value(sanity["write_token"]),
        use_cdn=use_cdn,
    )


def smtp_settings() -> Optional[SmtpSettings]:
    """SMTP settings, or None unless host, port, user and password are all set."""
    smtp = ENV_REQUIREMENTS["smtp"]
    host = get_env_value(smtp["host"])
    port = get_env_value(smtp["port"])
    user = get_env_value(smtp["user"])
    password = get_env_value(smtp["password"])
    if not (host and port and user and password):
        return None
    try:
        port_number = int(port)
    except ValueError:
        logging.warning("SMTP_PORT is not a number: %r", port)
        return None
    return SmtpSettings(
        host=host,
        port=port_number,
        user=user,
        password=password,
        sender=get_env_value(smtp["sender"], user) or user,
        recipient=os.environ.get("INQUIRY_EMAIL", DEFAULT_INQUIRY_EMAIL),
    )


def site_url() -> str:
    url = get_env_value(ENV_REQUIREMENTS["site"]["url"], DEFAULT_SITE_URL) or DEFAULT_SITE_URL
    return url.rstrip("/")


def base_url() -> str:
    return (get_env_value(ENV_REQUIREMENTS["site"]["base_url"]) or site_url()).rstrip("/")


def app_environment() -> str:
    """APP_ENV as set, or "unknown"; development behaviour is opt-in."""
    return os.environ.get("APP_ENV") or "unknown"


def is_development() -> bool:
    return app_environment() == "development"


@dataclass(frozen=True)
class EnvStatus:
    sanity_configured: bool
    sanity_write_configured: bool
    smtp_configured: bool
    site_url_configured: bool


def get_env_status() -> EnvStatus:
    # writes only need project id + write token: dataset has a default and the
    # read token is only required for private datasets
    sanity = ENV_REQUIREMENTS["sanity"]
    smtp = ENV_REQUIREMENTS["smtp"]
    return EnvStatus(
        sanity_configured=has_env_value(sanity["project_id"]),
        sanity_write_configured=has_env_value(sanity["project_id"]) and has_env_value(sanity["write_token"]),
        smtp_configured=all(
            has_env_value(smtp[key]) for key in ("host", "port", "user", "password")
        ),
        site_url_configured=has_env_value(ENV_REQUIREMENTS["site"]["url"]),
    )


def validate_env() -> List[str]:
    """Collect warnings about optional configuration that is missing."""
    warnings: List[str] = []
    status = get_env_status()

    if not status.sanity_configured:
        warnings.append(
            "Sanity CMS not configured (SANITY_PROJECT_ID or NEXT_PUBLIC_SANITY_PROJECT_ID not set). "
            "The site will use local data as a fallback."
        )
    elif not status.sanity_write_configured:
        warnings.append(
            "Sanity write token not configured (SANITY_WRITE_TOKEN not set). "
            "Inquiries will not be saved to Sanity CMS."
        )

    if not status.smtp_configured:
        warnings.append(
            "SMTP not fully configured. Email notifications for inquiries will be disabled. "
            "In development mode, inquiries will be logged instead."
        )

    if not status.site_url_configured:
        warnings.append(
            f"SITE_URL not set. Sitemap and canonical URLs will default to {DEFAULT_SITE_URL}."
        )
    return warnings


def log_env_warnings() -> None:
    for message in validate_env():
        logging.warning("config: %s", message)
