"""Inquiry endpoint: validate, persist to Sanity, notify by email.

Either side effect is enough for the lead to count as received. Only when
neither happens (and we are not in development) does the client get a 500.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from .. import config
from ..core import sanity
from ..core.mailer import send_inquiry_email
from ..schemas import InquiryRequest, MessageResponse

router = APIRouter()

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED_FIELDS = {
    "full_name": "fullName",
    "company_name": "companyName",
    "email": "email",
    "country": "country",
    "message": "message",
}


def _message(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def missing_fields(inquiry: InquiryRequest) -> List[str]:
    return [
        alias
        for attr, alias in REQUIRED_FIELDS.items()
        if not (getattr(inquiry, attr) or "").strip()
    ]


def inquiry_source(url_path: str) -> str:
    if url_path.startswith("/product/"):
        return "product-page"
    if url_path.startswith("/contact"):
        return "contact-page"
    return "other"


def inquiry_document(inquiry: InquiryRequest) -> Dict[str, Any]:
    url_path = inquiry.url_path or ""
    doc: Dict[str, Any] = {
        "_type": "inquiry",
        "name": inquiry.full_name,
        "email": inquiry.email,
        "company": inquiry.company_name,
        "country": inquiry.country,
        "message": inquiry.message,
        "source": inquiry_source(url_path),
        "urlPath": url_path,
        "createdAt": datetime.now(timezone.utc).isoformat(),
        "status": "new",
    }
    optional = {
        "phone": inquiry.phone,
        "productName": inquiry.product_name,
        "productSlug": inquiry.product_slug,
        "productCategory": inquiry.product_category,
    }
    doc.update({key: value for key, value in optional.items() if value})
    return doc


@router.post(
    "/inquiry",
    response_model=MessageResponse,
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}},
)
def submit_inquiry(inquiry: InquiryRequest) -> JSONResponse:
    missing = missing_fields(inquiry)
    if missing:
        return _message(400, f"Missing required fields: {', '.join(missing)} are required")
    if not EMAIL_PATTERN.match(inquiry.email.strip()):
        return _message(400, "Invalid email format")

    document_id = sanity.create_document(inquiry_document(inquiry))
    if document_id:
        logging.info("inquiry: stored in Sanity as %s", document_id)

    smtp = config.smtp_settings()
    if smtp is None:
        if document_id:
            return _message(200, "Inquiry received and logged in our system")
        if config.is_development():
            logging.info(
                "inquiry: SMTP not configured, not sending (product=%s, country=%s, source=%s)",
                inquiry.product_name or "-",
                inquiry.country,
                inquiry_source(inquiry.url_path or ""),
            )
            return _message(200, "Inquiry received (development mode - email not sent)")
        logging.warning("inquiry: neither SMTP nor Sanity write access configured")
        return _message(500, "Email service is not configured. Please contact us directly.")

    try:
        send_inquiry_email(inquiry, smtp)
    except Exception as exc:
        logging.exception("Error sending inquiry email: %s", exc)
        if document_id:
            return _message(200, "Inquiry received and logged in our system")
        return _message(500, "Failed to send inquiry. Please try again later.")
    return _message(200, "Inquiry submitted successfully")


@router.api_route("/inquiry", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
def inquiry_method_not_allowed() -> JSONResponse:
    return _message(405, "Method not allowed")
