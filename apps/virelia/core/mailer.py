"""Inquiry notification emails sent over SMTP."""

from __future__ import annotations

import smtplib
from datetime import datetime, timezone
from email.message import EmailMessage
from html import escape
from typing import Optional

from bs4 import BeautifulSoup

from ..config import SmtpSettings, base_url
from ..schemas import InquiryRequest

SMTP_TIMEOUT = 10


def _field(label: str, value: str) -> str:
    return f'<div class="field"><div class="label">{escape(label)}</div><div class="value">{value}</div></div>'


def render_inquiry_html(inquiry: InquiryRequest, submitted_at: Optional[datetime] = None) -> str:
    submitted_at = submitted_at or datetime.now(timezone.utc)
    email = escape(inquiry.email or "")
    rows = []
    if inquiry.product_name:
        rows.append(_field("Product", escape(inquiry.product_name)))
    if inquiry.product_category:
        rows.append(_field("Category", escape(inquiry.product_category)))
    rows.append(_field("Contact Person", escape(inquiry.full_name or "")))
    rows.append(_field("Company", escape(inquiry.company_name or "")))
    rows.append(_field("Email", f'<a href="mailto:{email}">{email}</a>'))
    rows.append(_field("Country", escape(inquiry.country or "")))
    if inquiry.phone:
        rows.append(_field("Phone", escape(inquiry.phone)))
    rows.append(_field("Message / Requirements", f'<div class="message-box">{escape(inquiry.message or "")}</div>'))

    footer = "<p>This inquiry was submitted through the Virelia website inquiry form.</p>"
    if inquiry.product_slug:
        footer += f"<p>Product Page: {escape(base_url())}/product/{escape(inquiry.product_slug)}</p>"
    elif inquiry.url_path:
        footer += f"<p>Page: {escape(base_url())}{escape(inquiry.url_path)}</p>"

    return (
        "<!DOCTYPE html><html><body>"
        f'<div class="header"><h1>New Quote Request</h1><p>Received on {submitted_at:%Y-%m-%d %H:%M %Z}</p></div>'
        f'<div class="content">{"".join(rows)}</div>'
        f'<div class="footer">{footer}</div>'
        "</body></html>"
    )


def html_to_text(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    blocks = [div.get_text(separator=": ").strip() for div in soup.select(".header, .field, .footer p")]
    return "\n\n".join(block for block in blocks if block)


def inquiry_subject(inquiry: InquiryRequest) -> str:
    if inquiry.product_name:
        return f"New Quote Request - {inquiry.product_name}"
    return f"New Inquiry - {inquiry.company_name}"


def build_inquiry_message(inquiry: InquiryRequest, settings: SmtpSettings) -> EmailMessage:
    html = render_inquiry_html(inquiry)
    msg = EmailMessage()
    msg["Subject"] = inquiry_subject(inquiry)
    msg["From"] = f'"Virelia Inquiry System" <{settings.sender}>'
    msg["To"] = settings.recipient
    if inquiry.email:
        msg["Reply-To"] = inquiry.email
    msg.set_content(html_to_text(html))
    msg.add_alternative(html, subtype="html")
    return msg


def send_inquiry_email(inquiry: InquiryRequest, settings: SmtpSettings) -> None:
    """Send the notification; SMTP errors propagate to the caller."""
    message = build_inquiry_message(inquiry, settings)
    if settings.port == 465:
        with smtplib.SMTP_SSL(settings.host, settings.port, timeout=SMTP_TIMEOUT) as smtp:
            smtp.login(settings.user, settings.password)
            smtp.send_message(message)
        return
    with smtplib.SMTP(settings.host, settings.port, timeout=SMTP_TIMEOUT) as smtp:
        smtp.starttls()
        smtp.login(settings.user, settings.password)
        smtp.send_message(message)
