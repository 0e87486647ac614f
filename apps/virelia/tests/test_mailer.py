from datetime import date, datetime, timezone

from virelia.config import SmtpSettings
from virelia.core.mailer import build_inquiry_message, html_to_text, inquiry_subject, render_inquiry_html
from virelia.core.sitemap import generate_sitemap
from virelia.schemas import InquiryRequest

SETTINGS = SmtpSettings(
    host="smtp.example.com",
    port=587,
    user="mailer@example.com",
    password="pw",
    sender="mailer@example.com",
    recipient="sales@example.com",
)


def _inquiry(**overrides):
    data = {
        "fullName": "Ada Lovelace",
        "companyName": "Analytical Foods",
        "email": "ada@example.com",
        "country": "Netherlands",
        "message": "Need <b>20</b> pallets",
    }
    data.update(overrides)
    return InquiryRequest(**data)


def test_subject_prefers_product_name():
    assert inquiry_subject(_inquiry(productName="Olive Oil")) == "New Quote Request - Olive Oil"
    assert inquiry_subject(_inquiry()) == "New Inquiry - Analytical Foods"


def test_html_escapes_user_input_and_links_product_page():
    html = render_inquiry_html(
        _inquiry(productSlug="olive-oil", productName="Olive Oil"),
        submitted_at=datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc),
    )
    assert "&lt;b&gt;20&lt;/b&gt;" in html
    assert "<b>20</b>" not in html
    assert "https://frezya.nl/product/olive-oil" in html
    assert "2024-03-01 09:30 UTC" in html


def test_text_part_is_derived_from_html():
    text = html_to_text(render_inquiry_html(_inquiry(phone="+31 20 123")))
    assert "Contact Person: Ada Lovelace" in text
    assert "Phone: +31 20 123" in text
    assert "Message / Requirements: Need <b>20</b> pallets" in text


def test_message_headers():
    msg = build_inquiry_message(_inquiry(), SETTINGS)
    assert msg["To"] == "sales@example.com"
    assert msg["Reply-To"] == "ada@example.com"
    assert "mailer@example.com" in msg["From"]
    assert msg.get_body(preferencelist=("html",)) is not None
    assert "Ada Lovelace" in msg.get_body(preferencelist=("plain",)).get_content()


def test_sitemap_lists_static_category_and_product_urls():
    xml = generate_sitemap("https://example.com/", ["olive-oil"], ["coffee-products"], lastmod=date(2024, 1, 2))
    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert "<loc>https://example.com/</loc>" in xml
    assert "<loc>https://example.com/about</loc>" in xml
    assert "<loc>https://example.com/products/coffee-products</loc>" in xml
    assert "<loc>https://example.com/product/olive-oil</loc>" in xml
    assert "<lastmod>2024-01-02</lastmod>" in xml
    assert "<priority>0.6</priority>" in xml
    assert 'xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"' in xml
