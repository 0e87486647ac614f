"""XML sitemap generation."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from datetime import date
from typing import Iterable, List, Optional, Tuple

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

# (path, priority, changefreq)
STATIC_PAGES: List[Tuple[str, float, str]] = [
    ("/", 1.0, "weekly"),
    ("/about", 0.8, "monthly"),
    ("/logistics", 0.8, "monthly"),
    ("/certifications", 0.8, "monthly"),
]
CATEGORY_PRIORITY = 0.7
PRODUCT_PRIORITY = 0.6


def _add_url(urlset: ET.Element, loc: str, lastmod: str, changefreq: str, priority: float) -> None:
    url = ET.SubElement(urlset, "url")
    ET.SubElement(url, "loc").text = loc
    ET.SubElement(url, "lastmod").text = lastmod
    ET.SubElement(url, "changefreq").text = changefreq
    ET.SubElement(url, "priority").text = f"{priority:.1f}"


def generate_sitemap(
    site_url: str,
    product_slugs: Iterable[str],
    category_slugs: Iterable[str],
    lastmod: Optional[date] = None,
) -> str:
    stamp = (lastmod or date.today()).isoformat()
    site_url = site_url.rstrip("/")
    urlset = ET.Element("urlset", xmlns=SITEMAP_NS)
    for path, priority, changefreq in STATIC_PAGES:
        _add_url(urlset, f"{site_url}{path}", stamp, changefreq, priority)
    for slug in category_slugs:
        _add_url(urlset, f"{site_url}/products/{slug}", stamp, "weekly", CATEGORY_PRIORITY)
    for slug in product_slugs:
        _add_url(urlset, f"{site_url}/product/{slug}", stamp, "weekly", PRODUCT_PRIORITY)
    ET.indent(urlset)
    body = ET.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'
