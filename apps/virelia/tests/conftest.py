"""Shared fixtures: a clean environment and small product sets."""

import pytest

from virelia.schemas import Product

_ENV_VARS = [
    "SANITY_PROJECT_ID",
    "NEXT_PUBLIC_SANITY_PROJECT_ID",
    "SANITY_DATASET",
    "NEXT_PUBLIC_SANITY_DATASET",
    "SANITY_READ_TOKEN",
    "SANITY_API_READ_TOKEN",
    "SANITY_WRITE_TOKEN",
    "SANITY_USE_CDN",
    "SMTP_HOST",
    "SMTP_PORT",
    "SMTP_USER",
    "SMTP_PASS",
    "SMTP_FROM",
    "INQUIRY_EMAIL",
    "SITE_URL",
    "NEXT_PUBLIC_SITE_URL",
    "NEXT_PUBLIC_BASE_URL",
    "APP_ENV",
    "VERCEL_GIT_COMMIT_SHA",
    "GIT_COMMIT",
    "COMMIT_SHA",
    "BUILD_TIME",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test with Sanity and SMTP unconfigured."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sanity_env(monkeypatch):
    monkeypatch.setenv("SANITY_PROJECT_ID", "abc123")
    monkeypatch.setenv("SANITY_DATASET", "production")
    monkeypatch.setenv("SANITY_USE_CDN", "false")


def make_product(slug, title=None, **fields):
    return Product(slug=slug, title=title or slug.replace("-", " ").title(), **fields)


@pytest.fixture
def sample_products():
    return [
        make_product(
            "olive-oil",
            "Olive Oil",
            category="Oils & Condiments",
            packaging="Glass bottle, Tin can",
            moq="5 pallets",
            origin="Turkey",
            certifications=["ISO 22000", "Organic"],
            featured=True,
        ),
        make_product(
            "harissa",
            "Harissa",
            category="Pepper & Chili Products",
            packaging="Glass jar",
            moq="8 pallets",
            origin="Tunisia",
            certifications=["Halal"],
        ),
        make_product(
            "pizza-sauces",
            "Pizza Sauces",
            category="Ready-to-Use Sauces",
            packaging="Tin can 3kg, Bag-in-box",
            moq="12 pallets",
            origin="Italy",
            certifications=["BRC", "Organic"],
        ),
        make_product(
            "sambal",
            "Sambal",
            category="Asian Specialties",
            packaging="PET bottle",
            moq="On request",
            origin="Indonesia",
            certifications=[],
        ),
        make_product(
            "preserved-vegetables",
            "Preserved Vegetables",
            category="Preserved Vegetables",
            packaging=None,
            moq=None,
            origin=None,
        ),
    ]
