"""
Shared pytest fixtures.

SITE_URL is pinned before the app is imported so the module-level `app`
in app.main is built against a known origin.
"""

import os

os.environ["SITE_URL"] = "https://devtools.wsgrok.com"

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.domain.routes import parse_route_entries
from app.main import create_app  # noqa: E402


SITE_URL = "https://devtools.wsgrok.com"


@pytest.fixture
def settings():
    return Settings(site_url=SITE_URL)


@pytest.fixture
def two_routes():
    """The two-entry route list used by the ordering scenario."""
    return parse_route_entries(
        [
            {"path": "", "priority": "1.0", "changefreq": "weekly"},
            {"path": "base64", "priority": "0.8", "changefreq": "monthly"},
        ]
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """FastAPI TestClient over the default route list."""
    with TestClient(app) as c:
        yield c
