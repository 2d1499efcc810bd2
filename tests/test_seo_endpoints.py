"""
Tests for:
  GET /robots.txt
  GET /sitemap.xml
  GET /health
"""

from fastapi.testclient import TestClient
from lxml import etree

from app.config import Settings
from app.domain.routes import SITE_ROUTES
from app.main import create_app
from app.service.seo_service import SITEMAP_NS

CACHE = "max-age=0, s-maxage=3600"


# ---------------------------------------------------------------------------
# GET /robots.txt
# ---------------------------------------------------------------------------


def test_robots_txt(client):
    r = client.get("/robots.txt")
    assert r.status_code == 200
    assert r.headers["content-type"] == "text/plain"
    assert r.text == (
        "User-agent: *\n"
        "Allow: /\n"
        "\n"
        "Sitemap: https://devtools.wsgrok.com/sitemap.xml"
    )


def test_robots_has_single_sitemap_line(client):
    lines = client.get("/robots.txt").text.splitlines()
    sitemap_lines = [ln for ln in lines if ln.startswith("Sitemap:")]
    assert sitemap_lines == ["Sitemap: https://devtools.wsgrok.com/sitemap.xml"]
    assert "Allow: /" in lines


# ---------------------------------------------------------------------------
# GET /sitemap.xml
# ---------------------------------------------------------------------------


def test_sitemap_xml(client):
    r = client.get("/sitemap.xml")
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/xml"
    assert r.text.startswith('<?xml version="1.0" encoding="UTF-8"?>')

    root = etree.fromstring(r.content)
    assert root.tag == f"{{{SITEMAP_NS}}}urlset"
    locs = [el.text for el in root.iterfind(f"{{{SITEMAP_NS}}}url/{{{SITEMAP_NS}}}loc")]
    assert locs == [f"https://devtools.wsgrok.com/{e.path}" for e in SITE_ROUTES]
    assert locs[0] == "https://devtools.wsgrok.com/"


def test_sitemap_scenario_order(two_routes):
    app = create_app(Settings(site_url="https://example.com"), two_routes)
    with TestClient(app) as c:
        body = c.get("/sitemap.xml").text

    root_at = body.index("<loc>https://example.com/</loc>")
    base64_at = body.index("<loc>https://example.com/base64</loc>")
    assert root_at < base64_at
    assert body.count("<url>") == 2


# ---------------------------------------------------------------------------
# Shared behaviour
# ---------------------------------------------------------------------------


def test_cache_header_identical_on_both(client):
    robots = client.get("/robots.txt")
    sitemap = client.get("/sitemap.xml")
    assert robots.headers["cache-control"] == CACHE
    assert sitemap.headers["cache-control"] == CACHE


def test_repeated_requests_are_byte_identical(client):
    for path in ("/robots.txt", "/sitemap.xml"):
        first = client.get(path).content
        assert all(client.get(path).content == first for _ in range(3))


def test_request_id_propagated(client):
    r = client.get("/robots.txt", headers={"X-Request-ID": "abc-123"})
    assert r.headers["x-request-id"] == "abc-123"


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_theme_config_not_served(client):
    assert client.get("/theme.json").status_code == 404
