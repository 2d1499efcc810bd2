from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from xml.sax.saxutils import escape

from ..config import CACHE_CONTROL, Settings
from ..domain.routes import SITE_ROUTES, RouteEntry, build_loc
from ..logging_conf import get_logger

logger = get_logger("service.seo")

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
ROBOTS_PATH = "/robots.txt"
SITEMAP_PATH = "/sitemap.xml"


@dataclass(frozen=True)
class PrerenderedDocument:
    """A response body computed once and served unchanged thereafter."""

    filename: str
    media_type: str
    body: str
    headers: dict[str, str] = field(default_factory=lambda: {"Cache-Control": CACHE_CONTROL})


# ------------------------
# Renderers
# ------------------------

def render_robots(site_url: str) -> str:
    """Return the robots.txt body allowing every crawler and pointing at the sitemap."""
    return f"User-agent: *\nAllow: /\n\nSitemap: {site_url}{SITEMAP_PATH}"


def _render_url(site_url: str, entry: RouteEntry) -> str:
    return (
        "  <url>\n"
        f"    <loc>{escape(build_loc(site_url, entry.path))}</loc>\n"
        f"    <changefreq>{entry.changefreq.value}</changefreq>\n"
        f"    <priority>{escape(entry.priority)}</priority>\n"
        "  </url>"
    )


def render_sitemap(site_url: str, entries: Iterable[RouteEntry]) -> str:
    """Return the sitemap XML with one <url> block per entry, in list order."""
    blocks = "\n".join(_render_url(site_url, e) for e in entries)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<urlset xmlns="{SITEMAP_NS}">\n'
        f"{blocks}\n"
        "</urlset>"
    )


# ------------------------
# Prerender
# ------------------------

def prerender(
    settings: Settings, entries: Iterable[RouteEntry] = SITE_ROUTES
) -> dict[str, PrerenderedDocument]:
    """Evaluate both documents once, keyed by the URL path they are served at."""
    entries = tuple(entries)
    headers = {"Cache-Control": settings.cache_control}
    docs = {
        ROBOTS_PATH: PrerenderedDocument(
            filename="robots.txt",
            media_type="text/plain",
            body=render_robots(settings.site_url),
            headers=dict(headers),
        ),
        SITEMAP_PATH: PrerenderedDocument(
            filename="sitemap.xml",
            media_type="application/xml",
            body=render_sitemap(settings.site_url, entries),
            headers=dict(headers),
        ),
    }
    logger.info(
        "seo.prerender",
        extra={
            "event": "seo_prerender",
            "site_url": settings.site_url,
            "route_count": len(entries),
        },
    )
    return docs
