from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from lxml import etree

from app.config import CACHE_CONTROL
from app.domain.routes import ChangeFreq, RouteEntry, build_loc
from app.domain.theme import ThemeConfig
from app.service.seo_service import SITEMAP_NS, SITEMAP_PATH, PrerenderedDocument
from runner.types import BuildError, FetchedDocument

_NS = {"sm": SITEMAP_NS}
_CHANGEFREQS = {c.value for c in ChangeFreq}
THEME_FILENAME = "tailwind.theme.json"


def validate_robots(text: str, site_url: str) -> list[str]:
    """Return the problems found in a robots.txt body (empty list == ok)."""
    problems: list[str] = []
    lines = [ln.strip() for ln in text.splitlines()]
    if "User-agent: *" not in lines:
        problems.append("missing 'User-agent: *'")
    if "Allow: /" not in lines:
        problems.append("missing 'Allow: /'")

    sitemap_lines = [ln for ln in lines if ln.startswith("Sitemap:")]
    expected = f"Sitemap: {site_url}{SITEMAP_PATH}"
    if len(sitemap_lines) != 1:
        problems.append(f"expected exactly one Sitemap line, found {len(sitemap_lines)}")
    elif sitemap_lines[0] != expected:
        problems.append(f"Sitemap line is {sitemap_lines[0]!r}, expected {expected!r}")
    return problems


def _text(el: etree._Element, tag: str) -> str | None:
    child = el.find(f"sm:{tag}", _NS)
    return child.text if child is not None else None


def validate_sitemap(xml: str, site_url: str, entries: Iterable[RouteEntry]) -> list[str]:
    """Return the problems found in a sitemap body checked against the route list."""
    entries = list(entries)
    try:
        # lxml refuses str input that carries an encoding declaration.
        root = etree.fromstring(xml.encode("utf-8"))
    except etree.XMLSyntaxError as e:
        return [f"sitemap is not well-formed XML: {e}"]

    if root.tag != f"{{{SITEMAP_NS}}}urlset":
        return [f"unexpected root element {root.tag!r}"]

    problems: list[str] = []
    urls = root.findall("sm:url", _NS)
    if len(urls) != len(entries):
        problems.append(f"expected {len(entries)} <url> elements, found {len(urls)}")

    for i, (url, entry) in enumerate(zip(urls, entries)):
        loc = _text(url, "loc")
        expected_loc = build_loc(site_url, entry.path)
        if loc != expected_loc:
            problems.append(f"url #{i}: loc {loc!r} != {expected_loc!r}")
        elif "//" in loc.split("://", 1)[-1]:
            problems.append(f"url #{i}: loc {loc!r} has a double slash")

        priority = _text(url, "priority")
        try:
            if priority is None or not (0.0 <= float(priority) <= 1.0):
                problems.append(f"url #{i}: priority {priority!r} out of range")
        except ValueError:
            problems.append(f"url #{i}: priority {priority!r} is not a number")

        changefreq = _text(url, "changefreq")
        if changefreq not in _CHANGEFREQS:
            problems.append(f"url #{i}: unknown changefreq {changefreq!r}")
    return problems


def check_served(doc: FetchedDocument, media_type: str) -> list[str]:
    """Return problems with a served document's status and headers."""
    problems: list[str] = []
    if doc.status_code != 200:
        problems.append(f"{doc.path}: status {doc.status_code}")
    if doc.content_type.split(";")[0].strip() != media_type:
        problems.append(f"{doc.path}: content type {doc.content_type!r}, expected {media_type!r}")
    if doc.cache_control != CACHE_CONTROL:
        problems.append(f"{doc.path}: Cache-Control {doc.cache_control!r}, expected {CACHE_CONTROL!r}")
    return problems


def write_artifacts(
    out_dir: Path, documents: Mapping[str, PrerenderedDocument], theme: ThemeConfig
) -> list[Path]:
    """Write every prerendered document plus the theme config into `out_dir`."""
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        for doc in documents.values():
            target = out_dir / doc.filename
            target.write_text(doc.body, encoding="utf-8", newline="")
            written.append(target)
        theme_path = out_dir / THEME_FILENAME
        theme_path.write_text(theme.to_json(), encoding="utf-8", newline="")
        written.append(theme_path)
    except OSError as e:
        raise BuildError(f"cannot write build artifacts to {out_dir}: {e}") from e
    return written


def summarize(problems: Mapping[str, list[str]]) -> tuple[dict, int]:
    """Compute summary dict and an exit code from per-document problems."""
    failed = {path: msgs for path, msgs in problems.items() if msgs}
    summary = {
        "component": "runner",
        "event": "verify_summary",
        "checked": sorted(problems),
        "failed_count": len(failed),
        "failures": failed,
    }
    return summary, (1 if failed else 0)
