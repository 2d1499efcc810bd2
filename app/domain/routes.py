from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

__all__ = [
    "ChangeFreq",
    "RouteEntry",
    "RouteEntryError",
    "RouteDrift",
    "SITE_ROUTES",
    "parse_route_entries",
    "build_loc",
    "route_table_drift",
    "discover_page_paths",
]

_PRIORITY_RE = re.compile(r"\d+(\.\d+)?")
_PAGE_FILE = "+page.svelte"


class RouteEntryError(ValueError):
    """Raised when a route literal cannot be turned into a RouteEntry."""

    code: str = "invalid_route_entry"


class ChangeFreq(str, Enum):
    always = "always"
    hourly = "hourly"
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    yearly = "yearly"
    never = "never"


class RouteEntry(BaseModel):
    """One sitemap path plus its crawl hints.

    `path` is relative to the site origin; the empty string is the site root.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    priority: str
    changefreq: ChangeFreq

    @field_validator("path")
    @classmethod
    def _check_path(cls, v: str) -> str:
        if v.startswith("/"):
            raise ValueError("route path must be relative (no leading slash)")
        if any(ch.isspace() for ch in v) or "//" in v:
            raise ValueError("route path contains whitespace or empty segments")
        return v

    @field_validator("priority")
    @classmethod
    def _check_priority(cls, v: str) -> str:
        if not _PRIORITY_RE.fullmatch(v) or not (0.0 <= float(v) <= 1.0):
            raise ValueError("priority must be a decimal string in [0.0, 1.0]")
        return v


def parse_route_entries(raw: Iterable[Mapping[str, str]]) -> tuple[RouteEntry, ...]:
    """Validate route literals and return them as an immutable tuple, in order.

    Raises:
        RouteEntryError: on the first invalid literal, or on a duplicated path.
    """
    out: list[RouteEntry] = []
    seen: set[str] = set()
    for i, item in enumerate(raw):
        try:
            entry = RouteEntry.model_validate(item)
        except ValidationError as e:
            raise RouteEntryError(f"route #{i} is invalid: {e.errors()[0]['msg']}") from e
        if entry.path in seen:
            raise RouteEntryError(f"route #{i} duplicates path {entry.path!r}")
        seen.add(entry.path)
        out.append(entry)
    return tuple(out)


# Hand-maintained; keep in sync with the site's pages (see `discover_page_paths`).
SITE_ROUTES: tuple[RouteEntry, ...] = parse_route_entries(
    [
        {"path": "", "priority": "1.0", "changefreq": "weekly"},
        {"path": "base64", "priority": "0.8", "changefreq": "monthly"},
        {"path": "url", "priority": "0.8", "changefreq": "monthly"},
        {"path": "json", "priority": "0.8", "changefreq": "monthly"},
        {"path": "json-escape", "priority": "0.8", "changefreq": "monthly"},
        {"path": "regex", "priority": "0.8", "changefreq": "monthly"},
        {"path": "jwt", "priority": "0.8", "changefreq": "monthly"},
        {"path": "jwt-rsa", "priority": "0.8", "changefreq": "monthly"},
        {"path": "hex", "priority": "0.8", "changefreq": "monthly"},
        {"path": "hash", "priority": "0.8", "changefreq": "monthly"},
        {"path": "uuid", "priority": "0.8", "changefreq": "monthly"},
    ]
)


def build_loc(site_url: str, path: str) -> str:
    """Return the absolute location for a route; the root maps to `<site_url>/`."""
    return f"{site_url}/{path}"


class RouteDrift(BaseModel):
    """Difference between the listed routes and the pages actually served."""

    missing: list[str]  # served but not listed
    stale: list[str]  # listed but not served

    @property
    def ok(self) -> bool:
        return not self.missing and not self.stale


def route_table_drift(entries: Iterable[RouteEntry], served_paths: Iterable[str]) -> RouteDrift:
    listed = [e.path for e in entries]
    served = set(served_paths)
    return RouteDrift(
        missing=sorted(served - set(listed)),
        stale=[p for p in listed if p not in served],
    )


def discover_page_paths(routes_dir: Path) -> list[str]:
    """Return the relative path of every static page under a SvelteKit routes dir.

    Rules:
    - A directory is a page when it holds `+page.svelte`; the root maps to "".
    - Layout groups like `(app)` do not contribute a URL segment.
    - Pages under dynamic segments (`[slug]`) are skipped.

    Raises:
        FileNotFoundError: if `routes_dir` does not exist.
    """
    routes_dir = Path(routes_dir)
    if not routes_dir.is_dir():
        raise FileNotFoundError(f"routes directory not found: {routes_dir}")

    found: set[str] = set()
    for page in routes_dir.rglob(_PAGE_FILE):
        segments = page.parent.relative_to(routes_dir).parts
        if any(s.startswith("[") for s in segments):
            continue
        kept = [s for s in segments if not (s.startswith("(") and s.endswith(")"))]
        found.add("/".join(kept))
    return sorted(found)
