import pytest
from pydantic import ValidationError

from app.domain.routes import (
    SITE_ROUTES,
    ChangeFreq,
    RouteEntry,
    RouteEntryError,
    build_loc,
    discover_page_paths,
    parse_route_entries,
    route_table_drift,
)


def test_site_routes_order_and_root_first():
    paths = [e.path for e in SITE_ROUTES]
    assert paths == [
        "",
        "base64",
        "url",
        "json",
        "json-escape",
        "regex",
        "jwt",
        "jwt-rsa",
        "hex",
        "hash",
        "uuid",
    ]
    assert SITE_ROUTES[0].priority == "1.0"
    assert SITE_ROUTES[0].changefreq is ChangeFreq.weekly
    assert all(e.changefreq is ChangeFreq.monthly for e in SITE_ROUTES[1:])


def test_route_entry_is_frozen():
    with pytest.raises(ValidationError):
        SITE_ROUTES[1].path = "other"


@pytest.mark.parametrize(
    "item",
    [
        {"path": "/base64", "priority": "0.8", "changefreq": "monthly"},
        {"path": "base 64", "priority": "0.8", "changefreq": "monthly"},
        {"path": "hex", "priority": "1.5", "changefreq": "monthly"},
        {"path": "hex", "priority": "high", "changefreq": "monthly"},
        {"path": "hex", "priority": "0.8\n", "changefreq": "monthly"},
        {"path": "hex", "priority": "0.8", "changefreq": "fortnightly"},
    ],
)
def test_parse_rejects_invalid_literals(item):
    with pytest.raises(RouteEntryError) as exc:
        parse_route_entries([item])
    assert exc.value.code == "invalid_route_entry"


def test_parse_rejects_duplicate_paths():
    with pytest.raises(RouteEntryError, match="duplicates"):
        parse_route_entries(
            [
                {"path": "hex", "priority": "0.8", "changefreq": "monthly"},
                {"path": "hex", "priority": "0.5", "changefreq": "weekly"},
            ]
        )


def test_build_loc_root_has_single_slash():
    assert build_loc("https://example.com", "") == "https://example.com/"
    assert build_loc("https://example.com", "jwt-rsa") == "https://example.com/jwt-rsa"


def test_route_table_drift():
    entries = [RouteEntry(path=p, priority="0.8", changefreq="monthly") for p in ("", "hex", "old")]
    drift = route_table_drift(entries, ["", "hex", "uuid"])
    assert drift.missing == ["uuid"]
    assert drift.stale == ["old"]
    assert not drift.ok
    assert route_table_drift(entries[:2], ["hex", ""]).ok


def test_discover_page_paths(tmp_path):
    for rel in ("", "base64", "(tools)/jwt", "blog/[slug]", "robots.txt"):
        d = tmp_path / rel
        d.mkdir(parents=True, exist_ok=True)
    for rel in ("", "base64", "(tools)/jwt", "blog/[slug]"):
        (tmp_path / rel / "+page.svelte").write_text("<h1/>")
    (tmp_path / "robots.txt" / "+server.ts").write_text("")

    assert discover_page_paths(tmp_path) == ["", "base64", "jwt"]


def test_discover_page_paths_missing_dir(tmp_path):
    with pytest.raises(FileNotFoundError):
        discover_page_paths(tmp_path / "nope")
