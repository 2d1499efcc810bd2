#!/usr/bin/env python3
"""Build-time prerender and post-deploy verification of the SEO documents.

build:
- optionally check the sitemap's route list against the site's pages
- render robots.txt and sitemap.xml once and write them as static files
- resolve the styling library and write the theme config next to them

verify:
- fetch both documents from a running site concurrently
- check status, content type, cache header and body structure
- emit a compact summary and exit code
"""
from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from app.config import Settings, get_settings
from app.domain.routes import SITE_ROUTES, RouteEntry, discover_page_paths, route_table_drift
from app.domain.theme import ThemeConfigError, build_theme_config, resolve_package_dir
from app.logging_conf import get_logger, setup_logging
from app.service.seo_service import ROBOTS_PATH, SITEMAP_PATH, prerender
from runner.cli import parse_args
from runner.client import fetch_all
from runner.types import BuildError, FetchError
from runner.utils import check_served, summarize, validate_robots, validate_sitemap, write_artifacts

setup_logging(get_settings().log_level)
logger = get_logger("runner")


def run_build(
    *,
    settings: Settings,
    out_dir: Path,
    node_modules: Path,
    skeleton_dir: Path | None = None,
    routes_dir: Path | None = None,
    strict: bool = False,
    entries: tuple[RouteEntry, ...] = SITE_ROUTES,
) -> list[Path]:
    if routes_dir is not None:
        drift = route_table_drift(entries, discover_page_paths(routes_dir))
        if not drift.ok:
            logger.warning(
                "routes.drift",
                extra={"event": "routes_drift", "missing": drift.missing, "stale": drift.stale},
            )
            if strict:
                raise BuildError(
                    f"sitemap routes out of sync: missing={drift.missing} stale={drift.stale}"
                )

    if skeleton_dir is None:
        try:
            skeleton_dir = resolve_package_dir(node_modules)
        except ThemeConfigError as e:
            raise BuildError(str(e)) from e

    documents = prerender(settings, entries)
    theme = build_theme_config(skeleton_dir)
    written = write_artifacts(out_dir, documents, theme)
    logger.info(
        "build.done",
        extra={"event": "build_done", "out_dir": out_dir, "files": [p.name for p in written]},
    )
    return written


async def run_verify(
    *,
    base_url: str,
    settings: Settings,
    timeout_s: float = 10.0,
    retries: int = 3,
    backoff_s: float = 0.25,
    entries: tuple[RouteEntry, ...] = SITE_ROUTES,
    transport=None,
) -> int:
    docs = await fetch_all(
        base_url,
        [ROBOTS_PATH, SITEMAP_PATH],
        timeout_s=timeout_s,
        retries=retries,
        backoff_s=backoff_s,
        transport=transport,
    )
    checks = {
        ROBOTS_PATH: ("text/plain", lambda body: validate_robots(body, settings.site_url)),
        SITEMAP_PATH: (
            "application/xml",
            lambda body: validate_sitemap(body, settings.site_url, entries),
        ),
    }
    problems: dict[str, list[str]] = {}
    for path, (media_type, validate) in checks.items():
        doc = docs[path]
        if isinstance(doc, FetchError):
            problems[path] = [f"{path}: fetch failed: {doc}"]
            continue
        problems[path] = check_served(doc, media_type) + validate(doc.body)
    summary, exit_code = summarize(problems)
    logger.info("runner.summary", extra=summary)
    return exit_code


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    settings = get_settings()
    if args.command == "build":
        run_build(
            settings=settings,
            out_dir=args.out,
            node_modules=args.node_modules,
            skeleton_dir=args.skeleton_dir,
            routes_dir=args.routes_dir,
            strict=args.strict,
        )
        code = 0
    else:
        code = asyncio.run(
            run_verify(
                base_url=args.base_url,
                settings=settings,
                timeout_s=args.timeout,
                retries=args.retries,
            )
        )
    raise SystemExit(code)


if __name__ == "__main__":
    main()
