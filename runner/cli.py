from __future__ import annotations

import argparse
import os
from pathlib import Path


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return value


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse CLI arguments for the prerender/verify runner."""
    parser = argparse.ArgumentParser(description="Prerender and verify the site's SEO documents")
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="write robots.txt, sitemap.xml and the theme config")
    build.add_argument("--out", type=Path, default=Path(os.getenv("BUILD_DIR", "build")))
    build.add_argument(
        "--node-modules",
        type=Path,
        default=Path("node_modules"),
        help="where the styling library is installed",
    )
    build.add_argument(
        "--skeleton-dir",
        type=Path,
        default=None,
        help="use this directory instead of resolving the styling library",
    )
    build.add_argument(
        "--routes-dir",
        type=Path,
        default=None,
        help="site routes directory to check the sitemap's route list against",
    )
    build.add_argument("--strict", action="store_true", help="fail the build on route drift")

    verify = sub.add_parser("verify", help="fetch the documents from a running site and check them")
    verify.add_argument("--base-url", default=os.getenv("BASE_URL", "http://127.0.0.1:8000"))
    verify.add_argument("--timeout", type=float, default=10.0)
    verify.add_argument("--retries", type=_positive_int, default=3)
    return parser.parse_args(argv)
