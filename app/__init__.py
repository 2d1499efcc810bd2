"""Devtools site SEO documents: robots.txt, sitemap.xml and the theme config.

Exposes the installed distribution version as __version__.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("devtools-seo")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
