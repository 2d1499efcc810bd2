from __future__ import annotations

from dataclasses import dataclass


@dataclass
class FetchedDocument:
    """An SEO document as served by a running site."""

    path: str
    status_code: int
    content_type: str
    cache_control: str | None
    body: str


class RunnerError(RuntimeError):
    """Base class for build/verify failures."""


class BuildError(RunnerError):
    """Raised when the prerender build cannot produce its artifacts."""


class VerifyError(RunnerError):
    """Raised when a served document cannot be checked at all."""


class FetchError(VerifyError):
    """Raised when fetching a document fails after retries."""
