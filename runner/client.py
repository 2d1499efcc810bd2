from __future__ import annotations

import asyncio
from collections.abc import Iterable

import httpx

from app.logging_conf import get_logger
from runner.types import FetchedDocument, FetchError

logger = get_logger("runner.client")


async def fetch_document(
    client: httpx.AsyncClient, path: str, *, retries: int = 3, backoff_s: float = 0.25
) -> FetchedDocument:
    """GET one document, retrying transport errors and 5xx responses.

    - Always makes at least one request, even when `retries` < 1
    - 4xx responses are returned as-is so the caller can report them
    - Logs each retry with the error seen
    """
    attempts = max(1, retries)
    last_err: Exception | None = None
    for attempt in range(attempts):
        try:
            r = await client.get(path)
            if r.status_code >= 500:
                raise httpx.HTTPStatusError(
                    f"server error {r.status_code}", request=r.request, response=r
                )
            return FetchedDocument(
                path=path,
                status_code=r.status_code,
                content_type=r.headers.get("content-type", ""),
                cache_control=r.headers.get("cache-control"),
                body=r.text,
            )
        except httpx.HTTPError as e:
            last_err = e
            logger.warning(
                "fetch.retry",
                extra={
                    "event": "fetch_retry",
                    "path": path,
                    "attempt": attempt + 1,
                    "error": str(e),
                },
            )
            if attempt + 1 < attempts:
                await asyncio.sleep(backoff_s * (attempt + 1))
    raise FetchError(f"fetching {path} failed: {last_err}")


async def fetch_all(
    base_url: str,
    paths: Iterable[str],
    *,
    timeout_s: float = 10.0,
    retries: int = 3,
    backoff_s: float = 0.25,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, FetchedDocument | FetchError]:
    """Fetch every path concurrently; a path that keeps failing maps to its FetchError.

    - Continues even if some fetches fail
    - Logs a short summary of counts
    """
    paths = list(paths)
    async with httpx.AsyncClient(
        base_url=base_url, timeout=timeout_s, transport=transport, follow_redirects=True
    ) as client:
        results = await asyncio.gather(
            *(fetch_document(client, p, retries=retries, backoff_s=backoff_s) for p in paths),
            return_exceptions=True,
        )
    out: dict[str, FetchedDocument | FetchError] = {}
    for path, res in zip(paths, results):
        if isinstance(res, BaseException) and not isinstance(res, FetchError):
            raise res
        out[path] = res
    failed = sum(isinstance(r, FetchError) for r in out.values())
    logger.info(
        "fetch.summary",
        extra={
            "event": "fetch_summary",
            "base_url": base_url,
            "requested": len(paths),
            "succeeded": len(paths) - failed,
            "failed": failed,
        },
    )
    return out
