from __future__ import annotations

from fastapi import APIRouter, Request, Response

from ..service.seo_service import ROBOTS_PATH, SITEMAP_PATH, PrerenderedDocument

router = APIRouter()


def _serve(request: Request, path: str) -> Response:
    doc: PrerenderedDocument = request.app.state.documents[path]
    # An explicit header stops Starlette from appending "; charset=utf-8".
    headers = {**doc.headers, "Content-Type": doc.media_type}
    return Response(content=doc.body, media_type=doc.media_type, headers=headers)


@router.get(
    ROBOTS_PATH,
    response_class=Response,
    summary="Crawl permissions (prerendered)",
)
async def robots_txt(request: Request) -> Response:
    """Return the prerendered robots.txt."""
    return _serve(request, ROBOTS_PATH)


@router.get(
    SITEMAP_PATH,
    response_class=Response,
    summary="Sitemap of the site's tool pages (prerendered)",
)
async def sitemap_xml(request: Request) -> Response:
    """Return the prerendered sitemap.xml."""
    return _serve(request, SITEMAP_PATH)
