"""XML sitemap for search engines."""

import logging
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.dependencies import DatabaseSession
from ..core.exceptions import InternalServerError
from ..services.tour_service import TourService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sitemap"])

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"


def _add_url(
    urlset: ET.Element,
    loc: str,
    lastmod: Optional[datetime],
    changefreq: str,
    priority: float,
) -> None:
    url = ET.SubElement(urlset, "url")
    ET.SubElement(url, "loc").text = loc
    if lastmod is not None:
        ET.SubElement(url, "lastmod").text = lastmod.date().isoformat()
    ET.SubElement(url, "changefreq").text = changefreq
    ET.SubElement(url, "priority").text = f"{priority:.1f}"


def build_sitemap(base_url: str, entries, now: Optional[datetime] = None) -> bytes:
    """
    Render the sitemap document.

    Args:
        base_url: Public site root, without trailing slash
        entries: ``(slug, updated_at)`` pairs for active tours
        now: lastmod for the static pages

    Returns:
        UTF-8 encoded XML
    """
    now = now or datetime.now(timezone.utc)
    base_url = base_url.rstrip("/")

    urlset = ET.Element("urlset", xmlns=SITEMAP_NAMESPACE)
    _add_url(urlset, base_url, now, "daily", 1.0)
    _add_url(urlset, f"{base_url}/tours", now, "daily", 0.9)
    for slug, updated_at in entries:
        _add_url(urlset, f"{base_url}/tours/{slug}", updated_at, "weekly", 0.8)

    return ET.tostring(urlset, encoding="utf-8", xml_declaration=True)


@router.get("/sitemap.xml", response_class=Response)
async def sitemap(db: AsyncSession = DatabaseSession) -> Response:
    """Site root, the tour index and one entry per active tour."""
    try:
        entries = await TourService(db).list_sitemap_entries()
    except Exception as e:
        logger.error("Unexpected error building sitemap", extra={"error": str(e)}, exc_info=True)
        raise InternalServerError(detail="Failed to build sitemap") from e

    return Response(
        content=build_sitemap(settings.site_base_url, entries),
        media_type="application/xml",
    )
