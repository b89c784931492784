import logging

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from inkwell import dependencies as deps
from inkwell.responses import http_errors, ok
from inkwell.schemas.blog import ApiResponse
from inkwell.schemas.settings import PublicSettings
from inkwell.services.posts_service import PostsService
from inkwell.services.settings_service import SettingsService
from inkwell.services.sitemap import render_sitemap
from inkwell.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/settings", response_model=ApiResponse[PublicSettings])
def get_settings(service: SettingsService = Depends(deps.get_settings_service)):
    """Site and appearance settings for the public pages."""
    with http_errors("Failed to fetch settings"):
        return ok(service.get_public_settings())


@router.get("/sitemap.xml")
def get_sitemap(service: PostsService = Depends(deps.get_posts_service)):
    with http_errors("Failed to generate sitemap"):
        entries = service.get_sitemap_entries()
    return Response(
        content=render_sitemap(entries, settings.SITE_URL),
        media_type="application/xml",
    )
