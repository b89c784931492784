import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from starlette.status import HTTP_201_CREATED

from inkwell import dependencies as deps
from inkwell.responses import http_errors, ok
from inkwell.schemas.blog import (
    ApiResponse,
    PaginatedPosts,
    Post,
    PostCreate,
    PostStats,
    PostUpdate,
)
from inkwell.schemas.settings import AppearanceSettings, SiteSettings
from inkwell.security import get_admin_username
from inkwell.services.posts_service import PostsService
from inkwell.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin")


@router.get("/posts", response_model=ApiResponse[PaginatedPosts])
def list_posts(
    page: int = Query(1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    status: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
    service: PostsService = Depends(deps.get_posts_service),
):
    """List every post, drafts included. status is published, draft or all."""
    with http_errors("Failed to fetch posts"):
        result, _cacheable = service.list_admin_posts(
            page=page, page_size=limit, status=status, search=q
        )
    return ok(result)


@router.post("/posts", response_model=ApiResponse[Post], status_code=HTTP_201_CREATED)
def create_post(
    draft: PostCreate,
    author: str = Depends(get_admin_username),
    service: PostsService = Depends(deps.get_posts_service),
):
    with http_errors("Failed to create post"):
        return ok(service.create_post(draft, author=author))


@router.get("/posts/slug/{slug}", response_model=ApiResponse[Post])
def preview_post_by_slug(
    slug: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Resolve a slug including drafts. Does not count as a view."""
    with http_errors("Failed to fetch post"):
        return ok(service.get_post_by_slug(slug, admin=True))


@router.get("/posts/{post_id}", response_model=ApiResponse[Post])
def get_post(
    post_id: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    with http_errors("Failed to fetch post"):
        return ok(service.get_post(post_id, admin=True))


@router.put("/posts/{post_id}", response_model=ApiResponse[Post])
def update_post(
    post_id: str,
    changes: PostUpdate,
    service: PostsService = Depends(deps.get_posts_service),
):
    with http_errors("Failed to update post"):
        return ok(service.update_post(post_id, changes))


@router.delete("/posts/{post_id}", response_model=ApiResponse[dict])
def delete_post(
    post_id: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    with http_errors("Failed to delete post"):
        service.delete_post(post_id)
    return ok({"message": "Post deleted"})


@router.get("/stats", response_model=ApiResponse[PostStats])
def get_stats(service: PostsService = Depends(deps.get_posts_service)):
    with http_errors("Failed to fetch stats"):
        return ok(service.get_stats())


@router.get("/settings", response_model=ApiResponse[SiteSettings])
def get_site_settings(
    service: SettingsService = Depends(deps.get_settings_service),
):
    with http_errors("Failed to fetch site settings"):
        return ok(service.get_site_settings())


@router.put("/settings", response_model=ApiResponse[SiteSettings])
def update_site_settings(
    site: SiteSettings,
    service: SettingsService = Depends(deps.get_settings_service),
):
    with http_errors("Failed to update site settings"):
        return ok(service.update_site_settings(site))


@router.get("/appearance", response_model=ApiResponse[AppearanceSettings])
def get_appearance_settings(
    service: SettingsService = Depends(deps.get_settings_service),
):
    with http_errors("Failed to fetch appearance settings"):
        return ok(service.get_appearance_settings())


@router.put("/appearance", response_model=ApiResponse[AppearanceSettings])
def update_appearance_settings(
    appearance: AppearanceSettings,
    service: SettingsService = Depends(deps.get_settings_service),
):
    with http_errors("Failed to update appearance settings"):
        return ok(service.update_appearance_settings(appearance))
