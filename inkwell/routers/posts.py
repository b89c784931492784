import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from inkwell import dependencies as deps
from inkwell.responses import http_errors, ok
from inkwell.schemas.blog import ApiResponse, PaginatedPosts, Post, PostNavigation
from inkwell.services.posts_service import PostsService
from inkwell.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/posts", response_model=ApiResponse[PaginatedPosts])
def list_posts(
    response: Response,
    page: int = Query(1),
    limit: Optional[int] = Query(None, ge=1, le=100),
    q: Optional[str] = Query(None),
    service: PostsService = Depends(deps.get_posts_service),
):
    """List published posts, newest first, optionally filtered by a search term."""
    with http_errors("Failed to fetch posts"):
        result, cacheable = service.list_posts(page=page, page_size=limit, search=q)
    if cacheable:
        response.headers["Cache-Control"] = settings.PUBLIC_CACHE_CONTROL
    return ok(result)


@router.get("/posts/navigation", response_model=ApiResponse[PostNavigation])
def get_navigation(
    current_slug: str = Query(..., alias="currentSlug", min_length=1),
    service: PostsService = Depends(deps.get_posts_service),
):
    """Previous and next published posts around the given slug."""
    with http_errors("Failed to fetch post navigation"):
        return ok(service.get_navigation(current_slug))


@router.get("/posts/slug/{slug}", response_model=ApiResponse[Post])
def get_post_by_slug(
    slug: str,
    response: Response,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Get a published post by slug. Counts as a view."""
    with http_errors("Failed to fetch post"):
        post = service.get_post_by_slug(slug)
    response.headers["Cache-Control"] = settings.PUBLIC_CACHE_CONTROL
    return ok(post)


@router.get("/posts/{post_id}", response_model=ApiResponse[Post])
def get_post(
    post_id: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    with http_errors("Failed to fetch post"):
        return ok(service.get_post(post_id))


@router.post("/posts/{post_id}/views", response_model=ApiResponse[dict])
def record_view(
    post_id: str,
    service: PostsService = Depends(deps.get_posts_service),
):
    """Best effort; always reports success."""
    service.record_view(post_id)
    return ok({"message": "View recorded"})
