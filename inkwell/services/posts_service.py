import logging
import math
from typing import List, Optional, Tuple

from inkwell.errors import NotFoundError, ValidationError
from inkwell.repos.posts_repo import normalize_status
from inkwell.schemas.blog import (
    PaginatedPosts,
    Pagination,
    Post,
    PostCreate,
    PostFilter,
    PostLink,
    PostNavigation,
    PostStats,
    PostUpdate,
    SitemapEntry,
)
from inkwell.services.content import (
    CONTENT_MIN_LENGTH,
    TITLE_MAX_LENGTH,
    TITLE_MIN_LENGTH,
    calculate_reading_time,
    validate_content,
    validate_title,
)
from inkwell.services.posts_cache import PUBLISHED_POSTS_KEY, PostsCache

logger = logging.getLogger(__name__)

PUBLIC_PAGE_SIZE = 6
ADMIN_PAGE_SIZE = 6
SEARCH_PAGE_SIZE = 10


class PostsService:
    """
    Composes repository reads into the paginated shapes the routers return.

    The store cannot sort or offset, so every listing is fetched in full,
    sorted by created_at (newest first, stable for ties) and sliced here.
    """

    def __init__(self, repo, cache: Optional[PostsCache] = None):
        self.repo = repo
        self.cache = cache

    # Listings

    def list_posts(
        self, page: int = 1, page_size: Optional[int] = None, search: Optional[str] = None
    ) -> Tuple[PaginatedPosts, bool]:
        """Public browse and search. Always cacheable by the HTTP layer."""
        if search:
            candidates = self.repo.search(search)
            size = page_size or SEARCH_PAGE_SIZE
        else:
            candidates = self._published_posts()
            size = page_size or PUBLIC_PAGE_SIZE
        return paginate(candidates, page, size), True

    def list_admin_posts(
        self,
        page: int = 1,
        page_size: Optional[int] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[PaginatedPosts, bool]:
        """Admin listing across drafts and published posts. Never cacheable."""
        post_filter = PostFilter(status=normalize_status(status), search=search or None)
        candidates = self.repo.list_all(post_filter)
        size = page_size or (SEARCH_PAGE_SIZE if search else ADMIN_PAGE_SIZE)
        return paginate(candidates, page, size), False

    def _published_posts(self) -> List[dict]:
        if self.cache is not None:
            cached = self.cache.get(PUBLISHED_POSTS_KEY)
            if cached is not None:
                return cached
        posts = self.repo.list_published()
        if self.cache is not None:
            self.cache.set(PUBLISHED_POSTS_KEY, posts)
        return posts

    # Single posts

    def get_post(self, post_id: str, admin: bool = False) -> Post:
        record = self.repo.get_by_id(post_id)
        if not record or (not admin and not record.get("published")):
            raise NotFoundError(f"Post {post_id} not found")
        return to_post(record)

    def get_post_by_slug(self, slug: str, admin: bool = False) -> Post:
        """
        Resolve a slug to a single post. Public reads only see published posts
        and bump the view counter; a failed increment never fails the read.
        """
        record = self.repo.get_by_slug(slug, include_drafts=admin)
        if not record:
            raise NotFoundError(f"Post '{slug}' not found")

        if record.get("published") and not admin:
            views = self.repo.increment_views(record["id"], record["created_at"])
            if views is not None:
                record = {**record, "views": views}
        return to_post(record)

    def record_view(self, post_id: str) -> None:
        """Best-effort view counter used by the public view endpoint."""
        try:
            record = self.repo.get_by_id(post_id)
            if record and record.get("published"):
                self.repo.increment_views(record["id"], record["created_at"])
        except Exception as e:
            logger.warning(f"Failed to record view for {post_id}: {e}")

    # Mutations

    def create_post(self, draft: PostCreate, author: str) -> Post:
        if not draft.title or not draft.content:
            raise ValidationError("Title and content are required")
        _check_title(draft.title)
        _check_content(draft.content)

        record = self.repo.create(
            title=draft.title,
            content=draft.content,
            author=author,
            published=draft.published,
        )
        self._invalidate()
        return to_post(record)

    def update_post(self, post_id: str, changes: PostUpdate) -> Post:
        if changes.is_empty():
            raise ValidationError("At least one of title, content or published is required")
        if changes.title is not None:
            _check_title(changes.title)
        if changes.content is not None:
            _check_content(changes.content)

        existing = self.repo.get_by_id(post_id)
        if not existing:
            raise NotFoundError(f"Post {post_id} not found")

        updated = self.repo.update(
            post_id,
            existing["created_at"],
            changes,
            previous_updated_at=existing.get("updated_at"),
        )
        if not updated:
            raise NotFoundError(f"Post {post_id} not found")
        self._invalidate()
        return to_post(updated)

    def delete_post(self, post_id: str) -> None:
        existing = self.repo.get_by_id(post_id)
        if not existing:
            raise NotFoundError(f"Post {post_id} not found")
        self.repo.delete(post_id, existing["created_at"])
        self._invalidate()

    def _invalidate(self) -> None:
        if self.cache is not None:
            self.cache.invalidate()

    # Derived views

    def get_navigation(self, current_slug: str) -> PostNavigation:
        posts = sorted(self._published_posts(), key=lambda p: p.get("created_at", ""))
        index = next(
            (i for i, post in enumerate(posts) if post.get("slug") == current_slug),
            None,
        )
        if index is None:
            return PostNavigation()

        prev_post = posts[index - 1] if index > 0 else None
        next_post = posts[index + 1] if index < len(posts) - 1 else None
        return PostNavigation(
            prevPost=_link(prev_post) if prev_post else None,
            nextPost=_link(next_post) if next_post else None,
        )

    def get_stats(self) -> PostStats:
        posts = self.repo.list_all(PostFilter())
        published = sum(1 for post in posts if post.get("published"))
        return PostStats(
            totalPosts=len(posts),
            publishedPosts=published,
            draftPosts=len(posts) - published,
        )

    def get_sitemap_entries(self) -> List[SitemapEntry]:
        return [
            SitemapEntry(slug=row["slug"], updated_at=row["updated_at"])
            for row in self.repo.list_for_sitemap()
            if row.get("slug") and row.get("updated_at")
        ]


def paginate(candidates: List[dict], page: int, page_size: int) -> PaginatedPosts:
    """Sort newest first and cut out one page. Out-of-range pages come back empty."""
    ordered = sorted(candidates, key=lambda p: p.get("created_at", ""), reverse=True)
    total = len(ordered)
    start = (page - 1) * page_size
    window = ordered[start : start + page_size] if start >= 0 else []
    return PaginatedPosts(
        posts=[to_post(record) for record in window],
        pagination=Pagination(
            currentPage=page,
            totalPages=math.ceil(total / page_size),
            totalPosts=total,
        ),
    )


def to_post(record: dict) -> Post:
    return Post(**{**record, "readingTime": calculate_reading_time(record.get("content", ""))})


def _link(record: dict) -> PostLink:
    return PostLink(slug=record["slug"], title=record["title"])


def _check_title(title: str) -> None:
    if not validate_title(title):
        raise ValidationError(
            f"Title must be between {TITLE_MIN_LENGTH} and {TITLE_MAX_LENGTH} characters"
        )


def _check_content(content: str) -> None:
    if not validate_content(content):
        raise ValidationError(f"Content must be at least {CONTENT_MIN_LENGTH} characters")
