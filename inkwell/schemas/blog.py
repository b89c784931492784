from datetime import datetime, timezone
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Post(BaseModel):
    id: str
    created_at: str
    updated_at: str
    title: str
    slug: str
    content: str
    excerpt: Optional[str] = None
    author: str
    published: bool = False
    views: int = 0
    readingTime: Optional[str] = None


class PostCreate(BaseModel):
    title: str
    content: str
    published: bool = False


class PostUpdate(BaseModel):
    """Fields an update may touch. Anything else in the request body is dropped."""

    title: Optional[str] = None
    content: Optional[str] = None
    published: Optional[bool] = None

    def is_empty(self) -> bool:
        return self.title is None and self.content is None and self.published is None


class PostFilter(BaseModel):
    status: str = "all"  # published | draft | all
    search: Optional[str] = None


class Pagination(BaseModel):
    currentPage: int
    totalPages: int
    totalPosts: int


class PaginatedPosts(BaseModel):
    posts: List[Post] = Field(default_factory=list)
    pagination: Pagination


class PostLink(BaseModel):
    slug: str
    title: str


class PostNavigation(BaseModel):
    prevPost: Optional[PostLink] = None
    nextPost: Optional[PostLink] = None


class PostStats(BaseModel):
    totalPosts: int
    publishedPosts: int
    draftPosts: int


class SitemapEntry(BaseModel):
    slug: str
    updated_at: str


class ApiResponse(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
