from fastapi import Depends

from inkwell.db.dynamodb import get_store
from inkwell.repos.posts_repo import DynamoPostsRepo
from inkwell.repos.settings_repo import SettingsRepo
from inkwell.services.posts_cache import PostsCache
from inkwell.services.posts_service import PostsService
from inkwell.services.settings_service import SettingsService
from inkwell.settings import settings

# Shared across requests; invalidated by every post mutation
posts_cache = PostsCache(ttl_seconds=settings.POSTS_CACHE_TTL_SECONDS)


def get_posts_cache() -> PostsCache:
    return posts_cache


def get_posts_repo(store=Depends(get_store)):
    return DynamoPostsRepo(store.posts)


def get_settings_repo(store=Depends(get_store)):
    return SettingsRepo(store.settings)


def get_posts_service(
    repo=Depends(get_posts_repo),
    cache=Depends(get_posts_cache),
):
    return PostsService(repo=repo, cache=cache)


def get_settings_service(repo=Depends(get_settings_repo)):
    return SettingsService(repo)
