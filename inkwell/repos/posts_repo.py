import logging
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, Dict, List, Optional

from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from inkwell.db.dynamodb import store_errors
from inkwell.schemas.blog import PostFilter, PostUpdate
from inkwell.services.content import generate_excerpt, slugify

logger = logging.getLogger(__name__)

STATUS_PUBLISHED = "published"
STATUS_DRAFT = "draft"
STATUS_ALL = "all"

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


def utc_now() -> str:
    return datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT)


def later_than(now: str, floor: Optional[str]) -> str:
    """Return now, or floor plus one microsecond when the clock has not passed floor."""
    if not floor or now > floor:
        return now
    moment = datetime.fromisoformat(floor.replace("Z", "+00:00"))
    return (moment + timedelta(microseconds=1)).strftime(TIMESTAMP_FORMAT)


def normalize_status(status: Optional[str]) -> str:
    """Unknown or missing status values read as 'all'."""
    if status in (STATUS_PUBLISHED, STATUS_DRAFT):
        return status
    return STATUS_ALL


class DynamoPostsRepo:
    """
    Reads and writes posts in a single DynamoDB table keyed by (id, created_at).

    The table has no secondary indexes, so every lookup except get_by_id is a
    full scan and costs O(collection). Scans follow LastEvaluatedKey until the
    store stops returning one; a failure on any page aborts the whole call.
    """

    def __init__(self, table, clock: Callable[[], str] = utc_now):
        self.table = table
        self.clock = clock

    # Reads

    def list_all(self, post_filter: Optional[PostFilter] = None) -> List[dict]:
        post_filter = post_filter or PostFilter()
        status = normalize_status(post_filter.status)

        scan_kwargs = {}
        if status == STATUS_PUBLISHED:
            scan_kwargs["FilterExpression"] = Attr("published").eq(True)
        elif status == STATUS_DRAFT:
            scan_kwargs["FilterExpression"] = Attr("published").ne(True)

        items = self._scan_all(**scan_kwargs)
        if post_filter.search:
            # contains() in a FilterExpression is case-sensitive
            items = [item for item in items if _matches(item, post_filter.search)]
        return items

    def list_published(self) -> List[dict]:
        return self.list_all(PostFilter(status=STATUS_PUBLISHED))

    def search(self, term: str) -> List[dict]:
        return self.list_all(PostFilter(status=STATUS_PUBLISHED, search=term))

    def get_by_id(self, post_id: str) -> Optional[dict]:
        # id is the partition key, so a key-only query reaches the single item
        items = self._query_all(KeyConditionExpression=Key("id").eq(post_id))
        return items[0] if items else None

    def get_by_slug(self, slug: str, include_drafts: bool = False) -> Optional[dict]:
        """
        Slugs are not unique. The first published match in scan order wins;
        drafts are only considered when include_drafts is set and no published
        post carries the slug.
        """
        matches = self._scan_all(FilterExpression=Attr("slug").eq(slug))
        published = next((item for item in matches if item.get("published")), None)
        if published:
            return published
        if include_drafts and matches:
            return matches[0]
        return None

    def list_for_sitemap(self) -> List[dict]:
        return self._scan_all(
            FilterExpression=Attr("published").eq(True),
            ProjectionExpression="#slug, #updated_at",
            ExpressionAttributeNames={"#slug": "slug", "#updated_at": "updated_at"},
        )

    # Writes

    def create(
        self, title: str, content: str, author: str, published: bool = False
    ) -> dict:
        now = self.clock()
        item = {
            "id": str(uuid.uuid4()),
            "created_at": now,
            "updated_at": now,
            "title": title,
            "slug": slugify(title),
            "content": content,
            "excerpt": generate_excerpt(content),
            "author": author,
            "published": published,
            "views": 0,
        }
        with store_errors("put_item"):
            self.table.put_item(
                Item=item,
                ConditionExpression="attribute_not_exists(#id)",
                ExpressionAttributeNames={"#id": "id"},
            )
        logger.info(f"Created post {item['id']} ({item['slug']})")
        return item

    def update(
        self,
        post_id: str,
        created_at: str,
        changes: PostUpdate,
        previous_updated_at: Optional[str] = None,
    ) -> Optional[dict]:
        """
        Apply a partial update. Returns the stored record, or None when no item
        has this (id, created_at) key.

        updated_at always lands after both created_at and previous_updated_at,
        even when this process's clock lags the writer of the stored value.
        """
        floor = max(created_at, previous_updated_at or "")
        values: Dict[str, object] = {"updated_at": later_than(self.clock(), floor)}
        if changes.title is not None:
            values["title"] = changes.title
            values["slug"] = slugify(changes.title)
        if changes.content is not None:
            values["content"] = changes.content
            values["excerpt"] = generate_excerpt(changes.content)
        if changes.published is not None:
            values["published"] = changes.published

        assignments = ", ".join(f"#{field} = :{field}" for field in values)
        names = {f"#{field}": field for field in values}
        names["#id"] = "id"

        with store_errors("update_item"):
            try:
                response = self.table.update_item(
                    Key={"id": post_id, "created_at": created_at},
                    UpdateExpression=f"SET {assignments}",
                    ConditionExpression="attribute_exists(#id)",
                    ExpressionAttributeNames=names,
                    ExpressionAttributeValues={
                        f":{field}": value for field, value in values.items()
                    },
                    ReturnValues="ALL_NEW",
                )
            except ClientError as e:
                if not _is_conditional_failure(e):
                    raise
                logger.info(f"Update skipped, no post with key {post_id}/{created_at}")
                return None

        return _normalize(response.get("Attributes"))

    def delete(self, post_id: str, created_at: str) -> None:
        with store_errors("delete_item"):
            self.table.delete_item(Key={"id": post_id, "created_at": created_at})
        logger.info(f"Deleted post {post_id}")

    def increment_views(self, post_id: str, created_at: str) -> Optional[int]:
        """Best effort: failures are logged and reported as None, never raised."""
        try:
            response = self.table.update_item(
                Key={"id": post_id, "created_at": created_at},
                UpdateExpression="SET #views = if_not_exists(#views, :zero) + :one",
                ConditionExpression="attribute_exists(#id)",
                ExpressionAttributeNames={"#views": "views", "#id": "id"},
                ExpressionAttributeValues={":zero": 0, ":one": 1},
                ReturnValues="UPDATED_NEW",
            )
        except Exception as e:
            logger.warning(f"Failed to increment views for {post_id}: {e}")
            return None
        return int(response.get("Attributes", {}).get("views", 0))

    # Pagination loops

    def _scan_all(self, **scan_kwargs) -> List[dict]:
        return self._collect(self.table.scan, "scan", scan_kwargs)

    def _query_all(self, **query_kwargs) -> List[dict]:
        return self._collect(self.table.query, "query", query_kwargs)

    @staticmethod
    def _collect(operation, name: str, kwargs: dict) -> List[dict]:
        items: List[dict] = []
        start_key = None
        pages = 0
        while True:
            request = dict(kwargs)
            if start_key:
                request["ExclusiveStartKey"] = start_key
            with store_errors(name):
                response = operation(**request)
            pages += 1
            items.extend(_normalize(item) for item in response.get("Items", []))
            start_key = response.get("LastEvaluatedKey")
            if not start_key:
                break
        logger.debug(f"{name} collected {len(items)} items over {pages} pages")
        return items


def _matches(item: dict, term: str) -> bool:
    needle = term.lower()
    return (
        needle in str(item.get("title", "")).lower()
        or needle in str(item.get("content", "")).lower()
    )


def _normalize(item: Optional[dict]) -> Optional[dict]:
    """DynamoDB hands numbers back as Decimal."""
    if item is None:
        return None
    return {
        key: int(value) if isinstance(value, Decimal) else value
        for key, value in item.items()
    }


def _is_conditional_failure(error: ClientError) -> bool:
    code = error.response.get("Error", {}).get("Code")
    return code == "ConditionalCheckFailedException"
