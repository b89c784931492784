import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from inkwell.errors import ConfigurationError, InternalError
from inkwell.settings import Settings, settings

logger = logging.getLogger(__name__)


class DynamoStore:
    """
    DynamoDB handle holding the post and settings tables.
    Construction fails immediately when the store configuration is incomplete.
    """

    def __init__(self, config: Settings = settings, resource=None):
        missing = config.missing_store_settings
        if missing:
            raise ConfigurationError(
                f"Missing DynamoDB configuration: {', '.join(missing)}"
            )

        if resource is None:
            resource = boto3.resource(
                "dynamodb",
                region_name=config.AWS_REGION,
                aws_access_key_id=config.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=config.AWS_SECRET_ACCESS_KEY,
                endpoint_url=config.DYNAMODB_ENDPOINT_URL or None,
            )

        self.resource = resource
        self.posts = resource.Table(config.DYNAMODB_TABLE_NAME)
        self.settings = resource.Table(config.SETTINGS_TABLE_NAME)
        logger.info(
            f"DynamoDB store ready (region={config.AWS_REGION}, "
            f"table={config.DYNAMODB_TABLE_NAME})"
        )


_store: Optional[DynamoStore] = None


def get_store() -> DynamoStore:
    """
    Return the process-wide store handle, creating it on first use.
    The handle is read-only after construction and shared by all requests.
    """
    global _store
    if _store is None:
        _store = DynamoStore()
    return _store


def reset_store() -> None:
    global _store
    _store = None


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate botocore failures into InternalError, logging the cause."""
    try:
        yield
    except (BotoCoreError, ClientError) as e:
        logger.error(f"DynamoDB {operation} failed: {e}", exc_info=True)
        raise InternalError(f"Store {operation} failed") from e
