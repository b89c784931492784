from datetime import datetime, timezone
from typing import Optional

from inkwell.db.dynamodb import store_errors


class SettingsRepo:
    """Key/value documents in the settings table, keyed by (id, type)."""

    def __init__(self, table):
        self.table = table

    def get(self, key: str, kind: str) -> Optional[dict]:
        with store_errors("get_item"):
            response = self.table.get_item(Key={"id": key, "type": kind})
        item = response.get("Item")
        return item.get("settings") if item else None

    def put(self, key: str, kind: str, values: dict) -> None:
        with store_errors("put_item"):
            self.table.put_item(
                Item={
                    "id": key,
                    "type": kind,
                    "settings": values,
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                }
            )
