import copy
import re

from botocore.exceptions import ClientError

from inkwell.repos.posts_repo import DynamoPostsRepo


def client_error(code: str = "InternalServerError", operation: str = "Scan"):
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


def evaluate(condition, item: dict) -> bool:
    """Evaluate a boto3 condition object against a plain item."""
    expression = condition.get_expression()
    operator = expression["operator"]
    values = expression["values"]

    if operator == "AND":
        return all(evaluate(value, item) for value in values)
    if operator == "OR":
        return any(evaluate(value, item) for value in values)
    if operator == "NOT":
        return not evaluate(values[0], item)

    field = values[0].name
    if operator == "=":
        return item.get(field) == values[1]
    if operator == "<>":
        return item.get(field) != values[1]
    if operator == "contains":
        return values[1] in item.get(field, "")
    raise NotImplementedError(operator)


_ASSIGNMENT_SPLIT = re.compile(r",\s*(?=#)")
_IF_NOT_EXISTS = re.compile(r"if_not_exists\((#\w+), (:\w+)\) \+ (:\w+)")


class FakeTable:
    """
    Minimal in-memory DynamoDB Table stand-in.
    page_size bounds how many stored items one scan/query page evaluates,
    which forces LastEvaluatedKey continuation like the real 1MB limit.
    Set failures={"scan": exc} to make an operation raise.
    """

    def __init__(self, items=None, key_names=("id", "created_at"), page_size=None):
        self.key_names = key_names
        self.page_size = page_size
        self.items = {}
        for item in items or []:
            self.items[self._key_of(item)] = copy.deepcopy(item)
        self.calls = []
        self.failures = {}

    def _key_of(self, item: dict) -> tuple:
        return tuple(item[name] for name in self.key_names)

    def _enter(self, operation: str, kwargs: dict) -> None:
        self.calls.append((operation, kwargs))
        if operation in self.failures:
            raise self.failures[operation]

    # Reads

    def scan(self, **kwargs):
        self._enter("scan", kwargs)
        return self._page(list(self.items.values()), kwargs)

    def query(self, **kwargs):
        self._enter("query", kwargs)
        rows = [
            row
            for row in self.items.values()
            if evaluate(kwargs["KeyConditionExpression"], row)
        ]
        return self._page(rows, kwargs)

    def get_item(self, Key):
        self._enter("get_item", {"Key": Key})
        item = self.items.get(self._key_of(Key))
        return {"Item": copy.deepcopy(item)} if item else {}

    def _page(self, rows, kwargs):
        start = 0
        start_key = kwargs.get("ExclusiveStartKey")
        if start_key:
            keys = [self._key_of(row) for row in rows]
            start = keys.index(self._key_of(start_key)) + 1
        end = len(rows) if self.page_size is None else start + self.page_size
        evaluated = rows[start:end]

        condition = kwargs.get("FilterExpression")
        items = [
            copy.deepcopy(row)
            for row in evaluated
            if condition is None or evaluate(condition, row)
        ]

        if "ProjectionExpression" in kwargs:
            names = kwargs.get("ExpressionAttributeNames", {})
            fields = [
                names.get(part.strip(), part.strip())
                for part in kwargs["ProjectionExpression"].split(",")
            ]
            items = [{f: item[f] for f in fields if f in item} for item in items]

        response = {"Items": items, "Count": len(items), "ScannedCount": len(evaluated)}
        if end < len(rows):
            response["LastEvaluatedKey"] = {
                name: evaluated[-1][name] for name in self.key_names
            }
        return response

    # Writes

    def put_item(self, Item, ConditionExpression=None, ExpressionAttributeNames=None):
        self._enter("put_item", {"Item": Item})
        key = self._key_of(Item)
        if ConditionExpression and "attribute_not_exists" in ConditionExpression:
            if key in self.items:
                raise client_error("ConditionalCheckFailedException", "PutItem")
        self.items[key] = copy.deepcopy(Item)
        return {}

    def update_item(
        self,
        Key,
        UpdateExpression,
        ConditionExpression=None,
        ExpressionAttributeNames=None,
        ExpressionAttributeValues=None,
        ReturnValues=None,
    ):
        self._enter("update_item", {"Key": Key, "UpdateExpression": UpdateExpression})
        key = self._key_of(Key)
        if ConditionExpression and "attribute_exists" in ConditionExpression:
            if key not in self.items:
                raise client_error("ConditionalCheckFailedException", "UpdateItem")

        names = ExpressionAttributeNames or {}
        values = ExpressionAttributeValues or {}
        item = copy.deepcopy(self.items.get(key, dict(Key)))
        assert UpdateExpression.startswith("SET ")

        updated = []
        for assignment in _ASSIGNMENT_SPLIT.split(UpdateExpression[4:]):
            target, expression = (part.strip() for part in assignment.split("=", 1))
            field = names.get(target, target)
            match = _IF_NOT_EXISTS.fullmatch(expression)
            if match:
                current = item.get(names[match.group(1)], values[match.group(2)])
                item[field] = current + values[match.group(3)]
            else:
                item[field] = values[expression]
            updated.append(field)

        self.items[key] = item
        if ReturnValues == "ALL_NEW":
            return {"Attributes": copy.deepcopy(item)}
        if ReturnValues == "UPDATED_NEW":
            return {"Attributes": {field: item[field] for field in updated}}
        return {}

    def delete_item(self, Key):
        self._enter("delete_item", {"Key": Key})
        self.items.pop(self._key_of(Key), None)
        return {}


class FakeStore:
    def __init__(self, posts=None, settings=None):
        self.posts = posts if posts is not None else FakeTable()
        self.settings = (
            settings if settings is not None else FakeTable(key_names=("id", "type"))
        )


class StepClock:
    """Deterministic timestamps, one second apart per call."""

    def __init__(self, start: int = 0):
        self.tick = start

    def __call__(self) -> str:
        self.tick += 1
        minutes, seconds = divmod(self.tick, 60)
        return f"2025-01-01T00:{minutes:02d}:{seconds:02d}.000000Z"


def make_post(index: int, **overrides) -> dict:
    post = {
        "id": f"post-{index}",
        "created_at": _timestamp(index),
        "updated_at": _timestamp(index),
        "title": f"Post number {index}",
        "slug": f"post-number-{index}",
        "content": f"Body of post {index} with enough text.",
        "excerpt": f"Body of post {index} with enough text.",
        "author": "admin",
        "published": True,
        "views": 0,
    }
    post.update(overrides)
    return post


def make_repo(items=None, page_size=None, clock=None) -> DynamoPostsRepo:
    table = FakeTable(items, page_size=page_size)
    return DynamoPostsRepo(table, clock=clock or StepClock())


def _timestamp(index: int) -> str:
    hours, rest = divmod(index, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"2024-01-01T{hours:02d}:{minutes:02d}:{seconds:02d}.000000Z"
