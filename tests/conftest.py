import copy
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import pytest

from products.store import KEY_FIELD, ProductStore


class FakeTable:
    """In-memory stand-in for a boto3 DynamoDB ``Table``."""

    def __init__(self, page_size: Optional[int] = None):
        self.items: Dict[str, Dict[str, Any]] = {}
        self.page_size = page_size
        self.calls: List[str] = []

    def get_item(self, Key):
        self.calls.append("get_item")
        item = self.items.get(Key[KEY_FIELD])
        return {"Item": copy.deepcopy(item)} if item is not None else {}

    def put_item(self, Item):
        self.calls.append("put_item")
        self.items[Item[KEY_FIELD]] = copy.deepcopy(Item)
        return {}

    def delete_item(self, Key):
        self.calls.append("delete_item")
        self.items.pop(Key[KEY_FIELD], None)
        return {}

    def scan(self, ExclusiveStartKey=None):
        self.calls.append("scan")
        keys = list(self.items)
        start = 0
        if ExclusiveStartKey is not None:
            start = keys.index(ExclusiveStartKey[KEY_FIELD]) + 1
        end = len(keys) if self.page_size is None else start + self.page_size
        page = keys[start:end]
        res = {"Items": [copy.deepcopy(self.items[k]) for k in page]}
        if end < len(keys):
            res["LastEvaluatedKey"] = {KEY_FIELD: page[-1]}
        return res


@dataclass
class FakeLambdaContext:
    function_name: str = "products-test"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:eu-west-1:123456789012:function:products-test"
    aws_request_id: str = "52fdfc07-2182-154f-163f-5f0f9a621d72"
    function_version: str = "$LATEST"
    log_group_name: str = "/aws/lambda/products-test"
    log_stream_name: str = "2026/10/18/[$LATEST]0123456789abcdef"

    def get_remaining_time_in_millis(self) -> int:
        return 30000


@pytest.fixture
def lambda_context():
    return FakeLambdaContext()


@pytest.fixture
def table():
    return FakeTable()


@pytest.fixture
def store(table):
    return ProductStore(table)


@pytest.fixture
def pen():
    return {"name": "Pen", "description": "Blue ink", "price": 1.5, "available": True}


def _make_event(method: str = "GET", product_id: Optional[str] = None, body: Any = None,
               raw_body: Optional[str] = None, **extra) -> Dict[str, Any]:
    event: Dict[str, Any] = {
        "httpMethod": method,
        "pathParameters": {"id": product_id} if product_id is not None else None,
        "body": raw_body if raw_body is not None else (json.dumps(body) if body is not None else None),
        "isBase64Encoded": False,
    }
    event.update(extra)
    return event


@pytest.fixture
def make_event():
    return _make_event


@pytest.fixture
def paged_table():
    return FakeTable(page_size=2)
