from typing import Any, Dict, List, Optional

import boto3

from .config import Settings

KEY_FIELD = "productID"

Item = Dict[str, Any]


class ProductStore:
    """Thin wrapper over the products table (boto3 ``Table`` resource)."""

    def __init__(self, table):
        self.table = table

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProductStore":
        dynamodb = boto3.resource(
            "dynamodb",
            endpoint_url=settings.endpoint_url,
            region_name=settings.region_name,
        )
        return cls(dynamodb.Table(settings.table_name))

    def get(self, product_id: str) -> Optional[Item]:
        res = self.table.get_item(Key={KEY_FIELD: product_id})
        return res.get("Item")

    def put(self, item: Item) -> None:
        self.table.put_item(Item=item)

    def delete(self, product_id: str) -> None:
        self.table.delete_item(Key={KEY_FIELD: product_id})

    def scan(self) -> List[Item]:
        # a single scan call stops at 1 MB, keep going until LastEvaluatedKey is gone
        scan_kwargs: Dict[str, Any] = {}
        items: List[Item] = []
        while True:
            res = self.table.scan(**scan_kwargs)
            items.extend(res.get("Items", []))
            lek = res.get("LastEvaluatedKey")
            if not lek:
                return items
            scan_kwargs["ExclusiveStartKey"] = lek
