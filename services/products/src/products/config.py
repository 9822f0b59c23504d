import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_TABLE_NAME = "ProductsTable"
SERVICE_NAME = os.environ.get("POWERTOOLS_SERVICE_NAME", "products")


@dataclass(frozen=True)
class Settings:
    table_name: str = DEFAULT_TABLE_NAME
    endpoint_url: Optional[str] = None
    region_name: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            table_name=env.get("PRODUCTS_TABLE") or DEFAULT_TABLE_NAME,
            # DynamoDB Local / localstack
            endpoint_url=env.get("DYNAMODB_ENDPOINT_URL") or None,
            region_name=env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or None,
        )
