import base64
import binascii
import json
import uuid
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.typing import LambdaContext

from .config import SERVICE_NAME, Settings
from .errors import HANDLED_ERRORS, MalformedBodyError, NotFoundError, handle_error
from .responses import resp
from .schema import validate_product
from .store import KEY_FIELD, Item, ProductStore

logger = Logger(service=SERVICE_NAME)

Event = Dict[str, Any]
Response = Dict[str, Any]

DELETED_MESSAGE = "Product deleted"

_store: Optional[ProductStore] = None


def get_store() -> ProductStore:
    # one boto3 resource per container, reused across warm invocations
    global _store
    if _store is None:
        _store = ProductStore.from_settings(Settings.from_env())
    return _store


def new_product_id() -> str:
    return str(uuid.uuid4())


def _path_id(event: Event) -> Optional[str]:
    # API Gateway: pathParameters may be None
    path_params = event.get("pathParameters") or {}
    return path_params.get("id")


def _parse_body(event: Event) -> Any:
    body = event.get("body")
    if body is None:
        raise MalformedBodyError("request body is missing")

    if event.get("isBase64Encoded"):
        try:
            body = base64.b64decode(body, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as e:
            raise MalformedBodyError(f"invalid base64 body ({e})") from e

    try:
        # Decimal: DynamoDB rejects float
        return json.loads(body, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise MalformedBodyError(str(e)) from e


def _fetch_product(store: ProductStore, product_id: Optional[str]) -> Item:
    item = store.get(product_id) if product_id else None
    if not item:
        raise NotFoundError()
    return item


def _create(event: Event, store: ProductStore) -> Response:
    payload = validate_product(_parse_body(event))
    # any productID sent by the client was dropped by validation
    product = {**payload, KEY_FIELD: new_product_id()}
    store.put(product)
    logger.info("Product created", extra={"product_id": product[KEY_FIELD]})
    return resp(201, {"product": product}, indent=2)


def _get(event: Event, store: ProductStore) -> Response:
    product = _fetch_product(store, _path_id(event))
    logger.debug("Product fetched", extra={"product_id": product[KEY_FIELD]})
    return resp(200, product)


def _update(event: Event, store: ProductStore) -> Response:
    product_id = _path_id(event)
    _fetch_product(store, product_id)
    payload = validate_product(_parse_body(event))
    # whole-record replacement, not a merge
    product = {**payload, KEY_FIELD: product_id}
    store.put(product)
    logger.info("Product updated", extra={"product_id": product_id})
    return resp(200, product)


def _delete(event: Event, store: ProductStore) -> Response:
    product_id = _path_id(event)
    _fetch_product(store, product_id)
    store.delete(product_id)
    logger.info("Product deleted", extra={"product_id": product_id})
    return resp(204, DELETED_MESSAGE)


def _list(event: Event, store: ProductStore) -> Response:
    items = store.scan()
    logger.debug("Products listed", extra={"count": len(items)})
    return resp(200, items)


def _run(op: Callable[[Event, ProductStore], Response], event: Event,
         store: Optional[ProductStore]) -> Response:
    if store is None:
        store = get_store()
    try:
        return op(event, store)
    except HANDLED_ERRORS as e:
        return handle_error(e)
    except Exception:
        logger.exception("Unhandled error")
        raise


@logger.inject_lambda_context
def create_product(event: Event, context: LambdaContext,
                   store: Optional[ProductStore] = None) -> Response:
    return _run(_create, event, store)


@logger.inject_lambda_context
def get_product(event: Event, context: LambdaContext,
                store: Optional[ProductStore] = None) -> Response:
    return _run(_get, event, store)


@logger.inject_lambda_context
def update_product(event: Event, context: LambdaContext,
                   store: Optional[ProductStore] = None) -> Response:
    return _run(_update, event, store)


@logger.inject_lambda_context
def delete_product(event: Event, context: LambdaContext,
                   store: Optional[ProductStore] = None) -> Response:
    return _run(_delete, event, store)


@logger.inject_lambda_context
def list_products(event: Event, context: LambdaContext,
                  store: Optional[ProductStore] = None) -> Response:
    return _run(_list, event, store)


ROUTES = {
    ("POST", False): _create,
    ("GET", False): _list,
    ("GET", True): _get,
    ("PUT", True): _update,
    ("DELETE", True): _delete,
}


def _http_method(event: Event) -> str:
    # REST API (v1) puts it at the top, HTTP API (v2) under requestContext.http
    method = event.get("httpMethod")
    if not method:
        method = ((event.get("requestContext") or {}).get("http") or {}).get("method")
    return (method or "").upper()


@logger.inject_lambda_context
def handler(event: Event, context: LambdaContext,
            store: Optional[ProductStore] = None) -> Response:
    """Single-function deployment: /products and /products/{id}."""
    op = ROUTES.get((_http_method(event), _path_id(event) is not None))
    if op is None:
        return resp(405, {"error": "Method Not Allowed"})
    return _run(op, event, store)
