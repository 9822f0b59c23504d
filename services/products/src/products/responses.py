import json
from decimal import Decimal
from typing import Any, Dict, Optional

HEADERS = {"content-type": "application/json"}


def _json_default(o):
    if isinstance(o, Decimal):
        # integral -> int, otherwise -> float
        # o % 1 traps past 28 digits of context precision
        if o == o.to_integral_value():
            return int(o)
        return float(o)
    raise TypeError(f"Object of type {type(o).__name__} is not JSON serializable")


def to_json(payload: Any, indent: Optional[int] = None) -> str:
    return json.dumps(payload, default=_json_default, indent=indent)


def resp(status: int, payload: Any, indent: Optional[int] = None) -> Dict[str, Any]:
    return {
        "statusCode": status,
        "headers": dict(HEADERS),
        "body": to_json(payload, indent=indent),
    }
