from typing import Any, Dict

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from .config import SERVICE_NAME
from .responses import resp
from .schema import violation_messages

logger = Logger(service=SERVICE_NAME, child=True)


class HttpError(Exception):
    """A failure that already knows the response it maps to."""

    def __init__(self, status_code: int, body: Dict[str, Any]):
        super().__init__(body)
        self.status_code = status_code
        self.body = body


class NotFoundError(HttpError):
    def __init__(self):
        super().__init__(404, {"error": "Not Found"})


class MalformedBodyError(ValueError):
    """Request body could not be decoded into structured data."""


HANDLED_ERRORS = (ValidationError, MalformedBodyError, HttpError)


def handle_error(e: Exception) -> Dict[str, Any]:
    """Turn an anticipated failure into a 4xx response; re-raise anything else."""
    if isinstance(e, ValidationError):
        errors = violation_messages(e)
        logger.warning("Validation failed", extra={"errors": errors})
        return resp(400, {"errors": errors})
    if isinstance(e, MalformedBodyError):
        logger.warning("Malformed request body", extra={"reason": str(e)})
        return resp(400, {"errors": f"Invalid request body format: {e}"})
    if isinstance(e, HttpError):
        logger.warning("Request failed", extra={"status_code": e.status_code})
        return resp(e.status_code, e.body)
    raise e
