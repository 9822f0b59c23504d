from decimal import Decimal
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError, field_validator

# DynamoDB number limits
MAX_DIGITS = 38
MIN_EXPONENT = -130
MAX_EXPONENT = 125


class ProductIn(BaseModel):
    """Payload accepted by create and update. ``productID`` is never read from it."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: Decimal = Field(allow_inf_nan=False)
    available: StrictBool

    @field_validator("price")
    @classmethod
    def check_storable_price(cls, value: Decimal) -> Decimal:
        if value.is_zero():
            return Decimal(0)
        if len(value.as_tuple().digits) > MAX_DIGITS:
            raise ValueError(f"must have at most {MAX_DIGITS} significant digits")
        if not MIN_EXPONENT <= value.adjusted() <= MAX_EXPONENT:
            raise ValueError("magnitude must be between 1E-130 and 9.99E+125")
        return value


def validate_product(payload: Any) -> Dict[str, Any]:
    """Validate a decoded body and return the product fields.

    Raises ``pydantic.ValidationError`` listing every violation, not just the first.
    """
    return ProductIn.model_validate(payload).model_dump()


def violation_messages(exc: ValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "body"
        messages.append(f"{field}: {err['msg']}")
    return messages
