"""Shared type definitions for request and response models."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field, PlainSerializer

from equilibrium.math.fixed_point import BPS_DENOMINATOR
from equilibrium.safe_int import AMOUNT_MAX


def validate_amount(value: Any) -> int:
    """Validate that a value is a 64-bit unsigned amount.

    Accepts ints or decimal strings, so clients without 64-bit integers can
    send amounts as strings.

    Raises:
        ValueError: If value is not a non-negative integer within 64 bits
    """
    if isinstance(value, bool):
        raise ValueError("Amount must be an integer, got bool")
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError as err:
            raise ValueError(f"Amount must be a decimal integer string: '{value}'") from err
    if not isinstance(value, int):
        raise ValueError(f"Amount must be string or int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"Amount cannot be negative: {value}")
    if value > AMOUNT_MAX:
        raise ValueError(f"Amount overflow: {value} > 2^64-1")
    return value


# 0x-prefixed 20-byte identity
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]

# 64-bit unsigned amount; serialized as a decimal string
Amount = Annotated[
    int,
    BeforeValidator(validate_amount),
    PlainSerializer(str, return_type=str),
    Field(description="64-bit unsigned integer (int or decimal string)"),
]

BasisPoints = Annotated[int, Field(ge=0, le=BPS_DENOMINATOR)]
