"""Request authentication and amount validation."""

from __future__ import annotations

import hmac
import math
import re

from voice_proxy.config import MAX_AMOUNT
from voice_proxy.errors import AuthenticationError, InputValidationError

# Plain ASCII decimal, optional sign and exponent; no underscores or padding.
_DECIMAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def check_authorization(auth_header: str | None, api_key: str) -> None:
    """Require exactly 'Bearer <api_key>'. An unset key authenticates nobody."""
    if not api_key or not auth_header:
        raise AuthenticationError()
    expected = f"Bearer {api_key}"
    if not hmac.compare_digest(auth_header.encode(), expected.encode()):
        raise AuthenticationError()


def validate_amount(number: str | None) -> float:
    """Presence, then finite float, then strictly inside (0, MAX_AMOUNT)."""
    if not number:
        raise InputValidationError("amount parameter is required")
    if not _DECIMAL.fullmatch(number):
        raise InputValidationError("amount must be a valid number")
    amount = float(number)
    if not math.isfinite(amount):
        raise InputValidationError("amount must be a valid number")
    if amount <= 0 or amount >= MAX_AMOUNT:
        raise InputValidationError("amount must be between 0 and 100 billion")
    return amount
