"""Amount display formatting and client-side range check."""

from __future__ import annotations

import math
import re

MAX_AMOUNT = 100_000_000_000
AMOUNT_RANGE_MSG = "amount must be between 0 and 100 billion"

_NON_NUMERIC = re.compile(r"[^\d.]")
_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")
_DECIMAL = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


class AmountError(ValueError):
    """Amount failed local validation; message is shown to the user as-is."""


def format_amount_display(raw: str) -> str:
    """
    Group the integer part with commas for display.

    Everything except digits and '.' is stripped first, so already-grouped
    input formats to the same string. Only the first fractional part is kept.
    """
    if raw == "":
        return ""
    parts = _NON_NUMERIC.sub("", raw).split(".")
    formatted = _THOUSANDS.sub(",", parts[0])
    if len(parts) > 1 and parts[1]:
        formatted += "." + parts[1]
    return formatted


def strip_grouping(raw: str) -> str:
    return raw.replace(",", "")


def parse_amount(raw: str) -> float:
    """Parse an ungrouped amount; reject unparseable or out of (0, MAX_AMOUNT)."""
    if not _DECIMAL.fullmatch(raw):
        raise AmountError(AMOUNT_RANGE_MSG)
    value = float(raw)
    if not math.isfinite(value) or value <= 0 or value >= MAX_AMOUNT:
        raise AmountError(AMOUNT_RANGE_MSG)
    return value
