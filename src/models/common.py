"""Shared types, helpers, and base models used across Workforce Insights."""

import math
import re
from datetime import date, datetime

from pydantic import BaseModel


# --- Lenient parsing of text columns ---

_NUMBER_NOISE_RE = re.compile(r"[%,\s]")


def parse_float(value: object) -> float | None:
    """Parse a numeric text column leniently.

    Accepts numbers, and strings such as ``"89"``, ``" 89.5 % "`` or
    ``"1,250"``. Returns None for null, blank, non-finite, or unparseable input.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        text = value
    else:
        text = _NUMBER_NOISE_RE.sub("", str(value))
        if not text:
            return None
    try:
        parsed = float(text)
    except (ValueError, OverflowError):
        return None
    return parsed if math.isfinite(parsed) else None


def parse_date(value: object) -> date | None:
    """Parse an ISO date (or datetime) string; None when unparseable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def percent(part: float, whole: float) -> int:
    """``part / whole`` as a rounded percentage; 0 when whole is 0."""
    if not whole:
        return 0
    return round_half_up(part / whole * 100)


# --- Base model ---


class InsightsBase(BaseModel):
    """Base model with common configuration for all Workforce Insights models."""

    model_config = {
        "populate_by_name": True,
        "protected_namespaces": (),
    }
