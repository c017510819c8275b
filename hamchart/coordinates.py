"""Coordinate parsing helpers.

Turns what a user types into a latitude or longitude box (decimal degrees,
or degrees/minutes/seconds followed by a hemisphere letter) into a bounded
decimal value rounded to five places. Rejected input yields ``None``.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Optional


class InvalidCoordinate(ValueError):
    """Raised when a coordinate string cannot be normalized."""


@dataclass(frozen=True)
class Axis:
    positive: str
    negative: str
    maximum: float
    minimum: float


LATITUDE = Axis("N", "S", 90, -90)
LONGITUDE = Axis("E", "W", 180, -180)

PRECISION = 100000

_SEPARATOR_RE = re.compile(r"[^0-9.\-]+")
_FLOAT_PREFIX_RE = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")


def _strip_hemisphere(value: str, positive: str, negative: str) -> tuple[str, int]:
    for marker, sign in ((positive, 1), (negative, -1)):
        index = value.find(marker)
        if index >= 0:
            return value[:index] + value[index + 1:], sign
    return value, 0


def _leading_float(token: str) -> float:
    # "1.2.3" reads as 1.2 and "4-5" as 4, the way a browser reads them.
    match = _FLOAT_PREFIX_RE.match(token)
    if match is None:
        raise InvalidCoordinate(f"'{token}' is not a number.")
    return float(match.group())


def _numbers(value: str) -> list[float]:
    return [_leading_float(token) for token in _SEPARATOR_RE.split(value) if token]


def _round(value: float) -> float:
    scaled = math.floor(abs(value) * PRECISION + 0.5)
    return math.copysign(scaled, value) / PRECISION + 0.0


def require_coordinate(value: str, positive: str, negative: str, maximum: float, minimum: float) -> float:
    """Parse one coordinate axis, raising :class:`InvalidCoordinate` on bad input."""
    value, sign = _strip_hemisphere(value, positive, negative)
    numbers = _numbers(value)

    if not 1 <= len(numbers) <= 3:
        raise InvalidCoordinate("Expected degrees, optionally followed by minutes and seconds.")
    if any(not number.is_integer() for number in numbers[:-1]):
        raise InvalidCoordinate("Only the last number may have a fractional part.")
    if sign != 0 and numbers[0] < 0:
        raise InvalidCoordinate("A negative value cannot be combined with a hemisphere letter.")
    if sign == 0 and len(numbers) > 1:
        raise InvalidCoordinate(
            f"Minutes and seconds need a hemisphere letter ({positive} or {negative})."
        )
    if any(not 0 <= number < 60 for number in numbers[1:]):
        raise InvalidCoordinate("Minutes and seconds must lie between 0 and 60.")

    if sign == 0:
        sign = 1
    degrees, minutes, seconds = (numbers + [0, 0])[:3]
    coordinate = sign * (degrees + minutes / 60 + seconds / 3600)
    if coordinate > maximum or coordinate < minimum:
        raise InvalidCoordinate(f"Value must lie between {minimum} and {maximum}.")
    return _round(coordinate)


def parse_coordinate(value: str, positive: str, negative: str, maximum: float, minimum: float) -> Optional[float]:
    """Parse one coordinate axis into decimal degrees, or ``None`` if invalid."""
    try:
        return require_coordinate(value, positive, negative, maximum, minimum)
    except InvalidCoordinate:
        return None


def parse_latitude(value: str) -> Optional[float]:
    return parse_coordinate(value, LATITUDE.positive, LATITUDE.negative, LATITUDE.maximum, LATITUDE.minimum)


def parse_longitude(value: str) -> Optional[float]:
    return parse_coordinate(value, LONGITUDE.positive, LONGITUDE.negative, LONGITUDE.maximum, LONGITUDE.minimum)


def format_coordinate(value: float) -> str:
    """Render a parsed coordinate the way it is written back into the form."""
    text = f"{_round(value):.5f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text
