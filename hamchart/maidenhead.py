"""Maidenhead locator decoding.

A locator is a field (two letters A-R), a square (two digits) and an
optional subsquare (two letters A-X), e.g. ``FN42`` or ``IN73dm``.
Decoding yields the south-west corner of the cell; callers place the
chart at :attr:`GridCell.reference_longitude` /
:attr:`GridCell.reference_latitude`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional


class InvalidLocator(ValueError):
    """Raised when a string is not a 4 or 6 character Maidenhead locator."""


LABEL_PREFIX = "Maidenhead locator "

_LOCATOR_RE = re.compile(r"([a-r]{2})([0-9]{2})([a-x]{2})?")


@dataclass(frozen=True)
class GridCell:
    longitude: float
    latitude: float
    size: float
    label: str

    @property
    def reference_longitude(self) -> float:
        return self.longitude + self.size

    @property
    def reference_latitude(self) -> float:
        return self.latitude + self.size / 2

    @property
    def locator(self) -> str:
        return self.label[len(LABEL_PREFIX):]


def format_label(locator: str) -> str:
    locator = locator.strip()
    return LABEL_PREFIX + locator[:2].upper() + locator[2:].lower()


def require_locator(text: str) -> GridCell:
    """Decode a locator, raising :class:`InvalidLocator` if it is malformed."""
    locator = text.strip().lower()
    match = _LOCATOR_RE.fullmatch(locator)
    if match is None:
        raise InvalidLocator(f"'{text.strip()}' is not a valid Maidenhead locator.")

    field, square, subsquare = match.groups()
    longitude = (ord(field[0]) - ord("a")) * 20 - 180
    latitude = (ord(field[1]) - ord("a")) * 10 - 90
    longitude += int(square[0]) * 2
    latitude += int(square[1])
    size = 1
    if subsquare:
        longitude += (ord(subsquare[0]) - ord("a")) / 12
        latitude += (ord(subsquare[1]) - ord("a")) / 24
        size = 1 / 24

    return GridCell(longitude, latitude, size, format_label(locator))


def decode_locator(text: str) -> Optional[GridCell]:
    """Decode a locator into its grid cell, or ``None`` if it is invalid."""
    try:
        return require_locator(text)
    except InvalidLocator:
        return None
