"""Chart request form state.

Holds what the chart request page shows: the two coordinate boxes, the
chart name, the paper options and which inline "invalid" markers are
visible. Handlers mirror the page events and only touch this object.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from hamchart.coordinates import format_coordinate, parse_latitude, parse_longitude
from hamchart.maidenhead import decode_locator

MM_PER_INCH = 25.4

DEFAULT_PAPER_SIZES_MM = {
    "letter": (8.5 * MM_PER_INCH, 11 * MM_PER_INCH),
    "a4": (210.0, 297.0),
    "a3": (297.0, 420.0),
}
FALLBACK_PAPER_SIZE = "a4"


def paper_size_inches(size: str, sizes_mm: Optional[dict] = None) -> tuple[float, float]:
    """Return (width, height) in inches; unknown sizes fall back to A4."""
    sizes_mm = sizes_mm or DEFAULT_PAPER_SIZES_MM
    fallback = sizes_mm.get(FALLBACK_PAPER_SIZE, DEFAULT_PAPER_SIZES_MM[FALLBACK_PAPER_SIZE])
    width, height = sizes_mm.get(size.lower(), fallback)
    return width / MM_PER_INCH, height / MM_PER_INCH


@dataclass
class ChartForm:
    latitude: str = ""
    longitude: str = ""
    name: str = ""
    metric: bool = False
    size: str = "letter"
    latitude_invalid: bool = False
    longitude_invalid: bool = False
    locator_invalid: bool = False
    # Toggling "metric" picks the paper size until the user picks one by hand.
    tie_metric_and_size: bool = True
    size_hint_shown: bool = False
    paper_sizes_mm: dict = field(default_factory=lambda: dict(DEFAULT_PAPER_SIZES_MM))

    def latitude_changed(self, text: str) -> None:
        value = parse_latitude(text)
        self.latitude_invalid = value is None
        self.latitude = text if value is None else format_coordinate(value)

    def longitude_changed(self, text: str) -> None:
        value = parse_longitude(text)
        self.longitude_invalid = value is None
        self.longitude = text if value is None else format_coordinate(value)

    def apply_locator(self, text: str) -> bool:
        """Copy a decoded locator into the coordinate boxes and the name."""
        cell = decode_locator(text)
        self.locator_invalid = cell is None
        if cell is None:
            return False

        self.latitude_changed(repr(cell.reference_latitude))
        self.longitude_changed(repr(cell.reference_longitude))
        self.name = cell.label
        return True

    def metric_changed(self, checked: bool) -> None:
        self.metric = checked
        if self.tie_metric_and_size:
            self.size = "a4" if checked else "letter"
            self.size_hint_shown = True

    def size_changed(self, size: str) -> None:
        self.size = size
        self.tie_metric_and_size = False

    def is_submittable(self) -> bool:
        return (
            bool(self.latitude)
            and bool(self.longitude)
            and not self.latitude_invalid
            and not self.longitude_invalid
        )

    def paper_size_inches(self) -> tuple[float, float]:
        return paper_size_inches(self.size, self.paper_sizes_mm)

    def request_data(self) -> dict[str, str]:
        """Form fields as posted to the chart server."""
        data = {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "name": self.name.strip(),
            "size": self.size,
        }
        if self.metric:
            data["metric"] = "on"
        return data
