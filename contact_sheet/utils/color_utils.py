"""Color parsing utilities."""

from typing import Tuple

from PIL import ImageColor

from contact_sheet.exceptions import InvalidStyling


def parse_color(value: str) -> Tuple[int, int, int]:
    """Parse a CSS-style color string into an RGB tuple."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidStyling(f"Color must be a non-empty string, got {value!r}")
    try:
        rgb = ImageColor.getrgb(value.strip())
    except ValueError as exc:
        raise InvalidStyling(f"Malformed color value '{value}'") from exc
    return rgb[:3]


def normalize_color(value: str) -> str:
    """Normalize any accepted color to lowercase #rrggbb."""
    red, green, blue = parse_color(value)
    return f"#{red:02x}{green:02x}{blue:02x}"


def to_rgba(value: str, alpha: float = 1.0) -> Tuple[int, int, int, int]:
    """RGBA tuple with alpha given as a 0..1 fraction."""
    if not 0.0 <= alpha <= 1.0:
        raise InvalidStyling(f"Alpha must be within 0..1, got {alpha}")
    red, green, blue = parse_color(value)
    return red, green, blue, int(round(alpha * 255))
