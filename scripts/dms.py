"""Degree-minute-second coordinate parsing.

Coordinates on Korean Wikipedia station articles are rendered as a
hemisphere word followed by a DMS angle, e.g. ``북위37°33′39″`` or
``동경126°58′12.5″``. ``parse_dms`` converts such a string to signed
decimal degrees; it does not know which axis it is reading.
"""

from __future__ import annotations

import re
from typing import Final, Literal

_NORTH: Final[str] = "북위"
_SOUTH: Final[str] = "남위"
_EAST: Final[str] = "동경"
_WEST: Final[str] = "서경"

_HEMISPHERE_SIGNS: Final[tuple[tuple[str, int], ...]] = (
    (_NORTH, 1),
    (_EAST, 1),
    (_SOUTH, -1),
    (_WEST, -1),
)

_DMS_PATTERN: Final[re.Pattern[str]] = re.compile(r"(\d+)°\s*(\d+)′\s*([\d.]+)″")

Axis = Literal["latitude", "longitude"]


class FormatError(ValueError):
    """Raised when a string is not a recognizable DMS coordinate."""


def _hemisphere_sign(text: str) -> int:
    for prefix, sign in _HEMISPHERE_SIGNS:
        if text.startswith(prefix):
            return sign
    raise FormatError(f"Unknown hemisphere marker in {text!r}")


def parse_dms(text: str) -> float:
    """Convert a hemisphere-prefixed DMS string to decimal degrees.

    North and east are positive, south and west negative. The magnitude is
    ``degrees + minutes / 60 + seconds / 3600``.

    Args:
        text: Coordinate text such as ``"북위37°33′39″"``.

    Returns:
        Signed decimal degrees.

    Raises:
        FormatError: If the hemisphere marker is missing or unknown, or the
            angle does not match the D°M′S″ pattern.
    """
    trimmed: str = text.strip()
    sign: int = _hemisphere_sign(trimmed)

    match: re.Match[str] | None = _DMS_PATTERN.search(trimmed)
    if match is None:
        raise FormatError(f"Invalid DMS format: {trimmed!r}")

    degrees, minutes, seconds = match.groups()
    try:
        magnitude: float = int(degrees) + int(minutes) / 60 + float(seconds) / 3600
    except ValueError as exc:
        # "[\d.]+" also admits strings like "1.2.3"
        raise FormatError(f"Invalid seconds value in {trimmed!r}") from exc
    return sign * magnitude


def format_dms(value: float, axis: Axis) -> str:
    """Render decimal degrees in the notation accepted by ``parse_dms``.

    Seconds keep up to six decimal places so that parsing the result
    reproduces ``value`` well within float tolerance.
    """
    if axis == "latitude":
        prefix: str = _NORTH if value >= 0 else _SOUTH
    else:
        prefix = _EAST if value >= 0 else _WEST

    total_seconds: float = round(abs(value) * 3600, 6)
    degrees, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    seconds_text: str = f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{prefix}{int(degrees)}°{int(minutes)}′{seconds_text}″"
