"""Station coordinate lookup from Korean Wikipedia articles.

Station articles carry a ``.geo-dms`` block holding ``.latitude`` and
``.longitude`` spans in DMS notation. A lookup either yields a
``Coordinate`` or an ``Unresolved`` outcome naming why it failed; it never
raises for an ordinary exception, so one bad article cannot stop the batch.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from scripts.dms import FormatError, parse_dms
from scripts.fetch_page import FetchError

if TYPE_CHECKING:
    from bs4 import BeautifulSoup
    from bs4.element import Tag

    from scripts.fetch_page import PageFetcher

logger: Final[logging.Logger] = logging.getLogger(__name__)

_GEO_BLOCK_SELECTOR: Final[str] = ".geo-dms"
_LATITUDE_SELECTOR: Final[str] = ".latitude"
_LONGITUDE_SELECTOR: Final[str] = ".longitude"


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Decimal-degree position of a station."""

    latitude: float
    longitude: float

    def as_cell(self) -> str:
        """Render as the ``latitude,longitude`` output cell."""
        return f"{self.latitude!r},{self.longitude!r}"


class UnresolvedReason(enum.Enum):
    """Why a station's coordinate could not be determined."""

    NOT_FOUND = "not_found"
    MALFORMED_MARKUP = "malformed_markup"
    MALFORMED_COORDINATE_TEXT = "malformed_coordinate_text"
    LOOKUP_ERROR = "lookup_error"


@dataclass(frozen=True, slots=True)
class Unresolved:
    """Failed coordinate lookup.

    Attributes:
        reason: Failure category.
        detail: Human-readable context for logs.
    """

    reason: UnresolvedReason
    detail: str


CoordinateResult = Coordinate | Unresolved


class MarkupError(Exception):
    """Raised when an article lacks the expected coordinate elements."""


def _require(parent: BeautifulSoup | Tag, selector: str) -> Tag:
    element: Tag | None = parent.select_one(selector)
    if element is None:
        raise MarkupError(f"No element matches '{selector}'")
    return element


def extract_coordinate(document: BeautifulSoup) -> Coordinate:
    """Read the coordinate block of a station article.

    Raises:
        MarkupError: If the ``.geo-dms`` block or either axis is missing.
        FormatError: If an axis is not valid DMS text.
    """
    block: Tag = _require(document, _GEO_BLOCK_SELECTOR)
    latitude: float = parse_dms(_require(block, _LATITUDE_SELECTOR).get_text())
    longitude: float = parse_dms(_require(block, _LONGITUDE_SELECTOR).get_text())
    return Coordinate(latitude=latitude, longitude=longitude)


class CoordinateFetcher:
    """Look up station coordinates with one request per page key."""

    def __init__(self, fetch: PageFetcher, base_url: str) -> None:
        self.fetch: Final[PageFetcher] = fetch
        self.base_url: Final[str] = base_url

    def lookup(self, page_key: str) -> CoordinateResult:
        """Fetch the article for ``page_key`` and extract its coordinate."""
        url: str = f"{self.base_url}{page_key}"
        result: CoordinateResult
        try:
            result = extract_coordinate(self.fetch(url))
        except FetchError as exc:
            result = Unresolved(UnresolvedReason.NOT_FOUND, str(exc))
        except MarkupError as exc:
            result = Unresolved(UnresolvedReason.MALFORMED_MARKUP, f"{url}: {exc}")
        except FormatError as exc:
            result = Unresolved(
                UnresolvedReason.MALFORMED_COORDINATE_TEXT, f"{url}: {exc}"
            )
        except Exception as exc:
            logger.exception("Coordinate lookup for '%s' failed", page_key)
            result = Unresolved(
                UnresolvedReason.LOOKUP_ERROR, f"{url}: {type(exc).__name__}: {exc}"
            )

        if isinstance(result, Unresolved):
            logger.warning(
                "No coordinate for '%s' (%s): %s",
                page_key,
                result.reason.value,
                result.detail,
            )
        return result
