"""Station name to Wikipedia page key resolution.

Many Korail short names collide with city districts or with same-named
stations on other operators' lines. A curated override table maps those
names to their disambiguated article titles; every other name is assumed
to follow the ``<name>역`` title convention.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Final

from scripts.config import STATION_SUFFIX

logger: Final[logging.Logger] = logging.getLogger(__name__)

_OVERRIDE_COLUMNS: Final[tuple[str, str]] = ("station_name", "page_key")


@dataclass(frozen=True, slots=True)
class NameResolver:
    """Resolve station short names to coordinate page keys.

    Attributes:
        overrides: Short name to page key disambiguation table.
        suffix: Appended to names absent from ``overrides``.
    """

    overrides: Mapping[str, str]
    suffix: str = STATION_SUFFIX

    def resolve(self, name: str) -> str:
        """Return the page key for ``name``. Never raises."""
        override: str | None = self.overrides.get(name)
        if override is not None:
            return override
        return f"{name}{self.suffix}"


def load_overrides(path: Path) -> Mapping[str, str]:
    """Load a disambiguation table from a two-column CSV file.

    The file must have a ``station_name,page_key`` header. Blank lines are
    ignored.

    Args:
        path: CSV file path.

    Returns:
        Read-only mapping of station name to page key.

    Raises:
        ValueError: If the header is wrong, a row is incomplete, or a
            station name appears twice.
    """
    overrides: dict[str, str] = {}
    with path.open(encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        header: list[str] = next(reader, [])
        if tuple(h.strip() for h in header) != _OVERRIDE_COLUMNS:
            msg = f"{path}: expected header {','.join(_OVERRIDE_COLUMNS)}, got {header}"
            raise ValueError(msg)

        for row in reader:
            if not any(cell.strip() for cell in row):
                continue
            if len(row) != 2 or not row[0].strip() or not row[1].strip():
                msg = f"{path}:{reader.line_num}: expected two non-empty fields"
                raise ValueError(msg)
            name, page_key = row[0].strip(), row[1].strip()
            if name in overrides:
                msg = f"{path}:{reader.line_num}: duplicate station name '{name}'"
                raise ValueError(msg)
            overrides[name] = page_key

    logger.info("Loaded %d name overrides from %s", len(overrides), path)
    return MappingProxyType(overrides)
