"""Extract Korail station rows from the Namu Wiki station-code table.

The code table lists every station code with its Hangul name, Hanja name,
line, and a remarks column. Retired codes are shown either struck through
(``<del>`` inside the code cell) or flagged with ``†`` in the remarks.
Both are dropped. The first surviving row is the header and is returned
verbatim.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from scripts.config import (
    CODE_COLUMN,
    RETIRED_MARKER,
    STATUS_COLUMN,
    STRUCK_THROUGH_SELECTOR,
    TABLE_INDEX,
    TABLE_SELECTOR,
    WHITESPACE_STRIPPED_COLUMNS,
)

if TYPE_CHECKING:
    from bs4 import BeautifulSoup
    from bs4.element import Tag

logger: Final[logging.Logger] = logging.getLogger(__name__)

StationRow = tuple[str, ...]


class TableStructureError(Exception):
    """Raised when the station-code table is missing or malformed."""


def _cell_text(cell: Tag) -> str:
    """Return the cell text with whitespace runs collapsed and trimmed."""
    return " ".join(cell.get_text().split())


def _is_struck_through(cell: Tag) -> bool:
    return cell.select_one(STRUCK_THROUGH_SELECTOR) is not None


def _find_table(document: BeautifulSoup) -> Tag:
    tables: list[Tag] = document.select(TABLE_SELECTOR)
    if len(tables) <= TABLE_INDEX:
        msg = (
            f"Expected at least {TABLE_INDEX + 1} tables matching "
            f"'{TABLE_SELECTOR}', found {len(tables)}"
        )
        raise TableStructureError(msg)
    return tables[TABLE_INDEX]


def _convert_row(cells: list[Tag]) -> StationRow | None:
    """Map a row's cells to strings, or return None if the row is retired."""
    values: list[str] = []
    for index, cell in enumerate(cells):
        # Re-checked per cell; the row-level filter already covers this case.
        if index == CODE_COLUMN and _is_struck_through(cell):
            return None

        text: str = _cell_text(cell)
        if index in WHITESPACE_STRIPPED_COLUMNS:
            text = "".join(text.split())
        values.append(text)
    return tuple(values)


def extract_station_rows(document: BeautifulSoup) -> list[StationRow]:
    """Parse the station-code table into ordered rows of cell text.

    Index 0 of the result is the table header. Row order follows the
    source document.

    Args:
        document: Parsed station-code page.

    Returns:
        Header row followed by one row per active station.

    Raises:
        TableStructureError: If the table is absent, or a row lacks the
            remarks column.
    """
    table: Tag = _find_table(document)
    rows: list[StationRow] = []
    retired: int = 0

    for row_num, row in enumerate(table.select("tr")):
        cells: list[Tag] = row.select("td")
        if len(cells) <= STATUS_COLUMN:
            msg = (
                f"Row {row_num} has {len(cells)} cells; expected at least "
                f"{STATUS_COLUMN + 1}"
            )
            raise TableStructureError(msg)

        if (
            _is_struck_through(cells[CODE_COLUMN])
            or RETIRED_MARKER in _cell_text(cells[STATUS_COLUMN])
        ):
            retired += 1
            continue

        converted: StationRow | None = _convert_row(cells)
        if converted is None:
            retired += 1
            continue
        rows.append(converted)

    if not rows:
        msg = "Station-code table contains no rows"
        raise TableStructureError(msg)

    logger.info(
        "Extracted %d station rows (%d retired rows dropped)",
        len(rows) - 1,
        retired,
    )
    return rows
