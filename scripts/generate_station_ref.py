"""Generate stations.csv from the Korail station-code table.

Scrapes the station-code table from Namu Wiki, drops retired codes,
resolves each station's Korean Wikipedia article, and appends the
article's coordinate as a ``latitude,longitude`` column. Rows stream to
stdout as they are produced and to the durable CSV file, which is only
moved into place once the run completes.

Coordinate lookups are best-effort: a station whose article is missing or
malformed keeps its row with an empty coordinate column.

Usage:
    python -m scripts.generate_station_ref
    python -m scripts.generate_station_ref --output data/processed/stations.csv
    python -m scripts.generate_station_ref --overrides overrides.csv --verbose
"""

from __future__ import annotations

import argparse
import contextlib
import csv
import logging
import os
import sys
from collections import Counter
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final, Protocol, TextIO

from scripts.config import (
    COORDINATE_HEADER,
    DEFAULT_NAME_OVERRIDES,
    LOCAL_NAME_COLUMN,
    ScrapeConfig,
)
from scripts.coordinates import Coordinate, CoordinateFetcher
from scripts.extract_station_table import (
    StationRow,
    TableStructureError,
    extract_station_rows,
)
from scripts.fetch_page import FetchError, build_client, page_fetcher
from scripts.name_resolver import NameResolver, load_overrides

if TYPE_CHECKING:
    from scripts.fetch_page import PageFetcher

logger: Final[logging.Logger] = logging.getLogger(__name__)

OutputRow = list[str]


# ---------------------------------------------------------------------------
# Writer
# ---------------------------------------------------------------------------


class RowSink(Protocol):
    """Destination accepting one CSV row at a time."""

    def write_row(self, row: Sequence[str]) -> None: ...


class CsvSink:
    """Serialize rows as comma-delimited CSV onto a text stream."""

    def __init__(self, stream: TextIO) -> None:
        self._stream: Final[TextIO] = stream
        self._writer: Final = csv.writer(stream)

    def write_row(self, row: Sequence[str]) -> None:
        self._writer.writerow(row)
        self._stream.flush()


class RowWriter:
    """Fan each row out to every configured sink.

    A sink failure propagates immediately; the caller treats it as fatal
    for the whole run.
    """

    def __init__(self, sinks: Iterable[RowSink]) -> None:
        self.sinks: Final[tuple[RowSink, ...]] = tuple(sinks)
        if not self.sinks:
            msg = "RowWriter requires at least one sink"
            raise ValueError(msg)

    def write_row(self, row: Sequence[str]) -> None:
        for sink in self.sinks:
            sink.write_row(row)


@contextlib.contextmanager
def atomic_output(path: Path) -> Iterator[TextIO]:
    """Open a temp file beside ``path`` and replace ``path`` on success.

    On any exception the temp file is removed and ``path`` is untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path: Path = path.with_name(f"{path.name}.tmp")
    try:
        with tmp_path.open("w", newline="", encoding="utf-8") as fh:
            yield fh
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    os.replace(str(tmp_path), str(path))


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Outcome counts for one generation run.

    Attributes:
        output_path: Durable CSV file written.
        station_count: Data rows written (header excluded).
        unresolved: Count of stations without a coordinate, keyed by
            failure reason.
    """

    output_path: Path
    station_count: int
    unresolved: Mapping[str, int]

    @property
    def resolved_count(self) -> int:
        """Return the number of stations with a coordinate."""
        return self.station_count - sum(self.unresolved.values())


def build_output_rows(
    rows: Sequence[StationRow],
    resolver: NameResolver,
    fetcher: CoordinateFetcher,
    unresolved: Counter[str] | None = None,
) -> Iterator[OutputRow]:
    """Yield the header then one merged row per station, in source order.

    Args:
        rows: Extracted table rows; index 0 is the header.
        resolver: Maps a station's local name to its page key.
        fetcher: Looks up a page key's coordinate.
        unresolved: Optional counter updated with each failure reason.

    Yields:
        Header with the coordinate column appended, then each station's
        cells plus its coordinate cell (empty when unresolved).
    """
    header, *stations = rows
    yield [*header, COORDINATE_HEADER]

    for station in stations:
        page_key: str = resolver.resolve(station[LOCAL_NAME_COLUMN])
        result = fetcher.lookup(page_key)
        if isinstance(result, Coordinate):
            cell: str = result.as_cell()
        else:
            cell = ""
            if unresolved is not None:
                unresolved[result.reason.value] += 1
        yield [*station, cell]


def generate_station_ref(
    config: ScrapeConfig,
    fetch: PageFetcher,
    live_stream: TextIO,
) -> RunSummary:
    """Run extraction, coordinate enrichment, and dual CSV emission.

    Args:
        config: Source URLs, output path, and override table.
        fetch: Page fetcher shared by the table and coordinate lookups.
        live_stream: Stream receiving each row as it is written.

    Returns:
        Summary of rows written and unresolved coordinates.

    Raises:
        FetchError: If the station-code page cannot be fetched.
        TableStructureError: If the station-code table is unrecognized.
        OSError: If either destination cannot be written.
    """
    logger.info("Fetching station-code table from %s", config.source_table_url)
    rows: list[StationRow] = extract_station_rows(fetch(config.source_table_url))

    resolver = NameResolver(config.name_overrides)
    fetcher = CoordinateFetcher(fetch, config.coordinate_base_url)
    unresolved: Counter[str] = Counter()

    written: int = 0
    with atomic_output(config.output_path) as fh:
        writer = RowWriter([CsvSink(live_stream), CsvSink(fh)])
        for row in build_output_rows(rows, resolver, fetcher, unresolved):
            writer.write_row(row)
            written += 1

    return RunSummary(
        output_path=config.output_path,
        station_count=written - 1,
        unresolved=dict(unresolved),
    )


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def _build_arg_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""
    default_config: ScrapeConfig = ScrapeConfig()
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Generate the Korail station reference CSV with coordinates.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--output",
        type=str,
        default=str(default_config.output_path),
        help=f"Output CSV path (default: {default_config.output_path}).",
    )
    parser.add_argument(
        "--overrides",
        type=str,
        default=None,
        help="CSV of station_name,page_key pairs replacing the built-in table.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug-level logging.",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    """Set up logging on stderr; stdout carries the CSV."""
    level: int = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for station reference generation.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code: 0 on success, 1 on a fatal error.
    """
    parser: argparse.ArgumentParser = _build_arg_parser()
    args: argparse.Namespace = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        overrides: Mapping[str, str] = (
            load_overrides(Path(args.overrides))
            if args.overrides is not None
            else DEFAULT_NAME_OVERRIDES
        )
        config = ScrapeConfig(output_path=Path(args.output), name_overrides=overrides)
        with build_client(config.http_timeout, config.user_agent) as client:
            summary: RunSummary = generate_station_ref(
                config, page_fetcher(client), sys.stdout
            )
    except FetchError:
        logger.exception("Failed to fetch the station-code table")
        return 1
    except TableStructureError:
        logger.exception("Station-code table structure not recognized")
        return 1
    except (OSError, ValueError):
        logger.exception("Station reference generation failed")
        return 1

    logger.info(
        "Wrote %d stations to %s (%d with coordinates)",
        summary.station_count,
        summary.output_path,
        summary.resolved_count,
    )
    for reason, count in sorted(summary.unresolved.items()):
        logger.info("  unresolved (%s): %d", reason, count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
