"""Shared pytest fixtures for station reference tests.

Builds the station-code table and Wikipedia station articles as HTML
strings so no captured pages need to be committed. The code table fixture
mirrors the Namu Wiki layout: several ``table.Agu2vgbF`` elements, the
second being the code table, with ``td`` cells in every row including the
header.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest
from bs4 import BeautifulSoup

from scripts.fetch_page import parse_html

# ---------------------------------------------------------------------------
# Station-code table (Namu Wiki)
# ---------------------------------------------------------------------------

HEADER_CELLS: list[str] = ["역코드", "역명", "한자", "노선", "비고"]

# Code, Hangul, Hanja, Line, Remarks. Cells are raw HTML.
STATION_ROWS: list[list[str]] = [
    ["0001", "서울", "서울", "경부선", ""],
    ["0002", "용 산", "龍 山", "경부 고속선", "환승역"],
    ["<del>0003</del>", "남영", "南營", "경부선", ""],
    ["0004", "노량진", "鷺梁津", "경부선", "2020년 폐지†"],
    ["0005", "대곡", "大谷", "경의선", ""],
]


def _row_html(cells: list[str]) -> str:
    return "<tr>" + "".join(f"<td>{cell}</td>" for cell in cells) + "</tr>"


def build_code_table_html(rows: list[list[str]], header: list[str] | None = None) -> str:
    """Render a page with a decoy table followed by the station-code table."""
    body: str = _row_html(header or HEADER_CELLS) + "".join(_row_html(r) for r in rows)
    return (
        "<html><body>"
        '<table class="Agu2vgbF"><tr><td>목차</td></tr></table>'
        f'<table class="Agu2vgbF"><tbody>{body}</tbody></table>'
        "</body></html>"
    )


# ---------------------------------------------------------------------------
# Station articles (Korean Wikipedia)
# ---------------------------------------------------------------------------


def build_article_html(latitude: str | None, longitude: str | None) -> str:
    """Render a station article with an optional coordinate block.

    Passing None for both omits the ``.geo-dms`` block entirely; passing
    None for one omits only that axis.
    """
    if latitude is None and longitude is None:
        return "<html><body><p>좌표 정보 없음</p></body></html>"
    spans: str = ""
    if latitude is not None:
        spans += f'<span class="latitude">{latitude}</span> '
    if longitude is not None:
        spans += f'<span class="longitude">{longitude}</span>'
    return (
        "<html><body>"
        '<span class="geo-default"><span class="geo-dms" title="지도">'
        f"{spans}</span></span>"
        "</body></html>"
    )


@pytest.fixture()
def code_table_document() -> BeautifulSoup:
    """Parsed station-code page using the default rows."""
    return parse_html(build_code_table_html(STATION_ROWS))


@pytest.fixture()
def make_code_table() -> Callable[..., BeautifulSoup]:
    """Factory for parsed station-code pages with custom rows."""

    def _make(rows: list[list[str]], header: list[str] | None = None) -> BeautifulSoup:
        return parse_html(build_code_table_html(rows, header))

    return _make


@pytest.fixture()
def make_article() -> Callable[[str | None, str | None], BeautifulSoup]:
    """Factory for parsed station articles."""

    def _make(latitude: str | None, longitude: str | None) -> BeautifulSoup:
        return parse_html(build_article_html(latitude, longitude))

    return _make
