"""Scrape configuration for the Korail station reference table.

Defines the source URLs, CSS selectors, column layout of the station-code
table, HTTP settings, and the curated station-name disambiguation table.
The pipeline receives these values through a ``ScrapeConfig`` instance so
tests can substitute synthetic sources and override sets.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Final

# Station-code table published on Namu Wiki
_SOURCE_TABLE_URL: Final[str] = "https://namu.wiki/w/한국철도공사/역명코드"

# Per-station article prefix; the resolved page key is appended verbatim
_COORDINATE_BASE_URL: Final[str] = "https://ko.wikipedia.org/wiki/"

_OUTPUT_PATH: Final = Path("data/processed/stations.csv")

_HTTP_TIMEOUT: Final[float] = 30.0
_USER_AGENT: Final[str] = "korail-station-ref/0.1.0 (station coordinate scraper)"

# The code table is the second table rendered with this generated class
TABLE_SELECTOR: Final[str] = "table.Agu2vgbF"
TABLE_INDEX: Final[int] = 1

# Column layout of the station-code table
CODE_COLUMN: Final[int] = 0
LOCAL_NAME_COLUMN: Final[int] = 1
HANJA_NAME_COLUMN: Final[int] = 2
STATUS_COLUMN: Final[int] = 4

# Columns where the wiki inserts spacing inside names
WHITESPACE_STRIPPED_COLUMNS: Final[frozenset[int]] = frozenset(
    {LOCAL_NAME_COLUMN, HANJA_NAME_COLUMN}
)

STRUCK_THROUGH_SELECTOR: Final[str] = "del"
RETIRED_MARKER: Final[str] = "†"

COORDINATE_HEADER: Final[str] = "좌표"
STATION_SUFFIX: Final[str] = "역"

# Short names that collide with districts or same-named stations elsewhere
DEFAULT_NAME_OVERRIDES: Final[Mapping[str, str]] = MappingProxyType(
    {
        "가야": "가야역_(한국철도공사)",
        "강구": "강구역_(영덕)",
        "고양기지": "행신역",
        "구룡": "구룡역_(순천)",
        "구모량": "모량역",
        "구부조": "부조역",
        "구포": "구포역_(한국철도공사)",
        "금곡": "금곡역_(남양주)",
        "금호": "금호역_(영천)",
        "기성": "기성역_(울진)",
        "남포": "남포역_(보령)",
        "내포": "내포역_(예산)",
        "녹동": "녹동역_(봉화)",
        "대곡": "대곡역_(고양)",
        "대공원": "대공원역_(과천)",
        "도안": "도안역_(증평)",
        "동래": "동래역_(한국철도공사)",
        "백원": "백원역_(상주)",
        "범일": "범일역_(한국철도공사)",
        "봉화": "봉화역_(봉화)",
        "부산진": "부산진역_(한국철도공사)",
        "부전": "부전역_(한국철도공사)",
        "사상": "사상역_(한국철도공사)",
        "삼산(중앙선)": "삼산역",
        "상동": "상동역_(밀양)",
        "성산": "성산역_(순천)",
        "송정": "송정역_(부산)",
        "수서(고속선)": "수서역",
        "수서(분당선)": "수서역",
        "순천": "순천역_(전라남도)",
        "신기": "신기역_(삼척)",
        "신원": "신원역_(양평)",
        "신진영": "진영역",
        "신촌": "신촌역_(경의선)",
        "쌍룡": "쌍룡역_(영월)",
        "안평": "안평역_(장성)",
        "양원": "양원역_(봉화)",
        "양평": "양평역_(양평)",
        "연산": "연산역_(논산)",
        "연풍": "연풍역_(괴산)",
        "용문": "용문역_(양평)",
        "운천": "운천역_(파주)",
        "일신": "일신역_(양평)",
        "장흥": "장흥역_(양주)",
        "제천순환": "제천역",
        "좌천": "좌천역_(한국철도공사)",
        "중동": "중동역_(부천)",
        "중앙": "중앙역_(안산)",
        "진부(오대산)": "진부역",
        "판교": "판교역_(서천)",
        "판교(경기)": "판교역_(성남)",
        "판교(충남)": "판교역_(서천)",
        "화명": "화명역_(한국철도공사)",
        "화정": "화정역_(고양)",
        "효자": "효자역_(포항)",
    }
)


@dataclass(frozen=True, slots=True)
class ScrapeConfig:
    """Immutable settings for one station reference run.

    Attributes:
        source_table_url: Page holding the station-code table.
        coordinate_base_url: Prefix joined with a page key to build the
            per-station article URL.
        output_path: Destination of the durable CSV file.
        name_overrides: Short name to page key disambiguation table.
        http_timeout: Per-request timeout in seconds.
        user_agent: User-Agent header sent with every request.
    """

    source_table_url: str = _SOURCE_TABLE_URL
    coordinate_base_url: str = _COORDINATE_BASE_URL
    output_path: Path = _OUTPUT_PATH
    name_overrides: Mapping[str, str] = field(
        default_factory=lambda: DEFAULT_NAME_OVERRIDES
    )
    http_timeout: float = _HTTP_TIMEOUT
    user_agent: str = _USER_AGENT
