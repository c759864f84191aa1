"""Tests for DMS coordinate parsing and formatting."""

from __future__ import annotations

import pytest

from scripts.dms import FormatError, format_dms, parse_dms

# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParseDms:
    """Validate hemisphere signs and degree-minute-second arithmetic."""

    def test_north_latitude(self) -> None:
        assert parse_dms("북위37°33′39″") == pytest.approx(37.560833, abs=1e-6)

    def test_west_longitude_is_negative(self) -> None:
        assert parse_dms("서경126°58′39″") == pytest.approx(-126.9775)

    def test_east_longitude_is_positive(self) -> None:
        assert parse_dms("동경126°58′39″") == pytest.approx(126.9775)

    def test_south_latitude_is_negative(self) -> None:
        assert parse_dms("남위33°52′4″") == pytest.approx(-(33 + 52 / 60 + 4 / 3600))

    def test_fractional_seconds(self) -> None:
        assert parse_dms("북위35°6′52.5″") == pytest.approx(35 + 6 / 60 + 52.5 / 3600)

    def test_surrounding_whitespace_trimmed(self) -> None:
        assert parse_dms("  북위37°33′39″\n") == pytest.approx(37.560833, abs=1e-6)

    def test_spaces_between_components(self) -> None:
        assert parse_dms("동경127° 3′ 0″") == pytest.approx(127.05)

    def test_zero_minutes_and_seconds(self) -> None:
        assert parse_dms("북위36°0′0″") == 36.0


class TestParseDmsErrors:
    """Validate rejection of unrecognized input."""

    @pytest.mark.parametrize(
        "text",
        [
            "37°33′39″",
            "N37°33′39″",
            "위도37°33′39″",
            "",
        ],
    )
    def test_unknown_hemisphere_raises(self, text: str) -> None:
        with pytest.raises(FormatError, match="hemisphere"):
            parse_dms(text)

    @pytest.mark.parametrize(
        "text",
        [
            "북위",
            "북위37.5",
            "북위37°33′",
            "동경126°58'39\"",
        ],
    )
    def test_pattern_mismatch_raises(self, text: str) -> None:
        with pytest.raises(FormatError, match="Invalid DMS format"):
            parse_dms(text)

    def test_malformed_seconds_raises(self) -> None:
        with pytest.raises(FormatError):
            parse_dms("북위37°33′3.9.1″")

    def test_format_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_dms("unknown")


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


class TestFormatDms:
    """Validate rendering back into parseable DMS text."""

    def test_latitude_prefix_follows_sign(self) -> None:
        assert format_dms(37.5, "latitude").startswith("북위")
        assert format_dms(-37.5, "latitude").startswith("남위")

    def test_longitude_prefix_follows_sign(self) -> None:
        assert format_dms(126.9, "longitude").startswith("동경")
        assert format_dms(-126.9, "longitude").startswith("서경")

    def test_whole_seconds_have_no_decimal_point(self) -> None:
        assert format_dms(-126.9775, "longitude") == "서경126°58′39″"

    @pytest.mark.parametrize(
        ("value", "axis"),
        [
            (37.560833, "latitude"),
            (-33.867778, "latitude"),
            (126.9775, "longitude"),
            (-0.1275, "longitude"),
            (35.114583, "latitude"),
        ],
    )
    def test_parse_recovers_value(self, value: float, axis: str) -> None:
        text = format_dms(value, axis)  # type: ignore[arg-type]
        parsed = parse_dms(text)
        assert parsed == pytest.approx(value, abs=1e-9)
        assert (parsed < 0) == (value < 0)
