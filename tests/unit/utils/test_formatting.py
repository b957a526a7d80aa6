"""Unit tests for formatting utilities."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from bytescore.utils.formatting import (
    FLAVOR_TOP_TIER,
    flavor_text,
    format_duration,
    format_grouped,
    format_size,
)


@pytest.mark.unit
class TestFormatSize:
    """Test binary size formatting."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, "0 Bytes"),
            (512, "512 Bytes"),
            (1023, "1023 Bytes"),
            (1024, "1 KB"),
            (2048, "2 KB"),
            (5 * 1024**2, "5 MB"),
            (3 * 1024**3, "3 GB"),
            (2748779069440, "2.5 TB (2560 GB)"),
        ],
    )
    def test_units(self, value: int, expected: str) -> None:
        """Values are reported in the largest whole binary unit."""
        assert format_size(value) == expected

    def test_precision(self) -> None:
        """Terabyte precision is configurable."""
        assert format_size(1024**4, precision=2) == "1.00 TB (1024 GB)"

    def test_negative_rejected(self) -> None:
        """Negative sizes are invalid."""
        with pytest.raises(ValueError, match="non-negative"):
            _ = format_size(-1)


@pytest.mark.unit
class TestFormatGrouped:
    """Test thousands grouping."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0, "0"), (999, "999"), (1000, "1,000"), (1234567, "1,234,567")],
    )
    def test_grouping(self, value: int, expected: str) -> None:
        """Digits are grouped in threes."""
        assert format_grouped(value) == expected


@pytest.mark.unit
class TestFlavorText:
    """Test size tier labels."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, "Tiny"),
            (999, "Tiny"),
            (1_000, "Small"),
            (999_999, "Small"),
            (1_000_000, "Medium"),
            (10_000_000, "Large"),
            (100_000_000, "Larger"),
            (1_000_000_000, "Huge"),
            (10_000_000_000, "Massive"),
            (100_000_000_000, "Colossal"),
        ],
    )
    def test_tier_boundaries(self, value: int, expected: str) -> None:
        """Each tier starts exactly at its decimal boundary."""
        assert flavor_text(value) == expected

    @given(value=st.integers(min_value=100_000_000_000))
    def test_top_tier_is_unbounded(self, value: int) -> None:
        """Everything from 100 GB up is the top tier."""
        assert flavor_text(value) == FLAVOR_TOP_TIER

    def test_negative_rejected(self) -> None:
        """Negative sizes are invalid."""
        with pytest.raises(ValueError, match="non-negative"):
            _ = flavor_text(-5)


@pytest.mark.unit
class TestFormatDuration:
    """Test duration formatting."""

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0, "0.00s"),
            (0.25, "0.25s"),
            (9.5, "9.50s"),
            (10, "10s"),
            (59.9, "59s"),
            (60, "1m"),
            (90, "1m 30s"),
            (3600, "1h"),
            (3665, "1h 1m"),
        ],
    )
    def test_granularity(self, seconds: float, expected: str) -> None:
        """Precision adapts to the magnitude of the duration."""
        assert format_duration(seconds) == expected

    def test_negative_rejected(self) -> None:
        """Negative durations are invalid."""
        with pytest.raises(ValueError, match="non-negative"):
            _ = format_duration(-0.1)
