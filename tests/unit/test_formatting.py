"""Unit tests for display formatting."""
from __future__ import annotations

import pytest

from crypto_tracker.formatting import format_change, format_magnitude, format_price


class TestFormatPrice:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.000123, "0.000123"),
            (0.5, "0.5000"),
            (0.01, "0.0100"),
            (42.5, "42.50"),
            (9999.99, "9999.99"),
            (25000, "25,000.00"),
            (1234567.891, "1,234,567.89"),
        ],
    )
    def test_precision_tiers(self, value: float, expected: str) -> None:
        assert format_price(value) == expected

    def test_none(self) -> None:
        assert format_price(None) == "N/A"


class TestFormatMagnitude:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (1_500_000_000, "1.50B"),
            (2_340_000, "2.34M"),
            (12_500, "12.50K"),
            (1000, "1.00K"),
            (999, "999"),
            (0, "0"),
        ],
    )
    def test_suffixes(self, value: float, expected: str) -> None:
        assert format_magnitude(value) == expected

    def test_none(self) -> None:
        assert format_magnitude(None) == "N/A"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite(self, value: float) -> None:
        assert format_magnitude(value) == "N/A"
        assert format_price(value) == "N/A"
        assert format_change(value) == "N/A"


class TestFormatChange:
    def test_positive_has_plus_sign(self) -> None:
        assert format_change(1.234) == "+1.23%"

    def test_negative(self) -> None:
        assert format_change(-0.5) == "-0.50%"

    def test_zero(self) -> None:
        assert format_change(0.0) == "+0.00%"

    def test_none(self) -> None:
        assert format_change(None) == "N/A"
