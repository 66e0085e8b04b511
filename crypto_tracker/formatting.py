"""Display formatting for prices, magnitudes and percentage changes."""
from __future__ import annotations

import math

NOT_AVAILABLE = "N/A"


def format_price(value: float | None) -> str:
    """Format a price with precision depending on its size.

    Sub-cent prices keep 6 decimals, sub-dollar prices 4, everything else 2.
    Prices of 10,000 and above get thousands separators.
    """
    if value is None or not math.isfinite(value):
        return NOT_AVAILABLE
    if value < 0.01:
        return f"{value:.6f}"
    if value < 1:
        return f"{value:.4f}"
    if value < 10000:
        return f"{value:.2f}"
    return f"{value:,.2f}"


def format_magnitude(value: float | None) -> str:
    """Format a large number with a K/M/B suffix, e.g. ``1.50B``."""
    if value is None or not math.isfinite(value):
        return NOT_AVAILABLE
    if value >= 1e9:
        return f"{value / 1e9:.2f}B"
    if value >= 1e6:
        return f"{value / 1e6:.2f}M"
    if value >= 1e3:
        return f"{value / 1e3:.2f}K"
    return str(int(value))


def format_change(value: float | None) -> str:
    """Format a 24h percentage change with an explicit sign."""
    if value is None or not math.isfinite(value):
        return NOT_AVAILABLE
    prefix = "+" if value >= 0 else ""
    return f"{prefix}{value:.2f}%"
