from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when chart input cannot be turned into bars and parts."""


class ChartConfigError(ValueError):
    """Raised when chart configuration overrides are invalid."""
