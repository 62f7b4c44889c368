"""
Indicator engine errors.

Raised by the pure calculation functions. They are never caught inside the
engine; IndicatorService translates them for users.
"""


class IndicatorError(Exception):
    """Base exception for indicator computation."""
    pass


class InsufficientDataError(IndicatorError):
    """Input is shorter than the indicator's lookback."""

    def __init__(self, indicator: str, required: int, available: int):
        self.indicator = indicator
        self.required = required
        self.available = available
        super().__init__(
            f"{indicator} needs at least {required} values, got {available}"
        )


class DataQualityError(IndicatorError):
    """Degenerate input that would otherwise produce NaN or infinity."""
    pass


class InvalidArgumentError(IndicatorError, ValueError):
    """Wrong argument type or value at the call boundary."""
    pass
