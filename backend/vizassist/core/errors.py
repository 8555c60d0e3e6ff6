"""
errors.py - Core Exceptions

Profiling failures are terminal for the upload that caused them: the
input bytes are already in memory, so retrying gives the same result.
A chart that cannot be drawn from the available columns is NOT an
error; the chart engine returns None for that case.
"""


class ProfilingError(ValueError):
    """Base class for CSV sampling failures."""


class EmptyContentError(ProfilingError):
    """The decoded sample contains no text."""

    def __init__(self, message: str = "Empty file"):
        super().__init__(message)


class InsufficientRowsError(ProfilingError):
    """Fewer than two usable lines (a header plus one data row)."""

    def __init__(self, line_count: int):
        self.line_count = line_count
        super().__init__(f"Invalid CSV: Not enough rows (found {line_count} usable line(s), need 2)")


class UnknownChartTypeError(ValueError):
    """The chart selector is not one of the supported chart families."""

    def __init__(self, chart_type: str):
        self.chart_type = chart_type
        super().__init__(f"Unknown chart type: {chart_type}")


class SessionNotFoundError(KeyError):
    """No session exists for the given id."""

    def __init__(self, session_id: str):
        self.session_id = session_id
        super().__init__(session_id)

    def __str__(self) -> str:
        return f"Session not found: {self.session_id}"
