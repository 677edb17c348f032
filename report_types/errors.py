"""
Report error taxonomy.
"""

from typing import Optional


class ReportError(Exception):
    """Base class for every failure raised while producing a report."""
    pass


class UnsupportedReport(ReportError):
    def __init__(self, report: str):
        super().__init__(f"No DHCP report for {report}")
        self.report = report


class StoreError(ReportError):
    """Transport failure or non-success response from the event store."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class StoreTimeout(StoreError):
    """The store round-trip exceeded its request timeout."""
    pass


class DecodeError(ReportError):
    """The response document does not have the shape the report expects."""

    def __init__(self, path: str, detail: str):
        super().__init__(f"Malformed aggregation response at '{path}': {detail}")
        self.path = path
        self.detail = detail


class InvalidParameter(ReportError, ValueError):
    """A request parameter was rejected before reaching the store."""
    pass
