"""
Report tools built on the aggregation primitives.
"""

from .dhcp import build_dhcp_filters, dhcp_report, list_dhcp_reports, run_report
from .formatters import REPORTS, ReportDefinition, get_report_definition

__all__ = [
    "build_dhcp_filters",
    "dhcp_report",
    "list_dhcp_reports",
    "run_report",
    "REPORTS",
    "ReportDefinition",
    "get_report_definition",
]
