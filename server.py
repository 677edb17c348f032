"""
FastMCP DHCP Report Server.

This server exposes DHCP lease reports computed from events stored in
Elasticsearch:
- health: Check event store connectivity
- dhcp_report: Run one report (ack, request, servers, mac, ip)
- list_dhcp_reports: Names of the available reports
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from dotenv import load_dotenv

# Load environment variables before configuration is read
load_dotenv()

from config import get_current_environment, get_report_config
from report_types import EventQueryParams, ReportError
from tools.reports import dhcp_report as run_dhcp_report
from tools.reports import list_dhcp_reports as available_reports
from utils import setup_logging, test_connection

setup_logging()

# Initialize MCP server
mcp = FastMCP("dhcp-report-mcp")


def parse_min_timestamp(
    min_timestamp: Optional[str] = None,
    timeframe_minutes: Optional[int] = None,
) -> Optional[datetime]:
    """
    Resolve the report's lower time bound.

    An explicit ISO timestamp wins over a timeframe relative to now.
    Timestamps without an offset are read as UTC.
    """
    if min_timestamp:
        try:
            parsed = datetime.fromisoformat(min_timestamp.replace('Z', '+00:00'))
        except ValueError as e:
            raise ToolError(f"Invalid min_timestamp {min_timestamp!r}: {e}") from e
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    if timeframe_minutes is not None:
        if timeframe_minutes < 1:
            raise ToolError("timeframe_minutes must be at least 1")
        return datetime.now(timezone.utc) - timedelta(minutes=timeframe_minutes)
    return None


# ========== HEALTH TOOL ==========

@mcp.tool()
def health() -> Dict[str, Any]:
    """
    Check connectivity to the event store.

    Returns status information about Elasticsearch and the configured
    event index.
    """
    env = get_current_environment()
    connected = test_connection()

    return {
        "overall_status": "healthy" if connected else "degraded",
        "environment": env,
        "services": {
            "elasticsearch": {
                "service": "elasticsearch",
                "connected": connected,
                "index_pattern": get_report_config()["index_pattern"],
            },
        },
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


# ========== REPORT TOOLS ==========

@mcp.tool()
def dhcp_report(
    report: str,
    min_timestamp: Optional[str] = None,
    timeframe_minutes: Optional[int] = None,
    query_string: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Run a DHCP report over lease events.

    Reports:
    - ack: latest DHCP ACK event per client MAC
    - request: latest DHCP REQUEST event per client MAC
    - servers: addresses sending DHCP replies, with reply counts
    - mac: addresses assigned to each client MAC
    - ip: client MACs assigned each address

    Args:
        report: Report name
        min_timestamp: Only events at or after this ISO time (e.g., '2025-06-23T00:00:00Z')
        timeframe_minutes: Alternative to min_timestamp - minutes before now
        query_string: Additional free-text filter in query_string syntax

    Returns:
        {"data": [...]} with one record per MAC, server or address
    """
    params = EventQueryParams(
        min_timestamp=parse_min_timestamp(min_timestamp, timeframe_minutes),
        query_string=query_string,
    )
    try:
        return run_dhcp_report(report, params)
    except ReportError as e:
        raise ToolError(str(e)) from e


@mcp.tool()
def list_dhcp_reports() -> List[str]:
    """List the available DHCP report names."""
    return available_reports()


if __name__ == "__main__":
    mcp.run()
