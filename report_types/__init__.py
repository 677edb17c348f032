"""
Type definitions for the DHCP report server.
"""

from .errors import (
    ReportError,
    UnsupportedReport,
    StoreError,
    StoreTimeout,
    DecodeError,
    InvalidParameter,
)

from .primitives import (
    TERMS_SIZE_CAP,
    SortOrder,
    TopHitsSpec,
    AggregationSpec,
    SearchRequest,
    AggregationResponse,
)

from .domain import (
    UNASSIGNED_ADDRESS,
    ReportKind,
    EventQueryParams,
    BucketNode,
    ServerRecord,
    MacRecord,
    IpRecord,
)

__all__ = [
    # Errors
    "ReportError",
    "UnsupportedReport",
    "StoreError",
    "StoreTimeout",
    "DecodeError",
    "InvalidParameter",
    # Primitives
    "TERMS_SIZE_CAP",
    "SortOrder",
    "TopHitsSpec",
    "AggregationSpec",
    "SearchRequest",
    "AggregationResponse",
    # Domain
    "UNASSIGNED_ADDRESS",
    "ReportKind",
    "EventQueryParams",
    "BucketNode",
    "ServerRecord",
    "MacRecord",
    "IpRecord",
]
