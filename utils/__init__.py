"""
Utility functions for the DHCP report server.
"""

from .validation import validate_index_pattern, validate_timeout
from .connection import get_elasticsearch_client, test_connection
from .query_builder import (
    build_time_range_query,
    build_timestamp_gte_query,
    build_term_query,
    build_query_string_query,
    assemble_search_request,
)
from .response_parser import (
    parse_aggregations,
    decode_bucket,
    decode_buckets,
    walk,
)
from .log_config import setup_logging

__all__ = [
    # Validation
    "validate_index_pattern",
    "validate_timeout",
    # Connection
    "get_elasticsearch_client",
    "test_connection",
    # Query building
    "build_time_range_query",
    "build_timestamp_gte_query",
    "build_term_query",
    "build_query_string_query",
    "assemble_search_request",
    # Response parsing
    "parse_aggregations",
    "decode_bucket",
    "decode_buckets",
    "walk",
    # Logging
    "setup_logging",
]
