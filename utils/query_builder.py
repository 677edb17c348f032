"""
Query building utilities for Elasticsearch.
"""

from datetime import datetime
from typing import Dict, Any, Optional, Sequence, Union

from report_types.primitives import AggregationSpec, SearchRequest


TIMESTAMP_FIELD = "@timestamp"


def build_time_range_query(
    field: str,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Build a time range query.

    Args:
        field: Timestamp field name
        start: Start time (inclusive)
        end: End time (inclusive)

    Returns:
        Range query dict
    """
    range_query = {}
    if start:
        range_query["gte"] = start.isoformat()
    if end:
        range_query["lte"] = end.isoformat()

    return {"range": {field: range_query}}


def build_timestamp_gte_query(start: datetime) -> Dict[str, Any]:
    """Lower bound on the event timestamp."""
    return build_time_range_query(TIMESTAMP_FIELD, start=start)


def build_term_query(
    field: str,
    value: Union[str, int, bool],
    use_keyword: bool = False,
) -> Dict[str, Any]:
    """
    Build a term query for exact matching.

    Args:
        field: Field name
        value: Value to match
        use_keyword: Whether to append .keyword for text fields

    Returns:
        Term query dict
    """
    if use_keyword and isinstance(value, str):
        field = f"{field}.keyword"

    return {"term": {field: value}}


def build_query_string_query(query: str) -> Dict[str, Any]:
    """
    Build a free-text query_string clause.

    Terms are ANDed together.
    """
    return {"query_string": {"query": query, "default_operator": "AND"}}


def assemble_search_request(
    filters: Sequence[Dict[str, Any]],
    extra: Optional[Dict[str, Any]],
    aggregation: AggregationSpec,
    keyword_suffix: str = "",
) -> SearchRequest:
    """
    Combine shared filters and a report's aggregation into one request.

    The caller's filter list is copied, never extended in place, so a
    filter set can be built once and reused.

    Args:
        filters: Shared filter fragments, in order
        extra: Report-specific discriminator filter, appended last
        aggregation: Aggregation tree for the report
        keyword_suffix: Suffix appended to aggregation fields

    Returns:
        SearchRequest with a result window of 0
    """
    combined = list(filters)
    if extra is not None:
        combined.append(extra)

    return SearchRequest(
        filters=tuple(combined),
        aggregation=aggregation,
        keyword_suffix=keyword_suffix,
        size=0,
    )
