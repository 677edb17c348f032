"""
DHCP report dispatcher.
"""

import json
import logging
from typing import Dict, Any, List, Optional

from elasticsearch import Elasticsearch

from config.environments import get_report_config
from report_types.domain import EventQueryParams, ReportKind
from tools.primitives.aggregate import aggregate_elastic_data
from tools.reports.formatters import ReportDefinition, get_report_definition
from utils.query_builder import (
    assemble_search_request,
    build_query_string_query,
    build_term_query,
    build_timestamp_gte_query,
)
from utils.response_parser import walk


logger = logging.getLogger(__name__)


def build_dhcp_filters(params: EventQueryParams) -> List[Dict[str, Any]]:
    """
    Build the filters every DHCP report starts from.

    Args:
        params: Optional time lower bound and free-text query

    Returns:
        Filter fragments: event type, then timestamp, then query string
    """
    filters = [build_term_query("event_type", "dhcp")]

    if params.min_timestamp is not None:
        filters.append(build_timestamp_gte_query(params.min_timestamp))

    if params.query_string:
        filters.append(build_query_string_query(params.query_string))

    return filters


def run_report(
    definition: ReportDefinition,
    filters: List[Dict[str, Any]],
    es: Optional[Elasticsearch] = None,
    timeout: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Assemble, execute, walk and map one report.

    Args:
        definition: Report kind to produce
        filters: Shared filters
        es: Store handle (configured client if omitted)
        timeout: Request timeout in seconds for the store call

    Returns:
        {"data": [record, ...]}
    """
    config = get_report_config()
    field, value = definition.discriminator

    request = assemble_search_request(
        filters,
        build_term_query(field, value),
        definition.aggregation,
        keyword_suffix=config["keyword_suffix"],
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("DHCP %s report request: %s", definition.kind.value, json.dumps(request.to_dict()))

    response = aggregate_elastic_data(
        request,
        index_pattern=config["index_pattern"],
        es=es,
        timeout=timeout,
    )

    records = []
    for bucket in walk(response, [definition.aggregation.name]):
        record = definition.mapper(bucket)
        if record is not None:
            records.append(record)

    logger.info("DHCP %s report: %d records", definition.kind.value, len(records))
    return {"data": records}


def dhcp_report(
    report: str,
    params: Optional[EventQueryParams] = None,
    es: Optional[Elasticsearch] = None,
    timeout: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Produce a DHCP report by name.

    Args:
        report: Report kind (ack, request, servers, mac, ip)
        params: Shared filter parameters
        es: Store handle (configured client if omitted)
        timeout: Request timeout in seconds for the store call

    Returns:
        {"data": [record, ...]}

    Raises:
        UnsupportedReport: If the report kind is unknown
        StoreError: If the store call fails
        DecodeError: If the response is malformed
    """
    # Resolve first so an unknown kind never reaches the store
    kind = ReportKind.from_string(report)

    if params is None:
        params = EventQueryParams()

    filters = build_dhcp_filters(params)
    return run_report(get_report_definition(kind), filters, es=es, timeout=timeout)


def list_dhcp_reports() -> List[str]:
    """Names of the supported report kinds."""
    return [kind.value for kind in ReportKind]
