"""
Primitive aggregation operations for Elasticsearch.
"""

import logging
from typing import Dict, Any, Optional

from elasticsearch import ApiError, ConnectionTimeout, Elasticsearch, TransportError

from config.environments import get_report_config
from report_types.errors import StoreError, StoreTimeout
from report_types.primitives import AggregationResponse, SearchRequest
from utils.connection import get_elasticsearch_client
from utils.validation import validate_index_pattern, validate_timeout


logger = logging.getLogger(__name__)


def aggregate_elastic_data(
    request: SearchRequest,
    index_pattern: Optional[str] = None,
    es: Optional[Elasticsearch] = None,
    timeout: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Execute an aggregation request against the event store.

    One round-trip, no retries: any failure surfaces to the caller.

    Args:
        request: Assembled search request
        index_pattern: Index pattern to search (configured index if omitted)
        es: Client to use (configured client if omitted)
        timeout: Request timeout in seconds for this call only

    Returns:
        Raw response document

    Raises:
        InvalidParameter: If parameters are invalid
        StoreTimeout: If the request timed out
        StoreError: If the store failed or rejected the request
    """
    if index_pattern is None:
        index_pattern = get_report_config()["index_pattern"]
    validate_index_pattern(index_pattern)

    if es is None:
        es = get_elasticsearch_client()
    if timeout is not None:
        es = es.options(request_timeout=validate_timeout(timeout))

    try:
        response = es.search(
            index=index_pattern,
            body=request.to_dict(),
        )
    except ConnectionTimeout as e:
        logger.warning("Aggregation on %s timed out: %s", index_pattern, e)
        raise StoreTimeout(f"Elasticsearch aggregation timed out: {e}") from e
    except ApiError as e:
        logger.error("Aggregation on %s rejected with status %s: %s", index_pattern, e.meta.status, e)
        raise StoreError(f"Elasticsearch aggregation failed: {e}", status=e.meta.status) from e
    except TransportError as e:
        logger.error("Aggregation on %s failed: %s", index_pattern, e)
        raise StoreError(f"Elasticsearch aggregation failed: {e}") from e

    # ObjectApiResponse wraps the decoded body
    body = getattr(response, "body", response)

    summary = AggregationResponse.from_dict(body) if isinstance(body, dict) else None
    if summary is not None:
        if summary.timed_out:
            raise StoreTimeout("Elasticsearch aggregation timed out on one or more shards")
        logger.debug("Aggregation on %s took %dms", index_pattern, summary.took)

    return body
