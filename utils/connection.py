"""
Elasticsearch connection management.
"""

import logging
from elasticsearch import Elasticsearch

from config.environments import get_elasticsearch_config, get_report_config


logger = logging.getLogger(__name__)


def get_elasticsearch_client() -> Elasticsearch:
    """
    Create an Elasticsearch client for the configured event store.

    Returns:
        Configured Elasticsearch client
    """
    config = get_elasticsearch_config()

    # Build connection parameters
    params = {
        "hosts": [config["url"]],
        "request_timeout": config["timeout_ms"] / 1000.0,
        "verify_certs": config.get("verify_certs", True),
    }

    # Add CA certificates if provided
    if config.get("ca_certs"):
        params["ca_certs"] = config["ca_certs"]

    # Add authentication
    if config.get("api_key"):
        params["api_key"] = config["api_key"]
    elif config.get("username") and config.get("password"):
        params["basic_auth"] = (config["username"], config["password"])

    return Elasticsearch(**params)


def test_connection() -> bool:
    """
    Test Elasticsearch connection with a size-0 search on the event index.

    Returns:
        True if connection successful
    """
    index_pattern = get_report_config()["index_pattern"]
    try:
        es = get_elasticsearch_client()

        # A search works with read-only roles, unlike ping()
        response = es.search(
            index=index_pattern,
            size=0,
            query={"match_all": {}},
            timeout="5s"
        )

        return "hits" in response

    except Exception as e:
        logger.warning("Event store connection test failed: %s", e)
        return False
