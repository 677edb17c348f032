"""
Pytest configuration and fixtures for DHCP report tests.
"""

import pytest
import os
import sys
from unittest.mock import Mock, patch
from datetime import datetime, timezone

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(__file__))
sys.path.insert(0, project_root)


@pytest.fixture
def mock_elasticsearch():
    """Mock Elasticsearch client for testing."""
    mock_es = Mock()

    # Empty aggregation response by default
    mock_es.search.return_value = {
        "took": 5,
        "timed_out": False,
        "hits": {"total": {"value": 0}, "hits": []},
        "aggregations": {},
    }

    # Per-request options return the same client
    mock_es.options.return_value = mock_es

    return mock_es


@pytest.fixture
def mock_es_client(mock_elasticsearch):
    """Patch the client factory where the aggregation primitive looks it up."""
    with patch('tools.primitives.aggregate.get_elasticsearch_client', return_value=mock_elasticsearch):
        yield mock_elasticsearch


@pytest.fixture
def report_config():
    """Report settings used by every test."""
    config = {"index_pattern": "logstash-*", "keyword_suffix": ".keyword"}
    with patch('config.environments.DEFAULT_CONFIG', {
        "name": "test",
        "elasticsearch": {
            "url": "http://localhost:9200",
            "username": None,
            "password": None,
            "api_key": None,
            "timeout_ms": 5000,
            "verify_certs": False,
            "ca_certs": None,
        },
        "reports": config,
        "logging": {"level": "DEBUG", "format": "text"},
    }):
        yield config


@pytest.fixture
def min_timestamp():
    return datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def lease_event():
    """A DHCP ACK event as stored in the event index."""
    return {
        "@timestamp": "2024-01-15T10:30:00.000Z",
        "event_type": "dhcp",
        "src_ip": "10.0.0.1",
        "dest_ip": "10.0.0.5",
        "dhcp": {
            "type": "reply",
            "dhcp_type": "ack",
            "client_mac": "aa:bb:cc:dd:ee:01",
            "assigned_ip": "10.0.0.5",
            "hostname": "laptop-01",
            "lease_time": 86400,
        },
    }


def make_response(name, buckets, **extra):
    """Aggregation response with one top-level terms aggregation."""
    aggregation = {
        "doc_count_error_upper_bound": 0,
        "sum_other_doc_count": 0,
        "buckets": buckets,
    }
    aggregation.update(extra)
    return {
        "took": 3,
        "timed_out": False,
        "hits": {"total": {"value": sum(b.get("doc_count", 0) for b in buckets)}, "hits": []},
        "aggregations": {name: aggregation},
    }


@pytest.fixture
def aggregation_response():
    """Factory for single-aggregation responses."""
    return make_response
