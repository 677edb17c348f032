"""
Environment configuration management.
"""

import os
from typing import Dict, Any


def _env_flag(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Single environment configuration - reads directly from env vars
DEFAULT_CONFIG = {
    "name": os.getenv("REPORT_ENVIRONMENT", "default"),
    "elasticsearch": {
        "url": os.getenv("ELASTIC_URL", os.getenv("ELASTICSEARCH_URL", "http://localhost:9200")),
        "username": os.getenv("ELASTIC_USERNAME", os.getenv("ELASTICSEARCH_USERNAME")),
        "password": os.getenv("ELASTIC_PASSWORD", os.getenv("ELASTICSEARCH_PASSWORD")),
        "api_key": os.getenv("ELASTIC_API_KEY", os.getenv("ELASTICSEARCH_API_KEY")),
        "timeout_ms": int(os.getenv("ELASTIC_TIMEOUT", os.getenv("ELASTICSEARCH_TIMEOUT", "30000"))),
        "verify_certs": _env_flag("ELASTIC_VERIFY_CERTS"),
        "ca_certs": os.getenv("ELASTIC_CA_CERTS"),
    },
    "reports": {
        "index_pattern": os.getenv("ELASTIC_INDEX", "logstash-*"),
        # Aggregations run on the keyword sub-field of dynamically mapped strings
        "keyword_suffix": os.getenv("ELASTIC_KEYWORD_SUFFIX", ".keyword"),
    },
    "logging": {
        "level": os.getenv("LOG_LEVEL", "INFO").upper(),
        "format": os.getenv("LOG_FORMAT", "text").lower(),
    },
}


def get_current_environment() -> str:
    """
    Get the current environment name.

    Returns:
        Name from REPORT_ENVIRONMENT, 'default' when unset
    """
    return DEFAULT_CONFIG["name"]


def get_elasticsearch_config() -> Dict[str, Any]:
    """
    Get Elasticsearch configuration.

    Returns:
        Elasticsearch configuration dictionary
    """
    return DEFAULT_CONFIG["elasticsearch"]


def get_report_config() -> Dict[str, Any]:
    """
    Get report settings: the event index pattern and keyword field suffix.
    """
    return DEFAULT_CONFIG["reports"]


def get_logging_config() -> Dict[str, Any]:
    """Get logging level and output format."""
    return DEFAULT_CONFIG["logging"]
