"""
Configuration management for the DHCP report server.
"""

from .environments import (
    get_current_environment,
    get_elasticsearch_config,
    get_logging_config,
    get_report_config,
)

__all__ = [
    "get_current_environment",
    "get_elasticsearch_config",
    "get_logging_config",
    "get_report_config",
]
