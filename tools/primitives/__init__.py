"""
Primitive tools for low-level Elasticsearch operations.
"""

from .aggregate import aggregate_elastic_data

__all__ = [
    "aggregate_elastic_data",
]
