"""
Input validation utilities.
"""

import re

from report_types.errors import InvalidParameter


def validate_index_pattern(pattern: str) -> None:
    """
    Validate an Elasticsearch index pattern.

    Args:
        pattern: Index pattern to validate

    Raises:
        InvalidParameter: If pattern is invalid
    """
    if not pattern:
        raise InvalidParameter("Index pattern cannot be empty")

    if pattern.startswith("_"):
        raise InvalidParameter("Index pattern cannot start with underscore")

    # Comma separates multiple patterns
    invalid_chars = re.findall(r'[^a-zA-Z0-9\-_.*,]', pattern)
    if invalid_chars:
        raise InvalidParameter(f"Invalid characters in index pattern: {invalid_chars}")


def validate_timeout(timeout: float) -> float:
    """
    Validate a per-request timeout in seconds.

    Raises:
        InvalidParameter: If timeout is not positive
    """
    if timeout <= 0:
        raise InvalidParameter(f"Timeout must be positive, got {timeout}")
    return float(timeout)
