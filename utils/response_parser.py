"""
Response parsing utilities for Elasticsearch.

Aggregation responses are decoded once, at this boundary, into BucketNode
trees. A missing aggregation is read as "no buckets"; anything present but
malformed raises DecodeError.
"""

import logging
from typing import Any, Dict, List, Mapping, Sequence, Union

from report_types.domain import BucketNode
from report_types.errors import DecodeError


logger = logging.getLogger(__name__)

# Bucket fields that are bookkeeping rather than sub-aggregations
_BUCKET_META_FIELDS = ("key", "key_as_string", "doc_count", "doc_count_error_upper_bound")


def parse_aggregations(response: Any) -> Dict[str, Any]:
    """
    Extract aggregations from response.

    Args:
        response: Elasticsearch response

    Returns:
        Aggregations dict, empty when the response has none

    Raises:
        DecodeError: If the response or its aggregations are not objects
    """
    if not isinstance(response, Mapping):
        raise DecodeError("", f"response is {type(response).__name__}, not an object")

    aggregations = response.get("aggregations")
    if aggregations is None:
        return {}
    if not isinstance(aggregations, Mapping):
        raise DecodeError("aggregations", "not an object")
    return dict(aggregations)


def decode_bucket_key(raw: Mapping[str, Any], path: str) -> Union[str, int, float]:
    if "key" not in raw:
        raise DecodeError(path, "bucket has no key")
    key = raw["key"]
    # bool is an int subclass but never a valid terms key
    if isinstance(key, bool) or not isinstance(key, (str, int, float)):
        raise DecodeError(path, f"bucket key {key!r} is not a string or number")
    return key


def decode_doc_count(raw: Mapping[str, Any], path: str) -> int:
    count = raw.get("doc_count", 0)
    if isinstance(count, bool) or not isinstance(count, int) or count < 0:
        raise DecodeError(path, f"doc_count {count!r} is not a non-negative integer")
    return count


def decode_top_hits(aggregation: Mapping[str, Any], path: str) -> List[Dict[str, Any]]:
    """
    Decode the documents of a top_hits aggregation.

    Returns:
        The ``_source`` of each hit, in engine order
    """
    hits = aggregation["hits"]
    if not isinstance(hits, Mapping):
        raise DecodeError(path, "top hits container is not an object")

    hit_list = hits.get("hits", [])
    if not isinstance(hit_list, list):
        raise DecodeError(path, "top hits are not a list")

    documents = []
    for hit in hit_list:
        source = hit.get("_source") if isinstance(hit, Mapping) else None
        if not isinstance(source, Mapping):
            raise DecodeError(path, "top hit has no _source document")
        documents.append(dict(source))
    return documents


def decode_bucket(raw: Any, path: str) -> BucketNode:
    """
    Decode one engine bucket into a BucketNode.

    Every sub-object carrying a ``buckets`` list is decoded as a child
    aggregation, every sub-object carrying ``hits`` as a top_hits
    aggregation. Metric sub-aggregations are ignored.

    Args:
        raw: Bucket as returned by the engine
        path: Dotted aggregation path, for error messages

    Returns:
        Decoded bucket
    """
    if not isinstance(raw, Mapping):
        raise DecodeError(path, f"bucket is {type(raw).__name__}, not an object")

    node = BucketNode(
        key=decode_bucket_key(raw, path),
        doc_count=decode_doc_count(raw, path),
        path=path,
    )

    for name, value in raw.items():
        if name in _BUCKET_META_FIELDS or not isinstance(value, Mapping):
            continue
        child_path = f"{path}.{name}"
        if "buckets" in value:
            node.children[name] = decode_buckets(value, child_path)
        elif "hits" in value:
            node.hits[name] = decode_top_hits(value, child_path)

    return node


def decode_buckets(aggregation: Mapping[str, Any], path: str) -> List[BucketNode]:
    """
    Decode the bucket array of one terms aggregation.

    Args:
        aggregation: Aggregation result object
        path: Dotted aggregation path, for error messages

    Returns:
        Decoded buckets in engine order
    """
    buckets = aggregation.get("buckets", [])
    if not isinstance(buckets, list):
        raise DecodeError(path, "buckets is not a list")

    return [decode_bucket(raw, path) for raw in buckets]


def walk(response: Any, path: Union[str, Sequence[str]]) -> List[BucketNode]:
    """
    Extract the buckets found at an aggregation path.

    The first name is looked up under ``aggregations``; each further name
    selects that child aggregation inside every bucket of the previous
    level, and the results are flattened in order.

    Args:
        response: Elasticsearch response document
        path: Aggregation names, as a sequence or a dotted string

    Returns:
        Buckets at the end of the path, empty when the path is absent

    Raises:
        DecodeError: If the response content is malformed
    """
    names = path.split(".") if isinstance(path, str) else list(path)
    if not names:
        raise ValueError("Aggregation path cannot be empty")

    aggregations = parse_aggregations(response)
    root = aggregations.get(names[0])
    if root is None:
        return []
    if not isinstance(root, Mapping):
        raise DecodeError(names[0], "aggregation is not an object")

    # Only the capped top level is reported as truncated
    other = root.get("sum_other_doc_count", 0)
    if isinstance(other, int) and not isinstance(other, bool) and other > 0:
        logger.warning(
            "Aggregation %s truncated: %d documents fall outside the returned buckets",
            names[0], other,
        )

    nodes = decode_buckets(root, names[0])
    for name in names[1:]:
        nodes = [child for node in nodes for child in node.child_buckets(name)]
    return nodes
