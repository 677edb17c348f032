"""
Primitive layer type definitions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
from enum import Enum


# Explicit ceiling for top-level terms aggregations
TERMS_SIZE_CAP = 10000


class SortOrder(str, Enum):
    """Sort order for queries."""
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class TopHitsSpec:
    """Top N documents embedded in each bucket of the parent aggregation."""
    name: str
    size: int = 1
    sort_field: str = "@timestamp"
    order: SortOrder = SortOrder.DESC

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Elasticsearch top_hits aggregation body."""
        return {
            "top_hits": {
                "sort": [{self.sort_field: {"order": self.order.value}}],
                "size": self.size,
            }
        }


@dataclass(frozen=True)
class AggregationSpec:
    """
    Terms aggregation node.

    ``field`` is the logical field name; the keyword suffix is appended when
    the request is serialised. A ``size`` of None leaves the engine default
    in place, which is how nested breakdowns are requested.
    """
    name: str
    field: str
    size: Optional[int] = TERMS_SIZE_CAP
    children: Tuple["AggregationSpec", ...] = ()
    top_hits: Optional[TopHitsSpec] = None

    def to_dict(self, keyword_suffix: str = "") -> Dict[str, Any]:
        """Convert to Elasticsearch aggs dict keyed by aggregation name."""
        terms: Dict[str, Any] = {"field": f"{self.field}{keyword_suffix}"}
        if self.size is not None:
            terms["size"] = max(0, min(self.size, TERMS_SIZE_CAP))

        body: Dict[str, Any] = {"terms": terms}

        sub_aggs: Dict[str, Any] = {}
        for child in self.children:
            sub_aggs.update(child.to_dict(keyword_suffix))
        if self.top_hits:
            sub_aggs[self.top_hits.name] = self.top_hits.to_dict()
        if sub_aggs:
            body["aggs"] = sub_aggs

        return {self.name: body}


@dataclass(frozen=True)
class SearchRequest:
    """Aggregation-only search request."""
    filters: Tuple[Dict[str, Any], ...]
    aggregation: AggregationSpec
    keyword_suffix: str = ""
    size: int = 0  # Only the buckets are wanted, never top-level hits

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Elasticsearch query dict."""
        return {
            "query": {"bool": {"filter": list(self.filters)}},
            "aggs": self.aggregation.to_dict(self.keyword_suffix),
            "size": self.size,
        }


@dataclass
class AggregationResponse:
    """Elasticsearch aggregation response."""
    took: int
    timed_out: bool
    aggregations: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AggregationResponse":
        """Create from Elasticsearch response dict."""
        return cls(
            took=data.get("took", 0),
            timed_out=data.get("timed_out", False),
            aggregations=data.get("aggregations") or {},
        )
