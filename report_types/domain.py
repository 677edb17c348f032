"""
Domain layer type definitions.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, List, Dict, Any, Union
from enum import Enum

from .errors import DecodeError, UnsupportedReport


# Address reported for leases that were never assigned
UNASSIGNED_ADDRESS = "0.0.0.0"

BucketKey = Union[str, int, float]


class ReportKind(str, Enum):
    """Supported DHCP report kinds."""
    ACK = "ack"
    REQUEST = "request"
    SERVERS = "servers"
    MAC = "mac"
    IP = "ip"

    @classmethod
    def from_string(cls, value: str) -> "ReportKind":
        """Parse a report name, raising UnsupportedReport for unknown names."""
        try:
            return cls(value)
        except ValueError:
            raise UnsupportedReport(value) from None


@dataclass
class EventQueryParams:
    """Filters shared by every report kind."""
    min_timestamp: Optional[datetime] = None
    query_string: Optional[str] = None


@dataclass
class BucketNode:
    """One decoded aggregation bucket."""
    key: BucketKey
    doc_count: int = 0
    path: str = ""
    children: Dict[str, List["BucketNode"]] = field(default_factory=dict)
    hits: Dict[str, List[Dict[str, Any]]] = field(default_factory=dict)

    def child_buckets(self, name: str) -> List["BucketNode"]:
        return self.children.get(name, [])

    def child_keys(self, name: str) -> List[BucketKey]:
        """Keys of the named child aggregation, in engine order."""
        return [child.key for child in self.child_buckets(name)]

    def top_hit(self, name: str) -> Dict[str, Any]:
        """
        First document of the named top_hits aggregation.

        Raises:
            DecodeError: If the bucket carries no document for it
        """
        documents = self.hits.get(name)
        if not documents:
            raise DecodeError(f"{self.path}.{name}", f"no top hit for bucket {self.key!r}")
        return documents[0]


@dataclass
class ServerRecord:
    """Distinct DHCP reply source address."""
    ip: BucketKey
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"ip": self.ip, "count": self.count}


@dataclass
class MacRecord:
    """Addresses assigned to one client MAC."""
    mac: BucketKey
    addrs: List[BucketKey]

    def to_dict(self) -> Dict[str, Any]:
        return {"mac": self.mac, "addrs": list(self.addrs)}


@dataclass
class IpRecord:
    """Client MACs that were assigned one address."""
    ip: BucketKey
    macs: List[BucketKey]

    def to_dict(self) -> Dict[str, Any]:
        return {"ip": self.ip, "macs": list(self.macs)}
