"""
Declarative DHCP report definitions.

Each report kind is a discriminator filter, an aggregation tree and a
mapper from top-level bucket to output record. The mapper returns None to
leave a bucket out of the report.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from report_types.domain import (
    UNASSIGNED_ADDRESS,
    BucketNode,
    IpRecord,
    MacRecord,
    ReportKind,
    ServerRecord,
)
from report_types.primitives import AggregationSpec, TopHitsSpec


BucketMapper = Callable[[BucketNode], Optional[Dict[str, Any]]]


@dataclass(frozen=True)
class ReportDefinition:
    """How one report kind is queried and flattened."""
    kind: ReportKind
    discriminator: Tuple[str, str]
    aggregation: AggregationSpec
    mapper: BucketMapper


def latest_event(bucket: BucketNode) -> Dict[str, Any]:
    """Latest full lease event of a client MAC bucket, verbatim."""
    return bucket.top_hit("latest")


def server_entry(bucket: BucketNode) -> Dict[str, Any]:
    return ServerRecord(ip=bucket.key, count=bucket.doc_count).to_dict()


def mac_entry(bucket: BucketNode) -> Dict[str, Any]:
    addrs = [key for key in bucket.child_keys("assigned_ip") if key != UNASSIGNED_ADDRESS]
    return MacRecord(mac=bucket.key, addrs=addrs).to_dict()


def ip_entry(bucket: BucketNode) -> Optional[Dict[str, Any]]:
    if bucket.key == UNASSIGNED_ADDRESS:
        return None
    return IpRecord(ip=bucket.key, macs=bucket.child_keys("client_mac")).to_dict()


# ack and request are mirror views of the same lease-event stream
LATEST_BY_MAC = AggregationSpec(
    name="client_mac",
    field="dhcp.client_mac",
    top_hits=TopHitsSpec(name="latest", size=1, sort_field="@timestamp"),
)

REPORTS: Dict[ReportKind, ReportDefinition] = {
    ReportKind.ACK: ReportDefinition(
        kind=ReportKind.ACK,
        discriminator=("dhcp.dhcp_type", "ack"),
        aggregation=LATEST_BY_MAC,
        mapper=latest_event,
    ),
    ReportKind.REQUEST: ReportDefinition(
        kind=ReportKind.REQUEST,
        discriminator=("dhcp.dhcp_type", "request"),
        aggregation=LATEST_BY_MAC,
        mapper=latest_event,
    ),
    ReportKind.SERVERS: ReportDefinition(
        kind=ReportKind.SERVERS,
        discriminator=("dhcp.type", "reply"),
        aggregation=AggregationSpec(name="servers", field="src_ip"),
        mapper=server_entry,
    ),
    ReportKind.MAC: ReportDefinition(
        kind=ReportKind.MAC,
        discriminator=("dhcp.type", "reply"),
        aggregation=AggregationSpec(
            name="client_mac",
            field="dhcp.client_mac",
            children=(AggregationSpec(name="assigned_ip", field="dhcp.assigned_ip", size=None),),
        ),
        mapper=mac_entry,
    ),
    ReportKind.IP: ReportDefinition(
        kind=ReportKind.IP,
        discriminator=("dhcp.type", "reply"),
        aggregation=AggregationSpec(
            name="assigned_ip",
            field="dhcp.assigned_ip",
            children=(AggregationSpec(name="client_mac", field="dhcp.client_mac", size=None),),
        ),
        mapper=ip_entry,
    ),
}


def get_report_definition(kind: ReportKind) -> ReportDefinition:
    return REPORTS[kind]
