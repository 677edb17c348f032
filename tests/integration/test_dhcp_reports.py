"""
Integration tests running each DHCP report end to end against a mocked store.
"""

import json

import pytest

from tools.reports import dhcp_report
from report_types.domain import EventQueryParams
from report_types.errors import DecodeError, StoreTimeout
from elasticsearch import ConnectionTimeout


def latest_bucket(mac, event, doc_count=1):
    return {
        "key": mac,
        "doc_count": doc_count,
        "latest": {
            "hits": {
                "total": {"value": doc_count},
                "max_score": None,
                "hits": [{"_index": "logstash-2024.01.15", "_id": mac, "_score": None, "_source": event}],
            }
        },
    }


def terms_bucket(key, doc_count, name, child_keys):
    return {
        "key": key,
        "doc_count": doc_count,
        name: {
            "doc_count_error_upper_bound": 0,
            "sum_other_doc_count": 0,
            "buckets": [{"key": k, "doc_count": 1} for k in child_keys],
        },
    }


class TestLatestEventReports:
    """ack and request reports."""

    @pytest.mark.parametrize("report", ["ack", "request"])
    def test_latest_event_per_mac(self, mock_es_client, report_config, aggregation_response, lease_event, report):
        other = dict(lease_event, dhcp=dict(lease_event["dhcp"], client_mac="aa:bb:cc:dd:ee:02"))
        mock_es_client.search.return_value = aggregation_response("client_mac", [
            latest_bucket("aa:bb:cc:dd:ee:01", lease_event, doc_count=4),
            latest_bucket("aa:bb:cc:dd:ee:02", other),
        ])

        result = dhcp_report(report)

        assert result == {"data": [lease_event, other]}
        body = mock_es_client.search.call_args[1]["body"]
        assert body["query"]["bool"]["filter"][-1] == {"term": {"dhcp.dhcp_type": report}}
        assert body["aggs"]["client_mac"]["aggs"]["latest"]["top_hits"]["size"] == 1

    def test_bucket_without_hit_fails_report(self, mock_es_client, report_config, aggregation_response):
        mock_es_client.search.return_value = aggregation_response("client_mac", [
            {"key": "aa:bb", "doc_count": 1, "latest": {"hits": {"hits": []}}},
        ])

        with pytest.raises(DecodeError):
            dhcp_report("ack")


class TestServersReport:
    """servers report."""

    def test_one_record_per_server(self, mock_es_client, report_config, aggregation_response):
        mock_es_client.search.return_value = aggregation_response("servers", [
            {"key": "10.0.0.1", "doc_count": 120},
            {"key": "192.168.1.1", "doc_count": 7},
        ])

        result = dhcp_report("servers")

        assert result == {"data": [
            {"ip": "10.0.0.1", "count": 120},
            {"ip": "192.168.1.1", "count": 7},
        ]}
        body = mock_es_client.search.call_args[1]["body"]
        assert body["aggs"] == {"servers": {"terms": {"field": "src_ip.keyword", "size": 10000}}}
        assert body["size"] == 0


class TestAssociationReports:
    """mac and ip reports."""

    def test_mac_scenario(self, mock_es_client, report_config):
        mock_es_client.search.return_value = {
            "aggregations": {
                "client_mac": {
                    "buckets": [
                        {
                            "key": "aa:bb",
                            "doc_count": 3,
                            "assigned_ip": {"buckets": [{"key": "10.0.0.5"}, {"key": "0.0.0.0"}]},
                        }
                    ]
                }
            }
        }

        assert dhcp_report("mac") == {"data": [{"mac": "aa:bb", "addrs": ["10.0.0.5"]}]}

    def test_ip_report_skips_unassigned(self, mock_es_client, report_config, aggregation_response):
        mock_es_client.search.return_value = aggregation_response("assigned_ip", [
            terms_bucket("0.0.0.0", 30, "client_mac", ["aa:bb", "cc:dd"]),
            terms_bucket("10.0.0.5", 4, "client_mac", ["aa:bb", "ee:ff"]),
            terms_bucket("10.0.0.6", 1, "client_mac", []),
        ])

        result = dhcp_report("ip")

        assert result == {"data": [
            {"ip": "10.0.0.5", "macs": ["aa:bb", "ee:ff"]},
            {"ip": "10.0.0.6", "macs": []},
        ]}
        for record in result["data"]:
            assert record["ip"] != "0.0.0.0"
            assert "0.0.0.0" not in record["macs"]

    def test_addresses_keep_engine_order(self, mock_es_client, report_config, aggregation_response):
        mock_es_client.search.return_value = aggregation_response("client_mac", [
            terms_bucket("aa:bb", 9, "assigned_ip", ["10.0.0.9", "0.0.0.0", "10.0.0.2", "10.0.0.5"]),
        ])

        assert dhcp_report("mac")["data"][0]["addrs"] == ["10.0.0.9", "10.0.0.2", "10.0.0.5"]

    def test_malformed_child_key_fails_report(self, mock_es_client, report_config, aggregation_response):
        mock_es_client.search.return_value = aggregation_response("client_mac", [
            {"key": "aa:bb", "doc_count": 1, "assigned_ip": {"buckets": [{"key": ["10.0.0.5"]}]}},
        ])

        with pytest.raises(DecodeError):
            dhcp_report("mac")


class TestSharedBehaviour:
    """Properties common to every report."""

    def test_filters_sent(self, mock_es_client, report_config, min_timestamp):
        params = EventQueryParams(min_timestamp=min_timestamp, query_string="dhcp.hostname:laptop*")

        dhcp_report("ip", params)

        filters = mock_es_client.search.call_args[1]["body"]["query"]["bool"]["filter"]
        assert filters == [
            {"term": {"event_type": "dhcp"}},
            {"range": {"@timestamp": {"gte": "2024-01-15T10:00:00+00:00"}}},
            {"query_string": {"query": "dhcp.hostname:laptop*", "default_operator": "AND"}},
            {"term": {"dhcp.type": "reply"}},
        ]

    def test_repeated_calls_identical(self, mock_es_client, report_config, aggregation_response):
        mock_es_client.search.return_value = aggregation_response("client_mac", [
            terms_bucket("aa:bb", 2, "assigned_ip", ["10.0.0.5"]),
            terms_bucket("cc:dd", 1, "assigned_ip", ["0.0.0.0"]),
        ])

        first = json.dumps(dhcp_report("mac"))
        second = json.dumps(dhcp_report("mac"))

        assert first == second
        bodies = [call[1]["body"] for call in mock_es_client.search.call_args_list]
        assert bodies[0] == bodies[1]

    def test_empty_child_buckets(self, mock_es_client, report_config, aggregation_response):
        mock_es_client.search.return_value = aggregation_response("client_mac", [
            terms_bucket("aa:bb", 2, "assigned_ip", []),
        ])

        assert dhcp_report("mac") == {"data": [{"mac": "aa:bb", "addrs": []}]}

    def test_store_timeout_propagates(self, mock_es_client, report_config):
        mock_es_client.search.side_effect = ConnectionTimeout("timed out")

        with pytest.raises(StoreTimeout):
            dhcp_report("servers")
        assert mock_es_client.search.call_count == 1
