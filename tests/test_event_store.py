import pytest

from apps.call_routing.event_store import EventStoreError, remote_cc_store
from apps.call_routing.routing_table import RoutingRule
from apps.call_routing.schemas import CallPayload

PAYLOAD = CallPayload(
    PBX_ID="pbx-1",
    CALL_ID="call-1",
    DIALED_NUMBER="+18005550100",
    CALLER_ID_NUMBER="+14155551234",
    CALLER_ID_NAME="JANE DOE",
)
CA = RoutingRule(state="CA", area_codes=("415",), extension="100")


def test_append_assigns_id_and_timestamp(events_store):
    record = events_store.append(PAYLOAD, "415", CA)
    assert record["id"] >= 1
    assert record["timestamp"] is not None
    assert record["AREA_CODE"] == "415"
    assert record["MATCHED_STATE"] == "CA"
    assert record["MATCHED_EXTENSION"] == "100"
    assert record["CALLER_ID_NAME"] == "JANE DOE"


def test_no_match_stores_nulls_together(events_store):
    record = events_store.append(PAYLOAD, "", None)
    assert record["AREA_CODE"] == ""
    assert record["MATCHED_STATE"] is None
    assert record["MATCHED_EXTENSION"] is None


def test_list_is_newest_first(events_store):
    ids = [events_store.append(PAYLOAD, "415", CA)["id"] for _ in range(4)]
    listed = [record["id"] for record in events_store.list()]
    assert listed == sorted(ids, reverse=True)


def test_list_limit(events_store):
    for _ in range(5):
        events_store.append(PAYLOAD, "415", None)
    assert len(events_store.list(limit=2)) == 2


def test_notify_store_uses_its_own_columns(calls_store):
    record = calls_store.append(PAYLOAD, "415", CA)
    assert record["CALLER_AREA_CODE"] == "415"
    assert record["State"] == "CA"
    assert record["Extension"] == "100"
    assert "MATCHED_EXTENSION" not in record


def test_stores_share_nothing(events_store, calls_store):
    events_store.append(PAYLOAD, "415", CA)
    assert calls_store.list() == []


def test_append_failure_raises(broken_session_factory):
    store = remote_cc_store(broken_session_factory)
    with pytest.raises(EventStoreError):
        store.append(PAYLOAD, "415", CA)


def test_list_failure_raises(broken_session_factory):
    store = remote_cc_store(broken_session_factory)
    with pytest.raises(EventStoreError):
        store.list()
