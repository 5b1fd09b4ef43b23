"""Tests for in-process change notifications."""

from shopdesk.gateway.changes import ChangeEvent, ChangeHub, ChangeKind


def event(collection="sales"):
    return ChangeEvent(collection=collection, kind=ChangeKind.UPDATE, record_id="1")


def test_events_reach_only_their_collection():
    hub = ChangeHub()
    sales, products = [], []
    hub.subscribe("sales", sales.append)
    hub.subscribe("products", products.append)

    hub.publish(event("sales"))

    assert len(sales) == 1
    assert products == []


def test_unsubscribe_is_idempotent():
    hub = ChangeHub()
    received = []
    handle = hub.subscribe("sales", received.append)

    hub.unsubscribe(handle)
    hub.unsubscribe(handle)
    hub.publish(event())

    assert received == []
    assert hub.subscribed_collections() == set()


def test_failing_handler_does_not_block_others():
    hub = ChangeHub()
    received = []

    def broken(_event):
        raise RuntimeError("boom")

    hub.subscribe("sales", broken)
    hub.subscribe("sales", received.append)

    hub.publish(event())

    assert len(received) == 1
    assert hub.subscriber_count("sales") == 2
