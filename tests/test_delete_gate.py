"""Tests for the delete confirmation gate."""

import pytest

from shopdesk.domain.delete_gate import DeleteGate, DeleteOutcome
from shopdesk.domain.errors import DomainError, GatewayError
from shopdesk.domain.kinds import SALES
from shopdesk.preferences import PreferenceStore


@pytest.fixture
def gate(fake_gateway, preferences):
    fake_gateway.seed("sales", {"id": "s1"}, {"id": "s2"})
    return DeleteGate(fake_gateway, SALES, preferences)


def test_request_stages_by_default(gate, fake_gateway):
    assert gate.request("s1") is DeleteOutcome.STAGED
    assert gate.staged_id == "s1"
    assert fake_gateway.writes() == []


def test_confirm_deletes_staged(gate, fake_gateway):
    gate.request("s1")

    assert gate.confirm() == "s1"

    assert fake_gateway.writes() == [("delete", "sales", "s1")]
    assert gate.staged_id is None


def test_cancel_forgets_staged(gate, fake_gateway):
    gate.request("s1")
    gate.cancel()

    assert gate.staged_id is None
    with pytest.raises(DomainError):
        gate.confirm()
    assert fake_gateway.writes() == []


def test_dont_ask_again_skips_future_confirmation(gate, fake_gateway, preferences):
    gate.request("s1")
    gate.confirm(dont_ask_again=True)

    # Persisted: a fresh store on the same file sees it
    assert PreferenceStore(preferences.path).skip_delete_warning

    assert gate.request("s2") is DeleteOutcome.DELETED
    assert fake_gateway.writes() == [("delete", "sales", "s1"), ("delete", "sales", "s2")]


def test_gateway_failure_propagates_and_clears_stage(gate, fake_gateway):
    gate.request("missing")

    with pytest.raises(GatewayError):
        gate.confirm()

    assert gate.staged_id is None
