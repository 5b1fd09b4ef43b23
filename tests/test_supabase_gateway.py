"""Tests for the supabase gateway against a mocked client."""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import httpx
import pytest
from postgrest.exceptions import APIError

from shopdesk.domain.errors import GatewayError
from shopdesk.gateway.changes import ChangeKind
from shopdesk.gateway.supabase_gateway import SupabaseGateway


def make_response(data):
    response = MagicMock()
    response.data = data
    return response


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def gateway(client):
    return SupabaseGateway("https://example.supabase.co", "anon-key", client=client)


def test_list_all_selects_everything(gateway, client):
    client.table.return_value.select.return_value.execute.return_value = make_response(
        [{"id": "1", "name": "Mug"}]
    )

    assert gateway.list_all("products") == [{"id": "1", "name": "Mug"}]
    client.table.assert_called_with("products")
    client.table.return_value.select.assert_called_with("*")


def test_insert_sends_json_payload_and_returns_id(gateway, client):
    client.table.return_value.insert.return_value.execute.return_value = make_response([{"id": "42"}])
    events = []
    gateway.subscribe("products", events.append)

    record_id = gateway.insert("products", {"id": "ignored", "name": "Mug", "costPrice": Decimal("2.50")})

    assert record_id == "42"
    client.table.return_value.insert.assert_called_with({"name": "Mug", "costPrice": "2.50"})
    assert events[0].kind is ChangeKind.INSERT
    assert events[0].record_id == "42"


def test_update_filters_by_id(gateway, client):
    chain = client.table.return_value.update.return_value.eq.return_value
    chain.execute.return_value = make_response([{"id": "7"}])

    gateway.update("sales", "7", {"price": Decimal("10.00")})

    client.table.return_value.update.assert_called_with({"price": "10.00"})
    client.table.return_value.update.return_value.eq.assert_called_with("id", "7")


def test_delete_missing_row_raises(gateway, client):
    client.table.return_value.delete.return_value.eq.return_value.execute.return_value = make_response([])

    with pytest.raises(GatewayError, match="No record '9' in sales"):
        gateway.delete("sales", "9")


def test_api_error_becomes_gateway_error(gateway, client):
    client.table.return_value.select.return_value.execute.side_effect = APIError(
        {"message": "permission denied", "code": "42501"}
    )

    with pytest.raises(GatewayError, match="permission denied"):
        gateway.list_all("customers")


def test_network_error_becomes_gateway_error(gateway, client):
    client.table.return_value.select.return_value.execute.side_effect = httpx.ConnectError("offline")

    with pytest.raises(GatewayError, match="offline"):
        gateway.list_all("customers")


def test_unknown_collection_rejected_before_request(gateway, client):
    with pytest.raises(GatewayError):
        gateway.list_all("orders")
    client.table.assert_not_called()


def test_connect_creates_client_lazily():
    with patch("shopdesk.gateway.supabase_gateway.create_client") as create_client:
        gateway = SupabaseGateway("https://example.supabase.co", "anon-key")
        gateway.connect()
        gateway.connect()

    create_client.assert_called_once_with("https://example.supabase.co", "anon-key")


def test_connect_failure_becomes_gateway_error():
    with patch("shopdesk.gateway.supabase_gateway.create_client", side_effect=Exception("Invalid API key")):
        gateway = SupabaseGateway("https://example.supabase.co", "bad")
        with pytest.raises(GatewayError, match="Invalid API key"):
            gateway.connect()
