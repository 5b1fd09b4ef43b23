"""Tests for create/edit sessions."""

from datetime import date
from decimal import Decimal

import pytest

from shopdesk.domain.edit_session import EditSession, SessionState
from shopdesk.domain.entities import Customer, Purchase, Transaction, TransactionType
from shopdesk.domain.errors import DomainError, NotFoundError, ValidationError
from shopdesk.domain.kinds import CUSTOMERS, PRODUCTS, SUBSCRIPTIONS, TRANSACTIONS

TODAY = date(2024, 6, 10)


def session_for(gateway, kind):
    return EditSession(gateway, kind, today=lambda: TODAY)


def test_open_create_uses_defaults(fake_gateway):
    session = session_for(fake_gateway, SUBSCRIPTIONS)
    session.open_create()

    assert session.state is SessionState.CREATING
    assert session.draft["activation_date"] == TODAY
    assert session.draft["category"] == "General"
    assert session.draft["expiration_date"] is None


def test_open_create_with_preset_type(fake_gateway):
    session = session_for(fake_gateway, TRANSACTIONS)
    session.open_create(type=TransactionType.INCOME)
    assert session.draft["type"] is TransactionType.INCOME


def test_submit_create_inserts_and_closes(fake_gateway):
    session = session_for(fake_gateway, SUBSCRIPTIONS)
    session.open_create(name="Netflix", expiration_date=date(2024, 7, 10))

    assert session.submit() is True

    assert session.state is SessionState.CLOSED
    (call,) = fake_gateway.writes()
    assert call[0] == "insert"
    assert call[1] == "subscriptions"
    assert call[2] == {
        "name": "Netflix",
        "activationDate": "2024-06-10",
        "expirationDate": "2024-07-10",
        "notes": "",
        "category": "General",
    }


def test_missing_required_fields_block_submit(fake_gateway):
    session = session_for(fake_gateway, SUBSCRIPTIONS)
    session.open_create(name="   ")

    with pytest.raises(ValidationError) as excinfo:
        session.submit()

    assert set(excinfo.value.field_errors) == {"name", "expiration_date"}
    assert session.is_open
    assert fake_gateway.writes() == []


def test_numeric_fields_validated(fake_gateway):
    session = session_for(fake_gateway, PRODUCTS)
    session.open_create(name="Mug", supplier="Acme", cost_price="cheap", selling_price=Decimal("-1"))

    errors = session.validate()

    assert errors["cost_price"] == "must be a number"
    assert errors["selling_price"] == "must not be negative"


def test_float_amount_stored_as_decimal(fake_gateway):
    session = session_for(fake_gateway, TRANSACTIONS)
    session.open_create(person="Sara", description="Ads", amount=12.5)
    session.submit()

    (call,) = fake_gateway.writes()
    assert call[2]["amount"] == Decimal("12.5")
    assert call[2]["type"] == "expense"


def test_unknown_field_rejected(fake_gateway):
    session = session_for(fake_gateway, PRODUCTS)
    session.open_create()
    with pytest.raises(DomainError):
        session.set_field("colour", "red")


def test_submit_edit_updates_record(fake_gateway):
    fake_gateway.seed("transactions", {"id": "t1"})
    tx = Transaction(
        id="t1",
        type=TransactionType.EXPENSE,
        person="Ali",
        description="Stock",
        amount=Decimal("10"),
        date=date(2024, 6, 1),
    )
    session = session_for(fake_gateway, TRANSACTIONS)
    session.open_edit(tx)
    session.update(amount=Decimal("15"))

    assert session.submit() is True
    (call,) = fake_gateway.writes()
    assert call[:3] == ("update", "transactions", "t1")
    assert call[3]["amount"] == Decimal("15")


def test_gateway_failure_keeps_session_open(fake_gateway):
    fake_gateway.fail_next = 1
    session = session_for(fake_gateway, PRODUCTS)
    session.open_create(name="Mug", supplier="Acme", cost_price=Decimal("2"), selling_price=Decimal("5"))

    assert session.submit() is False

    assert session.is_open
    assert "store unavailable" in session.error
    # A second try goes through
    assert session.submit() is True
    assert session.error is None


def test_submit_without_open_session(fake_gateway):
    session = session_for(fake_gateway, PRODUCTS)
    with pytest.raises(DomainError):
        session.submit()


def test_cancel_discards_draft(fake_gateway):
    session = session_for(fake_gateway, PRODUCTS)
    session.open_create(name="Mug")
    session.cancel()
    assert session.state is SessionState.CLOSED
    assert session.draft == {}


def make_customer() -> Customer:
    return Customer(
        id="c1",
        name="Huda",
        purchases=(Purchase(id="p1", date=date(2024, 5, 1), details="Mug"),),
    )


def test_edit_draft_does_not_touch_original(fake_gateway):
    customer = make_customer()
    session = session_for(fake_gateway, CUSTOMERS)
    session.open_edit(customer)

    session.add_purchase(details="Cap")

    assert len(customer.purchases) == 1
    assert len(session.draft["purchases"]) == 2


def test_add_purchase_defaults_to_today(fake_gateway):
    session = session_for(fake_gateway, CUSTOMERS)
    session.open_create(name="Huda")

    purchase = session.add_purchase()

    assert purchase.date == TODAY
    assert purchase.details == ""
    assert len(purchase.id) == 8
    # Details are required before submitting
    assert session.validate() == {"purchases[0].details": "is required"}


def test_update_and_remove_purchase(fake_gateway):
    fake_gateway.seed("customers", {"id": "c1"})
    session = session_for(fake_gateway, CUSTOMERS)
    session.open_edit(make_customer())

    session.update_purchase("p1", "details", "Large mug")
    extra = session.add_purchase(details="Cap", purchase_date=date(2024, 6, 1))
    session.remove_purchase(extra.id)
    session.submit()

    (call,) = fake_gateway.writes()
    assert call[3]["purchases"] == [{"id": "p1", "date": "2024-05-01", "details": "Large mug"}]


def test_purchase_operations_on_unknown_id(fake_gateway):
    session = session_for(fake_gateway, CUSTOMERS)
    session.open_edit(make_customer())

    with pytest.raises(NotFoundError):
        session.update_purchase("nope", "details", "x")
    with pytest.raises(NotFoundError):
        session.remove_purchase("nope")
    with pytest.raises(DomainError):
        session.update_purchase("p1", "id", "x")


def test_purchases_only_on_customers(fake_gateway):
    session = session_for(fake_gateway, PRODUCTS)
    session.open_create()
    with pytest.raises(DomainError):
        session.add_purchase(details="Mug")
