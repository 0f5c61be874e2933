from datetime import datetime
from unittest.mock import MagicMock

import pytest
import requests

from booking_schemas import BookingDraft, BookingItemPayload
from exceptions import RentalApiError
from rental_api import RentalApiClient
import config

HEADERS = {"Content-Type": "application/json"}


def fake_response(payload=None, status=200, content=b"{}"):
    response = MagicMock()
    response.ok = 200 <= status < 300
    response.status_code = status
    response.content = content
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return RentalApiClient("http://api.test/", session=session, timeout=None)


def test_list_products_parses_backend_json(client, session):
    session.request.return_value = fake_response([
        {"_id": "p1", "name": "JetSky", "category": "water", "pricePerTurn": 15000,
         "maxPeople": 2, "stock": 2, "requiresSafety": True, "safetyRequiredType": "helmet"},
    ])

    products = client.list_products()

    session.request.assert_called_once_with("GET", "http://api.test/product", json=None, headers=HEADERS, timeout=None)
    assert products[0].id == "p1"
    assert products[0].price_per_turn == 15000
    assert products[0].safety_required_type == "helmet"


def test_create_customer_posts_form(client, session):
    session.request.return_value = fake_response(
        {"_id": "c1", "name": "Ana", "email": "ana@example.com", "phone": "123456",
         "createdAt": "2026-05-10T12:00:00Z"}
    )

    customer = client.create_customer("Ana", "ana@example.com", "123456")

    session.request.assert_called_once_with(
        "POST", "http://api.test/customer",
        json={"name": "Ana", "email": "ana@example.com", "phone": "123456"},
        headers=HEADERS, timeout=None,
    )
    assert customer.id == "c1"
    assert customer.created_at.year == 2026


def test_create_booking_sends_draft_payload(client, session):
    draft = BookingDraft(
        customer_id="c1", start_time=datetime(2026, 6, 1, 10, 0), total_turns=1, method="cash",
        currency="ARS", amount=5000,
        items=[BookingItemPayload(product_id="p1", quantity=1, turns=1, people_count=1)],
    )
    session.request.return_value = fake_response({
        "booking": {"_id": "b1", "status": "booked",
                    "startTime": "2026-06-01T10:00:00", "endTime": "2026-06-01T10:30:00"},
        "payment": {"status": "pending", "total": 5000, "method": "cash"},
    })

    result = client.create_booking(draft)

    method, url = session.request.call_args.args
    assert (method, url) == ("POST", "http://api.test/booking")
    assert session.request.call_args.kwargs["json"]["items"][0]["productId"] == "p1"
    assert result.booking.id == "b1"
    assert result.payment.due_date is None


def test_cancel_and_pay_cash_endpoints(client, session):
    session.request.return_value = fake_response({"ok": True})

    client.cancel_booking("b1")
    session.request.assert_called_with("PATCH", "http://api.test/booking/cancel/b1", json=None,
                                       headers=HEADERS, timeout=None)

    client.pay_booking_with_cash("b1", {"amount": 5000})
    session.request.assert_called_with("POST", "http://api.test/payment/payCash/b1", json={"amount": 5000},
                                       headers=HEADERS, timeout=None)


def test_server_message_is_surfaced(client, session):
    session.request.return_value = fake_response({"message": "Not enough stock"}, status=400)

    with pytest.raises(RentalApiError) as exc_info:
        client.list_customers()

    assert exc_info.value.message == "Not enough stock"
    assert exc_info.value.status_code == 400


@pytest.mark.parametrize("payload", [{}, ValueError("not json"), ["unexpected"]])
def test_default_message_without_server_message(client, session, payload):
    session.request.return_value = fake_response(payload, status=500)

    with pytest.raises(RentalApiError, match="Request failed"):
        client.get("/product")


def test_transport_errors_become_api_errors(client, session):
    session.request.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(RentalApiError, match="connection refused") as exc_info:
        client.get("/product")

    assert exc_info.value.status_code is None


@pytest.mark.parametrize("status, content", [(204, b""), (200, b"")])
def test_empty_success_body_returns_none(client, session, status, content):
    session.request.return_value = fake_response(ValueError("no body"), status=status, content=content)

    assert client.cancel_booking("b1") is None


def test_invalid_json_on_success_becomes_api_error(client, session):
    session.request.return_value = fake_response(ValueError("Expecting value"), content=b"<html>ok</html>")

    with pytest.raises(RentalApiError, match="Invalid JSON") as exc_info:
        client.pay_booking_with_cash("b1", {"amount": 5000})

    assert exc_info.value.status_code == 200


def test_base_url_defaults_to_configuration(session, monkeypatch):
    monkeypatch.setattr(config, "RENTAL_API_BASE_URL", "http://configured.test/")

    assert RentalApiClient(None, session=session).base_url == "http://configured.test"
