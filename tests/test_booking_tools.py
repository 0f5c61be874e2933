from datetime import datetime, timedelta

import pytest

from booking_schemas import BookingDraft, BookingItemPayload
from catalog import DEFAULT_IMAGE, placeholder_image_url, product_image_url
from exceptions import RentalApiError
import example_run


def draft_for(customer_id: str, method: str = "cash", turns: int = 2) -> BookingDraft:
    return BookingDraft(
        customer_id=customer_id, start_time=datetime(2026, 6, 1, 10, 0), total_turns=turns,
        method=method, currency="EUR", amount=12.5,
        items=[BookingItemPayload(product_id="diving", quantity=1, turns=turns, people_count=1)],
    )


def test_duplicate_customer_email(mock_api):
    mock_api.create_customer("Ana", "ana@example.com", "123456")

    with pytest.raises(RentalApiError) as exc_info:
        mock_api.create_customer("Ana B", "ana@example.com", "654321")
    assert exc_info.value.status_code == 409


def test_cash_booking_window_and_due_date(mock_api):
    customer = mock_api.create_customer("Ana", "ana@example.com", "123456")

    result = mock_api.create_booking(draft_for(customer.id))

    assert result.booking.end_time - result.booking.start_time == timedelta(minutes=60)
    assert result.payment.total == pytest.approx(12500)
    assert result.payment.due_date == datetime(2026, 6, 1, 8, 0)


def test_paying_a_cancelled_booking_fails(mock_api):
    customer = mock_api.create_customer("Ana", "ana@example.com", "123456")
    booking_id = mock_api.create_booking(draft_for(customer.id, method="card")).booking.id
    mock_api.cancel_booking(booking_id)

    with pytest.raises(RentalApiError, match="cancelled"):
        mock_api.pay_booking_with_cash(booking_id, {})


def test_product_images(mock_api):
    by_id = {p.id: p for p in mock_api.list_products()}

    assert product_image_url(by_id["atv"]) == "img/cuatri.avif"
    renamed = by_id["atv"].model_copy(update={"name": "Kayak doble"})
    assert product_image_url(renamed) == DEFAULT_IMAGE
    assert placeholder_image_url(renamed).endswith("?text=Kayak%20doble")


def test_example_run_completes(capsys):
    example_run.main()

    out = capsys.readouterr().out
    assert "Turn limit exceeded" in out
    assert "Total: US$36.00 USD" in out
    assert "status: Booked" in out
