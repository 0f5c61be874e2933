"""
Shared fixtures: catalog products, selection lines and a widget wired to the
in-memory backend.
"""
import pytest

from booking_schemas import Product, SelectionLine
from booking_tools import MockRentalApi
from widget import BookingWidget


def _make_line(product_id: str, price: float, quantity: int = 1, turns: int = 1, people: int = 1) -> SelectionLine:
    return SelectionLine(
        product_id=product_id,
        product_name=product_id.title(),
        quantity=quantity,
        turns=turns,
        people_count=people,
        price_per_turn=price,
    )


@pytest.fixture
def jetski() -> Product:
    return Product.model_validate({
        "_id": "jetski", "name": "JetSky", "category": "water", "pricePerTurn": 15000,
        "maxPeople": 2, "stock": 2, "requiresSafety": True, "safetyRequiredType": "helmet",
    })


@pytest.fixture
def surfboard() -> Product:
    return Product.model_validate({
        "_id": "surf-adult", "name": "Tabla de Surf (adultos)", "category": "water",
        "pricePerTurn": 5000, "maxPeople": 1, "stock": 4,
    })


@pytest.fixture
def mock_api() -> MockRentalApi:
    return MockRentalApi()


@pytest.fixture
def widget(mock_api: MockRentalApi) -> BookingWidget:
    """Widget with the default catalog already loaded."""
    w = BookingWidget(mock_api)
    w.load_catalog()
    return w


@pytest.fixture
def make_line():
    """Factory for selection lines: make_line(product_id, price, quantity=1, turns=1)."""
    return _make_line
