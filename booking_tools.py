import time
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from booking_schemas import BookingDraft, BookingResult, Customer, Product
from exceptions import RentalApiError
import config
import pricing

DEFAULT_PRODUCTS = [
    {"_id": "jetski", "name": "JetSky", "category": "water", "pricePerTurn": 15000,
     "maxPeople": 2, "stock": 2, "requiresSafety": True, "safetyRequiredType": "helmet"},
    {"_id": "atv", "name": "Cuatriciclo", "category": "land", "pricePerTurn": 12000,
     "maxPeople": 2, "stock": 3, "requiresSafety": True, "safetyRequiredType": "helmet"},
    {"_id": "diving", "name": "Equipo de Buceo", "category": "water", "pricePerTurn": 8000,
     "maxPeople": 1, "stock": 5},
    {"_id": "surf-adult", "name": "Tabla de Surf (adultos)", "category": "water", "pricePerTurn": 5000,
     "maxPeople": 1, "stock": 4},
    {"_id": "surf-kids", "name": "Tabla de Surf (niños)", "category": "water", "pricePerTurn": 3500,
     "maxPeople": 1, "stock": 4},
]


class MockRentalApi:
    """
    In-memory stand-in for the rental backend: same methods as RentalApiClient,
    deterministic responses for demo / testing.
    """

    def __init__(self, products: Optional[List[dict]] = None, latency: float = 0.0):
        self.products = [Product.model_validate(p) for p in (products or DEFAULT_PRODUCTS)]
        self.customers: List[Customer] = []
        self.bookings: Dict[str, Dict[str, Any]] = {}
        self.latency = latency

    def _wait(self):
        # Simulate some latency
        if self.latency:
            time.sleep(self.latency)

    def list_products(self) -> List[Product]:
        self._wait()
        return list(self.products)

    def list_customers(self) -> List[Customer]:
        self._wait()
        return list(self.customers)

    def create_customer(self, name: str, email: str, phone: str) -> Customer:
        self._wait()
        if any(c.email == email for c in self.customers):
            raise RentalApiError("A customer with that email already exists", status_code=409)
        customer = Customer(
            id=f"cust-{uuid.uuid4().hex[:8]}",
            name=name,
            email=email,
            phone=phone,
            created_at=datetime.now(timezone.utc),
        )
        self.customers.append(customer)
        return customer

    def create_booking(self, draft: BookingDraft) -> BookingResult:
        self._wait()
        if not any(c.id == draft.customer_id for c in self.customers):
            raise RentalApiError("Customer not found", status_code=404)

        booking_id = f"book-{uuid.uuid4().hex[:8]}"
        start = draft.start_time
        end = start + timedelta(minutes=config.TURN_MINUTES * draft.total_turns)
        booking = {"_id": booking_id, "status": "booked", "startTime": start, "endTime": end}
        # the backend reports totals in the base currency
        payment = {
            "status": "paid" if draft.method == "card" else "pending",
            "total": pricing.convert(draft.amount, config.BASE_CURRENCY, source_currency=draft.currency),
            "method": draft.method,
            "currency": draft.currency,
        }
        if draft.method == "cash":
            payment["dueDate"] = start - timedelta(hours=config.PAYMENT_REMINDER_HOURS)

        self.bookings[booking_id] = {"booking": booking, "payment": payment}
        return BookingResult.model_validate(self.bookings[booking_id])

    def _get_booking(self, booking_id: str) -> Dict[str, Any]:
        if booking_id not in self.bookings:
            raise RentalApiError("Booking not found", status_code=404)
        return self.bookings[booking_id]

    def cancel_booking(self, booking_id: str) -> Dict[str, Any]:
        self._wait()
        record = self._get_booking(booking_id)
        record["booking"]["status"] = "cancelled"
        return {"_id": booking_id, "status": "cancelled"}

    def pay_booking_with_cash(self, booking_id: str, payment_data: Dict[str, Any]) -> Dict[str, Any]:
        self._wait()
        record = self._get_booking(booking_id)
        if record["booking"]["status"] == "cancelled":
            raise RentalApiError("Cannot pay a cancelled booking", status_code=400)
        record["payment"]["status"] = "paid"
        record["payment"].update(payment_data)
        return {"_id": booking_id, "status": "paid"}
