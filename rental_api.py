"""
Client for the remote rental backend (products, customers, bookings, payments).
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from booking_schemas import BookingDraft, BookingResult, Customer, Product
from exceptions import RentalApiError
import config

logger = logging.getLogger(__name__)


class RentalApiClient:
    """
    Thin JSON wrapper over the backend endpoints.
    Any non-2xx answer raises RentalApiError with the server's `message`.
    """

    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = config.RENTAL_API_TIMEOUT):
        self.base_url = (base_url or config.RENTAL_API_BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, endpoint: str, data: Optional[dict] = None) -> Any:
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.request(
                method,
                url,
                json=data,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Error in {method} {endpoint}: {e}")
            raise RentalApiError(str(e)) from e

        if not response.ok:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            message = payload.get("message") if isinstance(payload, dict) else None
            logger.error(f"Error in {method} {endpoint}: {response.status_code} {message or ''}".rstrip())
            raise RentalApiError(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Error in {method} {endpoint}: invalid JSON in {response.status_code} response")
            raise RentalApiError("Invalid JSON response from server", status_code=response.status_code) from e

    def get(self, endpoint: str) -> Any:
        return self._request("GET", endpoint)

    def post(self, endpoint: str, data: dict) -> Any:
        return self._request("POST", endpoint, data)

    def patch(self, endpoint: str, data: Optional[dict] = None) -> Any:
        return self._request("PATCH", endpoint, data)

    # Application endpoints

    def list_products(self) -> List[Product]:
        return [Product.model_validate(p) for p in self.get("/product")]

    def list_customers(self) -> List[Customer]:
        return [Customer.model_validate(c) for c in self.get("/customer")]

    def create_customer(self, name: str, email: str, phone: str) -> Customer:
        created = self.post("/customer", {"name": name, "email": email, "phone": phone})
        return Customer.model_validate(created)

    def create_booking(self, draft: BookingDraft) -> BookingResult:
        return BookingResult.model_validate(self.post("/booking", draft.to_payload()))

    def cancel_booking(self, booking_id: str) -> Optional[Dict[str, Any]]:
        return self.patch(f"/booking/cancel/{booking_id}")

    def pay_booking_with_cash(self, booking_id: str, payment_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return self.post(f"/payment/payCash/{booking_id}", payment_data)
