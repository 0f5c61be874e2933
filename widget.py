import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from booking_schemas import BookingForm, BookingResult, Customer, Product, SelectionLine, SummaryLine, SummaryView
from drafts import build_draft
from exceptions import InvalidPhoneError, MissingFieldsError, RentalApiError, TurnsMismatchError, UnknownProductError
from selection_manager import SelectionManager
from validation import validate_phone
import config
import pricing

logger = logging.getLogger(__name__)

BOOKING_STATUS_LABELS = {
    "booked": "Booked",
    "refunded": "Refunded",
    "cancelled": "Cancelled",
}
PAYMENT_STATUS_LABELS = {
    "pending": "Pending",
    "paid": "Paid",
    "refundedTotal": "Fully refunded",
    "refundedPartial": "Partially refunded",
}


@dataclass
class WidgetState:
    products: List[Product] = field(default_factory=list)
    customers: List[Customer] = field(default_factory=list)
    selection: SelectionManager = field(default_factory=SelectionManager)
    total_turns: int = 0
    # inline error per collection when a catalog load failed
    load_errors: Dict[str, str] = field(default_factory=dict)


class BookingWidget:
    """
    Booking screen logic without any rendering: catalog, current selection,
    summary in the selected currency, customer registration and submission.
    `api` is a RentalApiClient or anything with the same methods.
    """

    def __init__(self, api, state: Optional[WidgetState] = None):
        self.api = api
        self.state = state or WidgetState()

    # Catalog

    def load_catalog(self) -> Dict[str, str]:
        """
        Load products and customers. A failed load leaves that collection empty
        and records an inline error instead of raising.
        """
        self.state.load_errors = {}
        try:
            self.state.products = self.api.list_products()
        except RentalApiError as e:
            logger.error(f"Error loading products: {e.message}")
            self.state.products = []
            self.state.load_errors["products"] = f"Could not load products: {e.message}"
        try:
            self.state.customers = self.api.list_customers()
        except RentalApiError as e:
            logger.error(f"Error loading customers: {e.message}")
            self.state.customers = []
            self.state.load_errors["customers"] = f"Could not load customers: {e.message}"
        return self.state.load_errors

    def find_product(self, product_id: str) -> Product:
        for product in self.state.products:
            if product.id == product_id:
                return product
        raise UnknownProductError(product_id)

    # Selection

    def turn_options_for(self, product_id: str) -> List[int]:
        self.find_product(product_id)
        return self.state.selection.turn_options(product_id)

    def add_product(self, product_id: str, quantity: int, turns: int, people_count: int,
                    safety_quantity: Optional[int] = None) -> SelectionLine:
        product = self.find_product(product_id)
        line = self.state.selection.add_product(product, quantity, turns, people_count, safety_quantity)
        self.sync_total_turns()
        return line

    def remove_product(self, product_id: str) -> bool:
        removed = self.state.selection.remove_product(product_id)
        self.sync_total_turns()
        return removed

    def sync_total_turns(self) -> int:
        # the booking total always mirrors the sum of the selected lines
        self.state.total_turns = self.state.selection.total_turns()
        return self.state.total_turns

    def summary_view(self, currency: str = config.BASE_CURRENCY) -> Optional[SummaryView]:
        """Summary of the current selection converted to `currency`, None when empty."""
        summary = self.state.selection.summary()
        if summary is None:
            return None

        helper_text = "The amount is calculated automatically from the selected products and turns."
        if currency != config.BASE_CURRENCY and currency in config.EXCHANGE_RATES:
            rate = config.EXCHANGE_RATES[currency]
            helper_text += f" Conversion: 1 {currency} = {rate:g} {config.BASE_CURRENCY}"

        return SummaryView(
            currency=currency,
            symbol=pricing.currency_symbol(currency),
            lines=[
                SummaryLine(
                    product_name=line.product_name,
                    quantity=line.quantity,
                    turns=line.turns,
                    total=pricing.convert(line.line_total(), currency),
                )
                for line in self.state.selection.lines
            ],
            subtotal=pricing.convert(summary.subtotal, currency),
            discount_rate=summary.discount_rate,
            discount_amount=pricing.convert(summary.discount_amount, currency),
            total=pricing.convert(summary.total, currency),
            helper_text=helper_text,
        )

    # Submission

    def submit_booking(self, form: BookingForm) -> Optional[BookingResult]:
        """
        Build and send the booking. Returns None without submitting when the
        declared total turns had drifted (the total is recomputed instead).
        The selection is cleared only after the backend accepted the booking.
        """
        if form.total_turns is None and len(self.state.selection):
            form = form.model_copy(update={"total_turns": self.state.total_turns})

        try:
            draft = build_draft(self.state.selection.lines, form)
        except TurnsMismatchError as e:
            logger.warning(f"Turn total drift detected, recalculating: {e}")
            self.sync_total_turns()
            return None

        try:
            result = self.api.create_booking(draft)
        except RentalApiError as e:
            logger.error(f"Error creating booking: {e.message}")
            raise

        if result.booking:
            logger.info(f"Booking {result.booking.id} created for customer {draft.customer_id}")
        self.state.selection.clear()
        self.sync_total_turns()
        return result

    def register_customer(self, name: str, email: str, phone: str) -> Customer:
        missing = [label for label, value in (("name", name), ("email", email), ("phone", phone)) if not value]
        if missing:
            raise MissingFieldsError(missing)

        phone_check = validate_phone(phone)
        if not phone_check.valid:
            raise InvalidPhoneError(phone_check.reason)

        try:
            customer = self.api.create_customer(name, email, phone)
        except RentalApiError as e:
            logger.error(f"Error creating customer: {e.message}")
            raise

        self.state.customers.append(customer)
        logger.info(f"Customer {customer.id} registered")
        return customer

    def cancel_booking(self, booking_id: str) -> Optional[Dict[str, Any]]:
        try:
            return self.api.cancel_booking(booking_id)
        except RentalApiError as e:
            logger.error(f"Error cancelling booking {booking_id}: {e.message}")
            raise

    def pay_booking_with_cash(self, booking_id: str, payment_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            return self.api.pay_booking_with_cash(booking_id, payment_data)
        except RentalApiError as e:
            logger.error(f"Error paying booking {booking_id} in cash: {e.message}")
            raise


def describe_booking_result(result: BookingResult) -> Dict[str, Any]:
    """
    Display data for a booking answer: translated statuses and the payment
    total converted from the base currency to the currency used to book.
    """
    if not result or not result.booking:
        return {
            "success": False,
            "message": "The operation could not be completed. Please try again later.",
        }

    booking = result.booking
    view: Dict[str, Any] = {
        "success": True,
        "booking_id": booking.id,
        "status": BOOKING_STATUS_LABELS.get(booking.status, booking.status),
        "start_time": booking.start_time.isoformat(),
        "end_time": booking.end_time.isoformat(),
    }

    payment = result.payment
    if payment:
        currency = payment.currency or config.BASE_CURRENCY
        total = pricing.convert(payment.total, currency)
        view["payment"] = {
            "status": PAYMENT_STATUS_LABELS.get(payment.status, payment.status),
            "total": total,
            "total_display": pricing.format_money(total, currency),
            "method": "Card" if payment.method == "card" else "Cash",
        }
        if payment.status == "pending":
            view["payment"]["reminder"] = (
                f"Remember that the booking must be paid at least "
                f"{config.PAYMENT_REMINDER_HOURS} hours before it starts."
            )
            view["payment"]["due_date"] = payment.due_date.isoformat() if payment.due_date else None
    return view
