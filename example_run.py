"""
Run this script to see a full booking flow against the in-memory backend:
 - load the catalog
 - register a customer
 - add two products (3 turns in total) and try to go over the quota
 - print the summary in ARS and USD
 - submit the booking and print the result
"""

from datetime import datetime, timedelta

from booking_schemas import BookingForm
from booking_tools import MockRentalApi
from exceptions import BookingValidationError
from widget import BookingWidget, describe_booking_result
import config


def main():
    config.configure_logging()
    widget = BookingWidget(MockRentalApi())
    widget.load_catalog()

    print("=== Catalog ===")
    for p in widget.state.products:
        print(f"- {p.id}: {p.name} ({p.category}) ${p.price_per_turn:.0f} ARS per turn")

    customer = widget.register_customer("Ana Pérez", "ana@example.com", "+54 11 1234-5678")
    print(f"\nRegistered customer {customer.id}")

    widget.add_product("jetski", quantity=1, turns=2, people_count=2, safety_quantity=2)
    widget.add_product("surf-adult", quantity=2, turns=1, people_count=1)
    try:
        widget.add_product("diving", quantity=1, turns=1, people_count=1)
    except BookingValidationError as e:
        print(f"\n{e.title}: {e.message}")

    for currency in ("ARS", "USD"):
        view = widget.summary_view(currency)
        print(f"\n=== Summary ({currency}) ===")
        for line in view.lines:
            print(f"- {line.product_name} ({line.quantity}x{line.turns} turns): {view.symbol}{line.total:.2f}")
        print(f"Subtotal: {view.symbol}{view.subtotal:.2f}")
        print(f"Discount ({view.discount_rate:.0%}): -{view.symbol}{view.discount_amount:.2f}")
        print(f"Total: {view.symbol}{view.total:.2f} {currency}")
        print(view.helper_text)

    form = BookingForm(
        customer_id=customer.id,
        start_time=datetime.now() + timedelta(days=1),
        method="cash",
        currency="USD",
    )
    result = widget.submit_booking(form)

    print("\n=== Booking result ===")
    for key, value in describe_booking_result(result).items():
        print(f"{key}: {value}")


if __name__ == "__main__":
    main()
