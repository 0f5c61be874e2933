from typing import Sequence

from booking_schemas import BookingDraft, BookingForm, BookingItemPayload, SelectionLine
from exceptions import EmptySelectionError, MissingFieldsError, TurnsMismatchError
from pricing import convert, price_summary, total_turns

REQUIRED_FIELDS = {
    "customer_id": "customer",
    "start_time": "start time",
    "total_turns": "total turns",
    "method": "payment method",
    "currency": "currency",
}


def build_draft(lines: Sequence[SelectionLine], form: BookingForm) -> BookingDraft:
    """
    Turn the selected lines and the booking form into the payload the backend
    expects. Checks run in order and the first failure is raised:
    empty selection, missing fields, then the turn-total consistency guard.
    """
    if not lines:
        raise EmptySelectionError()

    missing = [label for field, label in REQUIRED_FIELDS.items() if not getattr(form, field)]
    if missing:
        raise MissingFieldsError(missing)

    selected_turns = total_turns(lines)
    if selected_turns != form.total_turns:
        raise TurnsMismatchError(form.total_turns, selected_turns)

    # backend expects the amount already expressed in the chosen currency
    summary = price_summary(lines)
    amount = convert(summary.total, form.currency)

    return BookingDraft(
        customer_id=form.customer_id,
        start_time=form.start_time,
        total_turns=form.total_turns,
        method=form.method,
        currency=form.currency,
        amount=amount,
        items=[
            BookingItemPayload(
                product_id=line.product_id,
                quantity=line.quantity,
                turns=line.turns,
                people_count=line.people_count,
                safety_items=line.safety_items,
            )
            for line in lines
        ],
    )
