import threading
from typing import Any, Dict, Literal, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from booking_schemas import BookingForm
from catalog import placeholder_image_url, product_image_url
from exceptions import BookingValidationError, RentalApiError
from rental_api import RentalApiClient
from validation import parse_start_time
from widget import BookingWidget, describe_booking_result
import config

app = FastAPI(title="Rental booking widget")

_widget: Optional[BookingWidget] = None
_widget_lock = threading.Lock()


def get_widget() -> BookingWidget:
    """One widget per process, loaded from the configured backend on first use."""
    global _widget
    with _widget_lock:
        if _widget is None:
            config.configure_logging()
            widget = BookingWidget(RentalApiClient())
            widget.load_catalog()
            _widget = widget
    return _widget


class LineRequest(BaseModel):
    quantity: int = 1
    turns: int
    people_count: int = 1
    safety_quantity: Optional[int] = None


class CustomerRequest(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""


class BookingSubmission(BaseModel):
    customer_id: Optional[str] = None
    start_date: Optional[str] = Field(default=None, description="dd/mm/yyyy")
    start_hour: Optional[int] = None
    start_minute: int = 0
    total_turns: Optional[int] = None
    method: Optional[Literal["cash", "card"]] = None
    currency: str = config.BASE_CURRENCY


@app.exception_handler(BookingValidationError)
async def validation_error_handler(request: Request, exc: BookingValidationError):
    return JSONResponse(status_code=exc.status_code, content={"title": exc.title, "message": exc.message})


@app.exception_handler(RentalApiError)
async def rental_api_error_handler(request: Request, exc: RentalApiError):
    return JSONResponse(status_code=502, content={"title": "Backend error", "message": exc.message})


@app.get("/products")
def list_products(widget: BookingWidget = Depends(get_widget)):
    products = []
    for product in widget.state.products:
        entry = product.model_dump(mode="json", by_alias=True)
        entry["image"] = product_image_url(product)
        entry["placeholder"] = placeholder_image_url(product)
        products.append(entry)
    return {"products": products, "error": widget.state.load_errors.get("products")}


@app.get("/products/{product_id}/turn-options")
def turn_options(product_id: str, widget: BookingWidget = Depends(get_widget)):
    options = widget.turn_options_for(product_id)
    return {
        "options": [{"turns": t, "minutes": t * config.TURN_MINUTES} for t in options],
        "current_turns": widget.state.selection.total_turns(),
        "available_turns": widget.state.selection.check(product_id, 0).available_turns,
    }


@app.get("/customers")
def list_customers(widget: BookingWidget = Depends(get_widget)):
    return {
        "customers": [c.model_dump(mode="json", by_alias=True) for c in widget.state.customers],
        "error": widget.state.load_errors.get("customers"),
    }


@app.post("/customers", status_code=201)
def create_customer(body: CustomerRequest, widget: BookingWidget = Depends(get_widget)):
    customer = widget.register_customer(body.name, body.email, body.phone)
    return customer.model_dump(mode="json", by_alias=True)


@app.get("/selection")
def get_selection(currency: str = config.BASE_CURRENCY, widget: BookingWidget = Depends(get_widget)):
    summary = widget.summary_view(currency)
    return {
        "lines": [line.model_dump(mode="json", by_alias=True) for line in widget.state.selection.lines],
        "total_turns": widget.state.total_turns,
        "remaining_turns": widget.state.selection.remaining_turns(),
        "summary": summary.model_dump() if summary else None,
    }


@app.put("/selection/{product_id}")
def put_selection_line(product_id: str, body: LineRequest, widget: BookingWidget = Depends(get_widget)):
    line = widget.add_product(product_id, body.quantity, body.turns, body.people_count, body.safety_quantity)
    return line.model_dump(mode="json", by_alias=True)


@app.delete("/selection/{product_id}")
def delete_selection_line(product_id: str, widget: BookingWidget = Depends(get_widget)):
    return {"removed": widget.remove_product(product_id), "total_turns": widget.state.total_turns}


@app.post("/bookings")
def create_booking(body: BookingSubmission, widget: BookingWidget = Depends(get_widget)):
    start_time = None
    if body.start_date and body.start_hour is not None:
        start_time = parse_start_time(body.start_date, body.start_hour, body.start_minute)
    form = BookingForm(
        customer_id=body.customer_id,
        start_time=start_time,
        total_turns=body.total_turns,
        method=body.method,
        currency=body.currency,
    )
    result = widget.submit_booking(form)
    if result is None:
        # turn total was out of sync, the widget recomputed it and nothing was sent
        return {"submitted": False, "total_turns": widget.state.total_turns}
    return {"submitted": True, "result": describe_booking_result(result)}


@app.patch("/bookings/{booking_id}/cancel")
def cancel_booking(booking_id: str, widget: BookingWidget = Depends(get_widget)):
    return widget.cancel_booking(booking_id)


@app.post("/bookings/{booking_id}/pay-cash")
def pay_cash(booking_id: str, payment_data: Dict[str, Any], widget: BookingWidget = Depends(get_widget)):
    return widget.pay_booking_with_cash(booking_id, payment_data)
