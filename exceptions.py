from typing import List, Optional


class BookingWidgetError(Exception):
    """Base class for every error raised by the booking widget."""

    pass


class BookingValidationError(BookingWidgetError):
    """
    Input rejected before any network call is made.
    `title` is a short heading for the error dialog, the message is the body.
    """

    title = "Invalid booking"
    status_code = 422

    def __init__(self, message: str, title: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if title:
            self.title = title


class EmptySelectionError(BookingValidationError):
    title = "No products"

    def __init__(self):
        super().__init__("At least one product must be selected for the booking.")


class MissingFieldsError(BookingValidationError):
    title = "Required fields"

    def __init__(self, fields: List[str]):
        self.fields = fields
        super().__init__(f"Please complete all required fields: {', '.join(fields)}.")


class TurnLimitExceededError(BookingValidationError):
    title = "Turn limit exceeded"

    def __init__(self, product_name: str, current_total: int, requested_turns: int,
                 resulting_total: int, max_turns: int):
        self.product_name = product_name
        self.current_total = current_total
        self.requested_turns = requested_turns
        self.resulting_total = resulting_total
        super().__init__(
            f"The total number of turns cannot exceed {max_turns}.\n\n"
            f"Current turns: {current_total}\n"
            f"Turns requested for {product_name}: {requested_turns}\n"
            f"Resulting total: {resulting_total}"
        )


class InvalidTurnsError(BookingValidationError):
    title = "Invalid turns"

    def __init__(self, message: str = "Please select a valid number of turns."):
        super().__init__(message)


class InvalidQuantityError(BookingValidationError):
    title = "Invalid quantity"


class InvalidPhoneError(BookingValidationError):
    title = "Invalid phone"


class InvalidStartTimeError(BookingValidationError):
    title = "Invalid date"


class UnknownProductError(BookingValidationError):
    title = "Unknown product"
    status_code = 404

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product {product_id} is not in the catalog.")


class TurnsMismatchError(BookingWidgetError):
    """Declared total turns drifted from the sum of the selected lines."""

    def __init__(self, declared: int, actual: int):
        self.declared = declared
        self.actual = actual
        super().__init__(f"Declared total turns {declared} does not match selected turns {actual}")


class RentalApiError(BookingWidgetError):
    """Custom exception for rental backend errors."""

    DEFAULT_MESSAGE = "Request failed"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.DEFAULT_MESSAGE
        self.status_code = status_code
        super().__init__(self.message)
