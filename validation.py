import re
from datetime import datetime
from typing import Optional

from booking_schemas import PhoneValidation
from exceptions import InvalidStartTimeError
import config

PHONE_ALLOWED = re.compile(r"^[0-9+\-\s()]+$")
DATE_PATTERN = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")


def validate_phone(raw: Optional[str], min_digits: int = config.MIN_PHONE_DIGITS) -> PhoneValidation:
    """
    Digits, spaces, parentheses, dashes and '+' only, with at least
    `min_digits` digits once everything else is stripped.
    """
    if not raw or not raw.strip():
        return PhoneValidation(valid=False, reason="The phone number is required.")

    if not PHONE_ALLOWED.match(raw):
        return PhoneValidation(
            valid=False,
            reason="The phone number may only contain digits, spaces, parentheses, dashes and the + sign.",
        )

    digits = re.sub(r"[^0-9]", "", raw)
    if not digits:
        return PhoneValidation(valid=False, reason="The phone number must contain at least one digit.")
    if len(digits) < min_digits:
        return PhoneValidation(
            valid=False,
            reason=f"The phone number must have at least {min_digits} digits.",
        )

    return PhoneValidation(valid=True)


def parse_start_time(date_text: str, hour: int, minute: int, now: Optional[datetime] = None) -> datetime:
    """
    Combine a dd/mm/yyyy date with an hour and minute into the booking start.
    Raises InvalidStartTimeError for malformed, impossible or past values.
    """
    now = now or datetime.now().astimezone()
    match = DATE_PATTERN.match((date_text or "").strip())
    if not match:
        raise InvalidStartTimeError("Invalid date format. Use dd/mm/yyyy.")

    day, month, year = (int(part) for part in match.groups())
    try:
        start_day = datetime(year, month, day, tzinfo=now.tzinfo)
    except ValueError:
        raise InvalidStartTimeError("Invalid date. Check the day, month and year.")

    if start_day.date() < now.date():
        raise InvalidStartTimeError("Bookings cannot be made for past dates.")

    try:
        start = start_day.replace(hour=int(hour), minute=int(minute))
    except (TypeError, ValueError):
        raise InvalidStartTimeError("Invalid start time. Select a valid hour and minute.")

    if start < now:
        raise InvalidStartTimeError("The selected date and time cannot be in the past.")
    return start
