import logging
import os
from typing import Optional

from dotenv import load_dotenv

# Values can be overridden from a .env file next to the project
load_dotenv()

RENTAL_API_BASE_URL = os.getenv("RENTAL_API_BASE_URL", "http://localhost:3000")
# No timeout unless one is configured explicitly
RENTAL_API_TIMEOUT = float(os.getenv("RENTAL_API_TIMEOUT")) if os.getenv("RENTAL_API_TIMEOUT") else None

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Booking policy
MAX_TURNS = int(os.getenv("MAX_TURNS", "3"))
TURN_MINUTES = 30
MULTI_PRODUCT_DISCOUNT = float(os.getenv("MULTI_PRODUCT_DISCOUNT", "0.10"))
PAYMENT_REMINDER_HOURS = 2
MIN_PHONE_DIGITS = 6

# Currencies: 1 unit of each currency = N units of the base currency
BASE_CURRENCY = "ARS"
EXCHANGE_RATES = {
    "ARS": 1.0,
    "USD": float(os.getenv("USD_RATE", "1000")),
    "EUR": float(os.getenv("EUR_RATE", "1000")),
}
CURRENCY_SYMBOLS = {
    "ARS": "$",
    "USD": "US$",
    "EUR": "€",
}


def configure_logging(level: Optional[str] = None):
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
