"""
Pure pricing, quota and currency helpers.

Nothing here touches widget state: callers pass the selection lines in and
get value objects back, so the rules can be exercised without any UI.
"""

import logging
from typing import Dict, List, Optional, Sequence

from booking_schemas import PriceSummary, QuotaCheck, SelectionLine
import config

logger = logging.getLogger(__name__)


def total_turns(lines: Sequence[SelectionLine]) -> int:
    return sum(line.turns for line in lines)


def can_add(lines: Sequence[SelectionLine], product_id: str, requested_turns: int,
            max_turns: int = config.MAX_TURNS) -> QuotaCheck:
    """
    Check whether `requested_turns` for `product_id` fit in the turn quota.
    An existing line for the same product is replaced, so its own turns are
    given back before comparing.
    """
    current_total = total_turns(lines)
    old_turns = 0
    for line in lines:
        if line.product_id == product_id:
            old_turns = line.turns
            break

    resulting_total = current_total - old_turns + requested_turns
    return QuotaCheck(
        allowed=resulting_total <= max_turns,
        available_turns=max_turns - current_total + old_turns,
        current_total=current_total,
        requested_turns=requested_turns,
        resulting_total=resulting_total,
    )


def turn_options(lines: Sequence[SelectionLine], product_id: str,
                 max_turns: int = config.MAX_TURNS) -> List[int]:
    """Turn counts that can still be offered for a product (empty when none fit)."""
    available = can_add(lines, product_id, 0, max_turns=max_turns).available_turns
    if available <= 0:
        return []
    return list(range(1, min(available, max_turns) + 1))


def price_summary(lines: Sequence[SelectionLine],
                  discount_rate: float = config.MULTI_PRODUCT_DISCOUNT) -> Optional[PriceSummary]:
    """
    Subtotal, multi-product discount and total in the base currency.
    Returns None for an empty selection.
    """
    if not lines:
        return None

    subtotal = sum(line.line_total() for line in lines)
    # flat discount as soon as there is more than one product, not tiered
    rate = discount_rate if len(lines) > 1 else 0.0
    discount_amount = subtotal * rate
    return PriceSummary(
        subtotal=subtotal,
        discount_rate=rate,
        discount_amount=discount_amount,
        total=subtotal - discount_amount,
    )


def _rate_for(currency: str, rates: Dict[str, float]) -> Optional[float]:
    if currency == config.BASE_CURRENCY:
        return 1.0
    return rates.get(currency)


def convert(amount: float, target_currency: str, source_currency: str = config.BASE_CURRENCY,
            rates: Optional[Dict[str, float]] = None) -> float:
    """
    Convert `amount` from `source_currency` to `target_currency` using the
    static rate table. Unknown currencies are treated as the base currency
    and a warning is logged.
    """
    if target_currency == source_currency:
        return amount
    rates = rates if rates is not None else config.EXCHANGE_RATES

    source_rate = _rate_for(source_currency, rates)
    if not source_rate:
        logger.warning(f"Unsupported currency: {source_currency}, treating amount as {config.BASE_CURRENCY}")
        source_rate = 1.0
    amount_in_base = amount * source_rate

    target_rate = _rate_for(target_currency, rates)
    if not target_rate:
        logger.warning(f"Unsupported currency: {target_currency}, keeping amount in {config.BASE_CURRENCY}")
        return amount_in_base
    return amount_in_base / target_rate


def currency_symbol(currency: str) -> str:
    return config.CURRENCY_SYMBOLS.get(currency, "$")


def format_money(amount: float, currency: str) -> str:
    return f"{currency_symbol(currency)}{amount:.2f} {currency}"
