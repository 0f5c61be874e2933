import threading
from typing import List, Optional

from booking_schemas import PriceSummary, Product, QuotaCheck, SafetyItems, SelectionLine
from exceptions import InvalidQuantityError, InvalidTurnsError, TurnLimitExceededError
import config
import pricing


class SelectionManager:
    """
    Owns the lines of the booking being assembled (one line per product).
    Every mutation goes through the turn quota, so the sum of turns never
    exceeds `max_turns`. Quota check and mutation run under one lock, the
    web front end shares a single selection across worker threads.
    """

    def __init__(self, max_turns: int = config.MAX_TURNS):
        self.max_turns = max_turns
        self._lines: List[SelectionLine] = []
        self._lock = threading.Lock()

    @property
    def lines(self) -> List[SelectionLine]:
        return list(self._lines)

    def __len__(self):
        return len(self._lines)

    def find(self, product_id: str) -> Optional[SelectionLine]:
        for line in self._lines:
            if line.product_id == product_id:
                return line
        return None

    def total_turns(self) -> int:
        return pricing.total_turns(self._lines)

    def remaining_turns(self) -> int:
        return self.max_turns - self.total_turns()

    def turn_options(self, product_id: str) -> List[int]:
        return pricing.turn_options(self._lines, product_id, max_turns=self.max_turns)

    def check(self, product_id: str, turns: int) -> QuotaCheck:
        return pricing.can_add(self._lines, product_id, turns, max_turns=self.max_turns)

    def add_product(self, product: Product, quantity: int, turns: int, people_count: int,
                    safety_quantity: Optional[int] = None) -> SelectionLine:
        """
        Add `product` to the booking, or replace its line if it is already there.
        Raises a BookingValidationError subclass and leaves the lines untouched
        when the request does not fit.
        """
        if not turns or turns <= 0:
            raise InvalidTurnsError()
        if not quantity or quantity < 1 or (product.stock and quantity > product.stock):
            if product.stock:
                message = f"Quantity for {product.name} must be between 1 and {product.stock}."
            else:
                message = f"Quantity for {product.name} must be at least 1."
            raise InvalidQuantityError(message)
        if not people_count or people_count < 1 or people_count > product.max_people:
            raise InvalidQuantityError(
                f"People count for {product.name} must be between 1 and {product.max_people}.",
                title="Invalid people count",
            )

        safety_items = None
        if product.requires_safety:
            if safety_quantity is not None and safety_quantity < 1:
                raise InvalidQuantityError(
                    f"Safety items for {product.name} must be at least 1.",
                    title="Invalid safety items",
                )
            safety_items = SafetyItems(
                type=product.safety_required_type or "safety item",
                quantity=1 if safety_quantity is None else safety_quantity,
            )

        line = SelectionLine(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            turns=turns,
            people_count=people_count,
            safety_items=safety_items,
            price_per_turn=product.price_per_turn,
        )

        with self._lock:
            quota = self.check(product.id, turns)
            if not quota.allowed:
                raise TurnLimitExceededError(
                    product.name,
                    quota.current_total,
                    quota.requested_turns,
                    quota.resulting_total,
                    self.max_turns,
                )
            for index, existing in enumerate(self._lines):
                if existing.product_id == product.id:
                    self._lines[index] = line
                    break
            else:
                self._lines.append(line)
        return line

    def remove_product(self, product_id: str) -> bool:
        with self._lock:
            before = len(self._lines)
            self._lines = [line for line in self._lines if line.product_id != product_id]
            return len(self._lines) != before

    def clear(self):
        with self._lock:
            self._lines = []

    def summary(self) -> Optional[PriceSummary]:
        return pricing.price_summary(self._lines)
