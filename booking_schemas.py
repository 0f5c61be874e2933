from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class WireModel(BaseModel):
    # Backend speaks camelCase JSON, python code uses snake_case names
    model_config = ConfigDict(populate_by_name=True)


class Product(WireModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(alias="_id")
    name: str
    category: str = ""
    price_per_turn: float = Field(alias="pricePerTurn")   # base currency
    max_people: int = Field(default=1, alias="maxPeople")
    stock: int = 0
    requires_safety: bool = Field(default=False, alias="requiresSafety")
    safety_required_type: Optional[str] = Field(default=None, alias="safetyRequiredType")


class Customer(WireModel):
    id: str = Field(alias="_id")
    name: str
    email: str
    phone: str
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")


class SafetyItems(WireModel):
    type: str
    quantity: int = 1


class SelectionLine(WireModel):
    product_id: str = Field(alias="productId")
    product_name: str = Field(alias="productName")
    quantity: int
    turns: int
    people_count: int = Field(alias="peopleCount")
    safety_items: Optional[SafetyItems] = Field(default=None, alias="safetyItems")
    price_per_turn: float = Field(alias="pricePerTurn")

    def line_total(self) -> float:
        return self.price_per_turn * self.quantity * self.turns


class BookingItemPayload(WireModel):
    product_id: str = Field(alias="productId")
    quantity: int
    turns: int
    people_count: int = Field(alias="peopleCount")
    safety_items: Optional[SafetyItems] = Field(default=None, alias="safetyItems")


class BookingForm(WireModel):
    """Form fields of the booking screen, all optional until validated."""

    customer_id: Optional[str] = Field(default=None, alias="customerId")
    start_time: Optional[datetime] = Field(default=None, alias="startTime")
    total_turns: Optional[int] = Field(default=None, alias="totalTurns")
    method: Optional[Literal["cash", "card"]] = None
    currency: Optional[str] = None


class BookingDraft(WireModel):
    customer_id: str = Field(alias="customerId")
    start_time: datetime = Field(alias="startTime")
    total_turns: int = Field(alias="totalTurns")
    method: Literal["cash", "card"]
    currency: str
    amount: float                 # already expressed in `currency`
    items: List[BookingItemPayload]

    @field_serializer("start_time", when_used="json")
    def _start_time_utc(self, value: datetime) -> str:
        # UTC with millisecond precision and a Z suffix, naive values are local time
        utc = value.astimezone(timezone.utc)
        return utc.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class BookingRecord(WireModel):
    id: str = Field(alias="_id")
    status: str
    start_time: datetime = Field(alias="startTime")
    end_time: datetime = Field(alias="endTime")


class PaymentRecord(WireModel):
    status: str
    total: float                  # always base currency
    method: str
    currency: Optional[str] = None
    due_date: Optional[datetime] = Field(default=None, alias="dueDate")


class BookingResult(WireModel):
    booking: Optional[BookingRecord] = None
    payment: Optional[PaymentRecord] = None


class QuotaCheck(BaseModel):
    allowed: bool
    available_turns: int
    current_total: int
    requested_turns: int
    resulting_total: int


class PriceSummary(BaseModel):
    subtotal: float
    discount_rate: float
    discount_amount: float
    total: float


class PhoneValidation(BaseModel):
    valid: bool
    reason: Optional[str] = None


class SummaryLine(BaseModel):
    product_name: str
    quantity: int
    turns: int
    total: float


class SummaryView(BaseModel):
    currency: str
    symbol: str
    lines: List[SummaryLine] = Field(default_factory=list)
    subtotal: float
    discount_rate: float
    discount_amount: float
    total: float
    helper_text: str
