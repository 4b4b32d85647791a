"""
Cart models.

A cart item references its hotel and room by identifier and carries the
derived prices for the whole stay. Cart aggregates are the sums of the item
fields and are rebuilt from scratch after every change.
"""

from datetime import UTC, datetime

from pydantic import Field

from hotel_booking_client.models.common import BookingBaseModel


class CartItem(BookingBaseModel):
    """One prospective room booking."""

    id: str
    hotel_id: str = Field(alias="hotelId")
    hotel_name: str = Field("", alias="hotelName")
    room_id: str = Field(alias="roomId")
    room_name: str = Field("", alias="roomName")
    check_in_date: datetime = Field(alias="checkInDate")
    check_out_date: datetime = Field(alias="checkOutDate")
    nights: int = Field(ge=1)
    rooms: int = Field(ge=1)
    guests: int = Field(ge=1)
    unit_price: float = Field(alias="unitPrice")
    service_fee: float = Field(0.0, alias="serviceFee")
    total_price: float = Field(alias="totalPrice")
    taxes: float
    fees: float
    grand_total: float = Field(alias="grandTotal")
    currency: str = "USD"

    @property
    def merge_key(self) -> tuple[str, datetime, datetime]:
        return (self.room_id, self.check_in_date, self.check_out_date)


class Cart(BookingBaseModel):
    """Ordered cart items plus their aggregate prices."""

    items: list[CartItem] = Field(default_factory=list)
    subtotal: float = 0.0
    taxes: float = 0.0
    fees: float = 0.0
    total: float = 0.0
    currency: str = "USD"
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC), alias="updatedAt"
    )

    @classmethod
    def empty(cls, currency: str = "USD") -> "Cart":
        return cls(currency=currency)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def totals(self) -> dict[str, float]:
        return {
            "subtotal": self.subtotal,
            "taxes": self.taxes,
            "fees": self.fees,
            "total": self.total,
        }
