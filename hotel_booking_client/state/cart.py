"""
Cart state container.

Holds the selected room bookings, derives per-item and aggregate prices,
merges repeat selections of the same room and stay, and persists the whole
cart to the key-value store after every change.
"""

import logging
from datetime import UTC, date, datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from hotel_booking_client.config.settings import Settings
from hotel_booking_client.models.cart import Cart, CartItem
from hotel_booking_client.models.hotel import Hotel, Room
from hotel_booking_client.storage import CART_KEY, KeyValueStore
from hotel_booking_client.utils.exceptions import ValidationError
from hotel_booking_client.utils.notifications import Notifier
from hotel_booking_client.utils.validators import (
    as_datetime,
    calculate_nights,
    validate_positive_count,
)

logger = logging.getLogger(__name__)

_ID_DATE_FORMAT = "%Y%m%dT%H%M%S"


def cart_item_id(room_id: str, check_in: datetime, check_out: datetime) -> str:
    """Deterministic item id for a room and stay."""
    return (
        f"{room_id}-{check_in.strftime(_ID_DATE_FORMAT)}"
        f"-{check_out.strftime(_ID_DATE_FORMAT)}"
    )


def calculate_totals(items: list[CartItem]) -> dict[str, float]:
    """Aggregate prices, rebuilt from the items on every call."""
    subtotal = sum(item.total_price for item in items)
    taxes = sum(item.taxes for item in items)
    fees = sum(item.fees for item in items)
    return {
        "subtotal": subtotal,
        "taxes": taxes,
        "fees": fees,
        "total": subtotal + taxes + fees,
    }


class CartState:
    """Client-held cart of prospective room bookings."""

    def __init__(
        self,
        storage: KeyValueStore,
        notifier: Notifier | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.storage = storage
        self.notifier = notifier or Notifier()
        self.settings = settings or Settings()
        self.tax_rate = self.settings.tax_rate
        self._cart = Cart.empty(self.settings.default_currency)
        self._load()

    @property
    def cart(self) -> Cart:
        return self._cart

    @property
    def items(self) -> list[CartItem]:
        return list(self._cart.items)

    @property
    def is_empty(self) -> bool:
        return self._cart.is_empty

    def get_item(self, item_id: str) -> CartItem | None:
        return next((item for item in self._cart.items if item.id == item_id), None)

    def add_item(
        self,
        hotel: Hotel,
        room: Room,
        check_in: date | datetime | str,
        check_out: date | datetime | str,
        guests: int,
        rooms: int,
    ) -> CartItem:
        """
        Add a room selection, or grow the matching item.

        An item matches when room, check-in and check-out are all equal; its
        room count and every money field then scale by
        (old_rooms + rooms) / old_rooms.

        Raises:
            ValidationError: If the stay is shorter than one night or the
                guest/room counts are not positive
        """
        try:
            validate_positive_count(guests, "guests")
            validate_positive_count(rooms, "rooms")
            check_in_dt = as_datetime(check_in)
            check_out_dt = as_datetime(check_out)
            nights = calculate_nights(check_in_dt, check_out_dt)
        except ValidationError as e:
            self.notifier.error(e.message)
            raise

        key = (room.id, check_in_dt, check_out_dt)
        items = list(self._cart.items)
        index = next(
            (i for i, item in enumerate(items) if item.merge_key == key), None
        )

        if index is not None:
            existing = items[index]
            new_rooms = existing.rooms + rooms
            item = existing.model_copy(
                update={
                    "rooms": new_rooms,
                    "total_price": (existing.total_price / existing.rooms) * new_rooms,
                    "taxes": (existing.taxes / existing.rooms) * new_rooms,
                    "fees": (existing.fees / existing.rooms) * new_rooms,
                    "grand_total": (existing.grand_total / existing.rooms) * new_rooms,
                }
            )
            items[index] = item
            self._commit(items)
            logger.info(
                "Cart item quantity updated",
                extra={"item_id": item.id, "rooms": new_rooms},
            )
            self.notifier.success("Updated booking quantity!")
            return item

        service_fee = room.service_fee or 0.0
        base_price = room.base_price * nights * rooms
        taxes = base_price * self.tax_rate
        fees = service_fee * nights * rooms

        item = CartItem(
            id=cart_item_id(room.id, check_in_dt, check_out_dt),
            hotel_id=hotel.id,
            hotel_name=hotel.name,
            room_id=room.id,
            room_name=room.name,
            check_in_date=check_in_dt,
            check_out_date=check_out_dt,
            nights=nights,
            rooms=rooms,
            guests=guests,
            unit_price=room.base_price,
            service_fee=service_fee,
            total_price=base_price,
            taxes=taxes,
            fees=fees,
            grand_total=base_price + taxes + fees,
            currency=room.currency,
        )
        items.append(item)
        self._commit(items)
        logger.info(
            "Cart item added",
            extra={"item_id": item.id, "nights": nights, "rooms": rooms},
        )
        self.notifier.success("Added to cart!")
        return item

    def remove_item(self, item_id: str) -> bool:
        """Drop an item; returns whether anything was removed."""
        items = [item for item in self._cart.items if item.id != item_id]
        removed = len(items) != len(self._cart.items)
        self._commit(items)
        self.notifier.success("Removed from cart!")
        return removed

    def update_item(self, item_id: str, **fields: Any) -> CartItem | None:
        """
        Shallow-merge fields into an item.

        Derived prices are not recomputed from the merged fields; the caller
        keeps them consistent. Cart aggregates are rebuilt as usual.
        """
        items = list(self._cart.items)
        for i, item in enumerate(items):
            if item.id == item_id:
                items[i] = item.model_copy(update=fields)
                self._commit(items)
                return items[i]

        logger.warning(f"Cart item not found: {item_id}")
        return None

    def clear_cart(self) -> Cart:
        self._cart = Cart.empty(self.settings.default_currency)
        self._persist()
        self.notifier.success("Cart cleared!")
        return self._cart

    def get_item_count(self) -> int:
        return sum(item.rooms for item in self._cart.items)

    def _commit(self, items: list[CartItem]) -> Cart:
        self._cart = Cart(
            items=items,
            currency=self._cart.currency,
            updated_at=datetime.now(UTC),
            **calculate_totals(items),
        )
        self._persist()
        return self._cart

    def _load(self) -> None:
        saved = self.storage.get(CART_KEY)
        if not saved:
            return
        try:
            self._cart = Cart.model_validate_json(saved)
        except PydanticValidationError as e:
            logger.error(f"Error parsing saved cart: {e}")

    def _persist(self) -> None:
        self.storage.set(CART_KEY, self._cart.model_dump_json(by_alias=True))
