"""
Hotel, room and availability models.

Provider identifiers and prices are carried as plain data; nothing in this
package reconciles prices across providers.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from hotel_booking_client.models.common import BookingBaseModel


class PropertyType(str, Enum):
    """Kind of property."""

    HOTEL = "HOTEL"
    APARTMENT = "APARTMENT"
    VILLA = "VILLA"
    RESORT = "RESORT"
    HOSTEL = "HOSTEL"
    BED_BREAKFAST = "BED_BREAKFAST"
    BOUTIQUE = "BOUTIQUE"
    BUSINESS = "BUSINESS"
    LUXURY = "LUXURY"
    BUDGET = "BUDGET"
    CHAIN = "CHAIN"
    INDEPENDENT = "INDEPENDENT"


class RoomType(str, Enum):
    """Room category."""

    STANDARD = "STANDARD"
    DELUXE = "DELUXE"
    SUITE = "SUITE"
    EXECUTIVE = "EXECUTIVE"
    PRESIDENTIAL = "PRESIDENTIAL"
    PENTHOUSE = "PENTHOUSE"
    FAMILY = "FAMILY"
    STUDIO = "STUDIO"
    APARTMENT = "APARTMENT"


class Room(BookingBaseModel):
    """Bookable room offered by a hotel."""

    id: str
    hotel_id: str | None = Field(None, alias="hotelId")
    name: str
    description: str | None = None
    room_type: RoomType = Field(RoomType.STANDARD, alias="roomType")
    size: float | None = None
    max_occupancy: int = Field(2, alias="maxOccupancy")
    bed_type: str | None = Field(None, alias="bedType")
    amenities: list[str] = Field(default_factory=list)
    is_active: bool = Field(True, alias="isActive")
    total_rooms: int = Field(1, alias="totalRooms")
    available_rooms: int = Field(1, alias="availableRooms")
    base_price: float = Field(alias="basePrice", ge=0)
    currency: str = "USD"
    cleaning_fee: float | None = Field(None, alias="cleaningFee")
    service_fee: float | None = Field(None, alias="serviceFee")


class Hotel(BookingBaseModel):
    """Hotel listing."""

    id: str
    name: str
    slug: str | None = None
    description: str | None = None
    short_description: str | None = Field(None, alias="shortDescription")
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    postal_code: str | None = Field(None, alias="postalCode")
    latitude: float | None = None
    longitude: float | None = None
    phone: str | None = None
    email: str | None = None
    website: str | None = None
    star_rating: int | None = Field(None, alias="starRating")
    property_type: PropertyType = Field(PropertyType.HOTEL, alias="propertyType")
    is_active: bool = Field(True, alias="isActive")
    is_featured: bool = Field(False, alias="isFeatured")
    check_in_time: str = Field("15:00", alias="checkInTime")
    check_out_time: str = Field("11:00", alias="checkOutTime")
    cancellation_policy: str | None = Field(None, alias="cancellationPolicy")

    # External provider identifiers
    rate_hawk_id: str | None = Field(None, alias="rateHawkId")
    amadeus_id: str | None = Field(None, alias="amadeusId")
    expedia_id: str | None = Field(None, alias="expediaId")
    booking_com_id: str | None = Field(None, alias="bookingComId")
    hotel_beds_id: str | None = Field(None, alias="hotelBedsId")
    agoda_id: str | None = Field(None, alias="agodaId")

    images: list[Any] = Field(default_factory=list)
    amenities: list[Any] = Field(default_factory=list)
    rooms: list[Room] = Field(default_factory=list)
    average_rating: float | None = Field(None, alias="averageRating")
    review_count: int | None = Field(None, alias="reviewCount")
    starting_price: float | None = Field(None, alias="startingPrice")
    is_favorite: bool | None = Field(None, alias="isFavorite")

    def find_room(self, room_id: str) -> Room | None:
        """Return the room with the given id, if this listing includes it."""
        return next((room for room in self.rooms if room.id == room_id), None)


class Availability(BookingBaseModel):
    """Nightly availability and price for one room, with per-provider quotes."""

    id: str | None = None
    hotel_id: str = Field(alias="hotelId")
    room_id: str = Field(alias="roomId")
    date: datetime
    price: float
    available_rooms: int = Field(0, alias="availableRooms")
    is_available: bool = Field(True, alias="isAvailable")
    rate_hawk_price: float | None = Field(None, alias="rateHawkPrice")
    amadeus_price: float | None = Field(None, alias="amadeusPrice")
    expedia_price: float | None = Field(None, alias="expediaPrice")
    booking_com_price: float | None = Field(None, alias="bookingComPrice")
    hotel_beds_price: float | None = Field(None, alias="hotelBedsPrice")
    agoda_price: float | None = Field(None, alias="agodaPrice")


class ProviderSetting(BookingBaseModel):
    """Enablement and priority of one external inventory provider."""

    enabled: bool = False
    priority: int = 0


class ApiSettings(BookingBaseModel):
    """Provider configuration as published by the backend."""

    rate_hawk: ProviderSetting = Field(default_factory=ProviderSetting, alias="rateHawk")
    amadeus: ProviderSetting = Field(default_factory=ProviderSetting)
    expedia: ProviderSetting = Field(default_factory=ProviderSetting)
    booking_com: ProviderSetting = Field(
        default_factory=ProviderSetting, alias="bookingCom"
    )
    hotel_beds: ProviderSetting = Field(
        default_factory=ProviderSetting, alias="hotelBeds"
    )
    agoda: ProviderSetting = Field(default_factory=ProviderSetting)
