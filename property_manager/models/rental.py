"""Rental unit models - bookings, rates and availability."""

from typing import Optional
from pydantic import Field

from property_manager.models.base import Image, RecordModel, YesNo


class RentalBooking(RecordModel):
    """A guest booking; ``booking_id`` + ``date_of_booking`` form the guest-link token."""
    from_: Optional[str] = Field(None, alias="from", description="Arrival date")
    to: Optional[str] = Field(None, description="Departure date")
    nights: Optional[str] = None
    names: Optional[str] = Field(None, description="Guest names, first name first")
    source: Optional[str] = Field(None, description="Booking source (Airbnb, direct, ...)")
    date_of_booking: Optional[str] = None
    booking_id: Optional[str] = None
    repeat_visit: Optional[str] = None
    preferred_language: Optional[str] = None
    has_arrived: YesNo = None
    vip_guest: YesNo = None
    clean_date: Optional[str] = None
    identification_type: Optional[str] = None
    identification_number: Optional[str] = None
    airport: Optional[str] = None
    flight_number: Optional[str] = None
    arrival_time: Optional[str] = None
    departure_time: Optional[str] = None
    adults: Optional[str] = None
    children: Optional[str] = None
    children_ages: Optional[str] = None
    cot_required: Optional[str] = None
    income_eur: Optional[str] = None
    exchange_rate_eur_gbp: Optional[str] = None
    eur_per_night: Optional[str] = None
    income_gbp: Optional[str] = None
    gbp_per_night: Optional[str] = None
    date_registered_with_aade: Optional[str] = None
    aade_screenshot: Optional[str] = None
    comments: Optional[str] = None

    @property
    def first_name(self) -> str:
        if not self.names:
            return ""
        parts = self.names.split(" ")
        return parts[0]


class RentalRate(RecordModel):
    season: str = ""
    price_per_week: Optional[str] = None


class RentalAvailability(RecordModel):
    year: int = 0
    calendar_image: Optional[Image] = None


class RentalUnit(RecordModel):
    """A rentable unit of a property."""
    name: Optional[str] = None
    id: Optional[str] = None
    availability: list[RentalAvailability] = Field(default_factory=list)
    bookings: list[RentalBooking] = Field(default_factory=list)
    ical_url: Optional[str] = None
    rates: list[RentalRate] = Field(default_factory=list)
    conditions: list[str] = Field(default_factory=list)
