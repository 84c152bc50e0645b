"""Guest link matching and the redirect decisions of the guest-aware pages.

A guest link carries a booking id and a booking date. A guest is granted
access when both tokens match one stored booking after normalization: ids
are compared trimmed and lower-cased, dates by their digits only. Date
matching is by digit order, so ``2024-01-05`` matches ``20240105`` but not
``05/01/2024``.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping, Optional
from urllib.parse import urlencode

from property_manager.models.base import normalize_yes_no
from property_manager.models.guest_info import GuestInfo
from property_manager.models.localization import DEFAULT_LANGUAGE, is_supported_language
from property_manager.models.property import Property
from property_manager.models.rental import RentalBooking
from property_manager.utils.i18n import QueryValue, format_message, get_language_from_query, get_query_value
from property_manager.utils.logging import get_structured_logger, mask_token

logger = get_structured_logger(__name__)

GUEST_SOURCE = "guest"

_NON_DIGITS = re.compile(r"\D")


def normalize_booking_id(value: Optional[str]) -> str:
    return (value or "").strip().lower()


def normalize_booking_date(value: Optional[str]) -> str:
    return _NON_DIGITS.sub("", (value or "").strip().lower())


def find_booking(
    bookings: Iterable[RentalBooking],
    supplied_id: Optional[str],
    supplied_date: Optional[str],
) -> Optional[RentalBooking]:
    """First booking matching both tokens, or None when either token is empty."""
    booking_id = normalize_booking_id(supplied_id)
    booking_date = normalize_booking_date(supplied_date)
    if not booking_id or not booking_date:
        return None

    for booking in bookings:
        if (
            normalize_booking_id(booking.booking_id) == booking_id
            and normalize_booking_date(booking.date_of_booking) == booking_date
        ):
            return booking
    return None


def find_property_booking(
    property: Property,
    supplied_id: Optional[str],
    supplied_date: Optional[str],
) -> Optional[RentalBooking]:
    """Search the bookings of every rental unit of ``property`` in stored order."""
    for unit in property.get_rental_units():
        booking = find_booking(unit.bookings, supplied_id, supplied_date)
        if booking is not None:
            return booking
    return None


def guest_language(booking: Optional[RentalBooking]) -> Optional[str]:
    """The booking's preferred language when it is supported, else None."""
    if booking is None or not is_supported_language(booking.preferred_language):
        return None
    return booking.preferred_language.strip().lower()


def build_property_path(property_id: str, params: Optional[Mapping[str, str]] = None) -> str:
    path = f"/{property_id}"
    query = {key: value for key, value in (params or {}).items() if value}
    return f"{path}?{urlencode(query)}" if query else path


def build_guest_info_path(
    property_id: str,
    booking_id: str,
    booking_date: str,
    language: Optional[str] = None,
    base_language: str = DEFAULT_LANGUAGE,
) -> str:
    """Link to the guest information page; ``lang`` is added only when it differs from the base."""
    query = {"id": property_id, "bookingId": booking_id, "bookingDate": booking_date}
    if language and language != base_language:
        query["lang"] = language
    return f"/guest?{urlencode(query)}"


class GuestAccessKind(str, Enum):
    PUBLIC = "public"
    GRANTED = "granted"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class GuestAccess:
    """Outcome of evaluating a page request for guest access."""
    kind: GuestAccessKind
    booking: Optional[RentalBooking] = None
    location: Optional[str] = None
    language: Optional[str] = None

    @property
    def is_guest(self) -> bool:
        return self.kind == GuestAccessKind.GRANTED


def evaluate_guest_access(
    property_id: str,
    property: Property,
    params: Optional[Mapping[str, QueryValue]],
) -> GuestAccess:
    """Decide whether a request is public, a granted guest view, or must redirect.

    Booking tokens are only considered when the request carries
    ``source=guest``; otherwise the request is public. A guest link that
    matches no booking redirects to the public page. A matched guest whose
    preferred language differs from the requested one is redirected once to
    the same page in their language.
    """
    source = (get_query_value(params, "source") or "").strip().lower()
    language = get_language_from_query(params)
    if source != GUEST_SOURCE:
        return GuestAccess(kind=GuestAccessKind.PUBLIC, language=language)

    booking = find_property_booking(
        property,
        get_query_value(params, "bookingId"),
        get_query_value(params, "bookingDate"),
    )
    if booking is None:
        logger.info(
            "Guest link did not match a booking",
            property_id=property_id,
            booking_id=mask_token(get_query_value(params, "bookingId")),
        )
        return GuestAccess(kind=GuestAccessKind.REDIRECT, location=build_property_path(property_id))

    preferred = guest_language(booking)
    if preferred and preferred != language:
        location = build_property_path(property_id, {"source": GUEST_SOURCE, "lang": preferred})
        return GuestAccess(kind=GuestAccessKind.REDIRECT, booking=booking, location=location, language=preferred)

    return GuestAccess(kind=GuestAccessKind.GRANTED, booking=booking, language=language)


def guest_welcome(booking: Optional[RentalBooking], repeat_template: str, first_template: str) -> str:
    """Salutation for a matched guest, or "" when there is nobody to greet."""
    if booking is None or not booking.names:
        return ""
    if normalize_yes_no(booking.has_arrived) == "No":
        return ""

    repeat = (booking.repeat_visit or "").strip().lower() == "yes"
    template = repeat_template if repeat else first_template
    return format_message(template, name=booking.first_name)


def has_guest_content(guest_info: Optional[GuestInfo]) -> bool:
    return guest_info is not None and guest_info.has_content()
