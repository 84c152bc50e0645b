"""Property record models and admin request payloads."""

from enum import Enum
from typing import Optional
from pydantic import Field

from property_manager.models.base import ExternalLink, Image, Pdf, RecordModel, YesNo
from property_manager.models.guest_info import GuestInfo
from property_manager.models.localization import LocalizedValue
from property_manager.models.rental import RentalUnit
from property_manager.models.theme import Theme, ThemeReference


class PropertyStatus(str, Enum):
    """Listing kind of a property."""
    RENTAL = "rental"
    SALE = "sale"


class HeroSettings(RecordModel):
    transition: Optional[str] = None


class PropertySection(RecordModel):
    id: str = ""
    title: Optional[LocalizedValue] = None
    description: Optional[LocalizedValue] = None
    hero_text: Optional[LocalizedValue] = None
    hero_images: list[Image] = Field(default_factory=list)
    images: list[Image] = Field(default_factory=list)


class PropertyPage(RecordModel):
    """Custom page of the property microsite."""
    id: str = ""
    title: LocalizedValue = Field(default_factory=LocalizedValue)
    show_sections_submenu: YesNo = None
    hero_images: list[Image] = Field(default_factory=list)
    hero_text: Optional[LocalizedValue] = None
    sections: list[PropertySection] = Field(default_factory=list)


class PlacesSection(RecordModel):
    id: str = ""
    title: LocalizedValue = Field(default_factory=LocalizedValue)
    description: Optional[LocalizedValue] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    category_value: str = ""


class ExperienceItem(RecordModel):
    """Nearby place or experience listed on the places page."""
    category: Optional[LocalizedValue] = None
    heading: Optional[LocalizedValue] = None
    hero_images: list[Image] = Field(default_factory=list)
    item_text: Optional[LocalizedValue] = None
    gallery_images: list[Image] = Field(default_factory=list)
    distance: Optional[float] = None
    map_reference: Optional[str] = None
    links: list[ExternalLink] = Field(default_factory=list)


class PlacesPage(RecordModel):
    page_title: LocalizedValue = Field(default_factory=LocalizedValue)
    description: Optional[LocalizedValue] = None
    sections: list[PlacesSection] = Field(default_factory=list)
    items: list[ExperienceItem] = Field(default_factory=list)


class PropertyFacts(RecordModel):
    bedrooms: Optional[float] = None
    bathrooms: Optional[float] = None
    kitchens: Optional[float] = None
    interior_area_sqm: Optional[float] = None
    land_area_sqm: Optional[float] = None


class Location(RecordModel):
    address: LocalizedValue = Field(default_factory=LocalizedValue)
    map_embed_url: Optional[str] = None
    description: Optional[LocalizedValue] = None


class FacilityItem(RecordModel):
    text: LocalizedValue = Field(default_factory=LocalizedValue)


class FacilityCategory(RecordModel):
    title: LocalizedValue = Field(default_factory=LocalizedValue)
    icon: str = Field(default="", description="Icon key, e.g. solid:wifi")
    items: list[FacilityItem] = Field(default_factory=list)


class SalesParticulars(RecordModel):
    price: Optional[str] = None
    legal: Optional[str] = None
    documents: list[str] = Field(default_factory=list)


class Property(RecordModel):
    """A property record as stored in one version file."""
    id: str = Field("", description="Stable slug, also the directory name")
    name: LocalizedValue = Field(default_factory=LocalizedValue)
    archived: bool = False
    status: str = Field("", description="rental or sale")
    version: Optional[str] = Field(None, description="Version stamp, YYYYMMDDHHMMSS")
    is_published: bool = False
    summary: Optional[LocalizedValue] = None
    hero_images: list[Image] = Field(default_factory=list)
    hero_settings: Optional[HeroSettings] = None
    pages: list[PropertyPage] = Field(default_factory=list)
    places: Optional[PlacesPage] = None
    theme: Optional[Theme] = None
    theme_name: Optional[str] = None
    facts: Optional[PropertyFacts] = None
    external_links: list[ExternalLink] = Field(default_factory=list)
    location: Optional[Location] = None
    facilities: list[FacilityCategory] = Field(default_factory=list)
    pdfs: list[Pdf] = Field(default_factory=list)
    sales_particulars: Optional[SalesParticulars] = None
    rental: Optional[RentalUnit] = Field(None, description="Legacy single rental unit")
    rental_units: Optional[list[RentalUnit]] = None
    guest_info: Optional[GuestInfo] = None
    listing_languages: Optional[list[str]] = None

    def get_rental_units(self) -> list[RentalUnit]:
        """Rental units, treating a legacy single ``rental`` as one unit."""
        if self.rental_units:
            return self.rental_units
        if self.rental is not None:
            return [self.rental]
        return []

    def normalize_rental_units(self) -> "Property":
        """Copy with ``rental_units`` always populated from the legacy field when needed."""
        if self.rental_units:
            return self
        return self.model_copy(update={"rental_units": self.get_rental_units()})

    def theme_reference(self) -> ThemeReference:
        return ThemeReference(name=self.theme_name, inline=self.theme)


class PropertyCreateRequest(RecordModel):
    """Payload for creating a new property shell."""
    id: str
    name: LocalizedValue = Field(default_factory=LocalizedValue)
    status: str
    listing_languages: Optional[list[str]] = None


class PropertyUpdateRequest(RecordModel):
    """Partial update; every field left as None keeps the stored value."""
    name: Optional[LocalizedValue] = None
    status: Optional[str] = None
    archived: Optional[bool] = None
    summary: Optional[LocalizedValue] = None
    hero_images: Optional[list[Image]] = None
    hero_settings: Optional[HeroSettings] = None
    pages: Optional[list[PropertyPage]] = None
    places: Optional[PlacesPage] = None
    theme: Optional[Theme] = None
    theme_name: Optional[str] = None
    facts: Optional[PropertyFacts] = None
    external_links: Optional[list[ExternalLink]] = None
    location: Optional[Location] = None
    facilities: Optional[list[FacilityCategory]] = None
    pdfs: Optional[list[Pdf]] = None
    sales_particulars: Optional[SalesParticulars] = None
    rental: Optional[RentalUnit] = None
    rental_units: Optional[list[RentalUnit]] = None
    guest_info: Optional[GuestInfo] = None
    listing_languages: Optional[list[str]] = None


class PageInfo(RecordModel):
    """Entry of a property's page index."""
    page: str
    order: int
