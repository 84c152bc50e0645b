"""Read side of the public microsite: localized, themed property records."""

from typing import Any, Optional

from pydantic import BaseModel

from property_manager.models.base import Image, Pdf
from property_manager.models.localization import LocalizedValue, normalize_language
from property_manager.models.property import PageInfo, Property
from property_manager.services.theme_resolver import apply_theme_library
from property_manager.services.theme_store import JsonThemeStore
from property_manager.services.property_store import PropertyVersionStore
from property_manager.utils.errors import InvalidDataError, StorageError
from property_manager.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)


def _localize(value: Any, language: str, include_all_languages: bool) -> Any:
    if isinstance(value, LocalizedValue):
        if include_all_languages:
            return value.expand_all_languages()
        return LocalizedValue.from_string(value.resolve(language))
    if isinstance(value, BaseModel):
        update = {
            field: _localize(getattr(value, field), language, include_all_languages)
            for field in type(value).model_fields
        }
        return value.model_copy(update=update)
    if isinstance(value, list):
        return [_localize(item, language, include_all_languages) for item in value]
    return value


def localize_property(property: Property, language: Optional[str], include_all_languages: bool = False) -> Property:
    """Copy of ``property`` with every localized value resolved.

    Each value becomes the single string for ``language``, or, with
    ``include_all_languages``, a translation for every supported language so a
    client can switch language without refetching.
    """
    return _localize(property, normalize_language(language), include_all_languages)


def list_pages(property: Property) -> list[PageInfo]:
    """Ordered page index of a property microsite."""
    names = ["overview"]
    names.extend(page.id for page in property.pages if page.id and page.id.strip())
    names.extend(["facilities", "location", "poi"])
    if property.get_rental_units():
        names.extend(["availability", "rates", "conditions"])
    if property.sales_particulars is not None:
        names.append("sales")
    return [PageInfo(page=name, order=order) for order, name in enumerate(names, start=1)]


class PropertyLookup:
    """Published (or preview) property records for the public pages.

    Archived properties read as not found. Unreadable data is logged and
    reported as not found too; callers cannot distinguish the two.
    """

    def __init__(self, store: PropertyVersionStore, theme_store: Optional[JsonThemeStore] = None):
        self.store = store
        self.theme_store = theme_store

    def _load(self, property_id: str, preview: bool) -> Optional[Property]:
        try:
            with log_timing("property_lookup", logger=logger, property_id=property_id, preview=preview):
                record = self.store.get_latest(property_id) if preview else self.store.get_published(property_id)
                if record is None or record.archived:
                    return None
                library = self.theme_store.get_all() if self.theme_store is not None else ()
                return apply_theme_library(record, library)
        except (InvalidDataError, StorageError) as e:
            logger.error(
                "Property data unavailable",
                property_id=property_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return None

    def get_property(
        self,
        property_id: str,
        language: Optional[str] = None,
        preview: bool = False,
        include_all_languages: bool = False,
    ) -> Optional[Property]:
        record = self._load(property_id, preview)
        if record is None:
            return None
        return localize_property(record, language, include_all_languages)

    def get_pages(self, property_id: str, preview: bool = False) -> Optional[list[PageInfo]]:
        record = self._load(property_id, preview)
        return list_pages(record) if record is not None else None

    def get_page_images(self, property_id: str, page: str, language: Optional[str] = None) -> Optional[list[Image]]:
        if self._load(property_id, preview=False) is None:
            return None
        language = normalize_language(language)
        return [_localize(image, language, False) for image in self.store.list_page_images(property_id, page)]

    def get_pdfs(self, property_id: str, language: Optional[str] = None) -> Optional[list[Pdf]]:
        if self._load(property_id, preview=False) is None:
            return None
        language = normalize_language(language)
        return [_localize(pdf, language, False) for pdf in self.store.list_pdfs(property_id)]
