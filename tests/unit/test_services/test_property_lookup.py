"""Tests for the public property lookup."""

import pytest

from property_manager.models.property import Property
from property_manager.models.theme import ThemeLibraryEntry
from property_manager.services.property_lookup import PropertyLookup, list_pages, localize_property
from property_manager.services.theme_resolver import DEFAULT_THEME
from tests.fixtures.properties import sale_property, villa_published
from tests.utils.assertions import assert_fully_localized
from tests.utils.helpers import property_dir, write_version_file


@pytest.fixture
def lookup(store, theme_store):
    return PropertyLookup(store, theme_store)


@pytest.mark.unit
def test_localize_property_resolves_every_value():
    villa = Property.model_validate(villa_published())

    localized = localize_property(villa, "fr")

    assert_fully_localized(localized)
    assert localized.name.resolve("en") == "Villa X (fr)"
    assert localized.hero_images[0].alt.resolve("en") == "Terrasse"
    assert localized.facilities[0].items[0].text.resolve("en") == "Pool"
    assert localized.location.address.resolve("en") == "Kassiopi, Corfu"
    assert villa.name.translations["fr"] == "Villa X (fr)"


@pytest.mark.unit
def test_localize_property_unsupported_language_uses_english():
    localized = localize_property(Property.model_validate(villa_published()), "es")

    assert localized.summary.resolve("fr") == "Sea views"


@pytest.mark.unit
def test_localize_property_with_all_languages():
    localized = localize_property(Property.model_validate(villa_published()), "fr", include_all_languages=True)

    assert localized.name.translations["th"] == "Villa X"
    assert localized.summary.translations["fr"] == "Vue mer"
    assert localized.pages[0].title.translations["de"] == "Gallery"


@pytest.mark.unit
def test_list_pages_for_rental():
    pages = list_pages(Property.model_validate(villa_published()))

    assert [(page.page, page.order) for page in pages] == [
        ("overview", 1),
        ("gallery", 2),
        ("facilities", 3),
        ("location", 4),
        ("poi", 5),
        ("availability", 6),
        ("rates", 7),
        ("conditions", 8),
    ]


@pytest.mark.unit
def test_list_pages_for_sale():
    pages = [page.page for page in list_pages(Property.model_validate(sale_property()))]

    assert pages == ["overview", "facilities", "location", "poi", "sales"]


@pytest.mark.unit
def test_get_property_returns_published_localized(lookup, storage_config):
    write_version_file(storage_config, "villa_x", "data.json", villa_published())

    record = lookup.get_property("villa_x", "el")

    assert record.name.resolve("en") == "Βίλα Χ"
    assert record.is_published is True


@pytest.mark.unit
def test_get_property_ignores_drafts_unless_preview(lookup, store, storage_config, frozen_clock):
    write_version_file(storage_config, "villa_x", "data.json", villa_published())
    store.update("villa_x", {"summary": "Draft summary"})

    assert lookup.get_property("villa_x", "en").summary.resolve("en") == "Sea views"
    assert lookup.get_property("villa_x", "en", preview=True).summary.resolve("en") == "Draft summary"


@pytest.mark.unit
def test_unpublished_and_archived_read_as_missing(lookup, store, storage_config, frozen_clock):
    store.create_shell("house_y", "House Y", "sale")
    data = villa_published()
    data["archived"] = True
    write_version_file(storage_config, "villa_x", "data.json", data)

    assert lookup.get_property("house_y") is None
    assert lookup.get_property("villa_x") is None
    assert lookup.get_property("nowhere") is None
    assert lookup.get_pages("villa_x") is None


@pytest.mark.unit
def test_named_theme_applied_from_library(lookup, theme_store, storage_config):
    theme_store.create(ThemeLibraryEntry(name="sea", corner_radius="4px"))
    data = villa_published()
    data["theme"] = {"cornerRadius": "30px"}
    write_version_file(storage_config, "villa_x", "data.json", data)

    assert lookup.get_property("villa_x").theme.corner_radius == "4px"


@pytest.mark.unit
def test_partial_inline_theme_filled_with_defaults(store, storage_config):
    data = villa_published()
    data.pop("themeName")
    data["theme"] = {"cornerRadius": "3px"}
    write_version_file(storage_config, "villa_p", "data.json", data)

    theme = PropertyLookup(store).get_property("villa_p", "en").theme

    assert theme.corner_radius == "3px"
    assert theme.body_text_size == "14px"
    assert theme.light.background == DEFAULT_THEME.light.background


@pytest.mark.unit
def test_property_without_theme_gets_default(lookup, storage_config):
    data = villa_published()
    data.pop("themeName")
    write_version_file(storage_config, "villa_x", "data.json", data)

    assert lookup.get_property("villa_x").theme == DEFAULT_THEME


@pytest.mark.unit
def test_corrupt_data_reads_as_missing(lookup, storage_config, caplog):
    path = property_dir(storage_config, "villa_x") / "data.json"
    path.parent.mkdir(parents=True)
    path.write_text("[1, 2", encoding="utf-8")

    assert lookup.get_property("villa_x") is None
    assert "Property data unavailable" in caplog.text


@pytest.mark.unit
def test_page_images_and_pdfs_localized(lookup, storage_config):
    write_version_file(storage_config, "villa_x", "data.json", villa_published())
    images_dir = property_dir(storage_config, "villa_x") / "pages" / "gallery" / "images"
    images_dir.mkdir(parents=True)
    (images_dir / "sunset.webp").write_bytes(b"")
    pdf_dir = property_dir(storage_config, "villa_x") / "pdfs"
    pdf_dir.mkdir()
    (pdf_dir / "welcome.pdf").write_bytes(b"%PDF")

    images = lookup.get_page_images("villa_x", "gallery", "fr")
    pdfs = lookup.get_pdfs("villa_x")

    assert [image.src for image in images] == ["/data/properties/villa_x/pages/gallery/images/sunset.webp"]
    assert [pdf.id for pdf in pdfs] == ["welcome"]
    assert lookup.get_pdfs("nowhere") is None


@pytest.mark.unit
def test_get_pages(lookup, storage_config):
    write_version_file(storage_config, "house_y", "data.json", sale_property())

    assert [page.page for page in lookup.get_pages("house_y")][-1] == "sales"
