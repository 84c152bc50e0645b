"""Theme resolution - shared library theme, inline theme, then the built-in default."""

from typing import Iterable, Optional, TypeVar

from pydantic import BaseModel

from property_manager.models.property import Property
from property_manager.models.theme import (
    Theme,
    ThemeFont,
    ThemeFonts,
    ThemeHeadingSizes,
    ThemeHeadingTransforms,
    ThemeLibraryEntry,
    ThemePalette,
    ThemeReference,
)
from property_manager.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

DEFAULT_FONT = ThemeFont(family="system-ui", weight="normal", style="normal")

DEFAULT_THEME = Theme(
    name="default",
    default_mode="light",
    light=ThemePalette(
        background="#f1f3f5",
        surface="#2e67845c",
        text="#2d3037",
        muted="#475569",
        primary="#1d9537",
        accent="#2e6785",
        border="#e2e8f0",
        shadow="0 20px 50px rgba(15, 23, 42, 0.12)",
        text_shadow="none",
    ),
    dark=ThemePalette(
        background="#353437",
        surface="#45beff47",
        text="#95daff",
        muted="#94a3b8",
        primary="#26d331",
        accent="#46beff",
        border="#2b2b2b",
        shadow="0 18px 40px rgba(0, 0, 0, 0.45)",
        text_shadow="0 2px 10px rgba(0, 0, 0, 0.6)",
    ),
    fonts=ThemeFonts(base=DEFAULT_FONT, title=DEFAULT_FONT, subtitle=DEFAULT_FONT),
    heading_sizes=ThemeHeadingSizes(h1="2.8rem", h2="2.2rem", h3="1.8rem", h4="1.6rem", h5="1.4rem", h6="1.2rem"),
    heading_transforms=ThemeHeadingTransforms(
        h1="uppercase", h2="uppercase", h3="uppercase", h4="none", h5="none", h6="none",
    ),
    body_text_size="14px",
    corner_radius="15px",
)


def _fill(value: Optional[ModelT], default: ModelT) -> ModelT:
    """Copy of ``value`` with every None field taken from ``default``, recursively."""
    if value is None:
        return default.model_copy(deep=True)

    update = {}
    for field in type(default).model_fields:
        current = getattr(value, field)
        fallback = getattr(default, field)
        if isinstance(fallback, BaseModel):
            update[field] = _fill(current, fallback)
        elif current is None:
            update[field] = fallback
    return value.model_copy(update=update)


def find_library_theme(name: Optional[str], library: Iterable[ThemeLibraryEntry]) -> Optional[ThemeLibraryEntry]:
    """Library theme with ``name`` (case-insensitive), or None."""
    if not name or not name.strip():
        return None
    wanted = name.strip().lower()
    for entry in library:
        if entry.name.lower() == wanted:
            return entry
    return None


def resolve_theme(ref: Optional[ThemeReference], library: Iterable[ThemeLibraryEntry] = ()) -> Theme:
    """Fully populated theme for a property.

    A name found in the library wins over an inline theme, an inline theme
    wins over the default, and any field still missing is taken from the
    default theme.
    """
    ref = ref or ThemeReference()

    base: Optional[Theme] = None
    entry = find_library_theme(ref.name, library)
    if entry is not None:
        base = entry.to_theme()
    elif ref.name:
        logger.warning("Theme not found in library", theme_name=ref.name)

    if base is None:
        base = ref.inline

    return _fill(base, DEFAULT_THEME)


def apply_theme_library(property: Property, library: Iterable[ThemeLibraryEntry] = ()) -> Property:
    """Copy of ``property`` carrying its fully resolved theme."""
    return property.model_copy(update={"theme": resolve_theme(property.theme_reference(), library)})
