"""Theme models - palettes, fonts and typography scales."""

from typing import Optional
from pydantic import Field

from property_manager.models.base import RecordModel


class ThemePalette(RecordModel):
    """Colour palette for one display mode; absent entries fall back to defaults."""
    background: Optional[str] = None
    surface: Optional[str] = None
    text: Optional[str] = None
    muted: Optional[str] = None
    primary: Optional[str] = None
    accent: Optional[str] = None
    border: Optional[str] = None
    shadow: Optional[str] = None
    text_shadow: Optional[str] = None


class ThemeFont(RecordModel):
    family: Optional[str] = None
    src: Optional[str] = None
    format: Optional[str] = None
    weight: Optional[str] = None
    style: Optional[str] = None


class ThemeFonts(RecordModel):
    base: Optional[ThemeFont] = None
    title: Optional[ThemeFont] = None
    subtitle: Optional[ThemeFont] = None


class ThemeHeadingSizes(RecordModel):
    h1: Optional[str] = None
    h2: Optional[str] = None
    h3: Optional[str] = None
    h4: Optional[str] = None
    h5: Optional[str] = None
    h6: Optional[str] = None


class ThemeHeadingTransforms(RecordModel):
    h1: Optional[str] = None
    h2: Optional[str] = None
    h3: Optional[str] = None
    h4: Optional[str] = None
    h5: Optional[str] = None
    h6: Optional[str] = None


class Theme(RecordModel):
    """Visual theme; every field is optional so partial themes are accepted."""
    name: Optional[str] = None
    default_mode: Optional[str] = Field(None, description="light or dark")
    light: Optional[ThemePalette] = None
    dark: Optional[ThemePalette] = None
    fonts: Optional[ThemeFonts] = None
    heading_sizes: Optional[ThemeHeadingSizes] = None
    heading_transforms: Optional[ThemeHeadingTransforms] = None
    body_text_size: Optional[str] = None
    corner_radius: Optional[str] = None


class ThemeLibraryEntry(Theme):
    """Shared theme stored in ``themes.json`` and referenced by name."""
    name: str = Field(..., description="Unique theme name (case-insensitive)")
    display_name: str = ""
    is_private: bool = False
    created_by: Optional[str] = None

    def to_theme(self) -> Theme:
        """Drop library metadata, keeping only the visual fields."""
        return Theme.model_validate(self.model_dump(include=set(Theme.model_fields)))


class ThemeReference(RecordModel):
    """How a property points at its theme: by shared name and/or inline copy."""
    name: Optional[str] = None
    inline: Optional[Theme] = None
