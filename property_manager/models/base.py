"""Shared model configuration and small value models used across property records."""

from typing import Annotated, Any, Optional
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from property_manager.models.localization import LocalizedValue


class RecordModel(BaseModel):
    """Base for records persisted as camelCase JSON."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def normalize_yes_no(value: Any) -> Optional[str]:
    """Read booleans and yes/no strings as "Yes"/"No"; other text is kept as-is."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if not isinstance(value, str):
        raise ValueError(f"Unexpected value {value!r} for a Yes/No field")

    trimmed = value.strip().lower()
    if trimmed in ("true", "yes"):
        return "Yes"
    if trimmed in ("false", "no"):
        return "No"
    return value


YesNo = Annotated[Optional[str], BeforeValidator(normalize_yes_no)]


class Image(RecordModel):
    """Image reference with optional localized alt text."""
    src: str = ""
    alt: Optional[LocalizedValue] = None


class ExternalLink(RecordModel):
    url: str = ""
    label: Optional[LocalizedValue] = None


class Pdf(RecordModel):
    """PDF document attached to a property."""
    id: str = ""
    title: LocalizedValue = Field(default_factory=LocalizedValue)
    type: str = Field(default="", description="directions, poi or other")
    src: str = ""
