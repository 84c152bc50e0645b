"""Localized string model and supported language codes."""

from typing import Any, Iterable, Mapping, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, model_serializer, model_validator


DEFAULT_LANGUAGE = "en"

SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "fr", "de", "el", "ar", "it", "th")

RTL_LANGUAGES = frozenset({"ar"})

# Applied when a property shell is created without explicit listing languages.
DEFAULT_CREATE_LISTING_LANGUAGES: tuple[str, ...] = ("en", "fr", "de", "el")

# Applied when a stored record predates listing languages.
DEFAULT_LISTING_LANGUAGES: tuple[str, ...] = ("en",)

_STRUCTURED_KEYS = frozenset({"value", "translations"})


def normalize_language(code: Optional[str], default: str = DEFAULT_LANGUAGE) -> str:
    """Normalize a language code to a supported value, or return ``default``."""
    if code is None or not code.strip():
        return default

    normalized = code.strip().lower()
    return normalized if normalized in SUPPORTED_LANGUAGES else default


def is_supported_language(code: Optional[str]) -> bool:
    if not code:
        return False
    return code.strip().lower() in SUPPORTED_LANGUAGES


def get_language_direction(code: Optional[str]) -> str:
    """Text direction ("ltr" or "rtl") for a language code."""
    if code and code.strip().lower() in RTL_LANGUAGES:
        return "rtl"
    return "ltr"


def get_property_listing_languages(listing_languages: Optional[Iterable[str]]) -> list[str]:
    """Supported listing languages of a property, defaulting when none are stored."""
    codes = [code.strip().lower() for code in (listing_languages or []) if is_supported_language(code)]
    return codes or list(DEFAULT_LISTING_LANGUAGES)


def normalize_listing_language(code: Optional[str], listing_languages: Optional[Iterable[str]]) -> str:
    """Coerce a code to one of the property's listing languages (first one when not listed)."""
    codes = list(listing_languages or []) or list(DEFAULT_LISTING_LANGUAGES)
    requested = (code or "").strip().lower()
    for candidate in codes:
        if candidate.lower() == requested:
            return candidate
    return codes[0] if codes else DEFAULT_LANGUAGE


class LocalizedValue(BaseModel):
    """A display string that is either a single value or a per-language map.

    On disk the single form is a plain JSON string and the translated form is
    an object keyed by language code. An object whose keys are only ``value``
    and/or ``translations`` is read as the structured form, so a translation
    map with the single key ``"value"`` does not round-trip.
    """

    model_config = ConfigDict(frozen=True)

    value: Optional[str] = None
    translations: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _detect_shape(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"value": data}
        if isinstance(data, Mapping) and not set(data) <= _STRUCTURED_KEYS:
            return {"translations": dict(data)}
        return data

    @model_serializer
    def _serialize(self) -> Union[str, dict[str, str]]:
        if self.translations:
            return dict(self.translations)
        return self.value or ""

    @classmethod
    def from_string(cls, value: str) -> "LocalizedValue":
        return cls(value=value)

    @classmethod
    def from_translations(cls, translations: Mapping[str, str]) -> "LocalizedValue":
        return cls(translations=dict(translations))

    def _lookup(self, code: Optional[str]) -> Optional[str]:
        if not code:
            return None
        if code in self.translations:
            return self.translations[code]
        folded = code.casefold()
        for key, text in self.translations.items():
            if key.casefold() == folded:
                return text
        return None

    def resolve(self, requested: Optional[str], fallback: str = DEFAULT_LANGUAGE) -> str:
        """Resolve to a display string; never raises and never returns None.

        Order: requested language (unsupported codes degrade to ``fallback``),
        fallback language, first translation in insertion order, single value,
        empty string.
        """
        if not self.translations:
            return self.value or ""

        match = self._lookup(normalize_language(requested, default=fallback))
        if match is not None:
            return match

        match = self._lookup(fallback)
        if match is not None:
            return match

        first = next(iter(self.translations.values()), None)
        if first is not None:
            return first
        return self.value or ""

    def with_translation(self, language: str, text: str) -> "LocalizedValue":
        """Return a copy with ``language`` set to ``text``.

        A single-string value is first promoted to a default-language translation.
        """
        if self.translations:
            translations = dict(self.translations)
        elif self.value:
            translations = {DEFAULT_LANGUAGE: self.value}
        else:
            translations = {}
        translations[language] = text
        return LocalizedValue.from_translations(translations)

    def expand_all_languages(self) -> "LocalizedValue":
        """Return a value carrying a resolved translation for every supported language."""
        return LocalizedValue.from_translations(
            {code: self.resolve(code) for code in SUPPORTED_LANGUAGES}
        )

    def __str__(self) -> str:
        return self.resolve(DEFAULT_LANGUAGE)
