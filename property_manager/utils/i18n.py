"""Request language helpers shared by the public and guest pages."""

from typing import Mapping, Optional, Sequence, Union

from property_manager.models.localization import DEFAULT_LANGUAGE, normalize_language

QueryValue = Union[str, Sequence[str], None]


def get_query_value(params: Optional[Mapping[str, QueryValue]], key: str) -> Optional[str]:
    """First value of a query parameter, accepting repeated parameters as lists."""
    if not params:
        return None
    raw = params.get(key)
    if raw is None or isinstance(raw, str):
        return raw
    return raw[0] if raw else None


def get_language_from_query(params: Optional[Mapping[str, QueryValue]]) -> str:
    """Normalized ``lang`` query parameter, defaulting to English."""
    if not params:
        return DEFAULT_LANGUAGE
    return normalize_language(get_query_value(params, "lang"))


def format_message(template: str, **values: object) -> str:
    """Substitute ``{placeholder}`` tokens, first occurrence of each only."""
    for key, value in values.items():
        template = template.replace("{" + key + "}", str(value), 1)
    return template
