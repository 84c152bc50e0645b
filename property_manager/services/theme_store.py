"""Shared theme library stored in ``themes.json``."""

from typing import Optional

from property_manager.models.theme import ThemeLibraryEntry
from property_manager.services.json_collection import JsonCollectionStore
from property_manager.utils.config import StorageConfig
from property_manager.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def _same_name(left: str, right: str) -> bool:
    return left.lower() == right.lower()


class JsonThemeStore(JsonCollectionStore[ThemeLibraryEntry]):
    """Library themes keyed by case-insensitive name."""

    model_cls = ThemeLibraryEntry

    def __init__(self, config: Optional[StorageConfig] = None):
        self.config = config or StorageConfig()
        super().__init__(self.config.themes_path)

    def get_by_name(self, name: Optional[str]) -> Optional[ThemeLibraryEntry]:
        if not name or not name.strip():
            return None
        return self._find(lambda theme: _same_name(theme.name, name))

    def create(self, theme: ThemeLibraryEntry) -> None:
        self._append(theme)
        logger.info("Theme created", theme_name=theme.name)

    def update(self, theme: ThemeLibraryEntry) -> bool:
        """Replace the theme with the same name; unknown names are ignored."""
        updated = self._replace(theme, lambda existing: _same_name(existing.name, theme.name))
        if updated:
            logger.info("Theme updated", theme_name=theme.name)
        return updated

    def delete(self, name: str) -> int:
        removed = self._remove(lambda theme: _same_name(theme.name, name))
        logger.info("Theme deleted", theme_name=name, removed=removed)
        return removed
