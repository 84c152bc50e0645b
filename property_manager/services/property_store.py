"""File-backed property version store - published record, drafts and archive.

Layout under ``<data root>/properties/<id>/``::

    data.json                       published record
    data-v<stamp>[-N].json          drafts, newest = highest stamp, then highest N
    archive/data-archive-v<stamp>.json
    archive/data-v<stamp>.json      drafts relocated by publish

Every edit writes a new draft; nothing is overwritten in place. Two admin
sessions updating the same property race read-modify-write and the last
writer wins; there is no optimistic lock.
"""

import os
import shutil
from contextlib import suppress
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

from property_manager.models.base import Image, Pdf
from property_manager.models.localization import DEFAULT_CREATE_LISTING_LANGUAGES, LocalizedValue
from property_manager.models.property import Property, PropertyStatus, PropertyUpdateRequest
from property_manager.utils.config import StorageConfig
from property_manager.utils.errors import AlreadyExistsError, NotFoundError, StorageError
from property_manager.utils.json_files import dump_model, load_model, write_json_atomic
from property_manager.utils.logging import get_structured_logger, log_timing, timed

logger = get_structured_logger(__name__)

DATA_FILE_NAME = "data.json"
DRAFT_FILE_PREFIX = "data-v"
ARCHIVE_FILE_PREFIX = "data-archive-v"
PUBLISH_TEMP_PREFIX = "data-publish-"
ARCHIVE_DIR_NAME = "archive"
VERSION_STAMP_FORMAT = "%Y%m%d%H%M%S"
IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png", ".webp", ".gif"})

# Fields of an update request copied over wholesale when provided.
_REPLACED_FIELDS = (
    "name",
    "status",
    "archived",
    "summary",
    "hero_images",
    "hero_settings",
    "pages",
    "places",
    "facts",
    "external_links",
    "location",
    "facilities",
    "pdfs",
    "sales_particulars",
    "guest_info",
    "listing_languages",
)


def get_version_stamp(timestamp: Optional[datetime] = None) -> str:
    """Fixed-width UTC stamp so that lexicographic order equals chronological order."""
    moment = timestamp or datetime.now(timezone.utc)
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(VERSION_STAMP_FORMAT)


def extract_version(file_name: str, prefix: str) -> Optional[str]:
    """Version part of ``<prefix><version>.json``, or None."""
    lowered = file_name.lower()
    if not lowered.startswith(prefix) or not lowered.endswith(".json"):
        return None
    version = file_name[len(prefix):-len(".json")]
    return version or None


def _validate_segment(value: str, label: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValueError(f"{label} is required")
    if cleaned in (".", "..") or "/" in cleaned or "\\" in cleaned:
        raise ValueError(f"Invalid {label}: {value!r}")
    return cleaned


def _normalize_status(status: Optional[str]) -> str:
    """Lower-cased ``rental`` or ``sale``; anything else raises ValueError."""
    return PropertyStatus((status or "").strip().lower()).value


def _version_key(version: Optional[str]) -> tuple[str, int]:
    """Sort key of a version stamp; the collision counter compares numerically."""
    base, _, counter = (version or "").lower().partition("-")
    return base, int(counter) if counter.isdigit() else 0


def _to_title(value: str) -> str:
    return value.replace("_", " ").replace("-", " ")


class PropertyVersionStore:
    """Draft/publish/archive versioning of property records over JSON files."""

    def __init__(self, config: Optional[StorageConfig] = None):
        self.config = config or StorageConfig()

    # -- paths -----------------------------------------------------------------

    def _property_path(self, property_id: str) -> Path:
        return self.config.properties_path / _validate_segment(property_id, "Property id")

    @staticmethod
    def _list_files(directory: Path, pattern: str) -> list[Path]:
        if not directory.is_dir():
            return []
        try:
            return sorted(directory.glob(pattern), key=lambda path: path.name.lower())
        except OSError as e:
            raise StorageError(f"Failed to list {directory}: {e}") from e

    def _draft_paths(self, property_path: Path) -> list[Path]:
        """Drafts ordered by version; a "-N" counter sorts numerically after its base stamp."""
        drafts = self._list_files(property_path, f"{DRAFT_FILE_PREFIX}*.json")
        return sorted(drafts, key=lambda path: _version_key(extract_version(path.name, DRAFT_FILE_PREFIX)))

    def _latest_draft_path(self, property_path: Path) -> Optional[Path]:
        drafts = self._draft_paths(property_path)
        return drafts[-1] if drafts else None

    def _latest_data_path(self, property_path: Path) -> Optional[Path]:
        """Latest draft when any exists, else the published file, else None."""
        draft_path = self._latest_draft_path(property_path)
        if draft_path is not None:
            return draft_path
        published_path = property_path / DATA_FILE_NAME
        return published_path if published_path.is_file() else None

    def _unique_path(self, path: Path) -> Path:
        """``path`` itself, or a suffixed sibling that does not exist yet."""
        if not path.exists():
            return path
        candidate = path.with_name(f"{path.stem}-{get_version_stamp()}{path.suffix}")
        counter = 0
        while candidate.exists():
            counter += 1
            candidate = path.with_name(f"{path.stem}-{get_version_stamp()}-{counter:03d}{path.suffix}")
        return candidate

    def _next_version(self, property_path: Path) -> str:
        """Fresh draft stamp, disambiguated when the clock is coarser than the write rate."""
        drafts = self._draft_paths(property_path)
        latest = extract_version(drafts[-1].name, DRAFT_FILE_PREFIX) if drafts else None

        base = get_version_stamp()
        if latest and latest.split("-")[0] > base:
            base = latest.split("-")[0]

        archive_dir = property_path / ARCHIVE_DIR_NAME
        candidate = base
        counter = 0
        while (
            (property_path / f"{DRAFT_FILE_PREFIX}{candidate}.json").exists()
            or (archive_dir / f"{DRAFT_FILE_PREFIX}{candidate}.json").exists()
            or (latest is not None and _version_key(candidate) <= _version_key(latest))
        ):
            counter += 1
            candidate = f"{base}-{counter:03d}"
        return candidate

    # -- reads -----------------------------------------------------------------

    @staticmethod
    def _apply_metadata(record: Property, path: Path, is_published: bool) -> Property:
        version = record.version
        if not version or not version.strip():
            version = extract_version(path.name, DRAFT_FILE_PREFIX) or extract_version(path.name, ARCHIVE_FILE_PREFIX)
        if not version:
            modified = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
            version = get_version_stamp(modified)
        return record.model_copy(update={"version": version, "is_published": is_published})

    def _read_record(self, path: Path) -> Property:
        record = load_model(path, Property)
        is_published = path.name.lower() == DATA_FILE_NAME
        return self._apply_metadata(record, path, is_published).normalize_rental_units()

    def get_latest(self, property_id: str) -> Optional[Property]:
        """Newest draft if any exist, otherwise the published record (admin/preview view)."""
        data_path = self._latest_data_path(self._property_path(property_id))
        if data_path is None:
            return None
        return self._read_record(data_path)

    def get_published(self, property_id: str) -> Optional[Property]:
        """The live record only; drafts are ignored (public site view)."""
        data_path = self._property_path(property_id) / DATA_FILE_NAME
        if not data_path.is_file():
            return None
        return self._read_record(data_path)

    def _property_directories(self) -> list[Path]:
        properties_path = self.config.properties_path
        if not properties_path.is_dir():
            return []
        try:
            return sorted(
                (entry for entry in properties_path.iterdir() if entry.is_dir()),
                key=lambda entry: entry.name.lower(),
            )
        except OSError as e:
            raise StorageError(f"Failed to list {properties_path}: {e}") from e

    @timed("property_list_published", logger=logger)
    def list_published(self) -> list[Property]:
        records = []
        for directory in self._property_directories():
            data_path = directory / DATA_FILE_NAME
            if data_path.is_file():
                records.append(self._read_record(data_path))
        return records

    @timed("property_list_latest", logger=logger)
    def list_latest(self) -> list[Property]:
        records = []
        for directory in self._property_directories():
            data_path = self._latest_data_path(directory)
            if data_path is not None:
                records.append(self._read_record(data_path))
        return records

    def list_drafts(self, property_id: str) -> list[str]:
        """Draft version stamps, oldest first."""
        drafts = self._draft_paths(self._property_path(property_id))
        return [extract_version(path.name, DRAFT_FILE_PREFIX) or path.stem for path in drafts]

    def list_archive(self, property_id: str) -> list[str]:
        """File names in the property's archive."""
        archive_dir = self._property_path(property_id) / ARCHIVE_DIR_NAME
        return [path.name for path in self._list_files(archive_dir, "*.json")]

    def list_page_images(self, property_id: str, page: str) -> list[Image]:
        """Images dropped under ``pages/<page>/images`` with their public URLs."""
        images_path = self._property_path(property_id) / "pages" / _validate_segment(page, "Page") / "images"
        return [
            Image(src=self.config.to_public_url(path), alt=LocalizedValue.from_string(_to_title(path.stem)))
            for path in self._list_files(images_path, "*")
            if path.suffix.lower() in IMAGE_EXTENSIONS
        ]

    def list_pdfs(self, property_id: str) -> list[Pdf]:
        """PDF documents under ``pdfs/``; files below ``pdfs/directions/`` are directions."""
        pdf_path = self._property_path(property_id) / "pdfs"
        pdfs = []
        for path in self._list_files(pdf_path, "**/*"):
            if path.suffix.lower() != ".pdf":
                continue
            relative = path.relative_to(pdf_path).as_posix().lower()
            pdfs.append(Pdf(
                id=path.stem,
                title=LocalizedValue.from_string(_to_title(path.stem)),
                type="directions" if relative.startswith("directions/") else "other",
                src=self.config.to_public_url(path),
            ))
        return pdfs

    # -- writes ----------------------------------------------------------------

    def _write_draft(self, property_path: Path, record: Property) -> None:
        write_json_atomic(property_path / f"{DRAFT_FILE_PREFIX}{record.version}.json", dump_model(record))

    def create_shell(
        self,
        property_id: str,
        name: Union[LocalizedValue, str, Mapping[str, str]],
        status: str,
        listing_languages: Optional[Iterable[str]] = None,
    ) -> str:
        """Create an unpublished property with a single draft; returns the id."""
        property_path = self._property_path(property_id)
        property_id = property_path.name
        status_value = _normalize_status(status)

        if (property_path / DATA_FILE_NAME).exists() or self._draft_paths(property_path):
            raise AlreadyExistsError(f"Property '{property_id}' already exists.", resource_id=property_id)

        try:
            property_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create {property_path}: {e}") from e

        languages = list(listing_languages or []) or list(DEFAULT_CREATE_LISTING_LANGUAGES)
        record = Property(
            id=property_id,
            name=name if isinstance(name, LocalizedValue) else LocalizedValue.model_validate(name),
            status=status_value,
            archived=False,
            version=self._next_version(property_path),
            is_published=False,
            listing_languages=languages,
        )
        self._write_draft(property_path, record)

        logger.info("Property shell created", property_id=property_id, version=record.version)
        return property_id

    def update(self, property_id: str, changes: Union[PropertyUpdateRequest, Mapping[str, Any]]) -> str:
        """Write the latest record plus ``changes`` as a new draft; returns its version.

        Each provided field replaces the stored one wholesale (no deep merge);
        fields left as None are retained. Prior drafts and the published
        record are left untouched.
        """
        if not isinstance(changes, PropertyUpdateRequest):
            changes = PropertyUpdateRequest.model_validate(changes)

        property_path = self._property_path(property_id)
        data_path = self._latest_data_path(property_path)
        if data_path is None:
            raise NotFoundError(f"Property '{property_id}' not found.", resource_id=property_id)

        current = self._read_record(data_path)

        update: dict[str, Any] = {}
        for field in _REPLACED_FIELDS:
            value = getattr(changes, field)
            if value is not None:
                update[field] = value
        if "status" in update:
            update["status"] = _normalize_status(update["status"])

        if changes.rental_units is not None:
            rental_units = changes.rental_units
        elif changes.rental is not None:
            rental_units = [changes.rental]
        else:
            rental_units = list(current.get_rental_units())

        # A theme name, requested or already stored, takes over from any inline theme.
        theme_name = changes.theme_name if changes.theme_name is not None else current.theme_name
        theme = None if theme_name is not None else (changes.theme or current.theme)

        update.update(
            rental=None,
            rental_units=rental_units,
            theme_name=theme_name,
            theme=theme,
            version=self._next_version(property_path),
            is_published=False,
        )
        updated = current.model_copy(update=update)
        self._write_draft(property_path, updated)

        logger.info(
            "Property draft written",
            property_id=property_id,
            version=updated.version,
            based_on=current.version,
            changed_fields=sorted(changes.model_dump(exclude_none=True)),
        )
        return updated.version

    def publish(self, property_id: str) -> Optional[str]:
        """Promote the latest draft to ``data.json`` and archive everything it supersedes.

        No-op (returns None) when there is no draft. The new content is written
        to a temporary file and renamed over ``data.json`` in one step, and only
        then are drafts moved to the archive, so readers always find exactly
        one published record.
        """
        property_path = self._property_path(property_id)
        latest_draft = self._latest_draft_path(property_path)
        if latest_draft is None:
            logger.debug("Publish skipped, no draft", property_id=property_id)
            return None

        with log_timing("property_publish", logger=logger, property_id=property_id):
            draft = load_model(latest_draft, Property)
            version = (draft.version or "").strip() or extract_version(latest_draft.name, DRAFT_FILE_PREFIX) or get_version_stamp()
            published = draft.model_copy(update={"version": version, "is_published": True})

            data_path = property_path / DATA_FILE_NAME
            archive_dir = property_path / ARCHIVE_DIR_NAME
            archive_copy: Optional[Path] = None
            if data_path.is_file():
                existing = load_model(data_path, Property)
                existing_version = (existing.version or "").strip()
                if not existing_version:
                    modified = datetime.fromtimestamp(data_path.stat().st_mtime, tz=timezone.utc)
                    existing_version = get_version_stamp(modified)
                archive_copy = self._unique_path(archive_dir / f"{ARCHIVE_FILE_PREFIX}{existing_version}.json")

            temp_path = property_path / f"{PUBLISH_TEMP_PREFIX}{version}.json"
            swapped = False
            try:
                write_json_atomic(temp_path, dump_model(published))
                if archive_copy is not None:
                    archive_dir.mkdir(parents=True, exist_ok=True)
                    shutil.copy2(data_path, archive_copy)
                os.replace(temp_path, data_path)
                swapped = True
            except (OSError, StorageError) as e:
                with suppress(OSError):
                    temp_path.unlink()
                if archive_copy is not None and not swapped:
                    with suppress(OSError):
                        archive_copy.unlink()
                raise StorageError(f"Failed to publish property '{property_id}': {e}") from e

            try:
                archive_dir.mkdir(parents=True, exist_ok=True)
                for draft_path in self._draft_paths(property_path):
                    shutil.move(str(draft_path), str(self._unique_path(archive_dir / draft_path.name)))
            except OSError as e:
                raise StorageError(f"Published '{property_id}' but failed to archive drafts: {e}") from e

        logger.info(
            "Property published",
            property_id=property_id,
            version=version,
            archived_previous=archive_copy.name if archive_copy else None,
        )
        return version

    def revert(self, property_id: str) -> Optional[str]:
        """Delete only the newest draft; returns its version, or None when there was none."""
        latest_draft = self._latest_draft_path(self._property_path(property_id))
        if latest_draft is None:
            return None

        try:
            latest_draft.unlink()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to revert property '{property_id}': {e}") from e

        version = extract_version(latest_draft.name, DRAFT_FILE_PREFIX)
        logger.info("Property draft reverted", property_id=property_id, version=version)
        return version

    def archive_property(self, property_id: str) -> str:
        return self.update(property_id, PropertyUpdateRequest(archived=True))

    def restore_property(self, property_id: str) -> str:
        return self.update(property_id, PropertyUpdateRequest(archived=False))
