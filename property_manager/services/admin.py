"""Admin operations on properties, gated by the caller's session."""

from typing import Any, Mapping, Optional, Union

from property_manager.models.localization import DEFAULT_LANGUAGE, normalize_language
from property_manager.models.property import Property, PropertyCreateRequest, PropertyUpdateRequest
from property_manager.services.property_lookup import localize_property
from property_manager.services.property_store import PropertyVersionStore
from property_manager.services.sessions import SessionContext
from property_manager.utils.errors import NotFoundError, PermissionDeniedError
from property_manager.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


class AdminPropertyService:
    """Draft, publish and archive workflow for authenticated admin users.

    Every call checks the session first; store errors propagate unchanged.
    """

    def __init__(self, store: PropertyVersionStore, session: SessionContext):
        self.store = store
        self.session = session

    def _deny(self, action: str, property_id: Optional[str] = None) -> PermissionDeniedError:
        logger.warning(
            "Admin action denied",
            action=action,
            user_id=self.session.user_id,
            property_id=property_id,
        )
        return PermissionDeniedError(f"User '{self.session.username}' may not {action}")

    def _require_edit(self, action: str, property_id: str) -> None:
        self.session.ensure_active()
        if not self.session.can_edit(property_id):
            raise self._deny(action, property_id)

    def list_properties(
        self,
        language: Optional[str] = DEFAULT_LANGUAGE,
        include_all_languages: bool = False,
    ) -> list[Property]:
        """Latest version of every property the session may see, ordered by display name."""
        self.session.ensure_active()
        session = self.session
        if not (session.is_admin or session.is_agent or session.is_property_manager or session.is_property_owner):
            raise self._deny("list properties")

        language = normalize_language(language)
        visible = [record for record in self.store.list_latest() if session.can_view(record.id)]
        visible.sort(key=lambda record: record.name.resolve(language))
        return [localize_property(record, language, include_all_languages) for record in visible]

    def get_property(self, property_id: str) -> Property:
        """Latest (draft-first) record, unlocalized, for editing."""
        self.session.ensure_active()
        if not self.session.can_view(property_id):
            raise self._deny("view property", property_id)

        record = self.store.get_latest(property_id)
        if record is None:
            raise NotFoundError(f"Property '{property_id}' not found.", resource_id=property_id)
        return record

    def create(self, request: Union[PropertyCreateRequest, Mapping[str, Any]]) -> str:
        self.session.ensure_active()
        if not self.session.can_create():
            raise self._deny("create properties")

        if not isinstance(request, PropertyCreateRequest):
            request = PropertyCreateRequest.model_validate(request)
        property_id = self.store.create_shell(request.id, request.name, request.status, request.listing_languages)
        logger.info("Property created by admin", property_id=property_id, user_id=self.session.user_id)
        return property_id

    def update(self, property_id: str, request: Union[PropertyUpdateRequest, Mapping[str, Any]]) -> str:
        self._require_edit("update property", property_id)
        return self.store.update(property_id, request)

    def archive(self, property_id: str) -> str:
        self._require_edit("archive property", property_id)
        return self.store.archive_property(property_id)

    def restore(self, property_id: str) -> str:
        self._require_edit("restore property", property_id)
        return self.store.restore_property(property_id)

    def publish(self, property_id: str) -> Optional[str]:
        self._require_edit("publish property", property_id)
        return self.store.publish(property_id)

    def revert(self, property_id: str) -> Optional[str]:
        self._require_edit("revert property", property_id)
        return self.store.revert(property_id)
