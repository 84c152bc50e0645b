"""Admin users stored in ``users.json``."""

from typing import Optional

from property_manager.models.user import UserCredential
from property_manager.services.json_collection import JsonCollectionStore
from property_manager.utils.config import StorageConfig
from property_manager.utils.logging import get_structured_logger, mask_sensitive_data

logger = get_structured_logger(__name__)


class JsonUserStore(JsonCollectionStore[UserCredential]):
    """User credentials; usernames match case-insensitively, ids exactly."""

    model_cls = UserCredential

    def __init__(self, config: Optional[StorageConfig] = None):
        self.config = config or StorageConfig()
        super().__init__(self.config.users_path)

    def get_by_username(self, username: Optional[str]) -> Optional[UserCredential]:
        if not username or not username.strip():
            return None
        wanted = username.lower()
        return self._find(lambda user: user.username.lower() == wanted)

    def get_by_id(self, user_id: Optional[str]) -> Optional[UserCredential]:
        if not user_id or not user_id.strip():
            return None
        return self._find(lambda user: user.id == user_id)

    def create(self, user: UserCredential) -> None:
        self._append(user)
        logger.info("User created", user_id=user.id, email=mask_sensitive_data(user.email or ""))

    def update(self, user: UserCredential) -> bool:
        updated = self._replace(user, lambda existing: existing.id == user.id)
        if updated:
            logger.info("User updated", user_id=user.id)
        return updated

    def delete(self, user_id: str) -> int:
        removed = self._remove(lambda user: user.id == user_id)
        logger.info("User deleted", user_id=user_id, removed=removed)
        return removed
