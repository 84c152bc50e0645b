"""Error handling utilities."""

from typing import Optional


class PropertyManagerError(Exception):
    """Base exception for the property manager core."""
    pass


class NotFoundError(PropertyManagerError):
    """Property, draft or stored record does not exist."""

    def __init__(self, message: str, resource_id: Optional[str] = None):
        super().__init__(message)
        self.resource_id = resource_id


class AlreadyExistsError(PropertyManagerError):
    """Create collided with an existing property shell."""

    def __init__(self, message: str, resource_id: Optional[str] = None):
        super().__init__(message)
        self.resource_id = resource_id


class InvalidDataError(PropertyManagerError):
    """Stored JSON failed to parse or does not match the expected shape."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class StorageError(PropertyManagerError):
    """Filesystem operation failed (permission denied, disk full, ...)."""
    pass


class AuthError(PropertyManagerError):
    """Session is missing, expired or invalid."""
    pass


class PermissionDeniedError(PropertyManagerError):
    """Session lacks the role or property claim for the operation."""
    pass
