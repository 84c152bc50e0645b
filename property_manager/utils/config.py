"""Storage configuration read from environment variables."""

import os
from pathlib import Path
from typing import Optional


class StorageConfig:
    """Location of the file-backed data store.

    Class attributes hold the environment defaults; instances may override any
    of them, which is how tests point the stores at a temporary directory.
    """

    DATA_ROOT = os.environ.get("PROPERTY_DATA_ROOT", "data")
    PUBLIC_BASE_PATH = os.environ.get("PROPERTY_PUBLIC_BASE_PATH", "/data")
    THEMES_FILE = os.environ.get("THEMES_FILE", "themes.json")
    USERS_FILE = os.environ.get("USERS_FILE", "users.json")

    def __init__(
        self,
        data_root: Optional[str] = None,
        public_base_path: Optional[str] = None,
        themes_file: Optional[str] = None,
        users_file: Optional[str] = None,
    ):
        self.data_root = data_root or self.DATA_ROOT
        self.public_base_path = public_base_path or self.PUBLIC_BASE_PATH
        self.themes_file = themes_file or self.THEMES_FILE
        self.users_file = users_file or self.USERS_FILE

    @property
    def root_path(self) -> Path:
        """Absolute data root; relative roots resolve against the working directory."""
        root = Path(self.data_root)
        if not root.is_absolute():
            root = Path.cwd() / root
        return root

    @property
    def properties_path(self) -> Path:
        return self.root_path / "properties"

    @property
    def themes_path(self) -> Path:
        return self.root_path / self.themes_file

    @property
    def users_path(self) -> Path:
        return self.root_path / self.users_file

    def to_public_url(self, file_path: Path) -> str:
        """Convert a file under the data root to a public URL."""
        relative = Path(file_path).relative_to(self.root_path).as_posix()
        base_path = self.public_base_path
        if not base_path.startswith("/"):
            base_path = "/" + base_path
        return f"{base_path.rstrip('/')}/{relative}"
