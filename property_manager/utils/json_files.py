"""JSON file helpers: strict reads and atomic writes."""

import json
import os
import uuid
from contextlib import suppress
from pathlib import Path
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from property_manager.utils.errors import InvalidDataError, NotFoundError, StorageError

ModelT = TypeVar("ModelT", bound=BaseModel)


def read_json(path: Path) -> Any:
    """Read and parse a JSON file.

    Raises NotFoundError when the file is missing, InvalidDataError when it does
    not parse and StorageError for any other filesystem failure.
    """
    try:
        with open(path, "r", encoding="utf-8") as handle:
            return json.load(handle)
    except FileNotFoundError as e:
        raise NotFoundError(f"File not found: {path}", resource_id=str(path)) from e
    except json.JSONDecodeError as e:
        raise InvalidDataError(f"Invalid JSON in {path}: {e}", path=str(path)) from e
    except OSError as e:
        raise StorageError(f"Failed to read {path}: {e}") from e


def load_model(path: Path, model_cls: Type[ModelT]) -> ModelT:
    """Read a JSON file into a pydantic model, failing loudly on shape mismatch."""
    data = read_json(path)
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise InvalidDataError(
            f"{path} does not contain a valid {model_cls.__name__}: {e.error_count()} error(s)",
            path=str(path),
        ) from e


def dump_model(model: BaseModel) -> Any:
    """JSON-ready, camelCase representation of a record."""
    return model.model_dump(mode="json", by_alias=True)


def write_json_atomic(path: Path, payload: Any) -> None:
    """Write JSON to a temporary sibling file and rename it into place.

    Readers see either the previous content or the new content, never a
    partially written file.
    """
    tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex[:8]}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, ensure_ascii=False)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, path)
    except OSError as e:
        with suppress(OSError):
            tmp_path.unlink()
        raise StorageError(f"Failed to write {path}: {e}") from e
