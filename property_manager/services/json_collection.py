"""Base for small shared collections persisted as one JSON array file."""

from pathlib import Path
from typing import Callable, Generic, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from property_manager.utils.errors import InvalidDataError
from property_manager.utils.json_files import dump_model, read_json, write_json_atomic


ModelT = TypeVar("ModelT", bound=BaseModel)


class JsonCollectionStore(Generic[ModelT]):
    """Whole-file read-modify-write over a JSON array of records.

    A missing file reads as an empty collection. Writes replace the file
    atomically; concurrent writers race and the last one wins.
    """

    model_cls: Type[ModelT]

    def __init__(self, path: Path):
        self.path = Path(path)
        self._adapter = TypeAdapter(list[self.model_cls])

    def _read_all(self) -> list[ModelT]:
        if not self.path.is_file():
            return []
        data = read_json(self.path)
        if data is None:
            return []
        try:
            return self._adapter.validate_python(data)
        except ValidationError as e:
            raise InvalidDataError(
                f"{self.path} does not contain a list of {self.model_cls.__name__}: {e.error_count()} error(s)",
                path=str(self.path),
            ) from e

    def _write_all(self, records: list[ModelT]) -> None:
        write_json_atomic(self.path, [dump_model(record) for record in records])

    def get_all(self) -> list[ModelT]:
        return self._read_all()

    def _find(self, predicate: Callable[[ModelT], bool]) -> Optional[ModelT]:
        return next((record for record in self._read_all() if predicate(record)), None)

    def _append(self, record: ModelT) -> None:
        records = self._read_all()
        records.append(record)
        self._write_all(records)

    def _replace(self, record: ModelT, predicate: Callable[[ModelT], bool]) -> bool:
        """Replace the first match; returns False (and writes nothing) when none matches."""
        records = self._read_all()
        for index, existing in enumerate(records):
            if predicate(existing):
                records[index] = record
                self._write_all(records)
                return True
        return False

    def _remove(self, predicate: Callable[[ModelT], bool]) -> int:
        records = self._read_all()
        kept = [record for record in records if not predicate(record)]
        removed = len(records) - len(kept)
        self._write_all(kept)
        return removed
