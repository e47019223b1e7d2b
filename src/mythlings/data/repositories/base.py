"""Base repository implementation for JSON definition data."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Generic, Iterable, TypeVar

from mythlings.data import paths
from mythlings.data.errors import DataValidationError
from mythlings.data.json_loader import load_json_object

T = TypeVar("T")


class RepositoryBase(Generic[T]):
    """Common caching, loading and field validation for repositories."""

    def __init__(self, filename: str, base_path: Path | str | None = None) -> None:
        self._filename = filename
        self._base_path = Path(base_path) if base_path is not None else None
        self._definitions: Dict[str, T] | None = None

    def _get_file_path(self) -> Path:
        definitions_dir = paths.get_definitions_path(self._base_path)
        return definitions_dir / self._filename

    def _load_raw(self) -> dict[str, object]:
        return load_json_object(self._get_file_path())

    def _build(self, raw: dict[str, object]) -> Dict[str, T]:
        """Convert a raw dict into typed definitions."""
        raise NotImplementedError

    def _ensure_loaded(self) -> Dict[str, T]:
        if self._definitions is None:
            raw = self._load_raw()
            self._definitions = self._build(raw)
        return self._definitions

    def get(self, def_id: str) -> T:
        """Return a definition by id."""
        definitions = self._ensure_loaded()
        try:
            return definitions[def_id]
        except KeyError as exc:
            raise KeyError(def_id) from exc

    def all(self) -> list[T]:
        """Return all definitions sorted deterministically by id."""
        definitions = self._ensure_loaded()
        return [definitions[key] for key in sorted(definitions.keys())]

    def __contains__(self, def_id: object) -> bool:
        return def_id in self._ensure_loaded()

    # -----------------------
    # Field validation
    # -----------------------
    def _fail(self, message: str) -> DataValidationError:
        return DataValidationError(message, source=self._filename)

    def _require_mapping(self, value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise self._fail(f"{context} must be an object/dict.")
        return value

    def _require_str(self, value: object, context: str, *, allow_empty: bool = False) -> str:
        if not isinstance(value, str):
            raise self._fail(f"{context} must be a string.")
        if not allow_empty and not value.strip():
            raise self._fail(f"{context} must not be empty.")
        return value

    def _optional_str(self, value: object, context: str) -> str | None:
        if value is None:
            return None
        return self._require_str(value, context, allow_empty=True)

    def _require_int(self, value: object, context: str, *, minimum: int | None = None) -> int:
        # bool is an int subclass; JSON true/false is never a valid stat.
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._fail(f"{context} must be an integer.")
        if minimum is not None and value < minimum:
            raise self._fail(f"{context} must be >= {minimum}.")
        return value

    def _require_list(self, value: object, context: str) -> list:
        if not isinstance(value, list):
            raise self._fail(f"{context} must be a list.")
        return value

    def _require_literal(self, value: object, allowed: Iterable[str], context: str) -> str:
        allowed_set = set(allowed)
        if not isinstance(value, str):
            raise self._fail(f"{context} must be a string.")
        if value not in allowed_set:
            raise self._fail(f"{context} must be one of {sorted(allowed_set)}.")
        return value

    def _assert_required(self, payload: dict[str, object], required: set[str], context: str) -> None:
        missing = required - payload.keys()
        if missing:
            raise self._fail(f"{context} missing fields: {sorted(missing)}")
