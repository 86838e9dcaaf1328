from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from jsonschema import Draft7Validator

from ..errors import DataValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaInfo:
    name: str
    uri: str
    schema: Dict[str, Any]


class SchemaRegistry:
    """Registry for bundled JSON Schemas.

    Discovers schemas from the package resource directory 'catacomb.data.schemas'.
    A schema's "name" is its filename without the ".schema.json" suffix.
    """

    _PKG = "catacomb.data"
    _DIR = "schemas"

    def __init__(self) -> None:
        self._schemas_by_name: dict[str, SchemaInfo] = {}
        self._schemas_by_uri: dict[str, SchemaInfo] = {}
        self._load_all()

    def _load_all(self) -> None:
        schema_dir = resources.files(self._PKG).joinpath(self._DIR)
        for entry in schema_dir.iterdir():
            if not entry.name.endswith(".schema.json"):
                continue
            name = entry.name[:-len(".schema.json")]
            with entry.open("rb") as fh:
                schema = json.load(fh)
            uri = schema.get("$id") or f"resource://{self._PKG}.{self._DIR}/{entry.name}"
            info = SchemaInfo(name=name, uri=uri, schema=schema)
            self._schemas_by_name[name] = info
            self._schemas_by_uri[uri] = info
            logger.debug("Registered schema '%s' (uri=%s)", name, uri)

    def get(self, name_or_uri: str) -> Optional[SchemaInfo]:
        return self._schemas_by_name.get(name_or_uri) or self._schemas_by_uri.get(name_or_uri)

    def names(self) -> list[str]:
        return sorted(self._schemas_by_name.keys())

    def make_validator(self, name_or_uri: str) -> Draft7Validator:
        info = self.get(name_or_uri)
        if not info:
            raise KeyError(f"Schema not found: {name_or_uri}")
        return Draft7Validator(info.schema)


class DataLoader:
    """Load YAML (or JSON) data files and validate them against bundled schemas.

    - Caching to avoid re-reading the same file repeatedly
    - Automatic detection of schema when the document contains "$schema": "name-or-uri"
    """

    def __init__(self, schema_registry: Optional[SchemaRegistry] = None) -> None:
        self.schemas = schema_registry or SchemaRegistry()
        self._cache: dict[str, Any] = {}

    def clear_cache(self) -> None:
        self._cache.clear()

    def load(self, path: os.PathLike | str, *, validate: bool = True, schema: Optional[str] = None) -> Any:
        """Load a data file from disk and optionally validate it.

        Raises:
            DataValidationError: if validation fails
            FileNotFoundError: if the file does not exist
        """
        abs_path = Path(path).resolve()
        key = str(abs_path)
        if key not in self._cache:
            if not abs_path.exists():
                raise FileNotFoundError(abs_path)
            logger.debug("Loading data file: %s", abs_path)
            with abs_path.open("r", encoding="utf-8") as fh:
                self._cache[key] = yaml.safe_load(fh)
        data = self._cache[key]
        if validate:
            self._validate_document(data, schema, key)
        return data

    def load_packaged(self, filename: str, *, validate: bool = True, schema: Optional[str] = None) -> Any:
        """Load one of the data files shipped inside the package."""
        key = f"resource://{filename}"
        if key not in self._cache:
            text = resources.files("catacomb.data").joinpath(filename).read_text(encoding="utf-8")
            self._cache[key] = yaml.safe_load(text)
        data = self._cache[key]
        if validate:
            self._validate_document(data, schema, key)
        return data

    def _validate_document(self, data: Any, schema: Optional[str], origin: str) -> None:
        schema_name = schema or (isinstance(data, dict) and data.get("$schema"))
        if schema_name:
            self.validate_data(data, schema_name)
        else:
            logger.debug("No schema specified for %s; skipping validation", origin)

    def validate_data(self, data: Any, schema_name_or_uri: str) -> None:
        try:
            validator = self.schemas.make_validator(schema_name_or_uri)
        except KeyError as e:
            raise DataValidationError(f"Unknown schema: {schema_name_or_uri}") from e

        errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
        if errors:
            for err in errors:
                logger.error("Schema '%s' validation error at %s: %s", schema_name_or_uri, list(err.path), err.message)
            raise DataValidationError(f"Validation failed for schema '{schema_name_or_uri}'", errors)


@lru_cache(maxsize=1)
def default_loader() -> DataLoader:
    return DataLoader()


__all__ = ["SchemaInfo", "SchemaRegistry", "DataLoader", "default_loader"]
