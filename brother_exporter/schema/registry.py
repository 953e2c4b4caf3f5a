# ==============================================
# SchemaRegistry
# ==============================================
#
# PURPOSE:
#   Read-only mapping from the exact "Model Name" string a printer
#   reports to the Schema that describes its maintenance CSV.
#
# LIFECYCLE:
#   Built once at startup (built-in schemas + optional schema file),
#   then handed to MaintenanceInfoReader / the probe app. Nothing
#   mutates it afterwards, so any number of requests may read it
#   concurrently without locking.
#
# CLASS: SchemaRegistry
# ---------------------
#   - lookup(model_name: str) -> Schema
#       Exact match only. Unknown names raise ModelUnknownError.
#   - model_names -> list[str]
#   - __contains__, __len__
#
# FUNCTIONS:
# ----------
# - load_schema_file(path) -> list[Schema]
#     Read extra schemas from a JSON file:
#       {"models": [ Schema.to_dict(), ... ]}
#
# - default_registry(schema_file: str | None = None) -> SchemaRegistry
#     Built-in schemas, plus the file's schemas when given.
#
# ==============================================

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, List, Optional, Union

from brother_exporter.errors import ModelUnknownError, SchemaDefinitionError
from brother_exporter.schema.models import BUILTIN_SCHEMAS
from brother_exporter.schema.rules import Schema

logger = logging.getLogger(__name__)


class SchemaRegistry:
    """
    Immutable model name → Schema mapping.
    """

    def __init__(self, schemas: Iterable[Schema]):
        """
        Args:
            schemas: Schemas to register. Model names must be unique.

        Raises:
            SchemaDefinitionError: two schemas share a model name
        """
        by_model = {}
        for schema in schemas:
            if schema.model_name in by_model:
                raise SchemaDefinitionError(
                    f"model '{schema.model_name}' defined more than once"
                )
            by_model[schema.model_name] = schema
        self._schemas = MappingProxyType(by_model)

    def lookup(self, model_name: str) -> Schema:
        """
        Find the schema for a reported model name.

        Raises:
            ModelUnknownError: no schema registered under exactly this name
        """
        try:
            return self._schemas[model_name]
        except KeyError:
            raise ModelUnknownError(model_name) from None

    @property
    def model_names(self) -> List[str]:
        return sorted(self._schemas)

    def __contains__(self, model_name: object) -> bool:
        return model_name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def __repr__(self) -> str:
        return f"SchemaRegistry({self.model_names!r})"


def load_schema_file(path: Union[str, Path]) -> List[Schema]:
    """
    Load schema definitions from a JSON file.

    Args:
        path: File containing {"models": [...]}

    Returns:
        List of validated Schema objects

    Raises:
        SchemaDefinitionError: file missing, not JSON, or a schema is invalid
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f)
    except OSError as e:
        raise SchemaDefinitionError(f"cannot read schema file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SchemaDefinitionError(f"schema file {path} is not valid JSON: {e}") from e

    if not isinstance(document, dict) or not isinstance(document.get("models"), list):
        raise SchemaDefinitionError(f"schema file {path} must contain a 'models' list")

    schemas = [Schema.from_dict(data) for data in document["models"]]
    logger.info("Loaded %d schema(s) from %s", len(schemas), path)
    return schemas


def default_registry(schema_file: Optional[Union[str, Path]] = None) -> SchemaRegistry:
    """
    Build the registry used by the exporter.

    Args:
        schema_file: Optional JSON file with additional models. It may not
                     redefine a built-in model.
    """
    schemas = list(BUILTIN_SCHEMAS)
    if schema_file:
        schemas.extend(load_schema_file(schema_file))

    registry = SchemaRegistry(schemas)
    logger.info("Schema registry ready: %s", ", ".join(registry.model_names))
    return registry
