# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""JSON Schema validation in three phases: load, register, validate.

Loading and registering must succeed for every file before anything is
validated, since a schema's ``$ref``s may point into any other file.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from referencing.exceptions import Unresolvable

from ..discovery import find_files
from ..exceptions import ContractValidatorError, MissingSchemaIdError, SchemaLoadError, SchemaRegistryError
from ..report import ValidationResult
from .checks import SchemaIssue, check_meta_schema, check_refs, check_strict
from .loader import LoadedSchema, load_schema_file
from .registry import SchemaRegistry

__all__ = [
    'find_schema_files',
    'load_schemas',
    'register_schemas',
    'validate_schemas',
    'LoadedSchema',
    'SchemaRegistry',
]

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = ('.json',)


def find_schema_files(root: Union[str, Path]) -> List[Path]:
    """Find all JSON files under a schemas directory."""
    return find_files(root, SCHEMA_EXTENSIONS)


def display_path(file_path: Path, root: Optional[Path]) -> str:
    """Path relative to ``root`` when possible, for report lines."""
    if root is None:
        return str(file_path)
    try:
        return str(Path(file_path).relative_to(root))
    except ValueError:
        return str(file_path)


def load_schemas(
    file_paths: List[Path],
    root: Optional[Path] = None,
) -> Tuple[List[LoadedSchema], List[ValidationResult]]:
    """Load every schema file, reporting all failures.

    Returns:
        (loaded schemas, results of the files that failed to load)
    """
    loaded: List[LoadedSchema] = []
    failures: List[ValidationResult] = []

    for file_path in file_paths:
        rel = display_path(file_path, root)
        try:
            loaded.append(load_schema_file(file_path))
        except MissingSchemaIdError as e:
            result = ValidationResult(file_path)
            result.add_error("Missing required $id field", detail=str(e))
            failures.append(result)
            logger.error(f"✗ {rel} - Missing required $id field")
            continue
        except SchemaLoadError as e:
            result = ValidationResult(file_path)
            result.add_error("Failed to load", detail=str(e))
            failures.append(result)
            logger.error(f"✗ {rel} - Failed to load")
            logger.error(f"  Error: {e}")
            continue
        logger.info(f"  Loaded: {rel}")

    return loaded, failures


def register_schemas(
    schemas: List[LoadedSchema],
    root: Optional[Path] = None,
) -> Tuple[SchemaRegistry, List[ValidationResult]]:
    """Add every loaded schema to one registry, reporting all failures.

    Returns:
        (registry, results of the files that could not be registered)
    """
    registry = SchemaRegistry()
    failures: List[ValidationResult] = []

    for loaded in schemas:
        rel = display_path(loaded.file_path, root)
        try:
            registry.add(loaded)
        except SchemaRegistryError as e:
            result = ValidationResult(loaded.file_path)
            result.add_error("Failed to add to registry", detail=str(e))
            failures.append(result)
            logger.error(f"✗ {rel} - Failed to add to registry")
            logger.error(f"  Error: {e}")
            continue
        logger.info(f"  Added: {rel}")

    return registry, failures


def validate_schemas(
    schemas: List[LoadedSchema],
    registry: SchemaRegistry,
    root: Optional[Path] = None,
    strict: bool = True,
) -> List[ValidationResult]:
    """Check each schema against its meta-schema, then resolve its ``$ref``s.

    Args:
        schemas: Loaded schemas, all already in ``registry``
        registry: Registry used to resolve references
        root: Base directory for report paths
        strict: Also reject unknown keywords and formats

    Returns:
        List of ValidationResult objects, one per schema
    """
    results = []

    for loaded in schemas:
        result = ValidationResult(loaded.file_path)
        rel = display_path(loaded.file_path, root)

        issues = check_meta_schema(loaded.schema)
        if issues:
            _record(result, "Schema validation failed", issues)
            logger.error(f"✗ {rel} - Schema validation failed")
            logger.error("  Errors:")
            for issue in issues:
                logger.error(f"    {issue}")
            results.append(result)
            continue

        try:
            issues = check_strict(loaded.schema) if strict else []
            issues += check_refs(loaded.schema, registry)
        except (Unresolvable, ContractValidatorError) as e:
            issues = [SchemaIssue(message=f"Compilation error: {e}")]

        if issues:
            _record(result, "Compilation failed", issues)
            logger.error(f"✗ {rel} - Compilation failed")
            for issue in issues:
                logger.error(f"  Error: {issue}")
        else:
            logger.info(f"✓ {rel} - Valid")

        results.append(result)

    return results


def _record(result: ValidationResult, message: str, issues: List[SchemaIssue]) -> None:
    for issue in issues:
        result.add_error(message, detail=str(issue))
