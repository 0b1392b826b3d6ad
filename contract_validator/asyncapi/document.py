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

"""YAML pre-check for AsyncAPI documents.

The AsyncAPI CLI owns the actual validation. This only catches files that
are not YAML at all, so they can be reported with a line number instead of
spawning the external tool for them.
"""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from ..report import ValidationResult

logger = logging.getLogger(__name__)

ASYNCAPI_VERSION_FIELD = "asyncapi"


def load_document(file_path: Path) -> Any:
    """Parse a YAML file, returning ``{}`` for an empty document."""
    with open(file_path, 'r', encoding='utf-8') as stream:
        data = yaml.safe_load(stream)
    return {} if data is None else data


def precheck_document(file_path: Path, result: ValidationResult) -> bool:
    """Check that a file is a parseable YAML mapping.

    Args:
        file_path: AsyncAPI document to check
        result: ValidationResult to add errors/warnings to

    Returns:
        True if the external validator should be run on the file
    """
    try:
        document = load_document(file_path)
    except yaml.MarkedYAMLError as exc:
        mark = exc.problem_mark or exc.context_mark
        result.add_error(
            f"Failed to parse YAML file {file_path}",
            line=mark.line + 1 if mark is not None else None,
            column=mark.column + 1 if mark is not None else None,
            detail=str(exc),
        )
        return False
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        result.add_error(f"Failed to read YAML file {file_path}", detail=str(exc))
        return False

    if not isinstance(document, dict):
        result.add_error(
            f"Root of {file_path} must be a mapping, got {type(document).__name__}"
        )
        return False

    _check_version_field(file_path, document, result)
    return True


def _check_version_field(file_path: Path, document: Dict[str, Any], result: ValidationResult) -> None:
    version = document.get(ASYNCAPI_VERSION_FIELD)
    if version is None:
        result.add_warning(f"{file_path} has no '{ASYNCAPI_VERSION_FIELD}' version field")
        return
    logger.debug(f"{file_path} declares AsyncAPI {version}")
