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

"""AsyncAPI document validation via the external AsyncAPI CLI."""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..discovery import find_files
from ..exceptions import ContractValidatorError
from ..report import ValidationResult
from .document import precheck_document
from .runner import AsyncApiRunner

__all__ = ['find_asyncapi_files', 'validate_asyncapi_files', 'AsyncApiRunner', 'ValidationResult']

logger = logging.getLogger(__name__)

ASYNCAPI_EXTENSIONS = ('.yaml', '.yml')


def find_asyncapi_files(root: Union[str, Path]) -> List[Path]:
    """Find all YAML files under an AsyncAPI directory."""
    return find_files(root, ASYNCAPI_EXTENSIONS)


def validate_asyncapi_files(
    file_paths: List[Path],
    runner: Optional[AsyncApiRunner] = None,
) -> List[ValidationResult]:
    """Validate a list of AsyncAPI documents.

    Every file is processed even when an earlier one fails.

    Args:
        file_paths: List of file paths to validate
        runner: External validator wrapper (default: ``asyncapi`` on PATH)

    Returns:
        List of ValidationResult objects, one per file
    """
    runner = runner or AsyncApiRunner()
    results = []

    for file_path in file_paths:
        result = ValidationResult(file_path)
        logger.info(f"Validating {file_path}...")

        if precheck_document(file_path, result):
            try:
                runner.validate(file_path)
            except ContractValidatorError as e:
                result.add_error(f"Error validating {file_path}", detail=str(e))

        for warning in result.warnings:
            logger.warning(f"  Warning: {warning['message']}")
        if not result.ok:
            for error in result.errors:
                _log_error(error)

        results.append(result)

    return results


def _log_error(error: dict) -> None:
    location = ""
    if 'line' in error:
        location = f" (line {error['line']}, column {error.get('column', '?')})"
    logger.error(f"{error['message']}{location}")
    if 'detail' in error:
        logger.error(f"  Error: {error['detail']}")
