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

"""Per-file result reporting for the validators."""

from pathlib import Path
from typing import List, Dict, Any, Optional, Sequence


class ValidationResult:
    """Container for validation results for a single file."""

    def __init__(self, file_path: Path):
        """Initialize validation result.

        Args:
            file_path: Path to the file being validated
        """
        self.file_path = file_path
        self.errors: List[Dict[str, Any]] = []
        self.warnings: List[Dict[str, Any]] = []

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        """Add an error message.

        Args:
            message: Error message
            line: Optional 1-based line number where the error occurred
            column: Optional 1-based column
            detail: Optional underlying error text
        """
        self.errors.append(_entry(message, line, column, detail))

    def add_warning(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        """Add a warning message."""
        self.warnings.append(_entry(message, line, column, detail))


def _entry(
    message: str,
    line: Optional[int],
    column: Optional[int],
    detail: Optional[str],
) -> Dict[str, Any]:
    entry: Dict[str, Any] = {'message': message}
    if line is not None:
        entry['line'] = line
    if column is not None:
        entry['column'] = column
    if detail is not None:
        entry['detail'] = detail
    return entry


def count_failures(results: Sequence[ValidationResult]) -> int:
    """Number of files with at least one error."""
    return sum(1 for r in results if not r.ok)


def exit_code(results: Sequence[ValidationResult]) -> int:
    """Aggregate exit code: 1 if any file failed, else 0."""
    return 1 if count_failures(results) else 0
