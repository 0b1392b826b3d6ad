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

"""Runs the external AsyncAPI CLI on a single document."""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from ..exceptions import ExternalToolError, ValidationError

logger = logging.getLogger(__name__)


class AsyncApiRunner:
    """Wrapper around ``asyncapi validate <file>``."""

    def __init__(self, command: Sequence[str] = ("asyncapi",), timeout: Optional[float] = None):
        """Initialize the runner.

        Args:
            command: Executable (plus leading arguments, e.g. ``npx asyncapi``)
            timeout: Optional per-file timeout in seconds
        """
        if not command:
            raise ExternalToolError("AsyncAPI command must not be empty")
        self.command = list(command)
        self.timeout = timeout

    def build_command(self, file_path: Path) -> List[str]:
        return [*self.command, "validate", str(Path(file_path).resolve())]

    def validate(self, file_path: Path) -> None:
        """Validate one document, streaming the tool's output to the terminal.

        Raises:
            ValidationError: If the tool rejects the document
            ExternalToolError: If the tool cannot be run
        """
        cmd = self.build_command(file_path)
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                check=True,
                timeout=self.timeout,
            )
        except subprocess.CalledProcessError as exc:
            raise ValidationError(
                f"AsyncAPI validation failed with exit code {exc.returncode}"
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise ExternalToolError(
                f"AsyncAPI validation timed out after {exc.timeout} seconds"
            ) from exc
        except OSError as exc:
            raise ExternalToolError(
                f"Failed to run '{self.command[0]}': {exc}"
            ) from exc
