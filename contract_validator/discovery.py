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

"""Recursive file discovery."""

import logging
from pathlib import Path
from typing import Iterable, List, Union

logger = logging.getLogger(__name__)


def find_files(root: Union[str, Path], extensions: Iterable[str]) -> List[Path]:
    """Find all files under ``root`` whose name ends with one of ``extensions``.

    A missing root is not an error: it simply contains no files.

    Args:
        root: Directory to search recursively
        extensions: File name suffixes to match (e.g. ``.yaml``)

    Returns:
        Sorted list of matching file paths
    """
    root = Path(root)
    extensions = tuple(extensions)

    if not root.exists():
        logger.debug(f"Search root does not exist: {root}")
        return []

    if not root.is_dir():
        logger.debug(f"Search root is not a directory: {root}")
        return []

    files: List[Path] = []
    for ext in extensions:
        files.extend(p for p in root.rglob(f"*{ext}") if p.is_file())

    return sorted(set(files))
