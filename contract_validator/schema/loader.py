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

"""JSON Schema document loader."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ..exceptions import MissingSchemaIdError, SchemaLoadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedSchema:
    file_path: Path
    schema: Dict[str, Any]

    @property
    def schema_id(self) -> str:
        return self.schema["$id"]


def load_schema_file(file_path: Path) -> LoadedSchema:
    """Load a JSON Schema file and require it to declare an ``$id``.

    Args:
        file_path: Path to the ``.json`` file

    Returns:
        The parsed schema

    Raises:
        SchemaLoadError: If the file cannot be read or is not valid JSON
        MissingSchemaIdError: If the document has no non-empty ``$id``
    """
    logger.debug(f"Loading schema file: {file_path}")
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            schema = json.load(f)
    except json.JSONDecodeError as e:
        raise SchemaLoadError(
            f"Invalid JSON at line {e.lineno}, column {e.colno}: {e.msg}"
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaLoadError(str(e)) from e

    if not isinstance(schema, dict):
        raise MissingSchemaIdError(
            f"Schema root is a {type(schema).__name__}, so it cannot declare $id"
        )

    schema_id = schema.get("$id")
    if not schema_id or not isinstance(schema_id, str):
        raise MissingSchemaIdError("Missing required $id field")

    return LoadedSchema(file_path=file_path, schema=schema)
