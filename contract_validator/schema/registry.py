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

"""Registry of every loaded schema, keyed by ``$id``.

Cross-file ``$ref``s only resolve once all schemas are registered, so the
registry is filled completely before any schema is checked.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict

from jsonschema_specifications import REGISTRY as META_SCHEMAS
from referencing import Registry, Resource, Specification
from referencing.jsonschema import DRAFT7, specification_with

from ..exceptions import SchemaRegistryError
from .loader import LoadedSchema

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from referencing._core import Resolver

DEFAULT_SPECIFICATION = DRAFT7


def specification_for(schema: Dict[str, Any]) -> Specification:
    """Draft named by ``$schema``, Draft 7 when absent or unknown."""
    dialect = schema.get("$schema")
    if not isinstance(dialect, str):
        return DEFAULT_SPECIFICATION
    return specification_with(dialect, default=DEFAULT_SPECIFICATION)


def normalize_id(schema_id: str) -> str:
    """Drop an empty trailing fragment (``http://x/a.json#`` -> ``http://x/a.json``)."""
    return schema_id[:-1] if schema_id.endswith("#") else schema_id


class SchemaRegistry:
    """Collects schemas into a ``referencing.Registry``.

    The registry starts out holding the standard meta-schemas, so a ``$ref``
    to e.g. ``http://json-schema.org/draft-07/schema#`` resolves.
    """

    def __init__(self):
        self._registry: Registry = META_SCHEMAS
        self._owners: Dict[str, Path] = {}
        self._specifications: Dict[str, Specification] = {}
        self._crawled = False

    def __contains__(self, schema_id: str) -> bool:
        return normalize_id(schema_id) in self._owners

    def __len__(self) -> int:
        return len(self._owners)

    def add(self, loaded: LoadedSchema) -> None:
        """Register one schema.

        Raises:
            SchemaRegistryError: If another file already registered the same ``$id``
        """
        uri = normalize_id(loaded.schema_id)
        owner = self._owners.get(uri)
        if owner is not None:
            raise SchemaRegistryError(
                f"schema with key or id \"{uri}\" already exists (defined in {owner})"
            )

        specification = specification_for(loaded.schema)
        resource = specification.create_resource(loaded.schema)

        self._registry = self._registry.with_resource(uri=uri, resource=resource)
        self._owners[uri] = loaded.file_path
        self._specifications[uri] = specification
        self._crawled = False
        logger.debug(f"Registered {uri} from {loaded.file_path}")

    def resource(self, schema_id: str) -> Resource:
        return self._registry[normalize_id(schema_id)]

    def specification(self, schema_id: str) -> Specification:
        """Specification (draft) chosen for a registered schema."""
        return self._specifications[normalize_id(schema_id)]

    def resolver(self, schema_id: str) -> Resolver:
        """Resolver whose base URI is the given schema's ``$id``."""
        if not self._crawled:
            # Index embedded $id / anchors so lookups into subschemas work
            self._registry = self._registry.crawl()
            self._crawled = True
        return self._registry.resolver(base_uri=normalize_id(schema_id))
