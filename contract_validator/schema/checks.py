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

"""Checks run on each registered schema.

* meta-schema validation (all errors, not just the first)
* strict mode: unknown keywords and unknown ``format`` values
* ``$ref`` resolution through the registry
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Tuple, Type

from jsonschema import Draft7Validator
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for
from referencing.exceptions import Unresolvable
from referencing.jsonschema import UnknownDialect, specification_with

from .registry import SchemaRegistry

if TYPE_CHECKING:
    from referencing._core import Resolver


JsonPointer = str

# Keywords that carry no validation logic but are part of the vocabularies
ANNOTATION_KEYWORDS = frozenset({
    "$schema", "$id", "$comment", "$defs", "$anchor", "$dynamicAnchor",
    "$recursiveAnchor", "$vocabulary", "definitions", "title", "description",
    "default", "examples", "readOnly", "writeOnly", "deprecated",
    "contentMediaType", "contentEncoding", "contentSchema", "then", "else",
})

# Formats known to ajv-formats; anything else is rejected in strict mode
STANDARD_FORMATS = frozenset({
    "date", "time", "date-time", "iso-time", "iso-date-time", "duration",
    "uri", "uri-reference", "uri-template", "url", "email", "hostname",
    "ipv4", "ipv6", "regex", "uuid", "json-pointer",
    "json-pointer-uri-fragment", "relative-json-pointer",
    "byte", "int32", "int64", "float", "double", "password", "binary",
})

_SCHEMA_KEYWORDS = (
    "additionalItems", "additionalProperties", "contains", "contentSchema",
    "else", "if", "not", "propertyNames", "then", "unevaluatedItems",
    "unevaluatedProperties",
)
_SCHEMA_LIST_KEYWORDS = ("allOf", "anyOf", "oneOf", "prefixItems")
_SCHEMA_MAP_KEYWORDS = (
    "$defs", "definitions", "dependentSchemas", "patternProperties", "properties",
)


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    pointer: Optional[JsonPointer] = None

    def __str__(self) -> str:
        return f"{self.pointer or '(root)'}: {self.message}"


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _join_path(base: JsonPointer, token: Any) -> JsonPointer:
    return f"{base}/{_jp_escape(str(token))}"


def iter_child_schemas(schema: Dict[str, Any], path: JsonPointer = "") -> Iterator[Tuple[JsonPointer, Any]]:
    """Yield (pointer, subschema) for each direct subschema of ``schema``."""
    for key in _SCHEMA_KEYWORDS:
        if key in schema:
            yield _join_path(path, key), schema[key]

    for key in _SCHEMA_LIST_KEYWORDS:
        value = schema.get(key)
        if isinstance(value, list):
            for idx, item in enumerate(value):
                yield _join_path(_join_path(path, key), idx), item

    for key in _SCHEMA_MAP_KEYWORDS:
        value = schema.get(key)
        if isinstance(value, dict):
            for name, item in value.items():
                yield _join_path(_join_path(path, key), name), item

    items = schema.get("items")
    if isinstance(items, list):
        for idx, item in enumerate(items):
            yield _join_path(_join_path(path, "items"), idx), item
    elif items is not None:
        yield _join_path(path, "items"), items

    # Draft 7 dependencies: values are either subschemas or property name lists
    dependencies = schema.get("dependencies")
    if isinstance(dependencies, dict):
        for name, item in dependencies.items():
            if not isinstance(item, list):
                yield _join_path(_join_path(path, "dependencies"), name), item


def validator_class(schema: Any) -> Type[Validator]:
    """Validator class for the schema's ``$schema`` (Draft 7 when absent)."""
    return validator_for(schema, default=Draft7Validator)


def check_meta_schema(schema: Any) -> List[SchemaIssue]:
    """Validate a schema against its meta-schema, collecting every error."""
    if isinstance(schema, dict) and isinstance(schema.get("$schema"), str):
        try:
            specification_with(schema["$schema"])
        except UnknownDialect:
            return [SchemaIssue(
                message=f"Unknown meta-schema '{schema['$schema']}'",
                pointer="/$schema",
            )]

    cls = validator_class(schema)
    meta_validator = cls(cls.META_SCHEMA, format_checker=cls.FORMAT_CHECKER)

    issues = []
    for error in sorted(meta_validator.iter_errors(schema), key=lambda e: [str(p) for p in e.absolute_path]):
        path = "/" + "/".join(str(p) for p in error.absolute_path) if error.absolute_path else ""
        issues.append(SchemaIssue(message=error.message, pointer=path))
    return issues


def check_strict(schema: Any) -> List[SchemaIssue]:
    """Report unknown keywords and unknown formats anywhere in the schema."""
    cls = validator_class(schema)
    known_keywords = set(cls.VALIDATORS) | ANNOTATION_KEYWORDS

    issues: List[SchemaIssue] = []

    def _walk(node: Any, path: JsonPointer) -> None:
        if not isinstance(node, dict):
            return
        for key in node:
            if key not in known_keywords:
                issues.append(SchemaIssue(
                    message=f"strict mode: unknown keyword: \"{key}\"",
                    pointer=path,
                ))
        fmt = node.get("format")
        if isinstance(fmt, str) and fmt not in STANDARD_FORMATS:
            issues.append(SchemaIssue(
                message=f"unknown format \"{fmt}\" ignored in schema",
                pointer=_join_path(path, "format"),
            ))
        for child_path, child in iter_child_schemas(node, path):
            _walk(child, child_path)

    _walk(schema, "")
    return issues


def check_refs(schema: Dict[str, Any], registry: SchemaRegistry) -> List[SchemaIssue]:
    """Resolve every ``$ref`` in the schema through the registry.

    Embedded ``$id``s change the base URI for the subschemas below them.
    """
    resolver = registry.resolver(schema["$id"])
    specification = registry.specification(schema["$id"])
    issues: List[SchemaIssue] = []

    def _walk(node: Any, path: JsonPointer, current: Resolver, is_root: bool) -> None:
        if not isinstance(node, dict):
            return
        if not is_root and "$id" in node:
            current = current.in_subresource(specification.create_resource(node))

        ref = node.get("$ref")
        if isinstance(ref, str):
            try:
                current.lookup(ref)
            except Unresolvable as e:
                issues.append(SchemaIssue(
                    message=f"can't resolve reference {ref} ({type(e).__name__})",
                    pointer=_join_path(path, "$ref"),
                ))

        for child_path, child in iter_child_schemas(node, path):
            _walk(child, child_path, current, False)

    _walk(schema, "", resolver, True)
    return issues
