#!/usr/bin/env python3
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

"""CLI entry point for validating the JSON schemas of a repository."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..config import ValidatorConfig, validator_config
from ..report import exit_code
from . import find_schema_files, load_schemas, register_schemas, validate_schemas

logger = logging.getLogger(__name__)


def run(config: ValidatorConfig) -> int:
    """Load, register and validate every schema under ``config.schemas_dir``.

    Returns:
        Process exit code
    """
    root = Path(config.schemas_dir)

    logger.info("Validating JSON schemas...\n")

    files = find_schema_files(root)
    if not files:
        logger.info("No JSON schemas found")
        return 0

    logger.info("Loading schemas...")
    schemas, failures = load_schemas(files, root)
    if failures:
        return 1

    logger.info("\nAdding schemas to registry...")
    registry, failures = register_schemas(schemas, root)
    if failures:
        return 1

    logger.info("\nValidating schemas...")
    results = validate_schemas(schemas, registry, root, strict=config.strict)

    if exit_code(results):
        logger.error("\n✗ Some JSON schemas are invalid. Please fix the errors above.\n")
        return 1

    logger.info("\n✓ All JSON schemas are valid!\n")
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the schema validation CLI."""
    parser = argparse.ArgumentParser(
        description=(
            f"Validate all JSON Schema files under '{validator_config.schemas_dir}/' "
            "and check that every $ref resolves"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.parse_args(argv)

    validator_config.set_logging()
    sys.exit(run(validator_config))


if __name__ == '__main__':
    main()
