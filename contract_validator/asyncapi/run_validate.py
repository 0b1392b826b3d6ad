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

"""CLI entry point for validating the AsyncAPI documents of a repository."""

import argparse
import logging
import sys
from typing import List, Optional

from ..config import ValidatorConfig, validator_config
from ..exceptions import ExternalToolError
from ..report import count_failures, exit_code
from . import find_asyncapi_files, validate_asyncapi_files
from .runner import AsyncApiRunner

logger = logging.getLogger(__name__)


def run(config: ValidatorConfig) -> int:
    """Validate every AsyncAPI document under ``config.asyncapi_dir``.

    Returns:
        Process exit code
    """
    files = find_asyncapi_files(config.asyncapi_dir)

    if not files:
        logger.info("No AsyncAPI files found")
        return 0

    try:
        runner = AsyncApiRunner(config.asyncapi_command, timeout=config.asyncapi_timeout)
    except ExternalToolError as e:
        logger.error(str(e))
        return 1

    results = validate_asyncapi_files(files, runner)

    failed = count_failures(results)
    if failed:
        logger.error(f"\n{failed} of {len(results)} AsyncAPI file(s) failed validation")
    else:
        logger.info(f"\nAll {len(results)} AsyncAPI file(s) are valid")
    return exit_code(results)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the AsyncAPI validation CLI."""
    parser = argparse.ArgumentParser(
        description=(
            f"Validate all AsyncAPI YAML files under '{validator_config.asyncapi_dir}/' "
            "with the AsyncAPI CLI"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.parse_args(argv)

    validator_config.set_logging()
    sys.exit(run(validator_config))


if __name__ == '__main__':
    main()
