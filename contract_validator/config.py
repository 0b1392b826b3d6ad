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

"""Configuration management for the contract validators."""

import os
import logging
import shlex
from dataclasses import dataclass, field
from typing import List, Optional

from .utils.logging_utils import configure_split_stream_logging

logger = logging.getLogger(__name__)

ENV_PREFIX = "CONTRACT_VALIDATOR_"


def _env(name: str, default: str) -> str:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _parse_timeout(raw: str) -> Optional[float]:
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {ENV_PREFIX}ASYNCAPI_TIMEOUT={raw!r}; running without a timeout")
        return None
    return timeout if timeout > 0 else None


@dataclass
class ValidatorConfig:
    """Configuration class for the contract validators."""
    asyncapi_dir: str = "asyncapi"
    schemas_dir: str = "schemas"
    asyncapi_command: List[str] = field(default_factory=lambda: ["asyncapi"])
    asyncapi_timeout: Optional[float] = None
    strict: bool = True
    log_level: str = "INFO"
    print_level: str = "WARNING"
    log_format: str = "%(message)s"

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            asyncapi_dir=_env('ASYNCAPI_DIR', 'asyncapi'),
            schemas_dir=_env('SCHEMAS_DIR', 'schemas'),
            asyncapi_command=shlex.split(_env('ASYNCAPI_COMMAND', 'asyncapi')),
            asyncapi_timeout=_parse_timeout(_env('ASYNCAPI_TIMEOUT', '')),
            strict=_env('STRICT', 'true').lower() == 'true',
            log_level=_env('LOG_LEVEL', 'INFO'),
            print_level=_env('PRINT_LEVEL', 'WARNING'),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.WARNING)

        formatter = logging.Formatter(self.log_format)
        configure_split_stream_logging(level=level, stderr_level=stderr_level, formatter=formatter)

        return logging.getLogger('contract_validator')


# Global configuration instance
validator_config = ValidatorConfig.from_env()
