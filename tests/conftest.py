"""Shared test fixtures for the contract validators."""

import json
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

from contract_validator.config import ValidatorConfig


@pytest.fixture
def config(tmp_path: Path) -> ValidatorConfig:
    """Config pointing at directories inside tmp_path."""
    return ValidatorConfig(
        asyncapi_dir=str(tmp_path / "asyncapi"),
        schemas_dir=str(tmp_path / "schemas"),
        asyncapi_command=["asyncapi"],
    )


@pytest.fixture
def write_schema(tmp_path: Path) -> Callable[[str, Dict[str, Any]], Path]:
    """Write a schema document under tmp_path/schemas."""

    def _write(name: str, schema: Any) -> Path:
        path = tmp_path / "schemas" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(schema), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_asyncapi(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write an AsyncAPI document under tmp_path/asyncapi."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / "asyncapi" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


VALID_ASYNCAPI = """\
asyncapi: 2.6.0
info:
  title: Orders
  version: 1.0.0
channels:
  orders/created:
    subscribe:
      message:
        payload:
          type: object
"""


@pytest.fixture
def valid_asyncapi() -> str:
    return VALID_ASYNCAPI
