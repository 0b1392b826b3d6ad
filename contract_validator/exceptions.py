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

"""Custom exceptions for the contract validators."""


class ContractValidatorError(Exception):
    """Base exception for contract-validator related errors."""
    pass


class ValidationError(ContractValidatorError):
    """Exception raised when a document fails validation."""
    pass


class SchemaLoadError(ContractValidatorError):
    """Exception raised when a schema file cannot be loaded."""
    pass


class SchemaRegistryError(ContractValidatorError):
    """Exception raised when a schema cannot be added to the registry."""
    pass


class ExternalToolError(ContractValidatorError):
    """Exception raised when an external validation command fails to run."""
    pass


class MissingSchemaIdError(SchemaLoadError):
    """Exception raised when a schema document has no ``$id``."""
    pass
