"""
GraphQL request parameters.

``RawParameters`` holds whatever the client sent; ``validate_params``
type-checks it into ``ValidatedParameters`` or an exposed 400 failure.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from graphql_response.errors import HttpFailure, bad_request

# Wire names of the recognised request parameters
QUERY = "query"
OPERATION_NAME = "operationName"
VARIABLES = "variables"
EXTENSIONS = "extensions"


@dataclass(frozen=True)
class RawParameters:
    """Untyped candidate parameters, each any JSON value or None."""

    query: Any = None
    operation_name: Any = None
    variables: Any = None
    extensions: Any = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> RawParameters:
        """Pick the recognised keys out of a decoded JSON object."""
        return cls(
            query=data.get(QUERY),
            operation_name=data.get(OPERATION_NAME),
            variables=data.get(VARIABLES),
            extensions=data.get(EXTENSIONS),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            QUERY: self.query,
            OPERATION_NAME: self.operation_name,
            VARIABLES: self.variables,
            EXTENSIONS: self.extensions,
        }


@dataclass(frozen=True)
class ValidatedParameters:
    """Type-checked GraphQL request parameters."""

    query: str
    operation_name: str | None = None
    variables: dict[str, Any] | None = None
    extensions: dict[str, Any] | None = None


def check_request_params(value: Any) -> str | None:
    """Return the first rule the value breaks, or None when it is well formed."""
    if isinstance(value, RawParameters):
        value = value.to_json()

    if not isinstance(value, dict):
        return "Value must be JSON object."

    if not isinstance(value.get(QUERY), str):
        return f'"{QUERY}" must be string.'

    variables = value.get(VARIABLES)
    if variables is not None and not isinstance(variables, dict):
        return f'"{VARIABLES}" must be object or null.'

    operation_name = value.get(OPERATION_NAME)
    if operation_name is not None and not isinstance(operation_name, str):
        return f'"{OPERATION_NAME}" must be string or null.'

    extensions = value.get(EXTENSIONS)
    if extensions is not None and not isinstance(extensions, dict):
        return f'"{EXTENSIONS}" must be object or null.'

    return None


def validate_params(raw: RawParameters | Mapping[str, Any]) -> ValidatedParameters | HttpFailure:
    """Type-check raw parameters; violations become an exposed 400."""
    data = raw.to_json() if isinstance(raw, RawParameters) else raw

    message = check_request_params(data)
    if message is not None:
        return bad_request(message)

    return ValidatedParameters(
        query=data[QUERY],
        operation_name=data.get(OPERATION_NAME),
        variables=data.get(VARIABLES),
        extensions=data.get(EXTENSIONS),
    )
