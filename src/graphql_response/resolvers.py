"""
Raw parameter resolution.

GET requests carry their parameters in the URL query string, POST
requests in a JSON body. Both resolve to ``RawParameters``; nothing is
type-checked here beyond what decoding JSON requires.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import parse_qs, urlsplit

from graphql_response.errors import HttpFailure, bad_request
from graphql_response.messages import BodyReadError, HttpRequest
from graphql_response.params import EXTENSIONS, OPERATION_NAME, QUERY, VARIABLES, RawParameters

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def loads_json(text: str) -> Any:
    """Decode standard JSON; NaN and Infinity literals are rejected.

    Nesting too deep for the decoder raises ``ValueError`` like any other
    undecodable input.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except RecursionError as e:
        raise ValueError("JSON nesting too deep") from e


def _first(values: dict[str, list[str]], name: str) -> str | None:
    found = values.get(name)
    return found[0] if found else None


def _json_param(values: dict[str, list[str]], name: str) -> Any | HttpFailure:
    text = _first(values, name)
    if text is None:
        return None
    try:
        return loads_json(text)
    except ValueError:
        return bad_request(f'"{name}" is invalid JSON format.')


def resolve_get_params(url: str) -> RawParameters | HttpFailure:
    """Read parameters from the URL query string.

    ``variables`` and ``extensions`` are JSON-encoded; a present but
    undecodable value is an exposed 400.
    """
    values = parse_qs(urlsplit(url).query, keep_blank_values=True)

    variables = _json_param(values, VARIABLES)
    if isinstance(variables, HttpFailure):
        return variables

    extensions = _json_param(values, EXTENSIONS)
    if isinstance(extensions, HttpFailure):
        return extensions

    return RawParameters(
        query=_first(values, QUERY),
        operation_name=_first(values, OPERATION_NAME),
        variables=variables,
        extensions=extensions,
    )


async def resolve_post_params(request: HttpRequest) -> RawParameters | HttpFailure:
    """Read parameters from a JSON object body."""
    try:
        text = await request.text()
    except BodyReadError as e:
        logger.warning("Failed to read request body: %s", e)
        return bad_request(expose=False)

    try:
        data = loads_json(text)
    except ValueError:
        return bad_request("Invalid JSON format.")

    if not isinstance(data, dict):
        return bad_request("JSON must be object.")

    return RawParameters.from_json(data)
