"""
GraphQL-over-HTTP response orchestration.

``create_response`` turns one HTTP request into one response descriptor.
Stages run strictly in order and each may end the request:

1. method check                  405
2. Accept negotiation            406
3. Content-Type check (POST)     415
4. parameter resolution          400
5. parameter validation          400
6. document parse                400
7. operation guard (GET)         405
8. schema validation             400
9. execution
10. response shaping             200 / 400

Example:
    from graphql import build_schema

    schema = build_schema("type Query { greet: String }")
    request = SimpleRequest("GET", "http://localhost/graphql?query={greet}")
    response = await create_response(
        request,
        ExecutionParams(schema=schema, root_value={"greet": "hello world!"}),
    )
"""

from __future__ import annotations

import json
import logging
from http import HTTPStatus
from typing import Any

from graphql import GraphQLError

from graphql_response.engine import ExecutionParams, GraphQLCoreEngine, GraphQLEngine
from graphql_response.errors import FailureCategory, HttpFailure, bad_request
from graphql_response.logging import log_with_context
from graphql_response.messages import HttpRequest, HttpResponse
from graphql_response.negotiation import (
    MediaType,
    Method,
    check_content_type,
    check_method,
    negotiate_accept,
)
from graphql_response.params import RawParameters, validate_params
from graphql_response.resolvers import resolve_get_params, resolve_post_params

logger = logging.getLogger(__name__)


def dumps(value: Any) -> str:
    """Serialize a JSON body the way JSON.stringify does: compact, non-ASCII kept."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _reject(request: HttpRequest, failure: HttpFailure) -> HttpResponse:
    log_with_context(
        logger,
        logging.DEBUG,
        f"Request rejected: {int(failure.status)} {failure.reason}",
        failure.to_log_dict(),
        method=request.method,
    )
    return failure.to_response()


async def _resolve_params(request: HttpRequest, method: Method) -> RawParameters | HttpFailure:
    match method:
        case Method.GET:
            return resolve_get_params(request.url)
        case Method.POST:
            return await resolve_post_params(request)


def _operation_guard(operation_type: str | None) -> HttpFailure | None:
    if operation_type is None or operation_type == "query":
        return None
    return HttpFailure(
        status=HTTPStatus.METHOD_NOT_ALLOWED,
        message=(
            f"Invalid GraphQL operation. Can only perform a {operation_type} "
            "operation from a POST request."
        ),
        expose=True,
        headers={"allow": Method.POST.value},
        category=FailureCategory.OPERATION,
    )


def shape_result(result: dict[str, Any], media_type: MediaType) -> HttpResponse:
    """Map an execution result onto a status code for the negotiated media type.

    ``application/json`` always answers 200. ``application/graphql-response+json``
    answers 200 when the result has a ``data`` entry (even null) and 400 when
    the request failed before execution.
    """
    match media_type:
        case MediaType.JSON:
            status = HTTPStatus.OK
        case MediaType.GRAPHQL_RESPONSE:
            status = HTTPStatus.OK if "data" in result else HTTPStatus.BAD_REQUEST

    return HttpResponse(
        status=int(status),
        headers={"content-type": media_type.with_charset()},
        body=dumps(result),
    )


async def create_response(
    request: HttpRequest,
    params: ExecutionParams,
    *,
    engine: GraphQLEngine | None = None,
) -> HttpResponse:
    """Create a GraphQL-over-HTTP compliant response for a request.

    Args:
        request: The incoming request
        params: Schema and resolver configuration, forwarded to the engine
        engine: GraphQL implementation (graphql-core when omitted)

    Returns:
        Response descriptor with status, headers and body
    """
    engine = engine or GraphQLCoreEngine()

    method = check_method(request.method)
    if isinstance(method, HttpFailure):
        return _reject(request, method)

    media_type = negotiate_accept(request.headers.get("accept"))
    if isinstance(media_type, HttpFailure):
        return _reject(request, media_type)

    unsupported = check_content_type(method, request.headers.get("content-type"))
    if unsupported is not None:
        return _reject(request, unsupported)

    raw = await _resolve_params(request, method)
    if isinstance(raw, HttpFailure):
        return _reject(request, raw)

    validated = validate_params(raw)
    if isinstance(validated, HttpFailure):
        return _reject(request, validated)

    try:
        document = engine.parse_document(validated.query)
    except GraphQLError as e:
        return _reject(request, bad_request(e.message, category=FailureCategory.SYNTAX))

    if method is Method.GET:
        forbidden = _operation_guard(
            engine.resolve_operation_type(document, validated.operation_name)
        )
        if forbidden is not None:
            return _reject(request, forbidden)

    validation_errors = engine.validate_document(params.schema, document)
    if validation_errors:
        log_with_context(
            logger,
            logging.DEBUG,
            "Document failed validation",
            errors=len(validation_errors),
            method=request.method,
        )
        return HttpResponse(
            status=int(HTTPStatus.BAD_REQUEST),
            headers={"content-type": media_type.with_charset()},
            body=dumps({"errors": [error.formatted for error in validation_errors]}),
        )

    result = engine.execute_document(
        params,
        document,
        validated.variables,
        validated.operation_name,
    )
    response = shape_result(result, media_type)
    log_with_context(
        logger,
        logging.DEBUG,
        "GraphQL request executed",
        status=response.status,
        media_type=media_type.value,
        errors=len(result.get("errors", ())),
    )
    return response
