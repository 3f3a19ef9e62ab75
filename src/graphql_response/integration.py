"""
FastAPI/Starlette integration.

Provides utilities for mounting a GraphQL-over-HTTP endpoint on an
existing FastAPI app or creating a standalone application.

The route is registered for every standard HTTP method so that unsupported
methods reach ``create_response`` and get its 405 answer instead of the
framework's.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from fastapi import FastAPI
from starlette.datastructures import Headers
from starlette.requests import ClientDisconnect, Request
from starlette.responses import Response

from graphql_response.config import get_config
from graphql_response.engine import ExecutionParams, GraphQLEngine
from graphql_response.messages import BodyReadError, HttpResponse
from graphql_response.response import create_response

Endpoint = Callable[[Request], Awaitable[Response]]

# Starlette narrows a function route to GET when no methods are given.
ROUTE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


class StarletteRequestAdapter:
    """Present a Starlette request through the ``HttpRequest`` protocol."""

    def __init__(self, request: Request) -> None:
        self._request = request

    @property
    def method(self) -> str:
        return self._request.method

    @property
    def url(self) -> str:
        return str(self._request.url)

    @property
    def headers(self) -> Headers:
        return self._request.headers

    async def text(self) -> str:
        try:
            body = await self._request.body()
        except ClientDisconnect as e:
            raise BodyReadError("Client disconnected before the body was read") from e
        return body.decode("utf-8", errors="replace")


def to_starlette_response(response: HttpResponse) -> Response:
    """Convert a response descriptor into a Starlette response."""
    return Response(
        content=response.body,
        status_code=response.status,
        headers=response.headers,
    )


def graphql_endpoint(params: ExecutionParams, engine: GraphQLEngine | None = None) -> Endpoint:
    """
    Build a Starlette endpoint serving GraphQL over HTTP.

    Args:
        params: Schema and resolver configuration
        engine: GraphQL implementation (graphql-core when omitted)

    Returns:
        Async endpoint callable taking a Starlette ``Request``
    """

    async def endpoint(request: Request) -> Response:
        response = await create_response(StarletteRequestAdapter(request), params, engine=engine)
        return to_starlette_response(response)

    return endpoint


def mount_graphql(
    app: FastAPI,
    params: ExecutionParams,
    path: str | None = None,
    engine: GraphQLEngine | None = None,
) -> None:
    """
    Mount the GraphQL endpoint on an existing FastAPI application.

    Args:
        app: Existing FastAPI application
        params: Schema and resolver configuration
        path: URL path for the endpoint (default: GRAPHQL_RESPONSE_PATH or /graphql)
        engine: GraphQL implementation (graphql-core when omitted)

    Example:
        from fastapi import FastAPI
        from graphql import build_schema

        app = FastAPI()
        schema = build_schema("type Query { greet: String }")
        mount_graphql(app, ExecutionParams(schema=schema))
        # GraphQL available at /graphql
    """
    app.add_route(
        path or get_config().path,
        graphql_endpoint(params, engine),
        methods=ROUTE_METHODS,
        name="graphql",
        include_in_schema=False,
    )


def create_graphql_app(
    params: ExecutionParams,
    path: str | None = None,
    engine: GraphQLEngine | None = None,
    title: str = "GraphQL API",
) -> FastAPI:
    """
    Create a standalone FastAPI application with the GraphQL endpoint.

    Use mount_graphql() to add GraphQL to an existing app.

    Example:
        app = create_graphql_app(ExecutionParams(schema=schema))
        # Run with: uvicorn mymodule:app
    """
    app = FastAPI(title=title)
    mount_graphql(app, params, path=path, engine=engine)
    return app
