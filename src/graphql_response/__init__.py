"""
graphql-response - GraphQL-over-HTTP requests and responses.

Turns an HTTP request plus a GraphQL schema into a compliant HTTP response:
- Content negotiation (method, Accept, Content-Type)
- GET query-string and POST JSON-body parameter handling
- Status codes for application/json and application/graphql-response+json
- FastAPI/Starlette integration
"""

from graphql_response._version import get_version as _get_version

__version__ = _get_version()

from graphql_response.engine import ExecutionParams, GraphQLCoreEngine, GraphQLEngine
from graphql_response.errors import FailureCategory, HttpFailure
from graphql_response.messages import BodyReadError, HttpRequest, HttpResponse, SimpleRequest
from graphql_response.negotiation import MediaType, Method
from graphql_response.params import RawParameters, ValidatedParameters
from graphql_response.response import create_response

__all__ = [
    "BodyReadError",
    "ExecutionParams",
    "FailureCategory",
    "GraphQLCoreEngine",
    "GraphQLEngine",
    "HttpFailure",
    "HttpRequest",
    "HttpResponse",
    "MediaType",
    "Method",
    "RawParameters",
    "SimpleRequest",
    "ValidatedParameters",
    "create_response",
]
