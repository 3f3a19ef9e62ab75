"""
GraphQL engine boundary.

The HTTP layer never calls graphql-core directly. It goes through the
``GraphQLEngine`` protocol, which exposes exactly the four capabilities
the request pipeline needs, so tests can substitute a fake engine.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from graphql import (
    DocumentNode,
    ExecutionContext,
    GraphQLError,
    GraphQLFieldResolver,
    GraphQLSchema,
    GraphQLTypeResolver,
    execute_sync,
    get_operation_ast,
    parse,
    specified_rules,
    validate,
)


@dataclass(frozen=True)
class ExecutionParams:
    """Caller-supplied execution configuration, forwarded to the engine untouched.

    Attributes:
        schema: The type system used to validate and execute documents
        root_value: First argument to resolvers on the root operation type
        context_value: Shared value passed to every resolver through ``info.context``
        field_resolver: Resolver used when the schema does not provide one
        type_resolver: Type resolver used when the schema does not provide one
        subscribe_field_resolver: Resolver for subscription source streams
    """

    schema: GraphQLSchema
    root_value: Any = None
    context_value: Any = None
    field_resolver: GraphQLFieldResolver | None = None
    type_resolver: GraphQLTypeResolver | None = None
    subscribe_field_resolver: GraphQLFieldResolver | None = None


class GraphQLEngine(Protocol):
    """Capabilities the request pipeline uses from a GraphQL implementation."""

    def parse_document(self, source: str) -> DocumentNode:
        """Parse query text; raises ``GraphQLError`` on syntax errors."""
        ...

    def validate_document(
        self, schema: GraphQLSchema, document: DocumentNode
    ) -> Sequence[GraphQLError]:
        """Run the standard validation rules; an empty result means valid."""
        ...

    def resolve_operation_type(
        self, document: DocumentNode, operation_name: str | None
    ) -> str | None:
        """Type of the operation that would run, or None if it cannot be determined."""
        ...

    def execute_document(
        self,
        params: ExecutionParams,
        document: DocumentNode,
        variables: dict[str, Any] | None,
        operation_name: str | None,
    ) -> dict[str, Any]:
        """Execute synchronously and return the JSON-ready execution result.

        The result has a ``data`` key if and only if execution started.
        Field errors are reported under ``errors``, never raised.
        """
        ...


def format_result(
    data: Any,
    errors: Sequence[GraphQLError] | None,
    extensions: dict[str, Any] | None = None,
    *,
    include_data: bool = True,
) -> dict[str, Any]:
    """Build the wire form of an execution result: errors, then data, then extensions."""
    result: dict[str, Any] = {}
    if errors:
        result["errors"] = [error.formatted for error in errors]
    if include_data:
        result["data"] = data
    if extensions is not None:
        result["extensions"] = extensions
    return result


class GraphQLCoreEngine:
    """``GraphQLEngine`` backed by graphql-core."""

    def parse_document(self, source: str) -> DocumentNode:
        return parse(source)

    def validate_document(
        self, schema: GraphQLSchema, document: DocumentNode
    ) -> list[GraphQLError]:
        return validate(schema, document, specified_rules)

    def resolve_operation_type(
        self, document: DocumentNode, operation_name: str | None
    ) -> str | None:
        operation = get_operation_ast(document, operation_name)
        if operation is None:
            return None
        return operation.operation.value

    def execute_document(
        self,
        params: ExecutionParams,
        document: DocumentNode,
        variables: dict[str, Any] | None,
        operation_name: str | None,
    ) -> dict[str, Any]:
        # graphql-core reports an unknown operation or bad variables as
        # data=None, which is indistinguishable from a null root. Build the
        # context first so those failures come back without a data key.
        context = ExecutionContext.build(
            params.schema,
            document,
            root_value=params.root_value,
            context_value=params.context_value,
            raw_variable_values=variables,
            operation_name=operation_name,
            field_resolver=params.field_resolver,
            type_resolver=params.type_resolver,
            subscribe_field_resolver=params.subscribe_field_resolver,
        )
        if isinstance(context, list):
            return format_result(None, context, include_data=False)

        result = execute_sync(
            params.schema,
            document,
            root_value=params.root_value,
            context_value=params.context_value,
            variable_values=variables,
            operation_name=operation_name,
            field_resolver=params.field_resolver,
            type_resolver=params.type_resolver,
        )
        return format_result(result.data, result.errors, result.extensions)
