"""Tests for the graphql-core backed engine."""

from __future__ import annotations

from typing import Any

import pytest
from graphql import GraphQLError, GraphQLSyntaxError, build_schema

from graphql_response.engine import ExecutionParams, GraphQLCoreEngine, format_result

SCHEMA = build_schema(
    """
    type Query {
      hello: String
      strict: String!
      echo(value: Int!): Int
    }

    type Mutation {
      touch: Boolean
    }
    """
)


@pytest.fixture
def engine() -> GraphQLCoreEngine:
    return GraphQLCoreEngine()


def _execute(
    engine: GraphQLCoreEngine,
    query: str,
    root_value: Any = None,
    variables: dict[str, Any] | None = None,
    operation_name: str | None = None,
) -> dict[str, Any]:
    document = engine.parse_document(query)
    return engine.execute_document(
        ExecutionParams(schema=SCHEMA, root_value=root_value),
        document,
        variables,
        operation_name,
    )


class TestParseDocument:
    def test_valid_query(self, engine: GraphQLCoreEngine) -> None:
        document = engine.parse_document("{ hello }")
        assert len(document.definitions) == 1

    def test_syntax_error_raises(self, engine: GraphQLCoreEngine) -> None:
        with pytest.raises(GraphQLSyntaxError) as exc_info:
            engine.parse_document("1")
        assert exc_info.value.message == "Syntax Error: Unexpected Int '1'."

    def test_empty_document(self, engine: GraphQLCoreEngine) -> None:
        with pytest.raises(GraphQLError, match="Unexpected <EOF>"):
            engine.parse_document("")


class TestResolveOperationType:
    @pytest.mark.parametrize(
        ("query", "expected"),
        [
            ("{ hello }", "query"),
            ("query { hello }", "query"),
            ("mutation { touch }", "mutation"),
            ("subscription { hello }", "subscription"),
        ],
    )
    def test_single_operation(self, engine: GraphQLCoreEngine, query: str, expected: str) -> None:
        document = engine.parse_document(query)
        assert engine.resolve_operation_type(document, None) == expected

    def test_named_operation(self, engine: GraphQLCoreEngine) -> None:
        document = engine.parse_document("query A { hello } mutation B { touch }")
        assert engine.resolve_operation_type(document, "A") == "query"
        assert engine.resolve_operation_type(document, "B") == "mutation"

    def test_ambiguous_or_unknown_is_none(self, engine: GraphQLCoreEngine) -> None:
        document = engine.parse_document("query A { hello } mutation B { touch }")
        assert engine.resolve_operation_type(document, None) is None
        assert engine.resolve_operation_type(document, "C") is None


class TestValidateDocument:
    def test_valid_document(self, engine: GraphQLCoreEngine) -> None:
        assert engine.validate_document(SCHEMA, engine.parse_document("{ hello }")) == []

    def test_unknown_field(self, engine: GraphQLCoreEngine) -> None:
        errors = engine.validate_document(SCHEMA, engine.parse_document("{ hello2 }"))
        assert len(errors) == 1
        assert errors[0].message.startswith("Cannot query field 'hello2' on type 'Query'.")


class TestExecuteDocument:
    def test_success(self, engine: GraphQLCoreEngine) -> None:
        result = _execute(engine, "{ hello }", root_value={"hello": "world"})
        assert result == {"data": {"hello": "world"}}

    def test_callable_root_value(self, engine: GraphQLCoreEngine) -> None:
        result = _execute(engine, "{ hello }", root_value={"hello": lambda info: "hi"})
        assert result == {"data": {"hello": "hi"}}

    def test_variables(self, engine: GraphQLCoreEngine) -> None:
        result = _execute(
            engine,
            "query ($v: Int!) { echo(value: $v) }",
            root_value={"echo": lambda info, value: value * 2},
            variables={"v": 21},
        )
        assert result == {"data": {"echo": 42}}

    def test_null_non_nullable_field_keeps_data_key(self, engine: GraphQLCoreEngine) -> None:
        result = _execute(engine, "{ strict }")
        assert list(result) == ["errors", "data"]
        assert result["data"] is None
        assert result["errors"][0]["message"] == (
            "Cannot return null for non-nullable field Query.strict."
        )
        assert result["errors"][0]["path"] == ["strict"]

    def test_missing_variable_has_no_data_key(self, engine: GraphQLCoreEngine) -> None:
        result = _execute(engine, "query ($v: Int!) { echo(value: $v) }", variables={})
        assert "data" not in result
        assert len(result["errors"]) == 1

    def test_unknown_operation_has_no_data_key(self, engine: GraphQLCoreEngine) -> None:
        result = _execute(engine, "query A { hello }", operation_name="B")
        assert "data" not in result
        assert result["errors"][0]["message"] == "Unknown operation named 'B'."


class TestFormatResult:
    def test_key_order(self) -> None:
        error = GraphQLError("boom")
        result = format_result({"a": 1}, [error], {"cost": 1})
        assert list(result) == ["errors", "data", "extensions"]
        assert result["errors"] == [{"message": "boom"}]

    def test_without_errors(self) -> None:
        assert format_result(None, None) == {"data": None}
        assert format_result(None, []) == {"data": None}

    def test_without_data(self) -> None:
        assert format_result(None, [GraphQLError("x")], include_data=False) == {
            "errors": [{"message": "x"}]
        }
