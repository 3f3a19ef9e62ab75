"""
Centralized configuration for graphql-response.

Settings are read from environment variables once and cached. The core
request pipeline takes no configuration; these values drive the
FastAPI integration and logging setup.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import cache
from pathlib import Path

DEFAULT_PATH = "/graphql"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class GraphQLResponseConfig:
    """Runtime configuration from environment variables.

    Attributes:
        path: URL path the GraphQL endpoint is mounted on
        log_level: Numeric logging level
        log_dir: Directory for the rotating JSONL log file (None disables it)
        log_json: Emit JSONL instead of human-readable lines on the console
    """

    path: str = DEFAULT_PATH
    log_level: int = logging.INFO
    log_dir: Path | None = None
    log_json: bool = False


def parse_log_level(value: str) -> int:
    """Convert a level name ("debug", "INFO") or number ("10") to a logging level."""
    value = value.strip()
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return level


@cache
def get_config() -> GraphQLResponseConfig:
    """Load configuration from environment variables.

    Environment variables:
        - GRAPHQL_RESPONSE_PATH → path (default /graphql)
        - GRAPHQL_RESPONSE_LOG_LEVEL → log_level (default INFO)
        - GRAPHQL_RESPONSE_LOG_DIR → log_dir (default: no file logging)
        - GRAPHQL_RESPONSE_LOG_JSON → log_json (default false)

    Returns:
        GraphQLResponseConfig with validated settings.

    Raises:
        ValueError: If GRAPHQL_RESPONSE_LOG_LEVEL is not a known level.
    """
    path = os.environ.get("GRAPHQL_RESPONSE_PATH") or DEFAULT_PATH
    if not path.startswith("/"):
        path = f"/{path}"

    log_dir = os.environ.get("GRAPHQL_RESPONSE_LOG_DIR")

    return GraphQLResponseConfig(
        path=path,
        log_level=parse_log_level(os.environ.get("GRAPHQL_RESPONSE_LOG_LEVEL", "INFO")),
        log_dir=Path(log_dir) if log_dir else None,
        log_json=os.environ.get("GRAPHQL_RESPONSE_LOG_JSON", "").strip().lower() in _TRUE_VALUES,
    )
