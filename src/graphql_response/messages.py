"""
Framework-neutral HTTP request and response types.

The pipeline only needs a method, a URL, header lookup and the body text.
``HttpRequest`` describes that surface; ``SimpleRequest`` implements it
for direct use and tests, and ``graphql_response.integration`` adapts
Starlette requests to it.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

TEXT_PLAIN_UTF8 = "text/plain;charset=UTF-8"


class BodyReadError(Exception):
    """The request body could not be read to completion."""


class HeaderLookup(Protocol):
    def get(self, key: str, default: str | None = None, /) -> str | None: ...


class HttpRequest(Protocol):
    """Request surface consumed by ``create_response``.

    ``headers.get`` must be case-insensitive. ``text()`` raises
    ``BodyReadError`` when the body stream fails.
    """

    @property
    def method(self) -> str: ...

    @property
    def url(self) -> str: ...

    @property
    def headers(self) -> HeaderLookup: ...

    async def text(self) -> str: ...


class Headers(dict[str, str]):
    """Case-insensitive header mapping (names are stored lower-case)."""

    def __init__(self, headers: Mapping[str, str] | None = None) -> None:
        super().__init__()
        for name, value in (headers or {}).items():
            self[name] = value

    def __setitem__(self, key: str, value: str) -> None:
        super().__setitem__(key.lower(), value)

    def __getitem__(self, key: str) -> str:
        return super().__getitem__(key.lower())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and super().__contains__(key.lower())

    def get(self, key: str, default: str | None = None, /) -> str | None:  # type: ignore[override]
        return super().get(key.lower(), default)


@dataclass
class SimpleRequest:
    """In-memory request.

    Example:
        request = SimpleRequest(
            "POST",
            "http://localhost/graphql",
            headers={"content-type": "application/json"},
            body='{"query": "{ hello }"}',
        )
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=Headers)
    body: str | bytes = ""

    def __post_init__(self) -> None:
        if not isinstance(self.headers, Headers):
            self.headers = Headers(self.headers)

    async def text(self) -> str:
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8", errors="replace")
        return self.body


@dataclass
class HttpResponse:
    """Response descriptor: status, lower-case headers and an optional text body."""

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None

    @property
    def text(self) -> str:
        return self.body or ""

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    def json(self) -> Any:
        """Decode the body as JSON."""
        return json.loads(self.text)
