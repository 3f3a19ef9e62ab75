"""
HTTP failure values for the GraphQL-over-HTTP pipeline.

Every stage of the request pipeline returns either its result or an
``HttpFailure``. Failures are plain values, not exceptions: the
orchestrator inspects them and turns them into responses, so each exit
of the pipeline is visible at the call site.

Example:
    media_type = negotiate_accept(request.headers.get("accept"))
    if isinstance(media_type, HttpFailure):
        return media_type.to_response()
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
from typing import Any

from graphql_response.messages import TEXT_PLAIN_UTF8, HttpResponse


class FailureCategory(Enum):
    """Where in the pipeline a failure was detected.

    - NEGOTIATION: method, Accept or Content-Type rejected
    - PARAMETER: malformed JSON or wrongly shaped request parameters
    - SYNTAX: the query text failed to parse
    - OPERATION: a non-query operation was requested over GET
    """

    NEGOTIATION = "negotiation"
    PARAMETER = "parameter"
    SYNTAX = "syntax"
    OPERATION = "operation"


@dataclass(frozen=True)
class HttpFailure:
    """A request that cannot proceed past some pipeline stage.

    Attributes:
        status: HTTP status code
        message: Human-readable description (None for a bare status)
        expose: Whether ``message`` is sent to the client as the body
        headers: Extra response headers (lower-case names)
        category: Pipeline stage that produced the failure
    """

    status: int
    message: str | None = None
    expose: bool = False
    headers: Mapping[str, str] = field(default_factory=dict)
    category: FailureCategory = FailureCategory.NEGOTIATION

    @property
    def reason(self) -> str:
        """Standard reason phrase for ``status``."""
        try:
            return HTTPStatus(self.status).phrase
        except ValueError:
            return "Unknown Status"

    def to_response(self) -> HttpResponse:
        """Convert to a response descriptor.

        Exposed messages become a plain-text body unless the failure
        already carries a content type.
        """
        headers = {name.lower(): value for name, value in self.headers.items()}
        body = self.message if self.expose else None
        if body is not None:
            headers.setdefault("content-type", TEXT_PLAIN_UTF8)
        return HttpResponse(status=int(self.status), headers=headers, body=body)

    def to_log_dict(self) -> dict[str, Any]:
        """Structured fields for logging."""
        data: dict[str, Any] = {
            "status": int(self.status),
            "category": self.category.value,
        }
        if self.message:
            data["detail"] = self.message
        return data


def bad_request(
    message: str | None = None,
    *,
    expose: bool = True,
    category: FailureCategory = FailureCategory.PARAMETER,
) -> HttpFailure:
    """Shorthand for a 400 failure; the message is exposed by default."""
    return HttpFailure(
        status=HTTPStatus.BAD_REQUEST,
        message=message,
        expose=expose and message is not None,
        category=category,
    )
