"""
Content negotiation for GraphQL-over-HTTP.

Decides, from the request method and headers alone, whether a request can
be served and which response media type it gets. All checks are pure
functions over header strings and return either their result or an
``HttpFailure``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus

from graphql_response.errors import FailureCategory, HttpFailure


class Method(str, Enum):
    """HTTP methods a GraphQL endpoint serves."""

    GET = "GET"
    POST = "POST"


class MediaType(str, Enum):
    """Response media types, in server preference order."""

    GRAPHQL_RESPONSE = "application/graphql-response+json"
    JSON = "application/json"

    def with_charset(self) -> str:
        return f"{self.value};charset=UTF-8"


SUPPORTED_MEDIA_TYPES: tuple[MediaType, ...] = tuple(MediaType)
ALLOWED_METHODS = ",".join(method.value for method in Method)
# Standard method names, matched case-insensitively
NORMALIZED_METHODS = frozenset({"DELETE", "GET", "HEAD", "OPTIONS", "POST", "PUT"})

_MEDIA_RANGE_RE = re.compile(r"^\s*([^\s/;]+)/([^;\s]+)\s*(?:;(.*))?$")


@dataclass(frozen=True)
class AcceptRange:
    """One media range from an ``Accept`` header."""

    type: str
    subtype: str
    q: float = 1.0
    params: dict[str, str] = field(default_factory=dict)
    index: int = 0

    def specificity(self, media_type: str) -> int | None:
        """Score how specifically this range matches ``media_type``.

        Returns None when it does not match at all. Higher is more specific:
        4 for an exact type, 2 for an exact subtype, 1 for matching parameters.
        """
        mtype, _, msubtype = media_type.lower().partition("/")
        score = 0

        if self.type == mtype:
            score |= 4
        elif self.type != "*":
            return None

        if self.subtype == msubtype:
            score |= 2
        elif self.subtype != "*":
            return None

        if self.params:
            # Supported media types carry no parameters of their own.
            if all(value == "*" for value in self.params.values()):
                score |= 1
            else:
                return None

        return score


def _split_unquoted(value: str, separator: str) -> list[str]:
    parts: list[str] = []
    start = 0
    quoted = False
    for index, char in enumerate(value):
        if char == '"':
            quoted = not quoted
        elif char == separator and not quoted:
            parts.append(value[start:index])
            start = index + 1
    parts.append(value[start:])
    return parts


def _parse_quality(value: str) -> float:
    try:
        q = float(value)
    except ValueError:
        return 0.0
    # float() accepts "nan" and "inf"; neither is a valid qvalue.
    if not 0.0 <= q <= 1.0:
        return 0.0
    return q


def parse_accept(header: str) -> list[AcceptRange]:
    """Parse an ``Accept`` header into media ranges, skipping malformed entries.

    Parameters after ``q`` are accept-extensions and are ignored.
    """
    ranges: list[AcceptRange] = []
    for index, raw in enumerate(_split_unquoted(header, ",")):
        match = _MEDIA_RANGE_RE.match(raw)
        if not match:
            continue

        q = 1.0
        params: dict[str, str] = {}
        if match.group(3):
            for param in _split_unquoted(match.group(3), ";"):
                key, sep, value = param.strip().partition("=")
                if not sep:
                    continue
                key = key.strip().lower()
                value = value.strip()
                if len(value) >= 2 and value[0] == value[-1] == '"':
                    value = value[1:-1]
                if key == "q":
                    q = _parse_quality(value)
                    break
                params[key] = value.lower()

        ranges.append(
            AcceptRange(
                type=match.group(1).lower(),
                subtype=match.group(2).lower(),
                q=q,
                params=params,
                index=index,
            )
        )
    return ranges


def _quality_of(media_type: MediaType, ranges: list[AcceptRange]) -> float:
    """Quality of ``media_type`` under the most specific matching range."""
    best: tuple[int, float] | None = None
    for accept_range in ranges:
        score = accept_range.specificity(media_type.value)
        if score is None:
            continue
        if best is None or (score, accept_range.q) > best:
            best = (score, accept_range.q)
    return best[1] if best else 0.0


def preferred_media_types(accept: str | None) -> list[MediaType]:
    """Acceptable supported media types, best first.

    A missing header accepts anything. Equal qualities keep the order of
    ``SUPPORTED_MEDIA_TYPES``.
    """
    ranges = parse_accept("*/*" if accept is None else accept)
    qualities = {media_type: _quality_of(media_type, ranges) for media_type in MediaType}
    acceptable = [media_type for media_type in SUPPORTED_MEDIA_TYPES if qualities[media_type] > 0]
    # sorted() is stable, so ties stay in preference order
    return sorted(acceptable, key=lambda media_type: -qualities[media_type])


def check_method(method: str) -> Method | HttpFailure:
    """Accept exactly GET and POST.

    Standard method names are compared case-insensitively, so ``get`` is
    GET. Other names must match exactly.
    """
    if method.upper() in NORMALIZED_METHODS:
        method = method.upper()
    try:
        return Method(method)
    except ValueError:
        return HttpFailure(
            status=HTTPStatus.METHOD_NOT_ALLOWED,
            headers={"allow": ALLOWED_METHODS},
            category=FailureCategory.NEGOTIATION,
        )


def negotiate_accept(accept: str | None) -> MediaType | HttpFailure:
    """Pick the response media type for an ``Accept`` header value."""
    preferred = preferred_media_types(accept)
    if preferred:
        return preferred[0]

    return HttpFailure(
        status=HTTPStatus.NOT_ACCEPTABLE,
        message=",".join(media_type.value for media_type in SUPPORTED_MEDIA_TYPES),
        expose=True,
        headers={"vary": "accept"},
        category=FailureCategory.NEGOTIATION,
    )


def check_content_type(method: Method, content_type: str | None) -> HttpFailure | None:
    """POST bodies must be declared as JSON; GET requests are not checked."""
    match method:
        case Method.GET:
            return None
        case Method.POST:
            if content_type is not None and content_type.strip().lower().startswith(
                MediaType.JSON.value
            ):
                return None
            return HttpFailure(
                status=HTTPStatus.UNSUPPORTED_MEDIA_TYPE,
                headers={"vary": "content-type"},
                category=FailureCategory.NEGOTIATION,
            )
