"""Error taxonomy and upstream failure classification for You.com calls.

Upstream APIs sometimes answer ``200 OK`` with an application error in the
body, so a response is inspected in a fixed order:

1. credential present at all (before any network call)
2. HTTP status
3. body parses as JSON
4. in-band ``error`` / ``errors`` indicator
5. schema validation

Each check returns a ``ToolError`` or ``None``; the orchestrator raises the
first one it gets.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from pydantic import ValidationError


class ErrorKind(str, Enum):
    """Machine-distinguishable failure kinds, shared by every capability."""

    MISSING_CREDENTIAL = "MissingCredential"
    BAD_REQUEST = "BadRequest"
    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    RATE_LIMITED = "RateLimited"
    UPSTREAM_SERVER_ERROR = "UpstreamServerError"
    IN_BAND_ERROR = "InBandError"
    MALFORMED_RESPONSE = "MalformedResponse"
    SCHEMA_VIOLATION = "SchemaViolation"
    CONFLICTING_PARAMETERS = "ConflictingParameters"
    UNKNOWN = "Unknown"


class ToolError(Exception):
    """A classified tool failure with a caller-facing message."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"ToolError(kind={self.kind.value!r}, message={self.message!r})"


RATE_LIMITED_MESSAGE = "Rate limited by You.com API. Please try again later."


def check_credential(api_key: str | None) -> ToolError | None:
    """Fail fast when no API key is configured."""
    if api_key:
        return None
    return ToolError(
        ErrorKind.MISSING_CREDENTIAL,
        "YDC_API_KEY is required. Set it in the environment or send it in the X-API-Key header.",
    )


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"), default=str)


def extract_error_detail(body: Any) -> str | None:
    """Pull a human-readable detail string out of a parsed error body."""
    if not isinstance(body, dict):
        return None

    for key in ("detail", "message", "error"):
        value = body.get(key)
        if value:
            return _stringify(value)

    errors = body.get("errors")
    if isinstance(errors, list):
        details = [
            _stringify(e.get("detail") or e.get("message") or e)
            for e in errors
            if isinstance(e, dict)
        ]
        if details:
            return "; ".join(details)
    return None


def _parse_body(body_text: str) -> Any:
    try:
        return json.loads(body_text)
    except (TypeError, ValueError):
        return None


def classify_status(
    status_code: int,
    body_text: str = "",
    *,
    capability: str = "You.com",
    bearer_auth: bool = False,
) -> ToolError | None:
    """Map a non-2xx HTTP status to a ``ToolError``.

    Returns ``None`` for 2xx. The body is only used to enrich the message;
    a body that is not JSON falls back to a generic ``HTTP <code>`` detail.
    """
    if 200 <= status_code < 300:
        return None

    if status_code == 429:
        return ToolError(ErrorKind.RATE_LIMITED, RATE_LIMITED_MESSAGE)

    detail = extract_error_detail(_parse_body(body_text)) or f"HTTP {status_code}"

    if status_code == 400:
        return ToolError(ErrorKind.BAD_REQUEST, f"Bad Request: {detail}")
    if status_code == 401:
        message = f"Authentication failed: {detail}. Please check your You.com API key."
        if bearer_auth:
            message += (
                " Note: the Agent APIs use Bearer token authentication while the"
                " Search and Contents APIs use X-API-Key. Ensure your key has"
                " permissions for agent endpoints."
            )
        return ToolError(ErrorKind.UNAUTHORIZED, message)
    if status_code == 403:
        return ToolError(
            ErrorKind.FORBIDDEN,
            f"Forbidden: {detail}. Your API key may not have access to the {capability} API.",
        )
    if status_code >= 500:
        return ToolError(ErrorKind.UPSTREAM_SERVER_ERROR, f"You.com API server error: {detail}")

    return ToolError(
        ErrorKind.UNKNOWN,
        f"Failed to call the You.com {capability} API. Error code: {status_code} ({detail})",
    )


def parse_json_body(body_text: str) -> tuple[Any, ToolError | None]:
    """Parse a 2xx body as JSON, or return a ``MalformedResponse`` error."""
    try:
        return json.loads(body_text), None
    except (TypeError, ValueError):
        return None, ToolError(
            ErrorKind.MALFORMED_RESPONSE,
            "You.com API returned a response that is not valid JSON.",
        )


def find_in_band_error(payload: Any) -> ToolError | None:
    """Detect an application error carried inside a successful response body."""
    if not isinstance(payload, dict):
        return None

    if "error" in payload:
        return ToolError(
            ErrorKind.IN_BAND_ERROR,
            f"You.com API Error: {_stringify(payload['error'])}",
        )

    errors = payload.get("errors")
    if isinstance(errors, list) and errors and all(isinstance(e, dict) for e in errors):
        return ToolError(
            ErrorKind.IN_BAND_ERROR,
            f"You.com API Error: {extract_error_detail(payload)}",
        )
    return None


def _describe_validation_error(exc: ValidationError, limit: int = 3) -> str:
    problems = []
    for err in exc.errors()[:limit]:
        location = ".".join(str(part) for part in err.get("loc", ())) or "<root>"
        problems.append(f"{location}: {err.get('msg', 'invalid')}")
    remaining = exc.error_count() - len(problems)
    if remaining > 0:
        problems.append(f"and {remaining} more")
    return "; ".join(problems)


def schema_violation(exc: ValidationError, capability: str) -> ToolError:
    """Wrap a response validation failure."""
    return ToolError(
        ErrorKind.SCHEMA_VIOLATION,
        f"Unexpected response from the You.com {capability} API: {_describe_validation_error(exc)}",
    )


def invalid_input(exc: ValidationError) -> ToolError:
    """Wrap a tool input validation failure."""
    return ToolError(ErrorKind.BAD_REQUEST, f"Invalid arguments: {_describe_validation_error(exc)}")
