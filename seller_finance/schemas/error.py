# This project was developed with assistance from AI tools.
"""RFC 7807 Problem Details returned by every failing API call."""

import enum

from pydantic import BaseModel, Field


class ErrorCode(str, enum.Enum):
    """Machine-readable failure category carried next to the HTTP status."""

    VALIDATION_ERROR = "validation_error"
    INVALID_INPUT = "invalid_input"
    DEGENERATE_INPUT = "degenerate_input"
    NOT_FOUND = "not_found"
    HTTP_ERROR = "http_error"
    INTERNAL_ERROR = "internal_error"


class ErrorResponse(BaseModel):
    """Problem Details body (https://datatracker.ietf.org/doc/html/rfc7807).

    ``code`` tells a solver rejection (``invalid_input`` or ``degenerate_input``)
    apart from a schema failure, since all three answer 422.
    """

    type: str = "about:blank"
    title: str
    status: int
    detail: str = ""
    code: ErrorCode = Field(description="Failure category, stable across message wording.")
    request_id: str = Field(default="", description="Echo of x-request-id, or a fresh UUID.")
