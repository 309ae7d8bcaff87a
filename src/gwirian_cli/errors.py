"""Request outcomes and the error taxonomy.

Every transport call yields exactly one Outcome. Failure outcomes are
classified into a closed set of ErrorKinds, each with a fixed title, that
both the command session and the navigation session present.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

AUTH_REQUIRED_MESSAGE = 'No token configured. Run "gwirian auth" to set your API token.'
AUTH_FAILURE_MESSAGE = 'Token invalid or expired. Run "gwirian auth" to set a new token.'


# -----------------------------------------------------------------------------
# Outcomes
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Success:
    """2xx response. value is the parsed JSON, raw text, or None for empty."""

    value: Any = None


@dataclass(frozen=True)
class AuthFailure:
    """HTTP 401, whatever the body."""


@dataclass(frozen=True)
class ApiFailure:
    """Any non-2xx response other than 401."""

    status_code: int
    message: str
    body: Any = None


@dataclass(frozen=True)
class TransportFailure:
    """DNS, connection, timeout or other failure below HTTP."""

    message: str


Failure = Union[AuthFailure, ApiFailure, TransportFailure]
Outcome = Union[Success, AuthFailure, ApiFailure, TransportFailure]


# -----------------------------------------------------------------------------
# Taxonomy
# -----------------------------------------------------------------------------


class ErrorKind(Enum):
    AUTH_REQUIRED = "auth_required"
    AUTH_FAILURE = "auth_failure"
    API_FAILURE = "api_failure"
    TRANSPORT_FAILURE = "transport_failure"


@dataclass(frozen=True)
class ClassifiedError:
    """A failure ready for presentation."""

    kind: ErrorKind
    title: str
    message: str
    status_code: int | None = None


def title_for_status(status_code: int) -> str:
    """Box title for an API failure status code."""
    if status_code == 404:
        return "Not found"
    if status_code == 403:
        return "Forbidden"
    return "Error"


def auth_required() -> ClassifiedError:
    """Error for a session started without a stored token."""
    return ClassifiedError(
        kind=ErrorKind.AUTH_REQUIRED,
        title="Auth required",
        message=AUTH_REQUIRED_MESSAGE,
    )


def classify(outcome: Failure) -> ClassifiedError:
    """Map a failure outcome to its presentation.

    Args:
        outcome: AuthFailure, ApiFailure or TransportFailure

    Returns:
        ClassifiedError with kind, title, message and status code
    """
    if isinstance(outcome, AuthFailure):
        return ClassifiedError(
            kind=ErrorKind.AUTH_FAILURE,
            title="Auth",
            message=AUTH_FAILURE_MESSAGE,
        )
    if isinstance(outcome, ApiFailure):
        return ClassifiedError(
            kind=ErrorKind.API_FAILURE,
            title=title_for_status(outcome.status_code),
            message=outcome.message,
            status_code=outcome.status_code,
        )
    if isinstance(outcome, TransportFailure):
        return ClassifiedError(
            kind=ErrorKind.TRANSPORT_FAILURE,
            title="Error",
            message=outcome.message,
        )
    raise TypeError(f"Not a failure outcome: {outcome!r}")


def classify_exception(exc: BaseException) -> ClassifiedError:
    """Catch-all for failures that escaped the transport."""
    return classify(TransportFailure(message=str(exc) or exc.__class__.__name__))
