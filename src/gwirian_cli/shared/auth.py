"""Authentication header helpers for gwirian-cli.

Tokens are opaque strings passed to the API as bearer credentials.
401 from the API is the only signal that a token is no longer valid.
"""

JSON_CONTENT_TYPE = "application/json"


def auth_headers(token: str | None) -> dict[str, str]:
    """Build Authorization header dict.

    Args:
        token: Bearer token string

    Returns:
        Dict with Authorization header, or empty dict if no token
    """
    if token:
        return {"Authorization": f"Bearer {token}"}
    return {}


def request_headers(token: str) -> dict[str, str]:
    """Headers attached to every API request."""
    return {**auth_headers(token), "Content-Type": JSON_CONTENT_TYPE}


def has_usable_token(token: str | None) -> bool:
    """True if the token is a non-empty string."""
    return isinstance(token, str) and len(token) > 0
