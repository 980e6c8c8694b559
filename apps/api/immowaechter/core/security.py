"""Shared-secret helpers for the scheduled endpoints."""

import hmac

BEARER_PREFIX = "Bearer "


def verify_secret(provided: str | None, expected: str | None) -> bool:
    """Constant-time comparison that rejects empty values on either side."""
    if not provided or not expected:
        return False
    return hmac.compare_digest(provided.encode(), expected.encode())


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None
