# server/core/gate.py

import logging
from core.errors import Forbidden, Unauthenticated
from core.tokens import Identity, TokenError, verify_token


logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


def extract_bearer_token(authorization: str | None) -> str | None:
    """Returns the token from an `Authorization: Bearer <token>` header value, or None."""
    if not authorization:
        return None

    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        return None

    token = token.strip()
    return token or None


def authorize(authorization: str | None, secret: str) -> Identity:
    token = extract_bearer_token(authorization)
    if token is None:
        raise Unauthenticated()

    try:
        return verify_token(token, secret)
    except TokenError as exc:
        logger.info("Rejected bearer token: %s", exc.reason.value)
        raise Forbidden() from exc
