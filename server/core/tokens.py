# server/core/tokens.py

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from jose import ExpiredSignatureError, JWTError, jwt


ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60
ACCESS_TOKEN_TTL = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)


@dataclass(frozen=True)
class Identity:
    """Who a verified token speaks for."""
    id: int
    username: str


class TokenRejection(str, enum.Enum):
    MALFORMED = "malformed"
    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"


class TokenError(Exception):
    reason: TokenRejection


class MalformedToken(TokenError):
    reason = TokenRejection.MALFORMED


class InvalidSignature(TokenError):
    reason = TokenRejection.INVALID_SIGNATURE


class TokenExpired(TokenError):
    reason = TokenRejection.EXPIRED


def issue_token(
    identity: Identity,
    secret: str,
    ttl: timedelta = ACCESS_TOKEN_TTL,
    now: datetime | None = None,
) -> str:
    if not secret:
        raise ValueError("A signing secret is required to issue tokens")

    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "id": identity.id,
        "username": identity.username,
        "iat": issued_at,
        "exp": issued_at + ttl,
    }
    return jwt.encode(claims, secret, algorithm=ALGORITHM)


def verify_token(token: str, secret: str) -> Identity:
    """
    Checks structure, then signature, then expiry, and returns the embedded identity.

    Raises:
        MalformedToken: the token cannot be parsed or lacks the identity claims.
        InvalidSignature: the signature does not match `secret`.
        TokenExpired: the current time is past the `exp` claim.
    """
    try:
        unverified = jwt.get_unverified_claims(token)
    except (JWTError, AttributeError, TypeError) as exc:
        raise MalformedToken("Token could not be parsed") from exc

    if not isinstance(unverified, dict) or "exp" not in unverified:
        raise MalformedToken("Token has no expiry")

    try:
        claims = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except ExpiredSignatureError as exc:
        raise TokenExpired("Token has expired") from exc
    except JWTError as exc:
        raise InvalidSignature("Token signature is invalid") from exc

    user_id = claims.get("id")
    username = claims.get("username")
    if isinstance(user_id, bool) or not isinstance(user_id, int) or not isinstance(username, str):
        raise MalformedToken("Token is missing identity claims")

    return Identity(id=user_id, username=username)
