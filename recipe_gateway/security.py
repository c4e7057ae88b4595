"""Password hashing (bcrypt) and session tokens (JWT via python-jose)."""

from datetime import datetime, timedelta
from typing import Any, Dict

import bcrypt
from jose import jwt
from jose.exceptions import JWTError

# bcrypt only looks at the first 72 bytes
_BCRYPT_MAX_BYTES = 72


class TokenInvalidError(Exception):
    pass


class TokenExpiredError(TokenInvalidError):
    pass


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    hashed = bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(password),
                              password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False


def create_token(claims: Dict[str, Any], secret: str, algorithm: str,
                 issued_at: datetime, ttl: timedelta) -> str:
    payload = dict(claims)
    payload["iat"] = int(issued_at.timestamp())
    payload["exp"] = int((issued_at + ttl).timestamp())
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_token(token: str, secret: str, algorithm: str,
                 now: datetime) -> Dict[str, Any]:
    """Check the signature and expiry of ``token`` and return its claims.

    Expiry is compared against ``now`` rather than the wall clock so callers
    control time.
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm],
                             options={"verify_exp": False})
    except JWTError as e:
        raise TokenInvalidError(str(e)) from e

    exp = payload.get("exp")
    if not isinstance(exp, (int, float)):
        raise TokenInvalidError("missing exp claim")
    if now.timestamp() >= exp:
        raise TokenExpiredError("token has expired")
    return payload
