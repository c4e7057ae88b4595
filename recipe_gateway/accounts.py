from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Tuple

from sqlalchemy.orm import Session

from . import crud, models
from .errors import AuthError, ValidationError
from .log import get_logger
from .security import (TokenExpiredError, TokenInvalidError, create_token,
                       decode_token, hash_password, verify_password)

logger = get_logger(__name__)

TOKEN_TTL = timedelta(hours=2)


@dataclass(frozen=True)
class Identity:
    user_id: int
    email: str


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _required(value: Optional[str], field: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required", field=field)
    return value


class AccountStore:
    """Registers users, checks passwords and issues/verifies tokens.

    The signing secret is passed in, never read from module state, so each
    store (and each test) can sign with its own key.
    """

    def __init__(
        self,
        db: Session,
        secret: str,
        algorithm: str = "HS256",
        token_ttl: timedelta = TOKEN_TTL,
        clock: Callable[[], datetime] = utcnow,
    ):
        if not secret:
            raise ValueError("a token secret is required")
        self.db = db
        self.secret = secret
        self.algorithm = algorithm
        self.token_ttl = token_ttl
        self.clock = clock

    def register(self, email: Optional[str],
                 password: Optional[str]) -> models.User:
        email = _required(email, "email").strip()
        password = _required(password, "password")
        user = crud.create_user(self.db, email, hash_password(password))
        logger.info("registered user {}", user.id)
        return user

    def issue_token(self, user: models.User) -> str:
        return create_token(
            {"sub": str(user.id), "email": user.email},
            self.secret,
            self.algorithm,
            issued_at=self.clock(),
            ttl=self.token_ttl,
        )

    def authenticate(self, email: Optional[str],
                     password: Optional[str]) -> Tuple[str, models.User]:
        email = _required(email, "email").strip()
        password = _required(password, "password")
        user = crud.get_user_by_email(self.db, email)
        # same error whether the email is unknown or the password is wrong
        if user is None or not verify_password(password, user.password_hash):
            raise AuthError()
        return self.issue_token(user), user

    def verify(self, token: Optional[str]) -> Identity:
        if not token:
            raise AuthError("Authentication required")
        try:
            claims = decode_token(token, self.secret, self.algorithm,
                                  now=self.clock())
        except TokenExpiredError:
            raise AuthError("Token expired")
        except TokenInvalidError as e:
            logger.debug("rejected token: {}", e)
            raise AuthError("Invalid token")

        try:
            return Identity(user_id=int(claims["sub"]), email=claims["email"])
        except (KeyError, TypeError, ValueError):
            raise AuthError("Invalid token")
