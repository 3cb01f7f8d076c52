# backend/staffgraph/core/security.py

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from staffgraph.core.config import Settings

log = logging.getLogger(__name__)

# pbkdf2_sha256 only: salted, and no 72-byte bcrypt limit
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password or "", hashed_password)
    except ValueError:
        # not a hash passlib recognizes
        return False


class TokenService:
    """Issues and verifies signed, time-limited bearer tokens.

    The payload is ``{"user": claim, "iat": ..., "exp": ...}`` where the claim
    carries ``id``, ``name``, ``email`` and ``role``. Tokens are never stored
    server-side: validity depends only on signature and expiry.
    """

    def __init__(self, settings: Settings):
        self._secret = settings.JWT_SECRET_KEY
        self._algorithm = settings.JWT_ALGORITHM
        self._ttl = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)

    def issue(self, claim: dict[str, Any], now: Optional[datetime] = None) -> str:
        issued = now or datetime.now(timezone.utc)
        to_encode = {
            "user": dict(claim),
            "iat": int(issued.timestamp()),
            "exp": int((issued + self._ttl).timestamp()),
        }
        return jwt.encode(to_encode, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Optional[dict[str, Any]]:
        """Return the embedded claim, or None for any invalid token."""
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as e:
            log.debug("Rejected token: %s", e)
            return None

        claim = payload.get("user")
        if not isinstance(claim, dict) or not claim.get("id"):
            log.debug("Rejected token: missing user claim")
            return None
        return claim
