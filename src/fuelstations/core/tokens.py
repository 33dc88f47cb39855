from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt

from .errors import AuthError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
TOKEN_LIFETIME = timedelta(days=7)
ALGORITHM = "HS256"

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class TokenService:
    def __init__(
        self,
        secret: str,
        lifetime: timedelta = TOKEN_LIFETIME,
        clock: Clock = _utcnow,
    ) -> None:
        self._secret = secret
        self._lifetime = lifetime
        self._clock = clock

    def issue(self, subject: str) -> str:
        if not subject:
            raise ValueError("Token subject must be a non-empty identifier")
        issued_at = self._clock()
        payload = {
            "id": subject,
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str | None) -> str:
        """Return the subject embedded in ``token``.

        Accepts the raw token or an ``Authorization`` header value with the
        ``Bearer `` prefix.
        """
        if not token:
            raise AuthError.missing()
        if token.startswith(BEARER_PREFIX):
            token = token[len(BEARER_PREFIX) :]

        try:
            decoded = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except jwt.PyJWTError as exc:
            logger.warning("Failed to verify token: %s", exc)
            raise AuthError.invalid() from exc

        subject = decoded.get("id")
        if not subject:
            logger.warning("Failed to decode token: no subject claim")
            raise AuthError.invalid()
        return str(subject)
