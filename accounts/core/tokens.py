"""Signed, time-boxed tokens binding an email address."""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import JWTError, jwt

TOKEN_ALGORITHM = "HS256"
EMAIL_TOKEN_TTL = timedelta(days=2)


class TokenIssuer:
    def __init__(self, secret: str) -> None:
        self._secret = secret

    def _key(self) -> str:
        if not self._secret:
            raise RuntimeError("TOKEN_SECRET must be configured to sign email tokens.")
        return self._secret

    def generate_email_token(self, email: str, *, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "email": email,
            "jti": secrets.token_hex(8),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + EMAIL_TOKEN_TTL).timestamp()),
        }
        return jwt.encode(payload, self._key(), algorithm=TOKEN_ALGORITHM)

    def decode_email_token(self, token: str) -> Dict[str, Any]:
        """Return the claims of a valid token or raise ValueError."""
        try:
            claims = jwt.decode(token, self._key(), algorithms=[TOKEN_ALGORITHM])
        except JWTError as exc:
            raise ValueError("Invalid or expired token") from exc
        if not claims.get("email"):
            raise ValueError("Token carries no email")
        return claims
