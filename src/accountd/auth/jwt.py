"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication. The
server keeps no token table: a token is good until its `exp`, and the
only thing needed to check it is the signing secret.

Payload is exactly {sub, iat, exp}. `sub` is the account id.
"""

from datetime import datetime, timezone
from typing import Callable

import jwt

from accountd.config import Settings

REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class TokenError(Exception):
    """Raised when token verification fails, for any reason."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    """Issues and verifies signed, expiring bearer tokens.

    Learn: `clock` is injectable so expiry can be tested against a
    simulated time. PyJWT's own exp check always uses the wall clock,
    so verify() decodes with verify_exp off and compares exp against
    `clock()` itself.
    """

    def __init__(
        self,
        secret: str,
        expires_in: int,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        if expires_in <= 0:
            raise ValueError("Token expiry must be a positive number of seconds")
        self._secret = secret
        self.expires_in = expires_in
        self.algorithm = algorithm
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret=settings.jwt_secret,
            expires_in=settings.jwt_expires_in,
            algorithm=settings.jwt_algorithm,
        )

    def issue(self, subject_id) -> str:
        """Create a signed access token for `subject_id`."""
        now = self._clock().timestamp()
        # exp keeps the fraction so the token lives the full expires_in.
        payload = {
            "sub": str(subject_id),
            "iat": int(now),
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Verify a token and return its subject id.

        Raises TokenError on failure. Malformed, bad signature, wrong
        algorithm, missing claims and expired all look the same.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={
                    "require": REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.PyJWTError as e:
            raise TokenError("Invalid token") from e

        expires_at = payload["exp"]
        if isinstance(expires_at, bool) or not isinstance(expires_at, (int, float)):
            raise TokenError("Invalid token")
        if self._clock().timestamp() >= expires_at:
            raise TokenError("Invalid token")

        subject = payload["sub"]
        if not isinstance(subject, str) or not subject:
            raise TokenError("Invalid token")
        return subject
