"""Bearer token issuing and verification.

Credential checks are pluggable through ``CredentialVerifier``; the demo
verifier accepts any user name and password.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Protocol

import jwt

from app.config import Settings
from app.core.errors import AuthenticationError

ALGORITHM = "HS256"


@dataclass(frozen=True)
class AuthenticatedUser:
    """Verified identity claims."""
    user_id: int
    user_name: str
    first_name: str
    last_name: str
    city: str

    def to_claims(self) -> Dict[str, Any]:
        return {
            "sub": str(self.user_id),
            "given_name": self.first_name,
            "family_name": self.last_name,
            "city": self.city,
        }


class CredentialVerifier(Protocol):
    def verify(self, user_name: Optional[str], password: Optional[str]) -> Optional[AuthenticatedUser]:
        """Return the verified user, or None when the credentials are rejected."""


class DemoCredentialVerifier:
    """Accepts every credential pair. There is no user store behind this API."""

    def verify(self, user_name: Optional[str], password: Optional[str]) -> Optional[AuthenticatedUser]:
        return AuthenticatedUser(
            user_id=1,
            user_name=user_name or "",
            first_name="Kevin",
            last_name="Dockx",
            city="Antwerp",
        )


def create_access_token(user: AuthenticatedUser, settings: Settings, now: Optional[datetime] = None) -> str:
    """Sign a JWT carrying the user's claims."""
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        **user.to_claims(),
        "iss": settings.AUTH_ISSUER,
        "aud": settings.AUTH_AUDIENCE,
        "nbf": issued_at,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.AUTH_TOKEN_LIFETIME_MINUTES),
    }
    return jwt.encode(payload, settings.AUTH_SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> Dict[str, Any]:
    """Validate signature, issuer, audience and lifetime.

    Raises:
        AuthenticationError: if the token is not acceptable
    """
    try:
        return jwt.decode(
            token,
            settings.AUTH_SECRET_KEY,
            algorithms=[ALGORITHM],
            audience=settings.AUTH_AUDIENCE,
            issuer=settings.AUTH_ISSUER,
        )
    except jwt.PyJWTError as e:
        raise AuthenticationError(f"Invalid bearer token: {e}")
