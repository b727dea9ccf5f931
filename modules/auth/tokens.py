"""
Access token issuance and verification.

Tokens are HS256 JWTs signed with the process-wide secret. They are
stateless: validity is decided entirely by signature, expiry and the
issuer/audience claims at verification time, so an issued token stays
valid until it expires.
"""

import binascii
import json
from datetime import datetime, timezone
from typing import Callable, Optional

import jwt
from jwt.utils import base64url_decode, base64url_encode
from pydantic import ValidationError as PydanticValidationError

from shared.config import Settings
from shared.exceptions import ConfigurationError

from .exceptions import (
    TokenClaimMismatchError,
    TokenExpiredError,
    TokenInvalidSignatureError,
    TokenMalformedError,
)
from .models import TokenClaims

REQUIRED_CLAIMS = ["sub", "email", "iss", "aud", "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    Issues and verifies access tokens.

    Holds no per-token state; the secret, issuer, audience and TTL are fixed
    at construction.
    """

    def __init__(
        self,
        secret: str,
        issuer: str,
        audience: str,
        expires_in_seconds: int,
        algorithm: str = "HS256",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._secret = secret
        self._issuer = issuer
        self._audience = audience
        self._expires_in = expires_in_seconds
        self._algorithm = algorithm
        self._clock = clock or _utcnow

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret.get_secret_value(),
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            expires_in_seconds=settings.jwt_expires_in_seconds,
            algorithm=settings.jwt_algorithm,
        )

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return self._expires_in

    def _require_secret(self) -> str:
        if not self._secret:
            raise ConfigurationError("Server authentication not configured")
        return self._secret

    def issue(self, subject_id: str, email: str) -> str:
        """
        Create a signed token for a user.

        Args:
            subject_id: The user's ID, stored as ``sub``
            email: The user's email

        Returns:
            Compact JWT string

        Raises:
            ConfigurationError: If no signing secret is configured
        """
        secret = self._require_secret()
        issued_at = int(self._clock().timestamp())
        payload = {
            "sub": subject_id,
            "email": email,
            "iss": self._issuer,
            "aud": self._audience,
            "iat": issued_at,
            "exp": issued_at + self._expires_in,
        }
        return jwt.encode(payload, secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify a token and return its claims exactly as issued.

        Raises:
            TokenExpiredError: The ``exp`` instant has passed
            TokenInvalidSignatureError: Signature does not match
            TokenClaimMismatchError: Issuer or audience is not ours
            TokenMalformedError: Not a JWT of the expected shape
            ConfigurationError: If no signing secret is configured
        """
        secret = self._require_secret()
        _check_signature_segment(token)

        try:
            payload = jwt.decode(
                token,
                secret,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError()
        except jwt.InvalidSignatureError:
            raise TokenInvalidSignatureError()
        except (jwt.InvalidIssuerError, jwt.InvalidAudienceError):
            raise TokenClaimMismatchError()
        except jwt.InvalidTokenError as e:
            raise TokenMalformedError(str(e))

        try:
            return TokenClaims(**payload)
        except PydanticValidationError:
            raise TokenMalformedError("Token claims have an unexpected shape")


def _check_signature_segment(token: str) -> None:
    """
    Reject a token whose signature segment is not canonical base64url.

    When the header and payload parse, a signature that does not decode,
    or decodes only by discarding bits, has been altered. Tokens whose
    header or payload does not parse are left to ``jwt.decode`` to report.
    """
    parts = token.split(".", 2)
    if len(parts) != 3:
        return
    header, payload, signature = parts

    try:
        for segment in (header, payload):
            json.loads(base64url_decode(segment))
    except (binascii.Error, ValueError):
        return

    try:
        canonical = base64url_encode(base64url_decode(signature)).decode()
    except (binascii.Error, ValueError):
        raise TokenInvalidSignatureError()
    if canonical != signature:
        raise TokenInvalidSignatureError()
