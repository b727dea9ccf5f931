"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.

Token and header failures all surface to clients as a bare 401; the
specific ``code`` is for server-side logs only.
"""

from shared.exceptions import (
    SplitwiseError,
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
)


# -----------------------------------------------------------------------------
# Credential hashing
# -----------------------------------------------------------------------------


class HashingError(SplitwiseError):
    """Raised when a password hash cannot be produced."""

    def __init__(self, message: str = "Password hashing failed"):
        super().__init__(message, code="HASHING_FAILED")


class MalformedHashError(HashingError):
    """Raised when a stored hash was not produced by this hasher."""

    def __init__(self):
        super().__init__("Stored password hash is malformed")
        self.code = "MALFORMED_HASH"


# -----------------------------------------------------------------------------
# Tokens
# -----------------------------------------------------------------------------


class TokenExpiredError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class TokenMalformedError(AuthenticationError):
    """Raised when a string cannot be parsed as a JWT of the expected shape."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="TOKEN_MALFORMED")


class TokenInvalidSignatureError(AuthenticationError):
    """Raised when a JWT signature does not verify under the shared secret."""

    def __init__(self, message: str = "Token signature verification failed"):
        super().__init__(message, code="TOKEN_INVALID_SIGNATURE")


class TokenClaimMismatchError(AuthenticationError):
    """Raised when issuer or audience differ from this service's values."""

    def __init__(self, message: str = "Token issuer or audience mismatch"):
        super().__init__(message, code="TOKEN_CLAIM_MISMATCH")


# -----------------------------------------------------------------------------
# Authorization header
# -----------------------------------------------------------------------------


class MissingHeaderError(AuthenticationError):
    """Raised when no Authorization header is provided."""

    def __init__(self, message: str = "Authorization header is required"):
        super().__init__(message, code="MISSING_HEADER")


class MalformedHeaderError(AuthenticationError):
    """Raised when the header is not of the form ``Bearer <token>``."""

    def __init__(
        self,
        message: str = "Invalid authorization header format. Expected: Bearer <token>",
    ):
        super().__init__(message, code="MALFORMED_HEADER")


class EmptyTokenError(AuthenticationError):
    """Raised when the header carries the Bearer scheme but no token."""

    def __init__(self, message: str = "Token is missing from authorization header"):
        super().__init__(message, code="EMPTY_TOKEN")


# -----------------------------------------------------------------------------
# Accounts
# -----------------------------------------------------------------------------


class InvalidCredentialsError(AuthenticationError):
    """
    Raised when login fails.

    Unknown email and wrong password share this exact message.
    """

    def __init__(self):
        super().__init__("Invalid email or password", code="INVALID_CREDENTIALS")


class DuplicateEmailError(ConflictError):
    """Raised when registering an email that is already taken."""

    def __init__(self):
        super().__init__("Email is already registered", code="DUPLICATE_EMAIL")


class UserNotFoundError(NotFoundError):
    """Raised when the authenticated user doesn't exist in the database."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


# -----------------------------------------------------------------------------
# User store
# -----------------------------------------------------------------------------


class ConstraintViolationError(ConflictError):
    """Raised by the store when an insert breaks a unique constraint."""

    def __init__(self, constraint: str = "users_email_key"):
        super().__init__(
            f"Unique constraint violated: {constraint}",
            code="CONSTRAINT_VIOLATION",
            details={"constraint": constraint},
        )


class StoreUnavailableError(ExternalServiceError):
    """Raised when the user store cannot be reached or errors out."""

    def __init__(self, message: str = "User store unavailable"):
        super().__init__(message, service="user_store", code="STORE_UNAVAILABLE")
