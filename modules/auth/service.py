"""
Authentication service implementation.

Registration and login on top of the credential hasher, the token
service and the user store, all passed in explicitly.
"""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from shared.exceptions import ValidationError
from shared.models import AuthenticatedIdentity

from .exceptions import (
    ConstraintViolationError,
    DuplicateEmailError,
    InvalidCredentialsError,
    UserNotFoundError,
)
from .interfaces import IAuthService, IUserRepository
from .models import (
    AuthResponse,
    LoginRequest,
    NewUser,
    RegisterRequest,
    UserProfile,
    UserRecord,
)
from .password import PasswordHasher
from .tokens import TokenService

logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT", bound=BaseModel)


class AuthService(IAuthService):
    """
    Implementation of the account service.

    Holds no state of its own beyond its collaborators.
    """

    def __init__(
        self,
        users: IUserRepository,
        tokens: TokenService,
        hasher: PasswordHasher,
    ):
        self._users = users
        self._tokens = tokens
        self._hasher = hasher

    async def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
    ) -> AuthResponse:
        """
        Create an account and issue its first token.

        The lookup gives a friendly error; the store's unique index on the
        lowercased email settles races between concurrent registrations.
        """
        request = _parse(
            RegisterRequest,
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password,
        )

        if self._users.find_by_email(request.email) is not None:
            raise DuplicateEmailError()

        password_hash = await self._hasher.hash_async(request.password)

        try:
            user = self._users.create(
                NewUser(
                    email=request.email,
                    password_hash=password_hash,
                    first_name=request.first_name,
                    last_name=request.last_name,
                )
            )
        except ConstraintViolationError:
            raise DuplicateEmailError()

        logger.info("Registered user %s", user.id)
        return self._authenticated(user)

    async def login(self, email: str, password: str) -> AuthResponse:
        """
        Check credentials and issue a token.

        Unknown email and wrong password raise the same error after the same
        amount of hashing work.
        """
        request = _parse(LoginRequest, email=email, password=password)

        user = self._users.find_by_email(request.email)
        if user is None:
            await self._hasher.verify_dummy_async(request.password)
            raise InvalidCredentialsError()

        if not await self._hasher.verify_async(request.password, user.password_hash):
            raise InvalidCredentialsError()

        logger.info("Login: %s", user.id)
        return self._authenticated(user)

    async def get_profile(self, identity: AuthenticatedIdentity) -> UserProfile:
        user = self._users.find_by_id(identity.id)
        if user is None:
            raise UserNotFoundError(identity.id)
        return user.to_profile()

    async def list_users(self) -> list[UserProfile]:
        return self._users.list_all()

    def _authenticated(self, user: UserRecord) -> AuthResponse:
        token = self._tokens.issue(user.id, user.email)
        return AuthResponse(
            user=user.to_profile(),
            token=token,
            expires_in=self._tokens.expires_in,
        )


def _parse(model: type[RequestT], **fields: Any) -> RequestT:
    """Validate raw fields, reporting every violation at once."""
    try:
        return model(**fields)
    except PydanticValidationError as e:
        raise ValidationError.from_errors(e.errors())
