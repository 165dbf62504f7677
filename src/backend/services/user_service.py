"""
User registration and credential checks.

Only the auth endpoints use this. Voting code receives an already
authenticated integer user id and never touches credentials.
"""

import structlog
from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from core.exceptions import NotFoundError, TransactionConflictError, UnauthorizedError, ValidationError
from core.security import hash_password, verify_password
from repositories.base import Storage
from schemas.user import User

logger = structlog.get_logger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 6

_email_adapter = TypeAdapter(EmailStr)


class UserService:
    """Registration, login and lookup."""

    def __init__(self, storage: Storage):
        self.storage = storage

    async def register(self, username: str, email: str, password: str) -> User:
        """
        Create a user account.

        Username and email must be unique ignoring case.

        Raises:
            ValidationError: bad field values or a taken username/email.
        """
        username = (username or "").strip()
        if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
            raise ValidationError(
                f"Username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters"
            )
        if len(password or "") < PASSWORD_MIN_LENGTH:
            raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
        try:
            email = _email_adapter.validate_python((email or "").strip())
        except PydanticValidationError:
            raise ValidationError("Invalid email address") from None

        password_hash = hash_password(password)

        try:
            async with self.storage.session(write=True) as store:
                if await store.find_user_by_username(username) is not None:
                    raise ValidationError("Username already exists")
                if await store.find_user_by_email(email) is not None:
                    raise ValidationError("Email already registered")
                user = await store.add_user(username=username, email=email, password_hash=password_hash)
        except TransactionConflictError:
            # A concurrent registration took the name or email after the checks above
            logger.info("user_register_conflict")
            raise ValidationError("Username or email already registered") from None

        logger.info("user_registered", user_id=user.id)
        return user

    async def authenticate(self, username: str, password: str) -> User:
        """Return the user for valid credentials, else raise UnauthorizedError."""
        async with self.storage.session() as store:
            user = await store.find_user_by_username((username or "").strip())

        if user is None or not verify_password(password, user.password_hash):
            logger.info("login_failed")
            raise UnauthorizedError("Invalid username or password")
        return user

    async def get_user(self, user_id: int) -> User:
        async with self.storage.session() as store:
            user = await store.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user
