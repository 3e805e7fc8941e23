"""User registration, login and profile management."""

import logging
import re
from dataclasses import dataclass
from typing import Protocol

import bcrypt

from forq.domain.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationFailedError,
)
from forq.domain.models import NutritionGoals, UserCredentials, UserRecord

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_MIN_PASSWORD_LENGTH = 6
_BCRYPT_ROUNDS = 10

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for users."""

    def get_by_id(self, user_id: int) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def get_credentials_by_email(self, email: str) -> UserCredentials | None:
        """Return the user and password hash for an email, if present."""

    def get_credentials_by_username(self, username: str) -> UserCredentials | None:
        """Return the user and password hash for a username, if present."""

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        """Create a user row and return it."""

    def update_user(self, user_id: int, payload: dict[str, object]) -> UserRecord:
        """Update a user row and return it."""


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt(rounds=_BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    """Return true when the password matches the stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    def register(  # noqa: PLR0913
        self,
        username: str,
        email: str,
        password: str,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> UserRecord:
        """Create a user after validating and de-duplicating credentials."""
        if not username or not email or not password:
            raise ValidationFailedError("Username, email, and password are required")
        if not _EMAIL_RE.match(email):
            raise ValidationFailedError("Invalid email format")
        if len(password) < _MIN_PASSWORD_LENGTH:
            raise ValidationFailedError(
                f"Password must be at least {_MIN_PASSWORD_LENGTH} characters long"
            )
        normalized_email = email.lower()
        if self.repository.get_credentials_by_username(username):
            raise ConflictError("Username already exists")
        if self.repository.get_credentials_by_email(normalized_email):
            raise ConflictError("Email already exists")

        user = self.repository.create_user(
            {
                "username": username,
                "email": normalized_email,
                "password_hash": hash_password(password),
                "first_name": first_name or None,
                "last_name": last_name or None,
            }
        )
        _logger.info("Registered user id=%s", user.id)
        return user

    def login(self, email_or_username: str, password: str) -> UserRecord:
        """Authenticate by email or username."""
        if not email_or_username or not password:
            raise ValidationFailedError("Email/username and password are required")
        credentials = self.repository.get_credentials_by_email(
            email_or_username.lower()
        ) or self.repository.get_credentials_by_username(email_or_username)
        if credentials is None or not check_password(
            password, credentials.password_hash
        ):
            raise AuthenticationError("Invalid credentials")
        return credentials.user

    def get_profile(self, user_id: int) -> UserRecord:
        """Return a user or raise NotFoundError."""
        user = self.repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def verify(self, user_id: int) -> UserRecord:
        """Confirm a stored session still maps to a user."""
        return self.get_profile(user_id)

    def update_profile(
        self,
        user_id: int,
        first_name: str | None = None,
        last_name: str | None = None,
        profile_picture: str | None = None,
    ) -> UserRecord:
        """Update the provided profile fields."""
        self.get_profile(user_id)
        updates = {
            key: value
            for key, value in {
                "first_name": first_name,
                "last_name": last_name,
                "profile_picture": profile_picture,
            }.items()
            if value is not None
        }
        if not updates:
            return self.get_profile(user_id)
        return self.repository.update_user(user_id, updates)

    def get_goals(self, user_id: int) -> NutritionGoals:
        """Return a user's daily goals."""
        return self.get_profile(user_id).goals

    def update_goals(
        self,
        user_id: int,
        calories: int | None = None,
        protein: float | None = None,
        carbs: float | None = None,
        fat: float | None = None,
    ) -> NutritionGoals:
        """Update daily goals; values must be non-negative."""
        self.get_profile(user_id)
        updates = {
            key: value
            for key, value in {
                "goal_calories": calories,
                "goal_protein": protein,
                "goal_carbs": carbs,
                "goal_fat": fat,
            }.items()
            if value is not None
        }
        if any(value < 0 for value in updates.values()):
            raise ValidationFailedError("Goals must be non-negative")
        if not updates:
            return self.get_goals(user_id)
        return self.repository.update_user(user_id, updates).goals
