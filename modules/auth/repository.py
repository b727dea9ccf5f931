"""
User repository for database access.

Encapsulates all Supabase queries and data mapping for the ``users`` table.
Emails are stored lowercased; the table's unique index on ``lower(email)``
is the final guard against duplicate registration.
"""

import logging
import uuid
from typing import Any, Optional

import httpx
from postgrest.exceptions import APIError
from shared.repository import BaseRepository

from .exceptions import ConstraintViolationError, StoreUnavailableError
from .models import NewUser, UserProfile, UserRecord, normalize_email

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for unique_violation
UNIQUE_VIOLATION = "23505"

PROFILE_COLUMNS = "id, email, first_name, last_name, created_at, updated_at"


class SupabaseUserRepository(BaseRepository[UserRecord]):
    """
    Repository for user data access.

    All methods return Pydantic models mapped from database rows.
    ``list_all`` never selects the password hash column.
    """

    table_name = "users"

    def find_by_email(self, email: str) -> Optional[UserRecord]:
        query = self._query().select("*").eq("email", normalize_email(email)).limit(1)
        result = self._execute(query, "find_by_email")
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def find_by_id(self, user_id: str) -> Optional[UserRecord]:
        # IDs are UUIDs; anything else cannot match a row.
        try:
            uuid.UUID(str(user_id))
        except ValueError:
            return None

        query = self._query().select("*").eq("id", user_id).limit(1)
        result = self._execute(query, "find_by_id")
        if not result.data:
            return None
        return self._map_to_record(result.data[0])

    def create(self, new_user: NewUser) -> UserRecord:
        data = new_user.model_dump()
        data["email"] = normalize_email(new_user.email)

        try:
            result = self._query().insert(data).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise ConstraintViolationError()
            logger.error("User insert failed: %s (%s)", e.message, e.code)
            raise StoreUnavailableError()
        except httpx.HTTPError as e:
            logger.error("User insert failed: %s", e)
            raise StoreUnavailableError()

        return self._map_to_record(result.data[0])

    def list_all(self) -> list[UserProfile]:
        query = self._query().select(PROFILE_COLUMNS).order("created_at", desc=True)
        result = self._execute(query, "list_all")
        return [self._map_to_profile(row) for row in result.data]

    def ping(self) -> bool:
        try:
            self._execute(self._query().select("id").limit(1), "ping")
        except StoreUnavailableError:
            return False
        return True

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _execute(self, query, operation: str):
        try:
            return query.execute()
        except APIError as e:
            logger.error("User store %s failed: %s (%s)", operation, e.message, e.code)
            raise StoreUnavailableError()
        except httpx.HTTPError as e:
            logger.error("User store %s failed: %s", operation, e)
            raise StoreUnavailableError()

    def _map_to_record(self, data: dict[str, Any]) -> UserRecord:
        """Map database row to UserRecord model."""
        return UserRecord(
            id=str(data["id"]),
            email=data["email"],
            password_hash=data["password_hash"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )

    def _map_to_profile(self, data: dict[str, Any]) -> UserProfile:
        """Map database row to UserProfile model."""
        return UserProfile(
            id=str(data["id"]),
            email=data["email"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
