"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and the table each repository owns.
"""

from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Table name via self._table
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class UserRepository(BaseRepository[UserRecord]):
            def find_by_id(self, user_id: str) -> Optional[UserRecord]:
                result = self._query().select("*").eq("id", user_id).execute()
                if not result.data:
                    return None
                return self._map_to_record(result.data[0])
    """

    table_name: str = ""

    def __init__(self, db: Client, table_name: str | None = None) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
            table_name: Overrides the class-level table name.
        """
        self._db = db
        self._table = table_name or self.table_name

    def _query(self):
        """Start a query against this repository's table."""
        return self._db.table(self._table)
