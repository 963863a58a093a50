"""Base repository for database operations."""

from datetime import datetime
from typing import Generic, TypeAlias, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
)

FilterValue: TypeAlias = str | int | float | bool | UUID | datetime | None

ModelT = TypeVar("ModelT", bound=SQLModel)


class BaseRepository(Generic[ModelT]):
    """
    Base repository implementing common lookups and guarded writes.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
        unique_fields: Columns whose unique violations are reported by name.
    """

    model: type[ModelT]
    id_field: str = "id"
    unique_fields: tuple[str, ...] = ()

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def get_by_id(self, record_id: UUID) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record UUID

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        id_column = getattr(self.model, self.id_field)
        statement = select(self.model).where(id_column == record_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_field(
        self,
        field_name: str,
        value: FilterValue,
    ) -> ModelT | None:
        """
        Get a record by a specific field value.

        Args:
            field_name: Name of the field to search
            value: Value to search for

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        field = getattr(self.model, field_name)
        statement = select(self.model).where(field == value)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def count(self) -> int:
        """
        Count total records.

        Returns:
            int: Total number of records
        """
        statement = select(func.count()).select_from(self.model)
        result = await self.session.execute(statement)
        count = result.scalar()
        return count if count is not None else 0

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record inside a savepoint and refresh it from the database.

        A failed write only rolls back its own savepoint, so the request
        transaction stays usable for a retry.

        Args:
            record: Record to add

        Returns:
            ModelT: Refreshed record

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other database errors
        """
        try:
            async with self.session.begin_nested():
                self.session.add(record)
                await self.session.flush()
        except IntegrityError as e:
            raise self._integrity_error(e) from e
        except Exception as e:
            raise DatabaseConnectionError(
                detail=f"Failed to save record: {e}",
            ) from e

        await self.session.refresh(record)
        return record

    def _integrity_error(self, error: IntegrityError) -> DatabaseError:
        """Translate an ``IntegrityError`` into the application error family."""
        error_msg = str(error.orig) if error.orig else str(error)
        lowered = error_msg.lower()
        if "unique" in lowered or "duplicate" in lowered:
            field = next((name for name in self.unique_fields if name in lowered), None)
            return DuplicateEntryError(detail=error_msg, field=field)
        return DatabaseError(detail=f"Database integrity error: {error_msg}")

    async def _check_exists_by_field(
        self,
        field_name: str,
        value: FilterValue,
        exclude_id: UUID | None = None,
    ) -> bool:
        """
        Check if a record exists with a specific field value.

        Args:
            field_name: Name of the field to check
            value: Value to check for
            exclude_id: Optional ID to exclude from check (for updates)

        Returns:
            bool: True if record exists, False otherwise
        """
        field = getattr(self.model, field_name)
        statement = select(1).where(field == value)

        if exclude_id is not None:
            id_column = getattr(self.model, self.id_field)
            statement = statement.where(id_column != exclude_id)

        statement = statement.limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None
