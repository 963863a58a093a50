"""User repository for database operations."""

from uuid import UUID

from sqlalchemy import select

from app.models.user import UserDB
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserDB]):
    """
    Repository for User database operations.

    Acts as the author directory for the post listing planner.
    """

    model = UserDB
    id_field = "uuid"
    unique_fields = ("external_id", "username", "email")

    async def find_id_by_username(self, username: str) -> UUID | None:
        """
        Resolve a username to the author's id.

        Args:
            username: Username to look up

        Returns:
            UUID | None: Author id if found, None otherwise
        """
        result = await self.session.execute(
            select(UserDB.uuid).where(UserDB.username == username),
        )
        return result.scalar_one_or_none()

    async def get_by_external_id(self, external_id: str) -> UserDB | None:
        """
        Get the user linked to an identity provider id.

        Args:
            external_id: Token subject issued by the identity provider

        Returns:
            UserDB | None: User if found, None otherwise
        """
        return await self.get_by_field("external_id", external_id)

    async def create(self, user: UserDB) -> UserDB:
        """
        Persist a provisioned user.

        Raises:
            DuplicateEntryError: If the external id, username or email is taken
        """
        return await self._add_and_refresh(user)
