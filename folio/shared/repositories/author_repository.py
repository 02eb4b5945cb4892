"""
Author repository for data access.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from folio.shared.models.author import Author
from folio.shared.repositories.base import BaseRepository


DEFAULT_AUTHOR_NAME = "Anonymous"


class AuthorRepository(BaseRepository[Author]):
    """Repository for Author entity."""

    def __init__(self, session: AsyncSession):
        super().__init__(Author, session)

    async def get_by_user_id(self, user_id: str) -> Optional[Author]:
        result = await self.session.execute(select(Author).where(Author.user_id == user_id))
        return result.scalar_one_or_none()

    async def get_or_create_for_user(self, user_id: str, name: Optional[str] = None) -> Author:
        """
        Author profile for an auth identity, created on first use.

        Args:
            user_id: Auth provider subject
            name: Display name from the identity, "Anonymous" when missing
        """
        author = await self.get_by_user_id(user_id)
        if author:
            return author
        return await self.create(user_id=user_id, name=name or DEFAULT_AUTHOR_NAME)
