from typing import List

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_team_ref_repository import IUserTeamRefRepository
from src.domain.entities import UserTeamRef

from ._flush import flush


class UserTeamRefRepository(IUserTeamRefRepository):
    """UserTeamRef repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_uid(self, uid: str) -> List[UserTeamRef]:
        """Get all team refs of a user"""
        stmt = select(UserTeamRef).where(UserTeamRef.uid == uid)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_uid_and_team(self, uid: str, team_id: str) -> List[UserTeamRef]:
        """Get the refs of a user pointing at one team"""
        stmt = select(UserTeamRef).where(
            UserTeamRef.uid == uid, UserTeamRef.team_id == team_id
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, ref: UserTeamRef) -> UserTeamRef:
        """Create a new ref"""
        self.session.add(ref)
        await flush(self.session)
        await self.session.refresh(ref)
        return ref

    async def update(self, ref: UserTeamRef) -> UserTeamRef:
        """Update existing ref"""
        self.session.add(ref)
        await flush(self.session)
        await self.session.refresh(ref)
        return ref

    async def delete(self, ref: UserTeamRef) -> None:
        """Delete a ref"""
        await self.session.delete(ref)
        await flush(self.session)
