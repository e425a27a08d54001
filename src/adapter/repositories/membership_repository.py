from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.membership_repository import IMembershipRepository
from src.domain.entities import Membership, MembershipStatus

from ._flush import flush


class MembershipRepository(IMembershipRepository):
    """Membership repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, team_id: str, membership_id: str) -> Optional[Membership]:
        """Get membership of a team by ID"""
        stmt = select(Membership).where(
            Membership.id == membership_id, Membership.team_id == team_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active_by_team_and_uid(
        self, team_id: str, uid: str
    ) -> Optional[Membership]:
        """Get the active membership of a user in a team"""
        stmt = select(Membership).where(
            Membership.team_id == team_id,
            Membership.uid == uid,
            Membership.status == MembershipStatus.active,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_active_by_team_and_email(
        self, team_id: str, email: str
    ) -> Optional[Membership]:
        """Get the active membership of a canonical email in a team"""
        stmt = select(Membership).where(
            Membership.team_id == team_id,
            Membership.email == email,
            Membership.status == MembershipStatus.active,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_team_id(self, team_id: str) -> List[Membership]:
        """Get all memberships for a team, newest first"""
        stmt = (
            select(Membership)
            .where(Membership.team_id == team_id)
            .order_by(Membership.joined_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        self.session.add(membership)
        await flush(self.session)
        await self.session.refresh(membership)
        return membership

    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        self.session.add(membership)
        await flush(self.session)
        await self.session.refresh(membership)
        return membership

    async def delete(self, membership: Membership) -> None:
        """Delete a membership"""
        await self.session.delete(membership)
        await flush(self.session)
