from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.team_repository import ITeamRepository
from src.domain.entities import Team

from ._flush import flush


class TeamRepository(ITeamRepository):
    """Team repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, team_id: str) -> Optional[Team]:
        """Get team by ID"""
        stmt = select(Team).where(Team.id == team_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_ids(self, team_ids: List[str]) -> List[Team]:
        """Get all teams whose ID is in team_ids"""
        stmt = select(Team).where(Team.id.in_(team_ids))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, team: Team) -> Team:
        """Create a new team"""
        self.session.add(team)
        await flush(self.session)
        await self.session.refresh(team)
        return team

    async def update(self, team: Team) -> Team:
        """Update existing team"""
        self.session.add(team)
        await flush(self.session)
        await self.session.refresh(team)
        return team
