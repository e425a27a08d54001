from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import Team


class ITeamRepository(ABC):
    """Team repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, team_id: str) -> Optional[Team]:
        """Get team by ID"""
        pass

    @abstractmethod
    async def get_by_ids(self, team_ids: List[str]) -> List[Team]:
        """Get all teams whose ID is in team_ids"""
        pass

    @abstractmethod
    async def create(self, team: Team) -> Team:
        """Create a new team"""
        pass

    @abstractmethod
    async def update(self, team: Team) -> Team:
        """Update existing team"""
        pass
