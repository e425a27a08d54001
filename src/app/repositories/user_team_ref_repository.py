from abc import ABC, abstractmethod
from typing import List

from src.domain.entities import UserTeamRef


class IUserTeamRefRepository(ABC):
    """UserTeamRef repository interface - application layer"""

    @abstractmethod
    async def get_by_uid(self, uid: str) -> List[UserTeamRef]:
        """Get all team refs of a user"""
        pass

    @abstractmethod
    async def get_by_uid_and_team(self, uid: str, team_id: str) -> List[UserTeamRef]:
        """Get the refs of a user pointing at one team"""
        pass

    @abstractmethod
    async def create(self, ref: UserTeamRef) -> UserTeamRef:
        """Create a new ref"""
        pass

    @abstractmethod
    async def update(self, ref: UserTeamRef) -> UserTeamRef:
        """Update existing ref"""
        pass

    @abstractmethod
    async def delete(self, ref: UserTeamRef) -> None:
        """Delete a ref"""
        pass
