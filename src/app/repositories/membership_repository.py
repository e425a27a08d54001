from abc import ABC, abstractmethod
from typing import List, Optional

from src.domain.entities import Membership


class IMembershipRepository(ABC):
    """Membership repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, team_id: str, membership_id: str) -> Optional[Membership]:
        """Get membership of a team by ID"""
        pass

    @abstractmethod
    async def get_active_by_team_and_uid(
        self, team_id: str, uid: str
    ) -> Optional[Membership]:
        """Get the active membership of a user in a team"""
        pass

    @abstractmethod
    async def get_active_by_team_and_email(
        self, team_id: str, email: str
    ) -> Optional[Membership]:
        """Get the active membership of a canonical email in a team"""
        pass

    @abstractmethod
    async def get_by_team_id(self, team_id: str) -> List[Membership]:
        """Get all memberships for a team, newest first"""
        pass

    @abstractmethod
    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        pass

    @abstractmethod
    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        pass

    @abstractmethod
    async def delete(self, membership: Membership) -> None:
        """Delete a membership"""
        pass
