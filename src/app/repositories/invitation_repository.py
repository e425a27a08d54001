from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional

from src.domain.entities import Invitation, InvitationStatus


class IInvitationRepository(ABC):
    """Invitation repository interface - application layer

    State transitions are compare-and-set: they only apply while the stored
    invitation is still pending and return False when another writer got
    there first.
    """

    @abstractmethod
    async def get_by_id(self, invitation_id: str) -> Optional[Invitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def reload(self, invitation: Invitation) -> Invitation:
        """Re-read the stored row into invitation after a lost transition"""
        pass

    @abstractmethod
    async def get_pending_by_team_and_email(
        self, team_id: str, email: str
    ) -> Optional[Invitation]:
        """Get pending invitation by team and canonical email"""
        pass

    @abstractmethod
    async def get_by_team_id(
        self, team_id: str, statuses: Iterable[InvitationStatus]
    ) -> List[Invitation]:
        """Get invitations of a team restricted to the given statuses"""
        pass

    @abstractmethod
    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def mark_accepted(
        self,
        invitation: Invitation,
        token_hash: str,
        accepted_by: str,
        accepted_at: datetime,
    ) -> bool:
        """pending -> accepted, only if token_hash still matches"""
        pass

    @abstractmethod
    async def mark_terminal(
        self, invitation: Invitation, status: InvitationStatus, now: datetime
    ) -> bool:
        """pending -> expired | cancelled"""
        pass

    @abstractmethod
    async def rotate_token(
        self,
        invitation: Invitation,
        token_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> bool:
        """Replace token hash and expiry of a pending invitation"""
        pass
