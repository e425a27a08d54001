from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.invitation_repository import IInvitationRepository
from src.domain.entities import Invitation, InvitationStatus

from ._flush import flush


class InvitationRepository(IInvitationRepository):
    """Invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: str) -> Optional[Invitation]:
        """Get invitation by ID"""
        stmt = select(Invitation).where(Invitation.id == invitation_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def reload(self, invitation: Invitation) -> Invitation:
        """Re-read the stored row into invitation after a lost transition"""
        await self.session.refresh(invitation)
        return invitation

    async def get_pending_by_team_and_email(
        self, team_id: str, email: str
    ) -> Optional[Invitation]:
        """Get pending invitation by team and canonical email"""
        stmt = select(Invitation).where(
            Invitation.team_id == team_id,
            Invitation.email == email,
            Invitation.status == InvitationStatus.pending,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_by_team_id(
        self, team_id: str, statuses: Iterable[InvitationStatus]
    ) -> List[Invitation]:
        """Get invitations of a team restricted to the given statuses"""
        stmt = (
            select(Invitation)
            .where(
                Invitation.team_id == team_id,
                Invitation.status.in_(list(statuses)),
            )
            .order_by(Invitation.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, invitation: Invitation) -> Invitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await flush(self.session)
        await self.session.refresh(invitation)
        return invitation

    async def mark_accepted(
        self,
        invitation: Invitation,
        token_hash: str,
        accepted_by: str,
        accepted_at: datetime,
    ) -> bool:
        """pending -> accepted, only if token_hash still matches"""
        return await self._transition(
            invitation,
            [Invitation.token_hash == token_hash],
            status=InvitationStatus.accepted,
            accepted_by=accepted_by,
            accepted_at=accepted_at,
            updated_at=accepted_at,
        )

    async def mark_terminal(
        self, invitation: Invitation, status: InvitationStatus, now: datetime
    ) -> bool:
        """pending -> expired | cancelled"""
        if status not in (InvitationStatus.expired, InvitationStatus.cancelled):
            raise ValueError(f"Not a terminal status reachable this way: {status}")
        return await self._transition(invitation, [], status=status, updated_at=now)

    async def rotate_token(
        self,
        invitation: Invitation,
        token_hash: str,
        expires_at: datetime,
        now: datetime,
    ) -> bool:
        """Replace token hash and expiry of a pending invitation"""
        return await self._transition(
            invitation, [], token_hash=token_hash, expires_at=expires_at, updated_at=now
        )

    async def _transition(self, invitation: Invitation, conditions: list, **values) -> bool:
        """Conditional UPDATE on a still-pending row; refreshes invitation when applied"""
        stmt = (
            update(Invitation)
            .where(
                Invitation.id == invitation.id,
                Invitation.status == InvitationStatus.pending,
                *conditions,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount != 1:
            return False

        await flush(self.session)
        await self.session.refresh(invitation)
        return True
