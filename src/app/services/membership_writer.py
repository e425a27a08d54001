"""
Membership Writer

The only code path that writes Membership and UserTeamRef records. Every
method stages both sides in the caller's unit of work, so the invariant
"every active Membership has exactly one matching UserTeamRef" holds after
commit.
"""

from datetime import datetime
from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import canonical_email
from src.domain.entities import (
    Membership,
    MembershipRole,
    MembershipStatus,
    UserTeamRef,
)


class MembershipWriter:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def add(
        self,
        team_id: str,
        uid: str,
        email: str,
        role: MembershipRole,
        joined_at: datetime,
        invited_by: Optional[str] = None,
    ) -> Membership:
        membership = Membership(
            team_id=team_id,
            uid=uid,
            email=canonical_email(email),
            role=role,
            status=MembershipStatus.active,
            joined_at=joined_at,
            invited_by=invited_by,
        )
        membership = await self.uow.memberships.create(membership)

        await self.uow.user_team_refs.create(
            UserTeamRef(
                uid=uid,
                team_id=team_id,
                role=role,
                status=MembershipStatus.active,
                joined_at=joined_at,
            )
        )
        return membership

    async def remove(self, membership: Membership) -> None:
        refs = await self.uow.user_team_refs.get_by_uid_and_team(
            membership.uid, membership.team_id
        )
        for ref in refs:
            await self.uow.user_team_refs.delete(ref)
        await self.uow.memberships.delete(membership)

    async def change_role(
        self, membership: Membership, role: MembershipRole, now: datetime
    ) -> Membership:
        membership.role = role
        membership.updated_at = now
        membership = await self.uow.memberships.update(membership)

        refs = await self.uow.user_team_refs.get_by_uid_and_team(
            membership.uid, membership.team_id
        )
        for ref in refs:
            ref.role = role
            ref.updated_at = now
            await self.uow.user_team_refs.update(ref)
        return membership
