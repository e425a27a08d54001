"""
Team Directory

Read-side authority on teams, memberships and role-based permissions.
Bound to a unit of work so checks run inside the caller's transaction.
"""

from typing import List, Optional

from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import canonical_email
from src.domain.entities import MANAGER_ROLES, Membership, Team


class TeamDirectory:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def get_team(self, team_id: str) -> Optional[Team]:
        return await self.uow.teams.get_by_id(team_id)

    async def list_memberships(self, team_id: str) -> List[Membership]:
        return await self.uow.memberships.get_by_team_id(team_id)

    async def can_invite(self, team_id: str, uid: str) -> bool:
        """Owner of the team, or an active member with role owner/admin"""
        if await self.is_owner(team_id, uid):
            return True

        membership = await self.uow.memberships.get_active_by_team_and_uid(team_id, uid)
        return membership is not None and membership.role in MANAGER_ROLES

    async def is_owner(self, team_id: str, uid: str) -> bool:
        team = await self.get_team(team_id)
        return team is not None and team.owner_uid == uid

    async def is_member(
        self, team_id: str, email: Optional[str] = None, uid: Optional[str] = None
    ) -> bool:
        """Active membership lookup by canonical email or by uid"""
        if uid is not None:
            membership = await self.uow.memberships.get_active_by_team_and_uid(
                team_id, uid
            )
        elif email is not None:
            membership = await self.uow.memberships.get_active_by_team_and_email(
                team_id, canonical_email(email)
            )
        else:
            raise ValueError("is_member needs an email or a uid")
        return membership is not None

    async def list_user_teams(self, uid: str) -> List[Team]:
        """Teams reachable through the user's UserTeamRef entries, by name"""
        refs = await self.uow.user_team_refs.get_by_uid(uid)
        team_ids = [ref.team_id for ref in refs]
        if not team_ids:
            return []

        teams = await self.uow.teams.get_by_ids(team_ids)
        return sorted(teams, key=lambda team: team.name.lower())
