"""
Create Team Use Case

Creates a team with the caller as its owner.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.clock import Clock
from src.app.services.membership_writer import MembershipWriter
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import MembershipRole, Team
from src.domain.errors import ErrorCode
from src.domain.identity import Identity

from .dtos import TeamResponse

logger = logging.getLogger(__name__)


class CreateTeamUseCase:
    """
    Use case for creating a team.

    Business Rules:
    - Caller must be authenticated
    - Caller becomes owner_uid and gets an owner Membership + UserTeamRef
    - Team, Membership and UserTeamRef are committed together
    - Settings not supplied fall back to the configured defaults
    """

    def __init__(
        self,
        uow: UnitOfWork,
        clock: Clock,
        default_allow_invites: bool = True,
        default_max_members: int = 50,
    ):
        self.uow = uow
        self.clock = clock
        self.default_allow_invites = default_allow_invites
        self.default_max_members = default_max_members

    async def execute(
        self,
        caller: Optional[Identity],
        name: str,
        description: Optional[str] = None,
        allow_invites: Optional[bool] = None,
        max_members: Optional[int] = None,
    ) -> Result[TeamResponse]:
        if caller is None:
            return Return.err(
                Error(ErrorCode.UNAUTHENTICATED, "Authentication required")
            )

        name = (name or "").strip()
        if not name:
            return Return.err(Error(ErrorCode.INVALID_INPUT, "Team name is required"))

        async with self.uow:
            now = self.clock.now()
            team = Team(
                name=name,
                description=description,
                owner_uid=caller.uid,
                allow_invites=(
                    self.default_allow_invites if allow_invites is None else allow_invites
                ),
                max_members=(
                    self.default_max_members if max_members is None else max_members
                ),
                created_at=now,
                updated_at=now,
            )
            team = await self.uow.teams.create(team)

            await MembershipWriter(self.uow).add(
                team_id=team.id,
                uid=caller.uid,
                email=caller.email,
                role=MembershipRole.owner,
                joined_at=now,
            )

            await self.uow.commit()

            logger.info(f"Team created: {team.id} by {caller.uid}")
            return Return.ok(TeamResponse.from_entity(team))
