"""
Remove Member from Team Use Case

Deletes a Membership and its UserTeamRef in one commit.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.membership_writer import MembershipWriter
from src.app.services.team_directory import TeamDirectory
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import MembershipRole
from src.domain.errors import ErrorCode
from src.domain.identity import Identity

from .dtos import RemoveMemberResponse

logger = logging.getLogger(__name__)


class RemoveMemberUseCase:
    """
    Use case for removing members from a team.

    Business Rules:
    - Only callers allowed to invite (owner/admin) can remove members
    - The owner membership can never be removed through this path
    - Membership and every matching UserTeamRef are deleted together
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Optional[Identity], team_id: str, membership_id: str
    ) -> Result[RemoveMemberResponse]:
        if caller is None:
            return Return.err(
                Error(ErrorCode.UNAUTHENTICATED, "Authentication required")
            )

        async with self.uow:
            directory = TeamDirectory(self.uow)

            if not await directory.can_invite(team_id, caller.uid):
                return Return.err(
                    Error(
                        ErrorCode.PERMISSION_DENIED,
                        "Only the owner and admins can remove members",
                    )
                )

            membership = await self.uow.memberships.get_by_id(team_id, membership_id)
            if membership is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Member not found"))

            if membership.role == MembershipRole.owner:
                return Return.err(
                    Error(
                        ErrorCode.INVARIANT_VIOLATION,
                        "The team owner cannot be removed",
                    )
                )

            await MembershipWriter(self.uow).remove(membership)
            await self.uow.commit()

            logger.info(f"Member {membership_id} removed from team {team_id}")
            return Return.ok(RemoveMemberResponse(status="removed"))
