"""
Update Member Role Use Case

Changes a member's role on the Membership and its UserTeamRef together.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.clock import Clock
from src.app.services.membership_writer import MembershipWriter
from src.app.services.team_directory import TeamDirectory
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import ASSIGNABLE_ROLES, MembershipRole
from src.domain.errors import ErrorCode
from src.domain.identity import Identity

from .dtos import MembershipResponse, UpdateMemberRoleResponse

logger = logging.getLogger(__name__)


class UpdateMemberRoleUseCase:
    """
    Use case for changing a member's role within a team.

    Business Rules:
    - Only the team owner can change roles
    - New role must be admin or member
    - The owner membership keeps its role
    """

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(
        self,
        caller: Optional[Identity],
        team_id: str,
        membership_id: str,
        new_role: str,
    ) -> Result[UpdateMemberRoleResponse]:
        if caller is None:
            return Return.err(
                Error(ErrorCode.UNAUTHENTICATED, "Authentication required")
            )

        try:
            role = MembershipRole(new_role)
        except ValueError:
            role = None
        if role not in ASSIGNABLE_ROLES:
            return Return.err(
                Error(
                    ErrorCode.INVALID_ROLE,
                    f"Invalid role: {new_role}. Must be one of: admin, member",
                )
            )

        async with self.uow:
            if not await TeamDirectory(self.uow).is_owner(team_id, caller.uid):
                return Return.err(
                    Error(
                        ErrorCode.PERMISSION_DENIED,
                        "Only the team owner can change member roles",
                    )
                )

            membership = await self.uow.memberships.get_by_id(team_id, membership_id)
            if membership is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Member not found"))

            if membership.role == MembershipRole.owner:
                return Return.err(
                    Error(
                        ErrorCode.INVARIANT_VIOLATION,
                        "The owner's role cannot be changed",
                    )
                )

            membership = await MembershipWriter(self.uow).change_role(
                membership, role, self.clock.now()
            )
            await self.uow.commit()

            logger.info(f"Member {membership_id} of team {team_id} is now {role.value}")
            return Return.ok(
                UpdateMemberRoleResponse(
                    status="updated",
                    membership=MembershipResponse.from_entity(membership),
                )
            )
