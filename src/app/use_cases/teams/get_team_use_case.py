"""
Get Team / List Members Use Cases

Read access to a team is limited to its owner and active members.
"""

from typing import List, Optional

from libs.result import Error, Result, Return
from src.app.services.team_directory import TeamDirectory
from src.app.services.unit_of_work import UnitOfWork
from src.domain.errors import ErrorCode
from src.domain.identity import Identity

from .dtos import MembershipResponse, TeamResponse


async def _check_read_access(
    directory: TeamDirectory, team_id: str, caller: Optional[Identity]
) -> Optional[Error]:
    if caller is None:
        return Error(ErrorCode.UNAUTHENTICATED, "Authentication required")

    team = await directory.get_team(team_id)
    if team is None:
        return Error(ErrorCode.NOT_FOUND, "Team not found")

    if team.owner_uid != caller.uid and not await directory.is_member(
        team_id, uid=caller.uid
    ):
        return Error(ErrorCode.PERMISSION_DENIED, "You are not a member of this team")
    return None


class GetTeamUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Optional[Identity], team_id: str
    ) -> Result[TeamResponse]:
        async with self.uow:
            directory = TeamDirectory(self.uow)
            error = await _check_read_access(directory, team_id, caller)
            if error:
                return Return.err(error)

            team = await directory.get_team(team_id)
            return Return.ok(TeamResponse.from_entity(team))


class ListMembersUseCase:
    """Members of a team, most recently joined first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Optional[Identity], team_id: str
    ) -> Result[List[MembershipResponse]]:
        async with self.uow:
            directory = TeamDirectory(self.uow)
            error = await _check_read_access(directory, team_id, caller)
            if error:
                return Return.err(error)

            memberships = await directory.list_memberships(team_id)
            return Return.ok([MembershipResponse.from_entity(m) for m in memberships])


class ListUserTeamsUseCase:
    """Teams the caller belongs to, resolved through UserTeamRef"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Optional[Identity]) -> Result[List[TeamResponse]]:
        if caller is None:
            return Return.err(
                Error(ErrorCode.UNAUTHENTICATED, "Authentication required")
            )

        async with self.uow:
            teams = await TeamDirectory(self.uow).list_user_teams(caller.uid)
            return Return.ok([TeamResponse.from_entity(team) for team in teams])
