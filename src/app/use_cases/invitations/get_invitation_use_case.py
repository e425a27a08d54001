"""
Public Invitation Read Use Cases

Preview and token validation for visitors who may not be signed in.
Both apply lazy expiry.
"""

from typing import List, Optional

from libs.result import Error, Result, Return
from src.app.services.clock import Clock
from src.app.services.team_directory import TeamDirectory
from src.app.services.token_crypto import TokenCrypto
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import InvitationStatus
from src.domain.errors import ErrorCode
from src.domain.identity import Identity

from .checks import check_redeemable, expire_if_due
from .dtos import InvitationView, TokenValidationResponse

LISTED_STATUSES = (InvitationStatus.pending, InvitationStatus.accepted)


class GetInvitationMetadataUseCase:
    """Invitation preview without any secret material"""

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(self, invitation_id: str) -> Result[InvitationView]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Invitation not found"))

            await expire_if_due(self.uow, invitation, self.clock.now())
            return Return.ok(InvitationView.from_entity(invitation))


class ValidateInviteTokenUseCase:
    """
    Checks an (invitation, token) pair without redeeming it.

    Never fails: an unusable pair yields valid=False with a reason.
    """

    def __init__(self, uow: UnitOfWork, crypto: TokenCrypto, clock: Clock):
        self.uow = uow
        self.crypto = crypto
        self.clock = clock

    async def execute(
        self, invitation_id: str, token: str
    ) -> Result[TokenValidationResponse]:
        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            error = await check_redeemable(
                self.uow, self.crypto, invitation, token, self.clock.now()
            )
            if error:
                return Return.ok(TokenValidationResponse(valid=False, reason=error.message))

            return Return.ok(
                TokenValidationResponse(
                    valid=True, invitation=InvitationView.from_entity(invitation)
                )
            )


class ListTeamInvitationsUseCase:
    """Pending and accepted invitations of a team, for its members"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, caller: Optional[Identity], team_id: str
    ) -> Result[List[InvitationView]]:
        if caller is None:
            return Return.err(
                Error(ErrorCode.UNAUTHENTICATED, "Authentication required")
            )

        async with self.uow:
            directory = TeamDirectory(self.uow)
            if not (
                await directory.is_owner(team_id, caller.uid)
                or await directory.is_member(team_id, uid=caller.uid)
            ):
                return Return.err(
                    Error(
                        ErrorCode.PERMISSION_DENIED, "You are not a member of this team"
                    )
                )

            invitations = await self.uow.invitations.get_by_team_id(
                team_id, LISTED_STATUSES
            )
            return Return.ok([InvitationView.from_entity(i) for i in invitations])
