"""
Accept Invitation Use Case

Redeems an invitation for the signed-in caller.
"""

import logging
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.clock import Clock
from src.app.services.membership_writer import MembershipWriter
from src.app.services.team_directory import TeamDirectory
from src.app.services.token_crypto import TokenCrypto
from src.app.services.unit_of_work import ConflictError, UnitOfWork
from src.domain.base import canonical_email
from src.domain.errors import ErrorCode
from src.domain.identity import Identity

from .checks import check_redeemable
from .dtos import AcceptInvitationResponse

logger = logging.getLogger(__name__)


class AcceptInvitationUseCase:
    """
    Use case for accepting team invitations.

    Business Rules:
    - Invitation must exist and be pending
    - Past expires_at: invitation is marked expired and the call fails
    - Token must hash to the stored token_hash; a mismatch changes nothing
    - Caller's canonical email must equal the invitation's
    - Caller must not already be an active member
    - Membership, UserTeamRef and invitation status=accepted are committed
      together; the status change is a compare-and-set on pending + token
      hash, so a concurrent second acceptance fails as already processed
    """

    def __init__(self, uow: UnitOfWork, crypto: TokenCrypto, clock: Clock):
        self.uow = uow
        self.crypto = crypto
        self.clock = clock

    async def execute(
        self, invitation_id: str, token: str, caller: Optional[Identity]
    ) -> Result[AcceptInvitationResponse]:
        if caller is None or not caller.email:
            return Return.err(
                Error(ErrorCode.UNAUTHENTICATED, "Sign in with a verified email first")
            )

        async with self.uow:
            invitation = await self.uow.invitations.get_by_id(invitation_id)
            now = self.clock.now()

            error = await check_redeemable(self.uow, self.crypto, invitation, token, now)
            if error:
                logger.warning(f"Invitation {invitation_id} not accepted: {error.code}")
                return Return.err(error)

            # Email check (case-insensitive)
            if caller.canonical_email != canonical_email(invitation.email):
                return Return.err(
                    Error(
                        ErrorCode.EMAIL_MISMATCH,
                        f"This invitation was sent to {invitation.email}, "
                        f"but you are signed in as {caller.email}",
                    )
                )

            if await TeamDirectory(self.uow).is_member(invitation.team_id, uid=caller.uid):
                return Return.err(
                    Error(ErrorCode.CONFLICT, "You are already a member of this team")
                )

            applied = await self.uow.invitations.mark_accepted(
                invitation,
                token_hash=invitation.token_hash,
                accepted_by=caller.uid,
                accepted_at=now,
            )
            if not applied:
                return Return.err(
                    Error(
                        ErrorCode.INVALID_STATE,
                        "This invitation has already been processed",
                    )
                )

            try:
                membership = await MembershipWriter(self.uow).add(
                    team_id=invitation.team_id,
                    uid=caller.uid,
                    email=caller.email,
                    role=invitation.role,
                    joined_at=now,
                    invited_by=invitation.created_by,
                )
                await self.uow.commit()
            except ConflictError:
                return Return.err(
                    Error(ErrorCode.CONFLICT, "You are already a member of this team")
                )

            logger.info(f"Invitation {invitation_id} accepted by {caller.uid}")
            return Return.ok(
                AcceptInvitationResponse(
                    success=True,
                    message="Invitation accepted",
                    team_id=invitation.team_id,
                    membership_id=membership.id,
                )
            )
