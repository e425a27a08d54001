"""
Cancel / Regenerate Invitation Use Cases

Both are restricted to the invitation's creator and the team owner, and
only act on pending invitations.
"""

import logging
from datetime import timedelta
from typing import Optional, Tuple

from libs.result import Error, Result, Return
from src.app.services.clock import Clock
from src.app.services.invite_links import InviteLinkBuilder
from src.app.services.team_directory import TeamDirectory
from src.app.services.token_crypto import TokenCrypto
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Invitation, InvitationStatus
from src.domain.errors import ErrorCode
from src.domain.identity import Identity

from .create_invitation_use_case import DEFAULT_INVITE_TTL
from .dtos import CancelInvitationResponse, InviteLink

logger = logging.getLogger(__name__)


async def _load_managed_invitation(
    uow: UnitOfWork,
    invitation_id: str,
    caller: Optional[Identity],
    action: str,
    done: str,
) -> Tuple[Optional[Invitation], Optional[Error]]:
    if caller is None:
        return None, Error(ErrorCode.UNAUTHENTICATED, "Authentication required")

    invitation = await uow.invitations.get_by_id(invitation_id)
    if invitation is None:
        return None, Error(ErrorCode.NOT_FOUND, "Invitation not found")

    # Creator or team owner
    allowed = invitation.created_by == caller.uid or await TeamDirectory(uow).is_owner(
        invitation.team_id, caller.uid
    )
    if not allowed:
        return None, Error(
            ErrorCode.PERMISSION_DENIED, f"You are not allowed to {action} this invitation"
        )

    if invitation.status != InvitationStatus.pending:
        return None, Error(
            ErrorCode.INVALID_STATE,
            f"Only pending invitations can be {done} "
            f"(this one is {invitation.status.value})",
        )

    return invitation, None


class CancelInvitationUseCase:
    """pending -> cancelled"""

    def __init__(self, uow: UnitOfWork, clock: Clock):
        self.uow = uow
        self.clock = clock

    async def execute(
        self, caller: Optional[Identity], invitation_id: str
    ) -> Result[CancelInvitationResponse]:
        async with self.uow:
            invitation, error = await _load_managed_invitation(
                self.uow, invitation_id, caller, "cancel", "cancelled"
            )
            if error:
                return Return.err(error)

            cancelled = await self.uow.invitations.mark_terminal(
                invitation, InvitationStatus.cancelled, self.clock.now()
            )
            if not cancelled:
                return Return.err(
                    Error(
                        ErrorCode.INVALID_STATE,
                        "This invitation has already been processed",
                    )
                )

            await self.uow.commit()

            logger.info(f"Invitation {invitation_id} cancelled by {caller.uid}")
            return Return.ok(CancelInvitationResponse(status="cancelled"))


class RegenerateInvitationUseCase:
    """
    Issues a fresh token, hash and expiry for a pending invitation.

    The previous token stops verifying because its hash is overwritten.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        crypto: TokenCrypto,
        clock: Clock,
        links: InviteLinkBuilder,
        ttl: timedelta = DEFAULT_INVITE_TTL,
    ):
        self.uow = uow
        self.crypto = crypto
        self.clock = clock
        self.links = links
        self.ttl = ttl

    async def execute(
        self, caller: Optional[Identity], invitation_id: str
    ) -> Result[InviteLink]:
        async with self.uow:
            invitation, error = await _load_managed_invitation(
                self.uow, invitation_id, caller, "regenerate", "regenerated"
            )
            if error:
                return Return.err(error)

            token = self.crypto.generate_token()
            now = self.clock.now()
            expires_at = now + self.ttl

            rotated = await self.uow.invitations.rotate_token(
                invitation, self.crypto.hash_token(token), expires_at, now
            )
            if not rotated:
                return Return.err(
                    Error(
                        ErrorCode.INVALID_STATE,
                        "This invitation has already been processed",
                    )
                )

            await self.uow.commit()

            logger.info(f"Invitation {invitation_id} link regenerated by {caller.uid}")
            return Return.ok(
                InviteLink(
                    invite_id=invitation.id,
                    token=token,
                    url=self.links.build(invitation.id, token),
                    expires_at=expires_at,
                )
            )
