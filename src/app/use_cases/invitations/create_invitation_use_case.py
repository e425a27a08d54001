"""
Create Invitation Use Case

Issues a team invitation and hands back its one-time shareable link.
"""

import logging
from datetime import timedelta
from typing import Optional

from libs.result import Error, Result, Return
from src.app.services.clock import Clock
from src.app.services.invite_links import InviteLinkBuilder
from src.app.services.team_directory import TeamDirectory
from src.app.services.token_crypto import TokenCrypto
from src.app.services.unit_of_work import ConflictError, UnitOfWork
from src.domain.base import canonical_email
from src.domain.entities import (
    ASSIGNABLE_ROLES,
    Invitation,
    InvitationStatus,
    MembershipRole,
)
from src.domain.errors import ErrorCode
from src.domain.identity import Identity

from .dtos import InviteLink

logger = logging.getLogger(__name__)

DEFAULT_INVITE_TTL = timedelta(hours=72)


class CreateInvitationUseCase:
    """
    Use case for inviting someone to join a team.

    Business Rules:
    - Only the owner or an active owner/admin member can invite
    - Role must be admin or member
    - At most one pending invitation per (team, canonical email)
    - Active members cannot be invited again
    - Invitation expires 72 hours after creation
    - Only the SHA-256 hash of the 256-bit token is stored; the token is
      returned once inside the link and never again
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
        self, caller: Optional[Identity], team_id: str, email: str, role: str
    ) -> Result[InviteLink]:
        if caller is None:
            return Return.err(
                Error(ErrorCode.UNAUTHENTICATED, "Authentication required")
            )

        try:
            invite_role = MembershipRole(role)
        except ValueError:
            invite_role = None
        if invite_role not in ASSIGNABLE_ROLES:
            return Return.err(
                Error(
                    ErrorCode.INVALID_ROLE,
                    f"Invalid role: {role}. Must be one of: admin, member",
                )
            )

        email = canonical_email(email)

        async with self.uow:
            directory = TeamDirectory(self.uow)

            if not await directory.can_invite(team_id, caller.uid):
                return Return.err(
                    Error(
                        ErrorCode.PERMISSION_DENIED,
                        "You are not allowed to invite members to this team",
                    )
                )

            # Check for duplicate pending invitation
            pending = await self.uow.invitations.get_pending_by_team_and_email(
                team_id, email
            )
            if pending:
                return Return.err(
                    Error(
                        ErrorCode.CONFLICT,
                        "A pending invitation already exists for this email",
                    )
                )

            if await directory.is_member(team_id, email=email):
                return Return.err(
                    Error(ErrorCode.CONFLICT, "This user is already a member of the team")
                )

            team = await directory.get_team(team_id)
            if team is None:
                return Return.err(Error(ErrorCode.NOT_FOUND, "Team not found"))

            token = self.crypto.generate_token()
            now = self.clock.now()

            invitation = Invitation(
                id=self.crypto.generate_id(),
                team_id=team_id,
                email=email,
                role=invite_role,
                token_hash=self.crypto.hash_token(token),
                status=InvitationStatus.pending,
                created_by=caller.uid,
                created_at=now,
                expires_at=now + self.ttl,
                invite_metadata={
                    "team_name": team.name,
                    "inviter_name": caller.display_name or caller.email or "Administrator",
                },
            )

            # The partial unique index on pending (team_id, email) catches a
            # concurrent create that slipped past the check above.
            try:
                await self.uow.invitations.create(invitation)
                await self.uow.commit()
            except ConflictError:
                return Return.err(
                    Error(
                        ErrorCode.CONFLICT,
                        "A pending invitation already exists for this email",
                    )
                )

            logger.info(f"Invitation created: {invitation.id} for team {team_id}")
            return Return.ok(
                InviteLink(
                    invite_id=invitation.id,
                    token=token,
                    url=self.links.build(invitation.id, token),
                    expires_at=invitation.expires_at,
                )
            )
