"""
Invite Landing

What happens when a visitor opens an invitation link: preview the
invitation, then either accept right away (signed in) or park it in the
PendingInviteCache until the visitor signs in.
"""

from enum import Enum
from typing import Optional, Tuple
from urllib.parse import parse_qs, urlparse

from pydantic import BaseModel

from src.app.services.invite_acceptor import AcceptOutcome
from src.app.use_cases.invitations import InvitationView
from src.domain.entities import InvitationStatus

from .api_client import AuthSession, InviteApiClient
from .pending_invite_cache import PendingInviteCache

UNAVAILABLE_MESSAGES = {
    InvitationStatus.accepted: "This invitation has already been used",
    InvitationStatus.expired: "This invitation has expired",
    InvitationStatus.cancelled: "This invitation has been cancelled",
}


class LandingState(str, Enum):
    invalid_link = "invalid_link"
    unavailable = "unavailable"
    login_required = "login_required"
    accepted = "accepted"
    failed = "failed"


class LandingResult(BaseModel):
    state: LandingState
    message: str
    invitation: Optional[InvitationView] = None
    outcome: Optional[AcceptOutcome] = None


def parse_invite_url(url: str) -> Tuple[str, str]:
    """(invite_id, token) from <base>/aceitar?inviteId=...&token=..."""
    query = parse_qs(urlparse(url).query)
    invite_id = query.get("inviteId", [""])[0]
    token = query.get("token", [""])[0]
    if not invite_id or not token:
        raise ValueError("Invitation link is missing inviteId or token")
    return invite_id, token


class InviteLanding:
    def __init__(self, api: InviteApiClient, cache: PendingInviteCache):
        self.api = api
        self.cache = cache

    async def open(self, url: str, session: Optional[AuthSession]) -> LandingResult:
        try:
            invite_id, token = parse_invite_url(url)
        except ValueError:
            return LandingResult(
                state=LandingState.invalid_link, message="Invalid invitation link"
            )

        invitation = await self.api.get_invitation(invite_id)
        if invitation is None:
            return LandingResult(
                state=LandingState.unavailable, message="Invitation not found"
            )

        status = InvitationStatus(invitation.status)
        if status != InvitationStatus.pending:
            return LandingResult(
                state=LandingState.unavailable,
                message=UNAVAILABLE_MESSAGES[status],
                invitation=invitation,
            )

        if session is None:
            self.cache.save(invite_id, token)
            return LandingResult(
                state=LandingState.login_required,
                message=(
                    f"Sign in as {invitation.email} to join "
                    f"{invitation.metadata.team_name}"
                ),
                invitation=invitation,
            )

        outcome = await self.api.accept(invite_id, token, session)
        if outcome.success:
            self.cache.discard(invite_id)
            state = LandingState.accepted
        else:
            state = LandingState.failed
        return LandingResult(
            state=state, message=outcome.message, invitation=invitation, outcome=outcome
        )
