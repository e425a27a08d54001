from datetime import datetime, timedelta

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.clock import Clock
from src.app.services.invite_links import InviteLinkBuilder
from src.app.services.token_crypto import TokenCrypto
from src.domain.entities import (
    Invitation,
    InvitationStatus,
    Membership,
    MembershipRole,
    MembershipStatus,
    Team,
)
from src.domain.identity import Identity

NOW = datetime(2025, 3, 1, 12, 0, 0)


class FakeClock(Clock):
    def __init__(self, now: datetime = NOW):
        self.current = now

    def now(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current += delta


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.teams = MagicMock()
    uow.teams.get_by_id = AsyncMock(return_value=None)
    uow.teams.get_by_ids = AsyncMock(return_value=[])
    uow.teams.create = AsyncMock(side_effect=lambda team: team)
    uow.teams.update = AsyncMock(side_effect=lambda team: team)

    uow.memberships = MagicMock()
    uow.memberships.get_by_id = AsyncMock(return_value=None)
    uow.memberships.get_active_by_team_and_uid = AsyncMock(return_value=None)
    uow.memberships.get_active_by_team_and_email = AsyncMock(return_value=None)
    uow.memberships.get_by_team_id = AsyncMock(return_value=[])
    uow.memberships.create = AsyncMock(side_effect=lambda membership: membership)
    uow.memberships.update = AsyncMock(side_effect=lambda membership: membership)
    uow.memberships.delete = AsyncMock()

    uow.user_team_refs = MagicMock()
    uow.user_team_refs.get_by_uid = AsyncMock(return_value=[])
    uow.user_team_refs.get_by_uid_and_team = AsyncMock(return_value=[])
    uow.user_team_refs.create = AsyncMock(side_effect=lambda ref: ref)
    uow.user_team_refs.update = AsyncMock(side_effect=lambda ref: ref)
    uow.user_team_refs.delete = AsyncMock()

    uow.invitations = MagicMock()
    uow.invitations.get_by_id = AsyncMock(return_value=None)
    uow.invitations.reload = AsyncMock(side_effect=lambda invitation: invitation)
    uow.invitations.get_pending_by_team_and_email = AsyncMock(return_value=None)
    uow.invitations.get_by_team_id = AsyncMock(return_value=[])
    uow.invitations.create = AsyncMock(side_effect=lambda invitation: invitation)
    uow.invitations.mark_accepted = AsyncMock(return_value=True)
    uow.invitations.mark_terminal = AsyncMock(return_value=True)
    uow.invitations.rotate_token = AsyncMock(return_value=True)

    return uow


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def crypto():
    return TokenCrypto()


@pytest.fixture
def links():
    return InviteLinkBuilder("https://app.example.com", "/aceitar")


@pytest.fixture
def owner():
    return Identity(uid="owner-uid", email="owner@acme.com", display_name="Olivia Owner")


@pytest.fixture
def invitee():
    return Identity(uid="invitee-uid", email="bob@example.com")


@pytest.fixture
def team(owner):
    return Team(id="team-1", name="Acme", owner_uid=owner.uid)


@pytest.fixture
def membership_factory():
    def make(team_id, uid, email, role=MembershipRole.member, **kwargs):
        values = dict(
            id=f"m-{uid}",
            team_id=team_id,
            uid=uid,
            email=email,
            role=role,
            status=MembershipStatus.active,
            joined_at=NOW,
        )
        values.update(kwargs)
        return Membership(**values)

    return make


@pytest.fixture
def invitation_factory(crypto):
    def make(token, **kwargs):
        values = dict(
            id="inv-1",
            team_id="team-1",
            email="bob@example.com",
            role=MembershipRole.member,
            token_hash=crypto.hash_token(token),
            status=InvitationStatus.pending,
            created_by="owner-uid",
            created_at=NOW,
            expires_at=NOW + timedelta(hours=72),
            invite_metadata={"team_name": "Acme", "inviter_name": "Olivia Owner"},
        )
        values.update(kwargs)
        return Invitation(**values)

    return make
