from datetime import timedelta

import pytest

from src.app.use_cases.invitations import (
    CancelInvitationUseCase,
    RegenerateInvitationUseCase,
)
from src.domain.entities import InvitationStatus
from src.domain.errors import ErrorCode
from src.domain.identity import Identity

TOKEN = "c" * 64


@pytest.fixture
def invitation(mock_uow, invitation_factory, team):
    invitation = invitation_factory(TOKEN)
    mock_uow.invitations.get_by_id.return_value = invitation
    mock_uow.teams.get_by_id.return_value = team
    return invitation


@pytest.mark.asyncio
async def test_creator_cancels_pending_invitation(mock_uow, clock, invitation, owner):
    # Act
    result = await CancelInvitationUseCase(mock_uow, clock).execute(owner, invitation.id)

    # Assert
    assert result.is_ok()
    assert result.value.status == "cancelled"
    mock_uow.invitations.mark_terminal.assert_called_once_with(
        invitation, InvitationStatus.cancelled, clock.now()
    )
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_team_owner_cancels_invitation_created_by_admin(
    mock_uow, clock, invitation, owner
):
    # Arrange
    invitation.created_by = "admin-uid"

    # Act
    result = await CancelInvitationUseCase(mock_uow, clock).execute(owner, invitation.id)

    # Assert
    assert result.is_ok()


@pytest.mark.asyncio
async def test_stranger_cannot_cancel(mock_uow, clock, invitation):
    # Arrange
    stranger = Identity(uid="stranger", email="stranger@example.com")

    # Act
    result = await CancelInvitationUseCase(mock_uow, clock).execute(stranger, invitation.id)

    # Assert
    assert result.is_err()
    assert result.error.code == ErrorCode.PERMISSION_DENIED
    mock_uow.invitations.mark_terminal.assert_not_called()


@pytest.mark.asyncio
async def test_cancel_accepted_invitation_is_invalid_state(
    mock_uow, clock, invitation, owner
):
    # Arrange
    invitation.status = InvitationStatus.accepted

    # Act
    result = await CancelInvitationUseCase(mock_uow, clock).execute(owner, invitation.id)

    # Assert
    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_STATE
    assert result.error.message == (
        "Only pending invitations can be cancelled (this one is accepted)"
    )
    mock_uow.invitations.mark_terminal.assert_not_called()


@pytest.mark.asyncio
async def test_cancel_unknown_invitation(mock_uow, clock, owner):
    result = await CancelInvitationUseCase(mock_uow, clock).execute(owner, "missing")

    assert result.is_err()
    assert result.error.code == ErrorCode.NOT_FOUND


@pytest.mark.asyncio
async def test_regenerate_rotates_token_and_expiry(
    mock_uow, crypto, clock, links, invitation, owner
):
    # Arrange
    clock.advance(timedelta(hours=10))
    use_case = RegenerateInvitationUseCase(mock_uow, crypto, clock, links)

    # Act
    result = await use_case.execute(owner, invitation.id)

    # Assert
    assert result.is_ok()
    link = result.value
    assert link.invite_id == invitation.id
    assert link.token != TOKEN
    assert link.expires_at == clock.now() + timedelta(hours=72)
    assert f"token={link.token}" in link.url

    mock_uow.invitations.rotate_token.assert_called_once_with(
        invitation, crypto.hash_token(link.token), link.expires_at, clock.now()
    )
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_regenerate_expired_invitation_is_invalid_state(
    mock_uow, crypto, clock, links, invitation, owner
):
    # Arrange
    invitation.status = InvitationStatus.expired
    use_case = RegenerateInvitationUseCase(mock_uow, crypto, clock, links)

    # Act
    result = await use_case.execute(owner, invitation.id)

    # Assert
    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_STATE
    assert "regenerated" in result.error.message
    mock_uow.invitations.rotate_token.assert_not_called()


@pytest.mark.asyncio
async def test_regenerate_lost_race(mock_uow, crypto, clock, links, invitation, owner):
    # Arrange
    mock_uow.invitations.rotate_token.return_value = False
    use_case = RegenerateInvitationUseCase(mock_uow, crypto, clock, links)

    # Act
    result = await use_case.execute(owner, invitation.id)

    # Assert
    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_STATE
    mock_uow.commit.assert_not_called()
