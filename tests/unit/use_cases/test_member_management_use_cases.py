import pytest

from src.app.use_cases.teams import RemoveMemberUseCase, UpdateMemberRoleUseCase
from src.domain.entities import MembershipRole, UserTeamRef
from src.domain.errors import ErrorCode
from src.domain.identity import Identity


@pytest.fixture
def target(mock_uow, team, membership_factory):
    membership = membership_factory(team.id, "bob-uid", "bob@example.com", id="m-bob")
    mock_uow.memberships.get_by_id.return_value = membership
    return membership


@pytest.fixture
def target_ref(mock_uow, target):
    ref = UserTeamRef(uid=target.uid, team_id=target.team_id, role=target.role)
    mock_uow.user_team_refs.get_by_uid_and_team.return_value = [ref]
    return ref


@pytest.mark.asyncio
async def test_owner_removes_member(mock_uow, owner, team, target, target_ref):
    # Arrange
    mock_uow.teams.get_by_id.return_value = team

    # Act
    result = await RemoveMemberUseCase(mock_uow).execute(owner, team.id, target.id)

    # Assert
    assert result.is_ok()
    assert result.value.status == "removed"
    mock_uow.user_team_refs.delete.assert_called_once_with(target_ref)
    mock_uow.memberships.delete.assert_called_once_with(target)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_admin_removes_member(
    mock_uow, team, target, target_ref, membership_factory
):
    # Arrange
    admin = Identity(uid="admin-uid", email="admin@acme.com")
    mock_uow.teams.get_by_id.return_value = team
    mock_uow.memberships.get_active_by_team_and_uid.return_value = membership_factory(
        team.id, admin.uid, admin.email, role=MembershipRole.admin
    )

    # Act
    result = await RemoveMemberUseCase(mock_uow).execute(admin, team.id, target.id)

    # Assert
    assert result.is_ok()


@pytest.mark.asyncio
async def test_owner_membership_cannot_be_removed(
    mock_uow, owner, team, membership_factory
):
    # Arrange
    mock_uow.teams.get_by_id.return_value = team
    mock_uow.memberships.get_by_id.return_value = membership_factory(
        team.id, owner.uid, owner.email, role=MembershipRole.owner
    )

    # Act
    result = await RemoveMemberUseCase(mock_uow).execute(owner, team.id, "m-owner")

    # Assert
    assert result.is_err()
    assert result.error.code == ErrorCode.INVARIANT_VIOLATION
    mock_uow.memberships.delete.assert_not_called()
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_member_cannot_remove_others(mock_uow, team, target, membership_factory):
    # Arrange
    member = Identity(uid="carol-uid", email="carol@acme.com")
    mock_uow.teams.get_by_id.return_value = team
    mock_uow.memberships.get_active_by_team_and_uid.return_value = membership_factory(
        team.id, member.uid, member.email
    )

    # Act
    result = await RemoveMemberUseCase(mock_uow).execute(member, team.id, target.id)

    # Assert
    assert result.is_err()
    assert result.error.code == ErrorCode.PERMISSION_DENIED


@pytest.mark.asyncio
async def test_remove_unknown_member(mock_uow, owner, team):
    # Arrange
    mock_uow.teams.get_by_id.return_value = team

    # Act
    result = await RemoveMemberUseCase(mock_uow).execute(owner, team.id, "missing")

    # Assert
    assert result.is_err()
    assert result.error.code == ErrorCode.NOT_FOUND


@pytest.mark.asyncio
async def test_owner_promotes_member_to_admin(
    mock_uow, clock, owner, team, target, target_ref
):
    # Arrange
    mock_uow.teams.get_by_id.return_value = team

    # Act
    result = await UpdateMemberRoleUseCase(mock_uow, clock).execute(
        owner, team.id, target.id, "admin"
    )

    # Assert
    assert result.is_ok()
    assert result.value.status == "updated"
    assert result.value.membership.role == "admin"
    assert target.role == MembershipRole.admin
    assert target_ref.role == MembershipRole.admin
    assert target_ref.updated_at == clock.now()
    mock_uow.user_team_refs.update.assert_called_once_with(target_ref)
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_only_owner_changes_roles(mock_uow, clock, team, target, membership_factory):
    # Arrange
    admin = Identity(uid="admin-uid", email="admin@acme.com")
    mock_uow.teams.get_by_id.return_value = team
    mock_uow.memberships.get_active_by_team_and_uid.return_value = membership_factory(
        team.id, admin.uid, admin.email, role=MembershipRole.admin
    )

    # Act
    result = await UpdateMemberRoleUseCase(mock_uow, clock).execute(
        admin, team.id, target.id, "admin"
    )

    # Assert
    assert result.is_err()
    assert result.error.code == ErrorCode.PERMISSION_DENIED


@pytest.mark.asyncio
async def test_cannot_grant_owner_role(mock_uow, clock, owner, team, target):
    result = await UpdateMemberRoleUseCase(mock_uow, clock).execute(
        owner, team.id, target.id, "owner"
    )

    assert result.is_err()
    assert result.error.code == ErrorCode.INVALID_ROLE


@pytest.mark.asyncio
async def test_owner_role_is_fixed(mock_uow, clock, owner, team, membership_factory):
    # Arrange
    mock_uow.teams.get_by_id.return_value = team
    mock_uow.memberships.get_by_id.return_value = membership_factory(
        team.id, owner.uid, owner.email, role=MembershipRole.owner
    )

    # Act
    result = await UpdateMemberRoleUseCase(mock_uow, clock).execute(
        owner, team.id, "m-owner", "member"
    )

    # Assert
    assert result.is_err()
    assert result.error.code == ErrorCode.INVARIANT_VIOLATION
