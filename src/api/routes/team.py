from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field, field_validator

from src.api.error import raise_for_error
from src.app.services.clock import Clock
from src.app.services.invite_links import InviteLinkBuilder
from src.app.services.token_crypto import TokenCrypto
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.invitations import (
    CreateInvitationUseCase,
    InvitationView,
    InviteLink,
    ListTeamInvitationsUseCase,
)
from src.app.use_cases.teams import (
    CreateTeamUseCase,
    GetTeamUseCase,
    ListMembersUseCase,
    MembershipResponse,
    RemoveMemberResponse,
    RemoveMemberUseCase,
    TeamResponse,
    UpdateMemberRoleResponse,
    UpdateMemberRoleUseCase,
)
from src.depends import (
    get_clock,
    get_current_identity,
    get_invite_links,
    get_invite_ttl,
    get_token_crypto,
    get_unit_of_work,
)
from src.domain.identity import Identity
from config import ApplicationConfig

router = APIRouter(prefix="/teams", tags=["Team"])


class TeamSettingsRequest(BaseModel):
    allow_invites: Optional[bool] = None
    max_members: Optional[int] = Field(None, ge=1)


class CreateTeamRequest(BaseModel):
    """
    Create team HTTP request payload

    Settings left out fall back to the configured defaults.
    """

    name: str = Field(..., min_length=1, max_length=255, description="Team name")
    description: Optional[str] = Field(None, max_length=1000)
    settings: Optional[TeamSettingsRequest] = None

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class UpdateMemberRoleRequest(BaseModel):
    role: str = Field(..., description="New role: admin or member")


class CreateInvitationRequest(BaseModel):
    """
    Invite HTTP request payload

    The email is compared in canonical form (trimmed, lower-cased).
    """

    email: EmailStr = Field(..., description="Email to invite")
    role: str = Field("member", description="Role to grant: admin or member")

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TeamResponse)
async def create_team(
    request: CreateTeamRequest,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Create Team

    The caller becomes owner; the team, the owner's membership and the
    owner's team reference are written in one transaction.
    """
    settings = request.settings or TeamSettingsRequest()
    use_case = CreateTeamUseCase(
        uow,
        clock,
        default_allow_invites=ApplicationConfig.TEAM_DEFAULT_ALLOW_INVITES,
        default_max_members=ApplicationConfig.TEAM_DEFAULT_MAX_MEMBERS,
    )
    result = await use_case.execute(
        caller,
        request.name,
        description=request.description,
        allow_invites=settings.allow_invites,
        max_members=settings.max_members,
    )

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{team_id}", response_model=TeamResponse)
async def get_team(
    team_id: str,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetTeamUseCase(uow).execute(caller, team_id)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{team_id}/members", response_model=List[MembershipResponse])
async def list_members(
    team_id: str,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List Members - most recently joined first"""
    result = await ListMembersUseCase(uow).execute(caller, team_id)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete(
    "/{team_id}/members/{membership_id}", response_model=RemoveMemberResponse
)
async def remove_member(
    team_id: str,
    membership_id: str,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Remove Member

    Raises:
        - 403 Forbidden: PERMISSION_DENIED (caller is not owner/admin)
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: INVARIANT_VIOLATION (target is the owner)
    """
    result = await RemoveMemberUseCase(uow).execute(caller, team_id, membership_id)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.patch(
    "/{team_id}/members/{membership_id}", response_model=UpdateMemberRoleResponse
)
async def update_member_role(
    team_id: str,
    membership_id: str,
    request: UpdateMemberRoleRequest,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Update Member Role - owner only

    Raises:
        - 400 Bad Request: INVALID_ROLE
        - 403 Forbidden: PERMISSION_DENIED
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: INVARIANT_VIOLATION (target is the owner)
    """
    use_case = UpdateMemberRoleUseCase(uow, clock)
    result = await use_case.execute(caller, team_id, membership_id, request.role)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{team_id}/invitations",
    status_code=status.HTTP_201_CREATED,
    response_model=InviteLink,
)
async def create_invitation(
    team_id: str,
    request: CreateInvitationRequest,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    crypto: TokenCrypto = Depends(get_token_crypto),
    clock: Clock = Depends(get_clock),
    links: InviteLinkBuilder = Depends(get_invite_links),
):
    """
    Invite to Team

    The response is the only place the raw token is ever returned.

    Raises:
        - 400 Bad Request: INVALID_ROLE
        - 403 Forbidden: PERMISSION_DENIED
        - 404 Not Found: NOT_FOUND (team)
        - 409 Conflict: CONFLICT (pending invitation exists / already a member)
    """
    use_case = CreateInvitationUseCase(uow, crypto, clock, links, get_invite_ttl())
    result = await use_case.execute(caller, team_id, request.email, request.role)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{team_id}/invitations", response_model=List[InvitationView])
async def list_team_invitations(
    team_id: str,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List Invitations - pending and accepted only"""
    result = await ListTeamInvitationsUseCase(uow).execute(caller, team_id)

    if result.is_err():
        raise_for_error(result.error)
    return result.value
