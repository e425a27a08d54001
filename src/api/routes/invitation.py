from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from src.api.error import raise_for_error
from src.app.services.clock import Clock
from src.app.services.invite_links import InviteLinkBuilder
from src.app.services.token_crypto import TokenCrypto
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.invitations import (
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CancelInvitationResponse,
    CancelInvitationUseCase,
    GetInvitationMetadataUseCase,
    InvitationView,
    InviteLink,
    RegenerateInvitationUseCase,
    TokenValidationResponse,
    ValidateInviteTokenUseCase,
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

router = APIRouter(prefix="/invitations", tags=["Invitations"])


class InvitationTokenRequest(BaseModel):
    """
    Invitation token HTTP request payload

    The token travels in the body, never in a logged query string.
    """

    token: str = Field(..., min_length=1, max_length=256, description="Invitation token")


@router.get("/{invitation_id}", response_model=InvitationView)
async def get_invitation(
    invitation_id: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Invitation Preview - no authentication

    Returns everything except the token hash. An overdue pending invitation
    is marked expired on read.
    """
    result = await GetInvitationMetadataUseCase(uow, clock).execute(invitation_id)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{invitation_id}/validate", response_model=TokenValidationResponse)
async def validate_invitation_token(
    invitation_id: str,
    request: InvitationTokenRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    crypto: TokenCrypto = Depends(get_token_crypto),
    clock: Clock = Depends(get_clock),
):
    """Validate Token - no authentication, no redemption"""
    use_case = ValidateInviteTokenUseCase(uow, crypto, clock)
    result = await use_case.execute(invitation_id, request.token)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post(
    "/{invitation_id}/accept",
    status_code=status.HTTP_200_OK,
    response_model=AcceptInvitationResponse,
)
async def accept_invitation(
    invitation_id: str,
    request: InvitationTokenRequest,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    crypto: TokenCrypto = Depends(get_token_crypto),
    clock: Clock = Depends(get_clock),
):
    """
    Accept Invitation

    Raises:
        - 400 Bad Request: INVALID_TOKEN
        - 401 Unauthorized: UNAUTHENTICATED
        - 403 Forbidden: EMAIL_MISMATCH
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: INVALID_STATE (already processed / cancelled), CONFLICT
        - 410 Gone: EXPIRED
    """
    use_case = AcceptInvitationUseCase(uow, crypto, clock)
    result = await use_case.execute(invitation_id, request.token, caller)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{invitation_id}/cancel", response_model=CancelInvitationResponse)
async def cancel_invitation(
    invitation_id: str,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Cancel Invitation - creator or team owner, pending only

    Raises:
        - 403 Forbidden: PERMISSION_DENIED
        - 404 Not Found: NOT_FOUND
        - 409 Conflict: INVALID_STATE
    """
    result = await CancelInvitationUseCase(uow, clock).execute(caller, invitation_id)

    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/{invitation_id}/regenerate", response_model=InviteLink)
async def regenerate_invitation(
    invitation_id: str,
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
    crypto: TokenCrypto = Depends(get_token_crypto),
    clock: Clock = Depends(get_clock),
    links: InviteLinkBuilder = Depends(get_invite_links),
):
    """
    Regenerate Invitation Link - creator or team owner, pending only

    Issues a new token and a fresh 72-hour expiry; the old link stops working.
    """
    use_case = RegenerateInvitationUseCase(uow, crypto, clock, links, get_invite_ttl())
    result = await use_case.execute(caller, invitation_id)

    if result.is_err():
        raise_for_error(result.error)
    return result.value
