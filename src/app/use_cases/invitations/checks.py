"""
Checks shared by accept and validate: existence, status, lazy expiry and
token. Both run them in the same order so neither leaks more than the other.
"""

import logging
from datetime import datetime
from typing import Optional

from libs.result import Error
from src.app.services.token_crypto import TokenCrypto
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Invitation, InvitationStatus
from src.domain.errors import ErrorCode

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    InvitationStatus.accepted: (
        ErrorCode.INVALID_STATE,
        "This invitation has already been processed (accepted)",
    ),
    InvitationStatus.cancelled: (
        ErrorCode.INVALID_STATE,
        "This invitation has been cancelled",
    ),
    InvitationStatus.expired: (ErrorCode.EXPIRED, "This invitation has expired"),
}


def status_error(invitation: Invitation) -> Optional[Error]:
    if invitation.status == InvitationStatus.pending:
        return None
    code, message = STATUS_MESSAGES[invitation.status]
    return Error(code, message)


async def expire_if_due(uow: UnitOfWork, invitation: Invitation, now: datetime) -> bool:
    """Lazy expiry: write pending -> expired through once the deadline passed.

    Commits the unit of work when the transition is applied. When another
    writer moved the invitation on first, it is re-read so callers see the
    stored status, and False is returned.
    """
    if invitation.status != InvitationStatus.pending or not invitation.is_expired(now):
        return False

    if await uow.invitations.mark_terminal(invitation, InvitationStatus.expired, now):
        await uow.commit()
        logger.info(f"Invitation {invitation.id} expired")
        return True

    await uow.invitations.reload(invitation)
    logger.info(f"Invitation {invitation.id} changed to {invitation.status.value} before expiry")
    return False


async def check_redeemable(
    uow: UnitOfWork,
    crypto: TokenCrypto,
    invitation: Optional[Invitation],
    token: str,
    now: datetime,
) -> Optional[Error]:
    """None when the invitation exists, is pending, unexpired and token matches"""
    if invitation is None:
        return Error(ErrorCode.NOT_FOUND, "Invitation not found")

    error = status_error(invitation)
    if error:
        return error

    if await expire_if_due(uow, invitation, now):
        return Error(ErrorCode.EXPIRED, "This invitation has expired")

    # re-read after a lost expiry race
    error = status_error(invitation)
    if error:
        return error

    if not crypto.verify_token(token, invitation.token_hash):
        return Error(ErrorCode.INVALID_TOKEN, "Invalid invitation token")

    return None
