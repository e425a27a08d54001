"""
Invitation Use Cases

The invitation state machine: pending -> accepted | expired | cancelled.
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .create_invitation_use_case import DEFAULT_INVITE_TTL, CreateInvitationUseCase
from .dtos import (
    AcceptInvitationResponse,
    CancelInvitationResponse,
    InvitationMetadata,
    InvitationView,
    InviteLink,
    TokenValidationResponse,
)
from .get_invitation_use_case import (
    GetInvitationMetadataUseCase,
    ListTeamInvitationsUseCase,
    ValidateInviteTokenUseCase,
)
from .manage_invitation_use_case import (
    CancelInvitationUseCase,
    RegenerateInvitationUseCase,
)

__all__ = [
    "DEFAULT_INVITE_TTL",
    "CreateInvitationUseCase",
    "AcceptInvitationUseCase",
    "GetInvitationMetadataUseCase",
    "ValidateInviteTokenUseCase",
    "ListTeamInvitationsUseCase",
    "CancelInvitationUseCase",
    "RegenerateInvitationUseCase",
    "InviteLink",
    "InvitationMetadata",
    "InvitationView",
    "AcceptInvitationResponse",
    "TokenValidationResponse",
    "CancelInvitationResponse",
]
