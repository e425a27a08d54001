"""
Use Cases

Organized into domain folders:
- teams/: Teams, members and roles
- invitations/: Invitation lifecycle

Import from subdirectories for better organization.
"""

from .invitations import (
    AcceptInvitationUseCase,
    CancelInvitationUseCase,
    CreateInvitationUseCase,
    GetInvitationMetadataUseCase,
    ListTeamInvitationsUseCase,
    RegenerateInvitationUseCase,
    ValidateInviteTokenUseCase,
)
from .teams import (
    CreateTeamUseCase,
    GetTeamUseCase,
    ListMembersUseCase,
    ListUserTeamsUseCase,
    RemoveMemberUseCase,
    UpdateMemberRoleUseCase,
)

__all__ = [
    # Teams
    "CreateTeamUseCase",
    "GetTeamUseCase",
    "ListMembersUseCase",
    "ListUserTeamsUseCase",
    "RemoveMemberUseCase",
    "UpdateMemberRoleUseCase",
    # Invitations
    "CreateInvitationUseCase",
    "AcceptInvitationUseCase",
    "GetInvitationMetadataUseCase",
    "ValidateInviteTokenUseCase",
    "ListTeamInvitationsUseCase",
    "CancelInvitationUseCase",
    "RegenerateInvitationUseCase",
]
