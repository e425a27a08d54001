"""
Team Management Use Cases

All team and membership business logic.
"""

from .create_team_use_case import CreateTeamUseCase
from .dtos import (
    MembershipResponse,
    RemoveMemberResponse,
    TeamResponse,
    TeamSettings,
    UpdateMemberRoleResponse,
)
from .get_team_use_case import GetTeamUseCase, ListMembersUseCase, ListUserTeamsUseCase
from .remove_member_use_case import RemoveMemberUseCase
from .update_member_role_use_case import UpdateMemberRoleUseCase

__all__ = [
    "CreateTeamUseCase",
    "GetTeamUseCase",
    "ListMembersUseCase",
    "ListUserTeamsUseCase",
    "RemoveMemberUseCase",
    "UpdateMemberRoleUseCase",
    "TeamResponse",
    "TeamSettings",
    "MembershipResponse",
    "RemoveMemberResponse",
    "UpdateMemberRoleResponse",
]
