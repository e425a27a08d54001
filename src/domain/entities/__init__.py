"""
Team Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    ASSIGNABLE_ROLES,
    MANAGER_ROLES,
    InvitationStatus,
    MembershipRole,
    MembershipStatus,
)

# Export all entities
from .team import Team
from .membership import Membership
from .user_team_ref import UserTeamRef
from .invitation import Invitation

__all__ = [
    # Enums
    "ASSIGNABLE_ROLES",
    "MANAGER_ROLES",
    "InvitationStatus",
    "MembershipRole",
    "MembershipStatus",
    # Entities
    "Team",
    "Membership",
    "UserTeamRef",
    "Invitation",
]
