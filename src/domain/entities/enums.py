"""
Team Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class MembershipRole(str, Enum):
    """User role within a team"""

    owner = "owner"
    admin = "admin"
    member = "member"


class MembershipStatus(str, Enum):
    """Membership status"""

    active = "active"
    inactive = "inactive"


class InvitationStatus(str, Enum):
    """Invitation status - pending is the only non-terminal state"""

    pending = "pending"
    accepted = "accepted"
    expired = "expired"
    cancelled = "cancelled"


# Roles that can be granted through an invitation or a role change.
# Ownership is only ever assigned at team creation.
ASSIGNABLE_ROLES = (MembershipRole.admin, MembershipRole.member)

# Roles allowed to create invitations and remove members.
MANAGER_ROLES = (MembershipRole.owner, MembershipRole.admin)
