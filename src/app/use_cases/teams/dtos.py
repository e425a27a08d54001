"""
Team Use Case DTOs (Data Transfer Objects)

All Response classes for the team domain.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Membership, Team


# ============================================================================
# Response DTOs
# ============================================================================


class TeamSettings(BaseModel):
    """Team settings"""

    allow_invites: bool
    max_members: int


class TeamResponse(BaseModel):
    """Team as returned by every team use case"""

    id: str
    name: str
    description: Optional[str] = None
    owner_uid: str
    settings: TeamSettings
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, team: Team) -> "TeamResponse":
        return cls(
            id=team.id,
            name=team.name,
            description=team.description,
            owner_uid=team.owner_uid,
            settings=TeamSettings(
                allow_invites=team.allow_invites, max_members=team.max_members
            ),
            created_at=team.created_at,
            updated_at=team.updated_at,
        )


class MembershipResponse(BaseModel):
    """Team member"""

    id: str
    team_id: str
    uid: str
    email: str
    role: str
    status: str
    joined_at: datetime
    invited_by: Optional[str] = None

    @classmethod
    def from_entity(cls, membership: Membership) -> "MembershipResponse":
        return cls(
            id=membership.id,
            team_id=membership.team_id,
            uid=membership.uid,
            email=membership.email,
            role=membership.role.value,
            status=membership.status.value,
            joined_at=membership.joined_at,
            invited_by=membership.invited_by,
        )


class RemoveMemberResponse(BaseModel):
    """Response for remove member use case"""

    status: str


class UpdateMemberRoleResponse(BaseModel):
    """Response for update member role use case"""

    status: str
    membership: MembershipResponse
