"""
Invitation Use Case DTOs (Data Transfer Objects)

None of these carry the token hash. The raw token only appears in InviteLink,
returned once by create and regenerate.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import Invitation


# ============================================================================
# Response DTOs
# ============================================================================


class InviteLink(BaseModel):
    """Shareable link returned once to the invitation's creator"""

    invite_id: str
    token: str
    url: str
    expires_at: datetime


class InvitationMetadata(BaseModel):
    """Display snapshot taken when the invitation was created"""

    team_name: str
    inviter_name: str


class InvitationView(BaseModel):
    """Everything about an invitation except its token hash"""

    id: str
    team_id: str
    email: str
    role: str
    status: str
    expires_at: datetime
    created_at: datetime
    created_by: str
    accepted_at: Optional[datetime] = None
    accepted_by: Optional[str] = None
    metadata: InvitationMetadata

    @classmethod
    def from_entity(cls, invitation: Invitation) -> "InvitationView":
        snapshot = invitation.invite_metadata or {}
        return cls(
            id=invitation.id,
            team_id=invitation.team_id,
            email=invitation.email,
            role=invitation.role.value,
            status=invitation.status.value,
            expires_at=invitation.expires_at,
            created_at=invitation.created_at,
            created_by=invitation.created_by,
            accepted_at=invitation.accepted_at,
            accepted_by=invitation.accepted_by,
            metadata=InvitationMetadata(
                team_name=snapshot.get("team_name", ""),
                inviter_name=snapshot.get("inviter_name", ""),
            ),
        )


class AcceptInvitationResponse(BaseModel):
    """Response for accept invitation use case"""

    success: bool
    message: str
    team_id: str
    membership_id: str


class TokenValidationResponse(BaseModel):
    """Response for validate token use case"""

    valid: bool
    reason: Optional[str] = None
    invitation: Optional[InvitationView] = None


class CancelInvitationResponse(BaseModel):
    """Response for cancel invitation use case"""

    status: str
