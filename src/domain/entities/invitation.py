"""
Invitation Entity

Time-boxed, single-use invitation to join a team.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from src.domain.base import utc_now

from .enums import InvitationStatus, MembershipRole


class Invitation(SQLModel, table=True):
    """
    Invitation entity - pending invitation to join a team.

    Business Rules:
    - Created by the team owner or an admin
    - Expires 72 hours after creation (or after the last regeneration)
    - Only the SHA-256 hash of the token is stored, never the token itself
    - pending -> accepted | expired | cancelled, all terminal
    - At most one pending invitation per (team_id, email)
    - invite_metadata holds a display snapshot: team_name, inviter_name
    """

    __tablename__ = "invitations"

    id: str = Field(primary_key=True, max_length=64)

    team_id: str = Field(foreign_key="teams.id", nullable=False, index=True)
    email: str = Field(max_length=255, nullable=False, index=True)

    role: MembershipRole = Field(nullable=False)
    token_hash: str = Field(max_length=64, nullable=False)  # SHA-256 hex

    status: InvitationStatus = Field(default=InvitationStatus.pending)

    created_by: str = Field(nullable=False, max_length=128)
    accepted_by: Optional[str] = Field(default=None, max_length=128)

    invite_metadata: dict = Field(default_factory=dict, sa_column=Column(JSON))

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    accepted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index(
            "uq_invitation_pending_team_email",
            "team_id",
            "email",
            unique=True,
            sqlite_where=text("status = 'pending'"),
            postgresql_where=text("status = 'pending'"),
        ),
        Index("idx_invitation_expires_at", "expires_at"),
        Index("idx_invitation_status", "status"),
    )

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
