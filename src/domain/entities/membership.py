"""
Membership Entity

Links a user (by uid) to a Team with a role.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, Relationship, SQLModel

from src.domain.base import generate_uuid, utc_now

from .enums import MembershipRole, MembershipStatus

if TYPE_CHECKING:
    from .team import Team


class Membership(SQLModel, table=True):
    """
    Membership entity - a user's role and status within one team.

    Business Rules:
    - One user can be member of multiple teams
    - At most one active membership per (team_id, uid)
    - email is stored in canonical form (trimmed, lower-cased)
    - Every membership has exactly one matching UserTeamRef,
      maintained only through MembershipWriter
    """

    __tablename__ = "team_members"

    id: str = Field(default_factory=generate_uuid, primary_key=True, max_length=64)

    team_id: str = Field(foreign_key="teams.id", nullable=False, index=True)
    uid: str = Field(nullable=False, index=True, max_length=128)
    email: str = Field(max_length=255, nullable=False, index=True)

    role: MembershipRole = Field(nullable=False)
    status: MembershipStatus = Field(default=MembershipStatus.active)

    invited_by: Optional[str] = Field(default=None, max_length=128)

    # Timestamps
    joined_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Relationships
    team: "Team" = Relationship(back_populates="memberships")

    __table_args__ = (
        Index(
            "uq_membership_active_team_uid",
            "team_id",
            "uid",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
        Index("idx_membership_team_email", "team_id", "email"),
    )
