"""
UserTeamRef Entity

Reverse index of the teams a user belongs to.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import generate_uuid, utc_now

from .enums import MembershipRole, MembershipStatus


class UserTeamRef(SQLModel, table=True):
    """
    UserTeamRef entity - denormalized back-reference from a user to a team.

    Business Rules:
    - Derived from Membership, never an independent source of truth
    - Created, updated and deleted in the same unit of work as its Membership
    - (uid, team_id) is unique
    """

    __tablename__ = "user_team_refs"

    id: str = Field(default_factory=generate_uuid, primary_key=True, max_length=64)

    uid: str = Field(nullable=False, index=True, max_length=128)
    team_id: str = Field(foreign_key="teams.id", nullable=False, index=True)

    role: MembershipRole = Field(nullable=False)
    status: MembershipStatus = Field(default=MembershipStatus.active)

    joined_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (
        Index("uq_user_team_ref_uid_team", "uid", "team_id", unique=True),
    )
