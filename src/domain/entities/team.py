"""
Team Entity

Represents a workspace with one exclusive owner.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING

from sqlmodel import Column, DateTime, Field, Relationship, SQLModel

from src.domain.base import generate_uuid, utc_now

if TYPE_CHECKING:
    from .membership import Membership


class Team(SQLModel, table=True):
    """
    Team entity - a workspace with members and invitations.

    Business Rules:
    - The creator becomes the exclusive owner (owner_uid)
    - owner_uid is immutable after creation
    - Settings default to allow_invites=True, max_members=50
    """

    __tablename__ = "teams"

    id: str = Field(default_factory=generate_uuid, primary_key=True, max_length=64)
    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)

    owner_uid: str = Field(nullable=False, index=True, max_length=128)

    # Settings
    allow_invites: bool = Field(default=True)
    max_members: int = Field(default=50)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    # Relationships
    memberships: list["Membership"] = Relationship(back_populates="team")
