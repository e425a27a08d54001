"""
Verified caller identity, as yielded by the authentication provider.
"""

from typing import Optional

from pydantic import BaseModel

from .base import canonical_email


class Identity(BaseModel):
    """Authenticated user: uid and email are verified by the auth provider"""

    uid: str
    email: str
    display_name: Optional[str] = None

    @property
    def canonical_email(self) -> str:
        return canonical_email(self.email)
