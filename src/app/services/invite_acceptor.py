from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel

from src.domain.identity import Identity


class AcceptOutcome(BaseModel):
    """Structured result of an acceptance attempt, rendered as-is to the user"""

    success: bool
    message: str
    code: Optional[str] = None
    team_id: Optional[str] = None


class InviteAcceptor(ABC):
    """Anything that can redeem an invitation on behalf of a signed-in user"""

    @abstractmethod
    async def accept(
        self, invite_id: str, token: str, caller: Identity
    ) -> AcceptOutcome:
        pass
