"""
Invitation Engine

Explicitly constructed facade over the invitation use cases, for callers that
embed the engine in-process rather than going through the HTTP API. Each call
runs in a fresh unit of work from uow_factory.

Propagation policy: accept() returns an AcceptOutcome for every business
failure; administrative operations raise InvitationError.
"""

from datetime import timedelta
from typing import Callable, List, Optional

from libs.result import Error, Result
from src.app.services.clock import Clock, SystemClock
from src.app.services.invite_acceptor import AcceptOutcome, InviteAcceptor
from src.app.services.invite_links import InviteLinkBuilder
from src.app.services.token_crypto import TokenCrypto
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.invitations import (
    DEFAULT_INVITE_TTL,
    AcceptInvitationUseCase,
    CancelInvitationResponse,
    CancelInvitationUseCase,
    CreateInvitationUseCase,
    GetInvitationMetadataUseCase,
    InvitationView,
    InviteLink,
    ListTeamInvitationsUseCase,
    RegenerateInvitationUseCase,
    TokenValidationResponse,
    ValidateInviteTokenUseCase,
)
from src.domain.errors import ErrorCode
from src.domain.identity import Identity


class InvitationError(Exception):
    def __init__(self, error: Error):
        self.error = error
        super().__init__(error.message)

    @property
    def code(self) -> str:
        return self.error.code


def _unwrap(result: Result):
    if result.is_err():
        raise InvitationError(result.error)
    return result.value


class InvitationEngine(InviteAcceptor):
    def __init__(
        self,
        uow_factory: Callable[[], UnitOfWork],
        links: InviteLinkBuilder,
        crypto: Optional[TokenCrypto] = None,
        clock: Optional[Clock] = None,
        ttl: timedelta = DEFAULT_INVITE_TTL,
    ):
        self.uow_factory = uow_factory
        self.links = links
        self.crypto = crypto or TokenCrypto()
        self.clock = clock or SystemClock()
        self.ttl = ttl

    async def create(
        self, team_id: str, email: str, role: str, caller: Optional[Identity]
    ) -> InviteLink:
        use_case = CreateInvitationUseCase(
            self.uow_factory(), self.crypto, self.clock, self.links, self.ttl
        )
        return _unwrap(await use_case.execute(caller, team_id, email, role))

    async def get_public_metadata(self, invite_id: str) -> Optional[InvitationView]:
        """None when the invitation does not exist"""
        use_case = GetInvitationMetadataUseCase(self.uow_factory(), self.clock)
        result = await use_case.execute(invite_id)
        if result.is_err() and result.error.code == ErrorCode.NOT_FOUND:
            return None
        return _unwrap(result)

    async def validate_token(self, invite_id: str, token: str) -> TokenValidationResponse:
        use_case = ValidateInviteTokenUseCase(self.uow_factory(), self.crypto, self.clock)
        return _unwrap(await use_case.execute(invite_id, token))

    async def accept(
        self, invite_id: str, token: str, caller: Optional[Identity]
    ) -> AcceptOutcome:
        use_case = AcceptInvitationUseCase(self.uow_factory(), self.crypto, self.clock)
        result = await use_case.execute(invite_id, token, caller)
        if result.is_err():
            return AcceptOutcome(
                success=False, code=result.error.code, message=result.error.message
            )

        accepted = result.value
        return AcceptOutcome(
            success=True, message=accepted.message, team_id=accepted.team_id
        )

    async def cancel(
        self, invite_id: str, caller: Optional[Identity]
    ) -> CancelInvitationResponse:
        use_case = CancelInvitationUseCase(self.uow_factory(), self.clock)
        return _unwrap(await use_case.execute(caller, invite_id))

    async def regenerate(self, invite_id: str, caller: Optional[Identity]) -> InviteLink:
        use_case = RegenerateInvitationUseCase(
            self.uow_factory(), self.crypto, self.clock, self.links, self.ttl
        )
        return _unwrap(await use_case.execute(caller, invite_id))

    async def list_for_team(
        self, team_id: str, caller: Optional[Identity]
    ) -> List[InvitationView]:
        use_case = ListTeamInvitationsUseCase(self.uow_factory())
        return _unwrap(await use_case.execute(caller, team_id))
