"""
HTTP client for the invitation endpoints, used by the client-side flows.
"""

import logging
from typing import Optional

import httpx

from src.app.services.invite_acceptor import AcceptOutcome, InviteAcceptor
from src.app.use_cases.invitations import InvitationView, TokenValidationResponse
from src.domain.errors import ErrorCode
from src.domain.identity import Identity

logger = logging.getLogger(__name__)


class AuthSession(Identity):
    """Signed-in identity plus the bearer token issued by the auth provider"""

    access_token: str


class InviteApiError(Exception):
    def __init__(self, status_code: int, code: str, message: str):
        self.status_code = status_code
        self.code = code
        self.message = message
        super().__init__(message)


def _error_from(response: httpx.Response) -> InviteApiError:
    try:
        error = response.json()["error"]
        code, message = error["code"], error["message"]
    except (ValueError, KeyError, TypeError):
        code, message = "HTTP_ERROR", f"Unexpected response ({response.status_code})"
    return InviteApiError(response.status_code, code, message)


class InviteApiClient(InviteAcceptor):
    def __init__(self, http: httpx.AsyncClient, prefix: str = ""):
        self.http = http
        self.prefix = prefix.rstrip("/")

    def _path(self, invite_id: str, action: str = "") -> str:
        path = f"{self.prefix}/invitations/{invite_id}"
        return f"{path}/{action}" if action else path

    async def get_invitation(self, invite_id: str) -> Optional[InvitationView]:
        """Public preview; None when the invitation does not exist"""
        response = await self.http.get(self._path(invite_id))
        if response.status_code == 404:
            return None
        if response.is_error:
            raise _error_from(response)
        return InvitationView.model_validate(response.json())

    async def validate_token(self, invite_id: str, token: str) -> TokenValidationResponse:
        response = await self.http.post(
            self._path(invite_id, "validate"), json={"token": token}
        )
        if response.is_error:
            raise _error_from(response)
        return TokenValidationResponse.model_validate(response.json())

    async def accept(
        self, invite_id: str, token: str, caller: Identity
    ) -> AcceptOutcome:
        access_token = getattr(caller, "access_token", None)
        if not access_token:
            return AcceptOutcome(
                success=False,
                code=ErrorCode.UNAUTHENTICATED,
                message="Sign in before accepting the invitation",
            )

        try:
            response = await self.http.post(
                self._path(invite_id, "accept"),
                json={"token": token},
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as exc:
            logger.warning(f"Accepting invitation {invite_id} failed: {exc!r}")
            return AcceptOutcome(
                success=False, message="Could not reach the server, try again"
            )

        if response.is_error:
            error = _error_from(response)
            return AcceptOutcome(success=False, code=error.code, message=error.message)

        try:
            body = response.json()
            return AcceptOutcome(
                success=True, message=body["message"], team_id=body.get("team_id")
            )
        except (ValueError, KeyError, TypeError, AttributeError):
            logger.warning(
                f"Accepting invitation {invite_id} returned an unreadable body "
                f"({response.status_code})"
            )
            return AcceptOutcome(
                success=False,
                message=f"Unexpected response ({response.status_code})",
            )
