from datetime import timedelta
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.utils.jwt import identity_from_claims, verify_jwt
from src.app.services.clock import Clock, SystemClock
from src.app.services.invite_links import InviteLinkBuilder
from src.app.services.token_crypto import TokenCrypto
from src.domain.errors import ErrorCode
from src.domain.identity import Identity

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)

_token_crypto = TokenCrypto()
_clock = SystemClock()
_invite_links = InviteLinkBuilder(
    ApplicationConfig.INVITE_BASE_URL, ApplicationConfig.INVITE_ACCEPT_PATH
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_crypto() -> TokenCrypto:
    return _token_crypto


def get_clock() -> Clock:
    return _clock


def get_invite_links() -> InviteLinkBuilder:
    return _invite_links


def get_invite_ttl() -> timedelta:
    return timedelta(hours=ApplicationConfig.INVITE_TTL_HOURS)


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Identity:
    """
    Dependency to extract and verify the caller's JWT from the Authorization header.

    Returns:
        Identity built from the verified claims (sub, email, name)

    Raises:
        ClientError: 401 UNAUTHENTICATED if the token is missing or invalid
    """
    payload = verify_jwt(credentials.credentials) if credentials else None
    identity = identity_from_claims(payload) if payload else None

    if identity is None:
        raise ClientError(
            Error(ErrorCode.UNAUTHENTICATED, "Invalid or expired token"),
            status_code=401,
        )

    return identity
