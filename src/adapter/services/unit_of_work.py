from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.invitation_repository import InvitationRepository
from src.adapter.repositories.membership_repository import MembershipRepository
from src.adapter.repositories.team_repository import TeamRepository
from src.adapter.repositories.user_team_ref_repository import UserTeamRefRepository
from src.app.services.unit_of_work import ConflictError, UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern

    One session transaction per unit of work. With close_session=True the
    session is closed on exit, for callers that create one per operation.
    """

    def __init__(self, session: AsyncSession, close_session: bool = False):
        self.session = session
        self.close_session = close_session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.teams = TeamRepository(self.session)
        self.memberships = MembershipRepository(self.session)
        self.user_team_refs = UserTeamRefRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()
        if self.close_session:
            await self.session.close()

    async def commit(self):
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError(str(exc.orig)) from exc

    async def rollback(self):
        await self.session.rollback()
