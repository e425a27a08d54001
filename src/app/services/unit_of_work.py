from abc import ABC, abstractmethod

from src.app.repositories.invitation_repository import IInvitationRepository
from src.app.repositories.membership_repository import IMembershipRepository
from src.app.repositories.team_repository import ITeamRepository
from src.app.repositories.user_team_ref_repository import IUserTeamRefRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management

    Everything done between __aenter__ and commit() is applied atomically;
    leaving the block without commit() discards it.
    """

    # Repository properties (initialized in __aenter__)
    teams: ITeamRepository
    memberships: IMembershipRepository
    user_team_refs: IUserTeamRefRepository
    invitations: IInvitationRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        """Commit the transaction.

        Raises ConflictError when a uniqueness constraint rejects the batch.
        """
        pass

    @abstractmethod
    async def rollback(self):
        pass


class ConflictError(Exception):
    """A store-level uniqueness constraint rejected the write batch"""
