from typing import List

from fastapi import APIRouter, Depends

from src.api.error import raise_for_error
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.teams import ListUserTeamsUseCase, TeamResponse
from src.depends import get_current_identity, get_unit_of_work
from src.domain.identity import Identity

router = APIRouter(prefix="/me", tags=["User"])


@router.get("/teams", response_model=List[TeamResponse])
async def list_my_teams(
    caller: Identity = Depends(get_current_identity),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Teams the caller belongs to, sorted by name"""
    result = await ListUserTeamsUseCase(uow).execute(caller)

    if result.is_err():
        raise_for_error(result.error)
    return result.value
