from sqlalchemy.exc import IntegrityError
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.services.unit_of_work import ConflictError


async def flush(session: AsyncSession) -> None:
    """Flush pending writes, surfacing constraint violations as ConflictError"""
    try:
        await session.flush()
    except IntegrityError as exc:
        raise ConflictError(str(exc.orig)) from exc
