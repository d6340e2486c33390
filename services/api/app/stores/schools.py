"""School lookups.

Only resolves existing schools by (name, address). Schools are created
transitively when a student embedding an unknown school is persisted.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import School
from app.stores.results import StoreResult

logger = logging.getLogger("uvicorn.error")


class SchoolRepository:
    """Read access to the schools table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_name_and_address(self, name: str, address: str) -> StoreResult[School]:
        """Get school by exact name and address.

        If several rows match, the one with the lowest id wins.

        Args:
            name: School name (case-sensitive).
            address: School address (case-sensitive).

        Returns:
            ok(school), not_found, or backend_error when the query fails.
        """
        try:
            result = await self._session.execute(
                select(School)
                .where(School.name == name, School.address == address)
                .order_by(School.id)
                .limit(1)
            )
            school = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.exception(
                f"Cannot get school from DB. With school name: {name!r} and address: {address!r}"
            )
            return StoreResult.backend_error(str(e))

        if school is None:
            return StoreResult.not_found()
        return StoreResult.ok(school)
