"""
Cascade Job Service.

Persistence for cascade job records. A job row is written twice: once at
creation (running) and once at completion.
"""

import uuid
from typing import Optional

import structlog
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from dispatch.core.database import get_db_context
from dispatch.models.draft import CascadeJob, CascadeJobStatus

logger = structlog.get_logger(__name__)


class CascadeJobService:
    """Service for cascade job records."""

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None):
        self._session_factory = session_factory

    async def create_job(
        self,
        master_content: str,
        created_by_id: str,
        db: Optional[AsyncSession] = None,
    ) -> CascadeJob:
        """Create a job in `running` status."""
        job_id = str(uuid.uuid4())

        async def _create(session: AsyncSession) -> CascadeJob:
            job = CascadeJob(
                id=job_id,
                master_content=master_content,
                status=CascadeJobStatus.RUNNING.value,
                created_by_id=created_by_id,
            )
            session.add(job)
            await session.commit()
            await session.refresh(job)
            return job

        if db:
            job = await _create(db)
        else:
            async with get_db_context(self._session_factory) as session:
                job = await _create(session)

        logger.info("Cascade job created", cascade_job_id=job.id, created_by_id=created_by_id)
        return job

    async def complete_job(
        self,
        job_id: str,
        db: Optional[AsyncSession] = None,
    ) -> None:
        """Mark a job `complete`."""
        async def _complete(session: AsyncSession) -> None:
            await session.execute(
                update(CascadeJob)
                .where(CascadeJob.id == job_id)
                .values(status=CascadeJobStatus.COMPLETE.value)
            )
            await session.commit()

        if db:
            await _complete(db)
        else:
            async with get_db_context(self._session_factory) as session:
                await _complete(session)

        logger.info("Cascade job complete", cascade_job_id=job_id)

    async def get_job(
        self,
        job_id: str,
        db: Optional[AsyncSession] = None,
    ) -> Optional[CascadeJob]:
        """Get a job with the drafts it produced."""
        async def _get(session: AsyncSession) -> Optional[CascadeJob]:
            stmt = (
                select(CascadeJob)
                .where(CascadeJob.id == job_id)
                .options(selectinload(CascadeJob.drafts))
            )
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

        if db:
            return await _get(db)

        async with get_db_context(self._session_factory) as session:
            return await _get(session)
