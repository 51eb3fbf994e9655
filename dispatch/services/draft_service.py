"""
Draft Service.

CRUD operations for generated drafts.
"""

import uuid
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dispatch.core.database import get_db_context
from dispatch.core.exceptions import InvalidRequestError, NotFoundError
from dispatch.models.draft import Draft, DraftStatus

logger = structlog.get_logger(__name__)


class DraftService:
    """
    Service for managing drafts.

    Drafts are created by the generation workflows and then edited or
    approved by the user. They are never deleted here.
    """

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None):
        self._session_factory = session_factory

    async def create_draft(
        self,
        user_id: str,
        content: str,
        topic: str,
        cascade_job_id: Optional[str] = None,
        db: Optional[AsyncSession] = None,
    ) -> Draft:
        """
        Create a new draft in `draft` status.

        Args:
            user_id: Owning user
            content: Generated post text
            topic: Free-text label
            cascade_job_id: Job that produced the draft, if any
            db: Optional database session

        Returns:
            Created draft
        """
        draft_id = str(uuid.uuid4())

        async def _create(session: AsyncSession) -> Draft:
            draft = Draft(
                id=draft_id,
                user_id=user_id,
                content=content,
                topic=topic,
                status=DraftStatus.DRAFT.value,
                cascade_job_id=cascade_job_id,
            )
            session.add(draft)
            await session.commit()
            await session.refresh(draft)
            return draft

        if db:
            return await _create(db)

        async with get_db_context(self._session_factory) as session:
            return await _create(session)

    async def get_draft(
        self,
        draft_id: str,
        db: Optional[AsyncSession] = None,
    ) -> Optional[Draft]:
        """Get a draft by ID."""
        async def _get(session: AsyncSession) -> Optional[Draft]:
            result = await session.execute(select(Draft).where(Draft.id == draft_id))
            return result.scalar_one_or_none()

        if db:
            return await _get(db)

        async with get_db_context(self._session_factory) as session:
            return await _get(session)

    async def list_drafts(
        self,
        user_id: Optional[str] = None,
        cascade_job_id: Optional[str] = None,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
        db: Optional[AsyncSession] = None,
    ) -> list[Draft]:
        """
        List drafts, newest first.

        Args:
            user_id: Optional owner filter
            cascade_job_id: Optional job filter
            status: Optional status filter
            limit: Max results
            offset: Pagination offset
            db: Optional database session
        """
        async def _list(session: AsyncSession) -> list[Draft]:
            stmt = select(Draft)
            if user_id:
                stmt = stmt.where(Draft.user_id == user_id)
            if cascade_job_id:
                stmt = stmt.where(Draft.cascade_job_id == cascade_job_id)
            if status:
                stmt = stmt.where(Draft.status == status)

            stmt = stmt.order_by(Draft.created_at.desc(), Draft.id).offset(offset).limit(limit)
            result = await session.execute(stmt)
            return list(result.scalars().all())

        if db:
            return await _list(db)

        async with get_db_context(self._session_factory) as session:
            return await _list(session)

    async def update_draft(
        self,
        draft_id: str,
        content: Optional[str] = None,
        status: Optional[str] = None,
        db: Optional[AsyncSession] = None,
    ) -> Draft:
        """
        Update a draft's content and/or status.

        Raises:
            InvalidRequestError: nothing to update, or unknown status
            NotFoundError: draft does not exist
        """
        if content is None and status is None:
            raise InvalidRequestError("No fields to update.")

        allowed = {s.value for s in DraftStatus}
        if status is not None and status not in allowed:
            raise InvalidRequestError(
                f"Invalid status '{status}'. Expected one of: {', '.join(sorted(allowed))}."
            )

        async def _update(session: AsyncSession) -> Draft:
            result = await session.execute(select(Draft).where(Draft.id == draft_id))
            draft = result.scalar_one_or_none()
            if draft is None:
                raise NotFoundError("Draft not found.")

            if content is not None:
                draft.content = content
            if status is not None:
                draft.status = status

            await session.commit()
            await session.refresh(draft)
            return draft

        if db:
            draft = await _update(db)
        else:
            async with get_db_context(self._session_factory) as session:
                draft = await _update(session)

        logger.info("Draft updated", draft_id=draft_id, status=draft.status)
        return draft
