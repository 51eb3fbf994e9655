"""
User Service.

Lookup and creation of users and their voice profiles.
"""

import uuid
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from dispatch.core.database import get_db_context
from dispatch.models.user import User, VoiceProfile
from dispatch.schemas.voice import UserInfo, VoiceProfileData

logger = structlog.get_logger(__name__)


class UserService:
    """Service for users and their voice profiles."""

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None):
        self._session_factory = session_factory

    async def create_with_voice_profile(
        self,
        user_info: UserInfo,
        profile: VoiceProfileData,
        samples: list[str],
        db: Optional[AsyncSession] = None,
    ) -> User:
        """
        Create a user together with its voice profile in one transaction.

        Args:
            user_info: Identity fields (already validated)
            profile: Parsed voice profile
            samples: The writing samples the profile was derived from
            db: Optional database session

        Returns:
            Created user with voice_profile loaded
        """
        user_id = str(uuid.uuid4())

        async def _create(session: AsyncSession) -> User:
            user = User(
                id=user_id,
                name=user_info.name,
                role=user_info.role,
                company=user_info.company,
                industry=user_info.industry,
            )
            user.voice_profile = VoiceProfile(
                id=str(uuid.uuid4()),
                tone=list(profile.tone),
                sentence_style=profile.sentence_style,
                vocabulary=profile.vocabulary,
                signature_phrases=list(profile.signature_phrases),
                topics=list(profile.topics),
                avoid=list(profile.avoid),
                raw_summary=profile.raw_summary,
                samples=list(samples),
            )
            session.add(user)
            await session.commit()
            await session.refresh(user, attribute_names=["created_at", "voice_profile"])
            await session.refresh(user.voice_profile)
            return user

        if db:
            user = await _create(db)
        else:
            async with get_db_context(self._session_factory) as session:
                user = await _create(session)

        logger.info("User created with voice profile", user_id=user.id, samples=len(samples))
        return user

    async def get_user(
        self,
        user_id: str,
        db: Optional[AsyncSession] = None,
    ) -> Optional[User]:
        """Get a user by ID with its voice profile."""
        async def _get(session: AsyncSession) -> Optional[User]:
            stmt = (
                select(User)
                .where(User.id == user_id)
                .options(selectinload(User.voice_profile))
            )
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

        if db:
            return await _get(db)

        async with get_db_context(self._session_factory) as session:
            return await _get(session)

    async def list_users(
        self,
        limit: int = 200,
        offset: int = 0,
        db: Optional[AsyncSession] = None,
    ) -> list[User]:
        """List users, newest first, with voice profiles."""
        async def _list(session: AsyncSession) -> list[User]:
            stmt = (
                select(User)
                .options(selectinload(User.voice_profile))
                .order_by(User.created_at.desc(), User.id)
                .offset(offset)
                .limit(limit)
            )
            result = await session.execute(stmt)
            return list(result.scalars().all())

        if db:
            return await _list(db)

        async with get_db_context(self._session_factory) as session:
            return await _list(session)

    async def find_eligible_recipients(
        self,
        user_ids: list[str],
        db: Optional[AsyncSession] = None,
    ) -> list[User]:
        """
        Resolve cascade recipients.

        Returns users among user_ids that have a voice profile, once each,
        in order of first appearance in user_ids. Unknown ids and users
        without a profile are dropped.
        """
        unique_ids = list(dict.fromkeys(user_ids))
        if not unique_ids:
            return []

        async def _find(session: AsyncSession) -> list[User]:
            stmt = (
                select(User)
                .join(User.voice_profile)
                .where(User.id.in_(unique_ids))
                .options(selectinload(User.voice_profile))
            )
            result = await session.execute(stmt)
            return list(result.scalars().all())

        if db:
            found = await _find(db)
        else:
            async with get_db_context(self._session_factory) as session:
                found = await _find(session)

        by_id = {user.id: user for user in found}
        return [by_id[user_id] for user_id in unique_ids if user_id in by_id]
