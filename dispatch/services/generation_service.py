"""
Single-draft generation.

Writes one post on a topic in one user's voice. No cascade job is involved.
"""

from typing import Optional

import structlog

from dispatch.core.config import settings
from dispatch.core.exceptions import (
    EmptyGenerationError,
    InvalidRequestError,
    NotFoundError,
)
from dispatch.core.llm_clients import TextGenerator
from dispatch.models.draft import Draft
from dispatch.services.draft_service import DraftService
from dispatch.services.user_service import UserService
from dispatch.utils.prompts import build_draft_prompt

logger = structlog.get_logger(__name__)


class DraftGenerationService:
    """Generates and stores a single draft."""

    def __init__(
        self,
        llm: TextGenerator,
        users: UserService,
        drafts: DraftService,
        max_tokens: Optional[int] = None,
    ):
        self._llm = llm
        self._users = users
        self._drafts = drafts
        self._max_tokens = max_tokens or settings.llm_max_tokens

    async def generate_draft(
        self,
        user_id: str,
        topic: str,
        raw_notes: Optional[str] = None,
    ) -> Draft:
        """
        Generate a draft about `topic` in the user's voice.

        Raises:
            InvalidRequestError: missing input, or user has no voice profile
            NotFoundError: user does not exist
            GenerationError: generation failed or returned nothing
        """
        topic = (topic or "").strip()
        if not user_id or not topic:
            raise InvalidRequestError("userId and topic are required.")

        user = await self._users.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found.")
        if user.voice_profile is None:
            raise InvalidRequestError("This user has not completed voice onboarding.")

        prompt = build_draft_prompt(
            user.voice_profile.to_data(),
            user.to_recipient(),
            topic,
            raw_notes,
        )
        content = await self._llm.generate_text(
            prompt.system,
            prompt.user,
            max_tokens=self._max_tokens,
        )
        if not content or not content.strip():
            raise EmptyGenerationError("Generation produced empty content.")

        draft = await self._drafts.create_draft(
            user_id=user.id,
            content=content.strip(),
            topic=topic,
        )
        logger.info("Draft generated", user_id=user.id, draft_id=draft.id)
        return draft
