"""
Voice Service.

Onboarding: turns writing samples into a stored voice profile.
"""

from typing import Optional

import structlog
from pydantic import ValidationError

from dispatch.core.config import settings
from dispatch.core.exceptions import InvalidRequestError, VoiceAnalysisParseError
from dispatch.core.llm_clients import TextGenerator
from dispatch.models.user import User
from dispatch.schemas.voice import UserInfo, VoiceProfileData
from dispatch.services.user_service import UserService
from dispatch.utils.parsing import extract_json_object
from dispatch.utils.prompts import build_voice_analysis_prompt

logger = structlog.get_logger(__name__)

MIN_SAMPLES = 2


def parse_voice_profile(raw_text: str) -> VoiceProfileData:
    """
    Parse model output into a VoiceProfileData.

    Raises:
        VoiceAnalysisParseError: no JSON object, or the object has the wrong shape
    """
    payload = extract_json_object(raw_text)
    try:
        return VoiceProfileData.model_validate(payload)
    except ValidationError as e:
        logger.warning("Voice analysis JSON has unexpected shape", errors=e.error_count())
        raise VoiceAnalysisParseError("Failed to parse voice analysis response.") from e


class VoiceService:
    """Analyzes writing samples and creates the user with its voice profile."""

    def __init__(
        self,
        llm: TextGenerator,
        users: UserService,
        max_tokens: Optional[int] = None,
    ):
        self._llm = llm
        self._users = users
        self._max_tokens = max_tokens or settings.llm_max_tokens

    async def analyze_voice(self, user_info: UserInfo, samples: list[str]) -> User:
        """
        Extract a voice profile from samples and persist it with a new user.

        Raises:
            InvalidRequestError: missing identity field or fewer than 2 usable samples
            GenerationError: the generation call failed
            VoiceAnalysisParseError: the output could not be parsed
        """
        info = UserInfo(
            name=user_info.name.strip(),
            role=user_info.role.strip(),
            company=user_info.company.strip(),
            industry=user_info.industry.strip(),
        )
        if not all([info.name, info.role, info.company, info.industry]):
            raise InvalidRequestError("Missing required user info fields.")

        usable = [s.strip() for s in samples or [] if s and s.strip()]
        if len(usable) < MIN_SAMPLES:
            raise InvalidRequestError(f"At least {MIN_SAMPLES} writing samples are required.")

        prompt = build_voice_analysis_prompt(info, usable)
        raw_text = await self._llm.generate_text(
            prompt.system,
            prompt.user,
            max_tokens=self._max_tokens,
        )

        profile = parse_voice_profile(raw_text)
        logger.info(
            "Voice analyzed",
            name=info.name,
            tone=profile.tone,
            sentence_style=profile.sentence_style,
        )

        return await self._users.create_with_voice_profile(info, profile, usable)
