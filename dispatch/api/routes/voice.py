"""
Voice onboarding API routes.
"""

import structlog
from fastapi import APIRouter, Depends

from dispatch.api.deps import get_voice_service
from dispatch.api.schemas import (
    AnalyzeVoiceRequest,
    AnalyzeVoiceResponse,
    VoiceProfileResponse,
)
from dispatch.schemas.voice import UserInfo
from dispatch.services import VoiceService

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["voice"])


@router.post("/analyze-voice", response_model=AnalyzeVoiceResponse)
async def analyze_voice(
    request: AnalyzeVoiceRequest,
    voice_service: VoiceService = Depends(get_voice_service),
) -> AnalyzeVoiceResponse:
    """
    Create a user and extract their voice profile from writing samples.

    Requires name, role, company, industry and at least two non-empty samples.
    """
    logger.info("Analyze voice request", samples=len(request.samples))

    user = await voice_service.analyze_voice(
        UserInfo(**request.user_info.model_dump()),
        request.samples,
    )

    return AnalyzeVoiceResponse(
        user_id=user.id,
        voice_profile=VoiceProfileResponse.from_model(user.voice_profile),
    )
