"""Pydantic domain shapes shared across services."""

from dispatch.schemas.cascade import (
    CascadeRunResult,
    RecipientFailure,
    RecipientOutcome,
    RecipientSuccess,
)
from dispatch.schemas.voice import RecipientContext, UserInfo, VoiceProfileData

__all__ = [
    "UserInfo",
    "VoiceProfileData",
    "RecipientContext",
    "RecipientSuccess",
    "RecipientFailure",
    "RecipientOutcome",
    "CascadeRunResult",
]
