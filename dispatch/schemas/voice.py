"""
Voice profile shapes.

VoiceProfileData mirrors the JSON the voice analysis prompt asks for, so the
model output validates straight into it.
"""

from pydantic import BaseModel, ConfigDict, Field


class UserInfo(BaseModel):
    """Identity fields collected at onboarding."""
    name: str = ""
    role: str = ""
    company: str = ""
    industry: str = ""


class VoiceProfileData(BaseModel):
    """Structured description of a writing voice."""

    model_config = ConfigDict(frozen=True)

    tone: list[str]
    sentence_style: str  # short|medium|long|mixed
    vocabulary: str  # conversational|professional|technical
    signature_phrases: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)
    avoid: list[str] = Field(default_factory=list)
    raw_summary: str


class RecipientContext(BaseModel):
    """Who a draft is written for."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    name: str
    role: str
    company: str
