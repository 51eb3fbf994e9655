"""
Pydantic request/response models for the API.

Bodies are camelCase on the wire; Python attributes stay snake_case.
"""

from datetime import datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from dispatch.models.draft import CascadeJob, Draft
from dispatch.models.user import User, VoiceProfile
from dispatch.schemas.cascade import RecipientFailure, RecipientSuccess


class CamelModel(BaseModel):
    """Base model with camelCase aliases; accepts either spelling on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ── Request schemas ────────────────────────────────────────────────────────

class RequestModel(CamelModel):
    """
    Request body base. Explicit nulls fall back to field defaults, so the
    services, not the parser, report what is missing.
    """

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class CascadeRequest(RequestModel):
    """Fan a master message out to several users."""
    master_content: str = ""
    user_ids: list[str] = []
    created_by_id: str = ""


class UserInfoRequest(RequestModel):
    name: str = ""
    role: str = ""
    company: str = ""
    industry: str = ""


class AnalyzeVoiceRequest(RequestModel):
    """Onboard a user from writing samples."""
    user_info: UserInfoRequest = UserInfoRequest()
    samples: list[str] = []


class GenerateDraftRequest(RequestModel):
    """Write one post in a user's voice."""
    user_id: str = ""
    topic: str = ""
    raw_notes: Optional[str] = None


class UpdateDraftRequest(RequestModel):
    """Edit and/or approve a draft."""
    content: Optional[str] = None
    status: Optional[str] = None


# ── Response schemas ───────────────────────────────────────────────────────

class VoiceProfileResponse(CamelModel):
    id: str
    user_id: str
    tone: list[str]
    sentence_style: str
    vocabulary: str
    signature_phrases: list[str]
    topics: list[str]
    avoid: list[str]
    raw_summary: str
    samples: list[str]
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, profile: VoiceProfile) -> "VoiceProfileResponse":
        return cls.model_validate(profile)


class UserResponse(CamelModel):
    id: str
    name: str
    role: str
    company: str
    industry: str
    created_at: Optional[datetime] = None
    voice_profile: Optional[VoiceProfileResponse] = None

    @classmethod
    def from_model(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            role=user.role,
            company=user.company,
            industry=user.industry,
            created_at=user.created_at,
            voice_profile=(
                VoiceProfileResponse.from_model(user.voice_profile)
                if user.voice_profile is not None
                else None
            ),
        )


class DraftResponse(CamelModel):
    id: str
    user_id: str
    content: str
    topic: str
    status: str
    cascade_job_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AnalyzeVoiceResponse(CamelModel):
    user_id: str
    voice_profile: VoiceProfileResponse


class GenerateDraftResponse(CamelModel):
    draft_id: str
    content: str


class DraftEnvelope(CamelModel):
    draft: DraftResponse


class DraftListResponse(CamelModel):
    drafts: list[DraftResponse]


class UserEnvelope(CamelModel):
    user: UserResponse


class UserListResponse(CamelModel):
    users: list[UserResponse]


class CascadeResultItem(CamelModel):
    """One recipient's row. Failures carry an error and empty draftId/content."""
    user_id: str
    draft_id: str
    content: str
    user_name: str
    user_role: str
    user_company: str
    error: Optional[str] = None

    @classmethod
    def from_outcome(
        cls, outcome: Union[RecipientSuccess, RecipientFailure]
    ) -> "CascadeResultItem":
        identity = dict(
            user_id=outcome.user_id,
            user_name=outcome.user_name,
            user_role=outcome.user_role,
            user_company=outcome.user_company,
        )
        if isinstance(outcome, RecipientSuccess):
            return cls(**identity, draft_id=outcome.draft_id, content=outcome.content)
        return cls(**identity, draft_id="", content="", error=outcome.error)


class CascadeResponse(CamelModel):
    cascade_job_id: str
    results: list[CascadeResultItem]


class CascadeJobResponse(CamelModel):
    id: str
    master_content: str
    status: str
    created_by_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    drafts: list[DraftResponse] = []

    @classmethod
    def from_model(cls, job: CascadeJob) -> "CascadeJobResponse":
        return cls(
            id=job.id,
            master_content=job.master_content,
            status=job.status,
            created_by_id=job.created_by_id,
            created_at=job.created_at,
            updated_at=job.updated_at,
            drafts=[DraftResponse.model_validate(d) for d in job.drafts],
        )


def draft_response(draft: Draft) -> DraftResponse:
    return DraftResponse.model_validate(draft)
