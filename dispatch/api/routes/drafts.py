"""
Draft API routes: single-draft generation, editing and listing.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query

from dispatch.api.deps import get_draft_service, get_generation_service
from dispatch.api.schemas import (
    DraftEnvelope,
    DraftListResponse,
    GenerateDraftRequest,
    GenerateDraftResponse,
    UpdateDraftRequest,
    draft_response,
)
from dispatch.core.exceptions import NotFoundError
from dispatch.services import DraftGenerationService, DraftService

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["drafts"])


@router.post("/generate-draft", response_model=GenerateDraftResponse)
async def generate_draft(
    request: GenerateDraftRequest,
    generation_service: DraftGenerationService = Depends(get_generation_service),
) -> GenerateDraftResponse:
    """Write one LinkedIn post on a topic in the user's voice."""
    logger.info("Generate draft request", user_id=request.user_id, topic=request.topic[:50])

    draft = await generation_service.generate_draft(
        user_id=request.user_id,
        topic=request.topic,
        raw_notes=request.raw_notes,
    )
    return GenerateDraftResponse(draft_id=draft.id, content=draft.content)


@router.get("/drafts", response_model=DraftListResponse)
async def list_drafts(
    user_id: Optional[str] = Query(None, alias="userId", description="Filter by owner"),
    cascade_job_id: Optional[str] = Query(None, alias="cascadeJobId", description="Filter by cascade job"),
    status: Optional[str] = Query(None, description="Filter by status"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    drafts: DraftService = Depends(get_draft_service),
) -> DraftListResponse:
    """List drafts, newest first."""
    items = await drafts.list_drafts(
        user_id=user_id,
        cascade_job_id=cascade_job_id,
        status=status,
        limit=limit,
        offset=offset,
    )
    return DraftListResponse(drafts=[draft_response(d) for d in items])


@router.get("/drafts/{draft_id}", response_model=DraftEnvelope)
async def get_draft(
    draft_id: str,
    drafts: DraftService = Depends(get_draft_service),
) -> DraftEnvelope:
    """Get a single draft."""
    draft = await drafts.get_draft(draft_id)
    if draft is None:
        raise NotFoundError("Draft not found.")
    return DraftEnvelope(draft=draft_response(draft))


@router.patch("/drafts/{draft_id}", response_model=DraftEnvelope)
async def update_draft(
    draft_id: str,
    request: UpdateDraftRequest,
    drafts: DraftService = Depends(get_draft_service),
) -> DraftEnvelope:
    """Edit a draft's content and/or set its status (draft|approved)."""
    draft = await drafts.update_draft(
        draft_id,
        content=request.content,
        status=request.status,
    )
    return DraftEnvelope(draft=draft_response(draft))
