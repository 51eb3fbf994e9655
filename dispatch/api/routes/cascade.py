"""
Cascade API routes.
"""

import structlog
from fastapi import APIRouter, Depends

from dispatch.api.deps import get_cascade_orchestrator, get_job_service
from dispatch.api.schemas import (
    CascadeJobResponse,
    CascadeRequest,
    CascadeResponse,
    CascadeResultItem,
)
from dispatch.core.exceptions import NotFoundError
from dispatch.services import CascadeJobService, CascadeOrchestrator

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/cascade", tags=["cascade"])


@router.post("", response_model=CascadeResponse, response_model_exclude_none=True)
async def run_cascade(
    request: CascadeRequest,
    orchestrator: CascadeOrchestrator = Depends(get_cascade_orchestrator),
) -> CascadeResponse:
    """
    Adapt one master message into a personalized draft per selected user.

    Per-user generation failures come back as entries with an `error` field;
    the request itself still succeeds. Check every entry.
    """
    logger.info(
        "Cascade request",
        created_by_id=request.created_by_id,
        recipients=len(request.user_ids),
    )

    result = await orchestrator.run_cascade(
        master_content=request.master_content,
        recipient_ids=request.user_ids,
        creator_id=request.created_by_id,
    )

    return CascadeResponse(
        cascade_job_id=result.cascade_job_id,
        results=[CascadeResultItem.from_outcome(o) for o in result.results],
    )


@router.get("/{job_id}", response_model=CascadeJobResponse)
async def get_cascade_job(
    job_id: str,
    jobs: CascadeJobService = Depends(get_job_service),
) -> CascadeJobResponse:
    """Get a cascade job and the drafts it produced."""
    job = await jobs.get_job(job_id)
    if job is None:
        raise NotFoundError("Cascade job not found.")
    return CascadeJobResponse.from_model(job)
