"""
FastAPI dependencies wiring process-wide handles into services.
"""

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dispatch.core.database import get_session_factory
from dispatch.core.llm_clients import TextGenerator
from dispatch.services import (
    CascadeJobService,
    CascadeOrchestrator,
    DraftGenerationService,
    DraftService,
    UserService,
    VoiceService,
)


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Process-wide session factory."""
    return get_session_factory()


def get_llm_client(request: Request) -> TextGenerator:
    """Generation client created in the application lifespan."""
    client = getattr(request.app.state, "llm_client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Generation client is not initialized",
        )
    return client


def get_user_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),
) -> UserService:
    return UserService(session_factory)


def get_draft_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),
) -> DraftService:
    return DraftService(session_factory)


def get_job_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),
) -> CascadeJobService:
    return CascadeJobService(session_factory)


def get_voice_service(
    llm: TextGenerator = Depends(get_llm_client),
    users: UserService = Depends(get_user_service),
) -> VoiceService:
    return VoiceService(llm, users)


def get_generation_service(
    llm: TextGenerator = Depends(get_llm_client),
    users: UserService = Depends(get_user_service),
    drafts: DraftService = Depends(get_draft_service),
) -> DraftGenerationService:
    return DraftGenerationService(llm, users, drafts)


def get_cascade_orchestrator(
    llm: TextGenerator = Depends(get_llm_client),
    users: UserService = Depends(get_user_service),
    drafts: DraftService = Depends(get_draft_service),
    jobs: CascadeJobService = Depends(get_job_service),
) -> CascadeOrchestrator:
    return CascadeOrchestrator(llm, users, drafts, jobs)
