"""
Pytest configuration and fixtures.
"""

import asyncio
import os
from typing import AsyncGenerator, Callable, Optional, Union

# Keep settings deterministic regardless of the developer's .env
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("ANTHROPIC_API_KEY", "test-key-not-real")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dispatch.api.deps import get_llm_client, get_sessionmaker
from dispatch.api.main import app
from dispatch.core.database import Base, create_engine_for_url, create_session_factory
from dispatch.models import CascadeJob, Draft, User
from dispatch.schemas.voice import UserInfo, VoiceProfileData
from dispatch.services import (
    CascadeJobService,
    CascadeOrchestrator,
    DraftGenerationService,
    DraftService,
    UserService,
    VoiceService,
)

Reply = Union[str, BaseException, Callable[[str, str], str]]


class FakeLLM:
    """
    In-process stand-in for the generation client.

    `reply` is returned (or raised) for every call; `replies_by_name` picks a
    reply by the recipient name found in the system prompt.
    """

    def __init__(self, reply: Reply = "Generated post", replies_by_name: Optional[dict] = None):
        self.reply = reply
        self.replies_by_name = replies_by_name or {}
        self.calls: list[tuple[str, str, Optional[int]]] = []
        self.delays_by_name: dict[str, float] = {}

    def _pick(self, system_prompt: str) -> Reply:
        for name, reply in self.replies_by_name.items():
            if f"VOICE PROFILE for {name} " in system_prompt:
                return reply
        return self.reply

    def _delay(self, system_prompt: str) -> float:
        for name, delay in self.delays_by_name.items():
            if f"VOICE PROFILE for {name} " in system_prompt:
                return delay
        return 0

    async def generate_text(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: Optional[int] = None,
    ) -> str:
        self.calls.append((system_prompt, user_prompt, max_tokens))
        delay = self._delay(system_prompt)
        if delay:
            await asyncio.sleep(delay)

        reply = self._pick(system_prompt)
        if isinstance(reply, BaseException):
            raise reply
        if callable(reply):
            return reply(system_prompt, user_prompt)
        return reply


SAMPLE_PROFILE = VoiceProfileData(
    tone=["direct", "warm", "curious"],
    sentence_style="short",
    vocabulary="conversational",
    signature_phrases=["Here's the thing:", "Let that sink in."],
    topics=["hiring", "remote work"],
    avoid=["synergy", "circle back"],
    raw_summary="Writes punchy one-line paragraphs and ends with a question.",
)


@pytest_asyncio.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Session factory over a fresh SQLite file database."""
    engine = create_engine_for_url(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield create_session_factory(engine)

    await engine.dispose()


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def user_service(session_factory) -> UserService:
    return UserService(session_factory)


@pytest.fixture
def draft_service(session_factory) -> DraftService:
    return DraftService(session_factory)


@pytest.fixture
def job_service(session_factory) -> CascadeJobService:
    return CascadeJobService(session_factory)


@pytest.fixture
def orchestrator(fake_llm, user_service, draft_service, job_service) -> CascadeOrchestrator:
    return CascadeOrchestrator(fake_llm, user_service, draft_service, job_service)


@pytest.fixture
def voice_service(fake_llm, user_service) -> VoiceService:
    return VoiceService(fake_llm, user_service)


@pytest.fixture
def generation_service(fake_llm, user_service, draft_service) -> DraftGenerationService:
    return DraftGenerationService(fake_llm, user_service, draft_service)


@pytest.fixture
def make_user(user_service, session_factory):
    """Create a user; with a voice profile unless with_profile=False."""

    async def _make(
        name: str,
        role: str = "Engineer",
        company: str = "Acme",
        with_profile: bool = True,
    ) -> User:
        info = UserInfo(name=name, role=role, company=company, industry="Software")
        if with_profile:
            return await user_service.create_with_voice_profile(
                info, SAMPLE_PROFILE, ["sample one", "sample two"]
            )

        async with session_factory() as session:
            user = User(
                id=f"bare-{name.lower().replace(' ', '-')}",
                name=info.name,
                role=info.role,
                company=info.company,
                industry=info.industry,
            )
            session.add(user)
            await session.commit()
            return user

    return _make


@pytest.fixture
def count_rows(session_factory):
    """Count rows of a model, optionally filtered."""

    async def _count(model, *criteria) -> int:
        async with session_factory() as session:
            stmt = select(func.count()).select_from(model)
            for criterion in criteria:
                stmt = stmt.where(criterion)
            return (await session.execute(stmt)).scalar_one()

    return _count


@pytest.fixture
def all_jobs(session_factory):
    async def _jobs() -> list[CascadeJob]:
        async with session_factory() as session:
            return list((await session.execute(select(CascadeJob))).scalars().all())

    return _jobs


@pytest.fixture
def all_drafts(session_factory):
    async def _drafts() -> list[Draft]:
        async with session_factory() as session:
            return list((await session.execute(select(Draft))).scalars().all())

    return _drafts


@pytest_asyncio.fixture
async def client(session_factory, fake_llm) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client against the app, wired to the test database and fake LLM."""
    app.dependency_overrides[get_sessionmaker] = lambda: session_factory
    app.dependency_overrides[get_llm_client] = lambda: fake_llm

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
