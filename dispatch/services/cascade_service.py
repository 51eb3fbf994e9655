"""
Cascade Orchestrator.

Fans one master message out to many voice profiles. Each recipient gets an
independent generation attempt; a failure for one recipient is recorded as
data and never affects the others.
"""

import asyncio
from typing import Optional, Union

import structlog

from dispatch.core.config import settings
from dispatch.core.exceptions import EmptyGenerationError, InvalidRequestError
from dispatch.core.llm_clients import TextGenerator
from dispatch.schemas.cascade import CascadeRunResult, RecipientFailure, RecipientSuccess
from dispatch.schemas.voice import RecipientContext, VoiceProfileData
from dispatch.services.draft_service import DraftService
from dispatch.services.job_service import CascadeJobService
from dispatch.services.user_service import UserService
from dispatch.utils.prompts import build_cascade_prompt

logger = structlog.get_logger(__name__)

RECIPIENT_FAILURE_MESSAGE = "Generation failed for this user."


def cascade_topic(master_content: str, prefix_length: Optional[int] = None) -> str:
    """Draft topic label for cascade output: a truncated prefix of the master."""
    limit = settings.cascade_topic_prefix_length if prefix_length is None else prefix_length
    suffix = "..." if len(master_content) > limit else ""
    return f"Cascade: {master_content[:limit]}{suffix}"


class CascadeOrchestrator:
    """
    Runs cascades.

    Collaborators are passed in so a process shares one generation client
    and one session factory.
    """

    def __init__(
        self,
        llm: TextGenerator,
        users: UserService,
        drafts: DraftService,
        jobs: CascadeJobService,
        max_tokens: Optional[int] = None,
    ):
        self._llm = llm
        self._users = users
        self._drafts = drafts
        self._jobs = jobs
        self._max_tokens = max_tokens or settings.llm_max_tokens

    async def run_cascade(
        self,
        master_content: str,
        recipient_ids: list[str],
        creator_id: str,
    ) -> CascadeRunResult:
        """
        Generate one personalized draft per eligible recipient.

        Args:
            master_content: Message to adapt; surrounding whitespace is dropped
            recipient_ids: Requested recipients; duplicates collapse
            creator_id: Identity of whoever started the run

        Returns:
            Job id and one outcome per resolved recipient, in resolution order

        Raises:
            InvalidRequestError: bad input or no eligible recipient (no job created)
        """
        master = (master_content or "").strip()
        if not master:
            raise InvalidRequestError("masterContent is required.")
        if not recipient_ids:
            raise InvalidRequestError("Select at least one team member.")
        if not creator_id:
            raise InvalidRequestError("createdById is required.")

        recipients = await self._users.find_eligible_recipients(recipient_ids)
        if not recipients:
            raise InvalidRequestError(
                "None of the selected users have completed voice onboarding."
            )

        # Snapshot each profile before fan-out; tasks share no ORM state
        snapshots = [(user.to_recipient(), user.voice_profile.to_data()) for user in recipients]

        job = await self._jobs.create_job(master_content=master, created_by_id=creator_id)
        log = logger.bind(cascade_job_id=job.id)
        log.info("Cascade started", recipients=len(snapshots))

        topic = cascade_topic(master)
        outcomes = await asyncio.gather(
            *(
                self._generate_for_recipient(job.id, master, topic, recipient, profile)
                for recipient, profile in snapshots
            ),
            return_exceptions=True,
        )

        await self._jobs.complete_job(job.id)

        unexpected = [o for o in outcomes if isinstance(o, BaseException)]
        if unexpected:
            log.error(
                "Cascade task crashed outside recipient handling",
                errors=[repr(e) for e in unexpected],
            )
            raise unexpected[0]

        result = CascadeRunResult(cascade_job_id=job.id, results=list(outcomes))
        log.info(
            "Cascade finished",
            succeeded=len(result.succeeded),
            failed=len(result.failed),
        )
        return result

    async def _generate_for_recipient(
        self,
        job_id: str,
        master_content: str,
        topic: str,
        recipient: RecipientContext,
        profile: VoiceProfileData,
    ) -> Union[RecipientSuccess, RecipientFailure]:
        """One recipient's attempt. Any failure becomes a RecipientFailure."""
        identity = {
            "user_id": recipient.user_id,
            "user_name": recipient.name,
            "user_role": recipient.role,
            "user_company": recipient.company,
        }
        prompt = build_cascade_prompt(profile, recipient, master_content)

        # Generation and the draft write both resolve to this recipient's outcome
        try:
            content = await self._llm.generate_text(
                prompt.system,
                prompt.user,
                max_tokens=self._max_tokens,
            )
            if not isinstance(content, str) or not content.strip():
                raise EmptyGenerationError("Generation produced empty content.")
            content = content.strip()

            draft = await self._drafts.create_draft(
                user_id=recipient.user_id,
                content=content,
                topic=topic,
                cascade_job_id=job_id,
            )
        except Exception as e:
            logger.warning(
                "Cascade recipient failed",
                cascade_job_id=job_id,
                user_id=recipient.user_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            return RecipientFailure(**identity, error=RECIPIENT_FAILURE_MESSAGE)

        return RecipientSuccess(**identity, draft_id=draft.id, content=content)
