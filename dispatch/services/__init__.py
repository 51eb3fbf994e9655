"""
Services layer for Dispatch.
Contains the generation workflows and the persistence services they use.
"""

from dispatch.services.cascade_service import CascadeOrchestrator, cascade_topic
from dispatch.services.draft_service import DraftService
from dispatch.services.generation_service import DraftGenerationService
from dispatch.services.job_service import CascadeJobService
from dispatch.services.user_service import UserService
from dispatch.services.voice_service import VoiceService

__all__ = [
    "CascadeOrchestrator",
    "cascade_topic",
    "DraftService",
    "DraftGenerationService",
    "CascadeJobService",
    "UserService",
    "VoiceService",
]
