"""Database models"""

from dispatch.models.draft import CascadeJob, CascadeJobStatus, Draft, DraftStatus
from dispatch.models.user import User, VoiceProfile

__all__ = [
    "User",
    "VoiceProfile",
    "Draft",
    "DraftStatus",
    "CascadeJob",
    "CascadeJobStatus",
]
