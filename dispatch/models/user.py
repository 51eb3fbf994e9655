"""
User and voice profile database models.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dispatch.core.database import Base
from dispatch.schemas.voice import RecipientContext, VoiceProfileData

if TYPE_CHECKING:
    from dispatch.models.draft import Draft


class User(Base):
    """A professional whose voice can be used for drafts."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(255), nullable=False)
    company: Mapped[str] = mapped_column(String(255), nullable=False)
    industry: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    voice_profile: Mapped[Optional["VoiceProfile"]] = relationship(
        "VoiceProfile", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    drafts: Mapped[list["Draft"]] = relationship("Draft", back_populates="user")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name={self.name})>"

    def to_recipient(self) -> RecipientContext:
        """Display identity used in prompts and cascade results."""
        return RecipientContext(
            user_id=self.id,
            name=self.name,
            role=self.role,
            company=self.company,
        )


class VoiceProfile(Base):
    """
    Writing voice extracted from a user's samples.

    One-to-one with User (unique user_id). Written once at onboarding.
    """

    __tablename__ = "voice_profiles"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    tone: Mapped[list] = mapped_column(JSON, default=list)  # exactly 3 expected
    sentence_style: Mapped[str] = mapped_column(String(20), nullable=False)  # short|medium|long|mixed
    vocabulary: Mapped[str] = mapped_column(String(20), nullable=False)  # conversational|professional|technical
    signature_phrases: Mapped[list] = mapped_column(JSON, default=list)
    topics: Mapped[list] = mapped_column(JSON, default=list)
    avoid: Mapped[list] = mapped_column(JSON, default=list)
    raw_summary: Mapped[str] = mapped_column(Text, nullable=False)

    # Original samples, kept for audit and regeneration
    samples: Mapped[list] = mapped_column(JSON, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="voice_profile")

    def __repr__(self) -> str:
        return f"<VoiceProfile(user_id={self.user_id}, tone={self.tone})>"

    def to_data(self) -> VoiceProfileData:
        """Immutable snapshot for prompt building."""
        return VoiceProfileData(
            tone=list(self.tone or []),
            sentence_style=self.sentence_style,
            vocabulary=self.vocabulary,
            signature_phrases=list(self.signature_phrases or []),
            topics=list(self.topics or []),
            avoid=list(self.avoid or []),
            raw_summary=self.raw_summary,
        )
