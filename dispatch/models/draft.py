"""
Draft and CascadeJob database models.
Stores generated LinkedIn posts and the fan-out runs that produced them.
"""

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dispatch.core.database import Base

if TYPE_CHECKING:
    from dispatch.models.user import User


class DraftStatus(str, Enum):
    """Draft lifecycle status."""
    DRAFT = "draft"
    APPROVED = "approved"


class CascadeJobStatus(str, Enum):
    """Cascade job lifecycle. Moves running -> complete exactly once."""
    RUNNING = "running"
    COMPLETE = "complete"


class CascadeJob(Base):
    """
    Durable record of one cascade run.

    Created before any generation call and completed after every recipient
    attempt has resolved, whatever the outcomes.
    """

    __tablename__ = "cascade_jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    master_content: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=CascadeJobStatus.RUNNING.value, nullable=False, index=True
    )
    # Opaque creator identity, not a foreign key
    created_by_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Relationships
    drafts: Mapped[list["Draft"]] = relationship(
        "Draft", back_populates="cascade_job", order_by="Draft.created_at"
    )

    def __repr__(self) -> str:
        return f"<CascadeJob(id={self.id}, status={self.status})>"


class Draft(Base):
    """A generated LinkedIn post candidate."""

    __tablename__ = "drafts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    topic: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=DraftStatus.DRAFT.value, nullable=False, index=True
    )
    cascade_job_id: Mapped[Optional[str]] = mapped_column(
        String(36), ForeignKey("cascade_jobs.id"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="drafts")
    cascade_job: Mapped[Optional["CascadeJob"]] = relationship(
        "CascadeJob", back_populates="drafts"
    )

    def __repr__(self) -> str:
        return f"<Draft(id={self.id}, user_id={self.user_id}, status={self.status})>"
