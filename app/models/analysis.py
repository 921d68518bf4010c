from datetime import datetime
from enum import Enum as PyEnum
from typing import Optional
from sqlalchemy import String, DateTime, Enum, Integer, Text, JSON
from sqlalchemy.orm import Mapped, mapped_column
from app.models.base import Base, TimestampMixin, UUIDMixin, utcnow


class AnalysisStatus(str, PyEnum):
    """Analysis status enumeration."""
    PENDING = "pending"
    PROCESSING = "processing"
    DONE = "done"
    FAILED = "failed"


class ArtworkAnalysis(Base, UUIDMixin, TimestampMixin):
    """AI analysis record for one catalog artwork."""

    __tablename__ = "artwork_analyses"

    artwork_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    source: Mapped[str] = mapped_column(String(50), nullable=False, default="algolia")
    analysis_version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    analysis_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    status: Mapped[AnalysisStatus] = mapped_column(
        Enum(AnalysisStatus, name="analysis_status", native_enum=False, values_callable=lambda x: [e.value for e in x]),
        default=AnalysisStatus.PENDING,
        nullable=False,
        index=True
    )

    # Artwork metadata copied from the catalog by the worker
    image_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    studio_name: Mapped[str] = mapped_column(Text, nullable=False, default="")

    ai_data: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)
    error: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<ArtworkAnalysis(id={self.id}, artwork_id={self.artwork_id}, status={self.status})>"
