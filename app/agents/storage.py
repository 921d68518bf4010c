import logging
from typing import Any, Dict, List, Optional, Tuple
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from app.exceptions import AnalysisNotFoundError
from app.models.analysis import ArtworkAnalysis, AnalysisStatus
from app.schemas.analysis import AnalysisStats

logger = logging.getLogger(__name__)


class AnalysisStore:
    """Persistence for per-artwork analysis records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, analysis_id: str) -> Optional[ArtworkAnalysis]:
        result = await self.db.execute(
            select(ArtworkAnalysis).where(ArtworkAnalysis.id == analysis_id)
        )
        return result.scalar_one_or_none()

    async def get_by_artwork_id(self, artwork_id: str) -> Optional[ArtworkAnalysis]:
        result = await self.db.execute(
            select(ArtworkAnalysis).where(ArtworkAnalysis.artwork_id == artwork_id)
        )
        return result.scalar_one_or_none()

    async def upsert_pending(self, artwork_id: str) -> ArtworkAnalysis:
        """
        Create a pending record for an artwork, or reset an existing one.

        Existing records keep their metadata; status goes back to pending and
        the previous error is cleared.
        """
        analysis = await self.get_by_artwork_id(artwork_id)

        if analysis is None:
            analysis = ArtworkAnalysis(
                artwork_id=artwork_id,
                status=AnalysisStatus.PENDING,
                image_url="",
                title="",
                studio_name="",
                source="algolia",
                analysis_version=1,
            )
            self.db.add(analysis)
            logger.info(f"Created pending analysis for artwork {artwork_id}")
        else:
            analysis.status = AnalysisStatus.PENDING
            analysis.error = None
            logger.info(f"Reset analysis for artwork {artwork_id} to pending")

        await self.db.commit()
        await self.db.refresh(analysis)
        return analysis

    async def reset_to_pending(self, analysis: ArtworkAnalysis) -> ArtworkAnalysis:
        analysis.status = AnalysisStatus.PENDING
        analysis.error = None
        await self.db.commit()
        await self.db.refresh(analysis)
        return analysis

    async def update_by_artwork_id(self, artwork_id: str, **fields: Any) -> ArtworkAnalysis:
        """
        Update fields on the record for an artwork.

        Raises:
            AnalysisNotFoundError: If no record exists for the artwork
        """
        analysis = await self.get_by_artwork_id(artwork_id)
        if analysis is None:
            raise AnalysisNotFoundError(f"ArtworkAnalysis not found: {artwork_id}")

        for key, value in fields.items():
            setattr(analysis, key, value)

        await self.db.commit()
        await self.db.refresh(analysis)
        return analysis

    async def count_by_status(self) -> Dict[AnalysisStatus, int]:
        result = await self.db.execute(
            select(ArtworkAnalysis.status, func.count()).group_by(ArtworkAnalysis.status)
        )
        counts = {status: 0 for status in AnalysisStatus}
        for status, count in result.all():
            counts[AnalysisStatus(status)] = count
        return counts

    async def stats(self) -> AnalysisStats:
        """Aggregate counts per status and the share of completed analyses."""
        counts = await self.count_by_status()
        total = sum(counts.values())
        done = counts[AnalysisStatus.DONE]
        success_rate = (done / total) * 100 if total > 0 else 0

        return AnalysisStats(
            total=total,
            pending=counts[AnalysisStatus.PENDING],
            processing=counts[AnalysisStatus.PROCESSING],
            done=done,
            failed=counts[AnalysisStatus.FAILED],
            success_rate=round(success_rate, 2),
        )

    async def list_analyses(
        self,
        status: Optional[AnalysisStatus] = None,
        limit: int = 50,
        offset: int = 0
    ) -> Tuple[List[ArtworkAnalysis], int]:
        """Page through records, newest first, with the unpaged total."""
        query = select(ArtworkAnalysis)
        if status:
            query = query.where(ArtworkAnalysis.status == status)

        count_query = select(func.count()).select_from(query.subquery())
        total_result = await self.db.execute(count_query)
        total = total_result.scalar() or 0

        query = query.order_by(ArtworkAnalysis.created_at.desc()).limit(limit).offset(offset)
        result = await self.db.execute(query)
        return list(result.scalars().all()), total

    async def list_done(self, limit: Optional[int] = None) -> List[ArtworkAnalysis]:
        """Completed analyses that carry AI data, newest first."""
        query = (
            select(ArtworkAnalysis)
            .where(ArtworkAnalysis.status == AnalysisStatus.DONE)
            .order_by(ArtworkAnalysis.created_at.desc())
        )
        if limit is not None:
            query = query.limit(limit)

        result = await self.db.execute(query)
        return [a for a in result.scalars().all() if a.ai_data is not None]
