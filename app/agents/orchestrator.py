import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple
import httpx
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from tenacity import AsyncRetrying, stop_after_attempt, wait_incrementing
from app.agents.catalog import CatalogAgent
from app.agents.inference import InferenceAgent
from app.agents.matcher import rank_matches
from app.agents.storage import AnalysisStore
from app.config import get_settings
from app.database import AsyncSessionLocal
from app.exceptions import AnalysisNotFoundError, ArtworkNotFoundError
from app.models.analysis import AnalysisStatus
from app.schemas.analysis import AIAnalysisData
from app.schemas.artwork import ArtworkRecord
from app.schemas.search import MatchCriteria, MatchResult

logger = logging.getLogger(__name__)
settings = get_settings()

SessionFactory = Callable[[], AsyncSession]


async def process_analysis_job(
    artwork_id: str,
    catalog: Optional[CatalogAgent] = None,
    inference: Optional[InferenceAgent] = None,
    session_factory: SessionFactory = AsyncSessionLocal,
) -> AIAnalysisData:
    """
    Analyze one artwork and persist the result, retrying on failure.

    Args:
        artwork_id: Catalog object ID of the artwork
        catalog: Catalog agent (defaults to a new CatalogAgent)
        inference: Inference agent (defaults to a new InferenceAgent)
        session_factory: Callable returning a database session

    Each attempt:
    1. Marks the record as processing
    2. Fetches the artwork from the catalog and copies its metadata
    3. Runs AI analysis on the first image
    4. Stores the analysis and marks the record as done

    Attempts are spaced linearly (delay, 2 x delay, ...). When the last
    attempt fails the record is marked as failed and the error is re-raised.
    """
    catalog = catalog or CatalogAgent()
    inference = inference or InferenceAgent()
    max_retries = settings.analysis_max_retries
    delay = settings.analysis_retry_delay

    retrying = AsyncRetrying(
        stop=stop_after_attempt(max_retries),
        wait=wait_incrementing(start=delay, increment=delay),
        reraise=True,
    )

    try:
        async for attempt in retrying:
            with attempt:
                attempt_number = attempt.retry_state.attempt_number
                try:
                    async with session_factory() as db:
                        result = await _run_analysis(AnalysisStore(db), artwork_id, catalog, inference)
                except Exception as e:
                    logger.error(
                        f"Error processing artwork {artwork_id} "
                        f"(attempt {attempt_number}/{max_retries}): {str(e)}"
                    )
                    raise
    except Exception as e:
        await _mark_failed(session_factory, artwork_id, str(e) or "Unknown error")
        raise

    logger.info(f"Successfully analyzed artwork {artwork_id}")
    return result


async def _run_analysis(
    store: AnalysisStore,
    artwork_id: str,
    catalog: CatalogAgent,
    inference: InferenceAgent,
) -> AIAnalysisData:
    await store.update_by_artwork_id(artwork_id, status=AnalysisStatus.PROCESSING)

    artwork = await catalog.get_artwork(artwork_id)
    if not artwork:
        raise ArtworkNotFoundError(f"Artwork {artwork_id} not found in catalog")

    image_urls = artwork.get("imageUrls") or []
    if not image_urls:
        raise ValueError(f"No image URL found for artwork {artwork_id}")
    image_url = image_urls[0]

    await store.update_by_artwork_id(
        artwork_id,
        image_url=image_url,
        title=artwork.get("title") or "",
        studio_name=artwork.get("studioName") or "",
    )

    ai_data = await inference.analyze_artwork(image_url, artwork)

    await store.update_by_artwork_id(
        artwork_id,
        status=AnalysisStatus.DONE,
        ai_data=ai_data.model_dump(mode="json", by_alias=True, exclude_none=True),
        error=None,
        analysis_date=datetime.now(timezone.utc),
    )
    return ai_data


async def _mark_failed(session_factory: SessionFactory, artwork_id: str, message: str) -> None:
    try:
        async with session_factory() as db:
            await AnalysisStore(db).update_by_artwork_id(
                artwork_id,
                status=AnalysisStatus.FAILED,
                error=message,
            )
    except AnalysisNotFoundError:
        logger.error(f"Cannot mark artwork {artwork_id} as failed: no analysis record")


async def find_matches(
    criteria: MatchCriteria,
    store: AnalysisStore,
    catalog: CatalogAgent,
    limit: Optional[int] = None,
) -> List[MatchResult]:
    """
    Score completed analyses against search criteria.

    Loads up to twice ``limit`` completed analyses, fetches their artworks
    from the catalog in one batch and returns the ``limit`` best matches.
    A catalog failure yields an empty result rather than an error.
    """
    if limit is None:
        limit = settings.search_result_limit
    analyses = await store.list_done(limit=limit * 2)

    artwork_ids = [a.artwork_id for a in analyses]
    try:
        artworks = await catalog.get_artworks(artwork_ids)
    except httpx.HTTPError as e:
        logger.error(f"Failed to fetch artworks from catalog: {str(e)}")
        artworks = []

    artworks_by_id = {a.get("objectID"): a for a in artworks}

    candidates: List[Tuple[ArtworkRecord, AIAnalysisData]] = []
    for analysis in analyses:
        raw_artwork = artworks_by_id.get(analysis.artwork_id)
        if raw_artwork is None:
            continue

        try:
            artwork = ArtworkRecord.model_validate(raw_artwork)
            ai_data = AIAnalysisData.model_validate(analysis.ai_data)
        except ValidationError as e:
            logger.warning(f"Skipping artwork {analysis.artwork_id} with invalid data: {str(e)}")
            continue

        candidates.append((artwork, ai_data))

    matches = rank_matches(criteria, candidates, limit)
    logger.info(f"Scored {len(candidates)} artworks, returning {len(matches)} matches")
    return matches
