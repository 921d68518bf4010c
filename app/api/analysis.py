from typing import Callable, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from app.agents.storage import AnalysisStore
from app.api.deps import get_analysis_store, get_job_queue
from app.models.analysis import AnalysisStatus
from app.schemas.analysis import (
    AnalysisExportItem,
    AnalysisListResponse,
    AnalysisResultResponse,
    AnalysisStats,
    EnqueueAnalysisRequest,
    EnqueueAnalysisResponse,
)
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/enqueue", response_model=EnqueueAnalysisResponse)
async def enqueue_analyses(
    request: EnqueueAnalysisRequest,
    store: AnalysisStore = Depends(get_analysis_store),
    enqueue: Callable[[str], str] = Depends(get_job_queue)
):
    """
    Queue artworks for AI analysis.
    Artworks whose analysis is already done are skipped.
    """
    job_ids = []

    for artwork_id in request.artwork_ids:
        existing = await store.get_by_artwork_id(artwork_id)
        if existing and existing.status == AnalysisStatus.DONE:
            continue

        await store.upsert_pending(artwork_id)
        job_ids.append(enqueue(artwork_id))

    logger.info(f"Enqueued {len(job_ids)} of {len(request.artwork_ids)} artworks for analysis")

    return EnqueueAnalysisResponse(enqueued=len(job_ids), job_ids=job_ids)


@router.get("/status", response_model=AnalysisStats)
async def get_analysis_status(
    store: AnalysisStore = Depends(get_analysis_store)
):
    """
    Get analysis counts per status.
    """
    return await store.stats()


@router.get("/export")
async def export_analyses(
    store: AnalysisStore = Depends(get_analysis_store)
):
    """
    Download all completed analyses as a JSON file.
    """
    analyses = await store.list_done()
    export_data = [
        AnalysisExportItem.model_validate(a).model_dump(by_alias=True)
        for a in analyses
    ]

    return JSONResponse(
        content=jsonable_encoder(export_data),
        headers={"Content-Disposition": "attachment; filename=artwork-analyses.json"}
    )


@router.get("/artwork/{artwork_id}", response_model=AnalysisResultResponse)
async def get_analysis_by_artwork(
    artwork_id: str,
    store: AnalysisStore = Depends(get_analysis_store)
):
    """
    Get the analysis for an artwork by its catalog ID.
    """
    analysis = await store.get_by_artwork_id(artwork_id)
    if not analysis:
        raise HTTPException(status_code=404, detail="Analysis not found")

    return AnalysisResultResponse.model_validate(analysis)


@router.post("/retry/{analysis_id}")
async def retry_analysis(
    analysis_id: str,
    store: AnalysisStore = Depends(get_analysis_store),
    enqueue: Callable[[str], str] = Depends(get_job_queue)
):
    """
    Reset an analysis to pending and queue it again.
    """
    analysis = await store.get_by_id(analysis_id)
    if not analysis:
        raise HTTPException(status_code=404, detail="Analysis not found")

    await store.reset_to_pending(analysis)
    enqueue(analysis.artwork_id)

    logger.info(f"Retrying analysis {analysis_id} for artwork {analysis.artwork_id}")
    return {"success": True}


@router.get("", response_model=AnalysisListResponse)
async def list_analyses(
    status: Optional[AnalysisStatus] = Query(None, description="Filter by status"),
    limit: int = Query(50, ge=1, le=500, description="Number of items to return"),
    offset: int = Query(0, ge=0, description="Number of items to skip"),
    store: AnalysisStore = Depends(get_analysis_store)
):
    """
    Get a paginated list of analyses, newest first.
    """
    analyses, total = await store.list_analyses(status=status, limit=limit, offset=offset)

    return AnalysisListResponse(
        results=[AnalysisResultResponse.model_validate(a) for a in analyses],
        total=total,
        limit=limit,
        offset=offset
    )


@router.get("/{analysis_id}", response_model=AnalysisResultResponse)
async def get_analysis(
    analysis_id: str,
    store: AnalysisStore = Depends(get_analysis_store)
):
    """
    Get a single analysis by its ID.
    """
    analysis = await store.get_by_id(analysis_id)
    if not analysis:
        raise HTTPException(status_code=404, detail="Analysis not found")

    return AnalysisResultResponse.model_validate(analysis)
