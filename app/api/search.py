from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from app.agents.catalog import CatalogAgent
from app.agents.criteria import CriteriaAgent
from app.agents.orchestrator import find_matches
from app.agents.storage import AnalysisStore
from app.api.deps import get_analysis_store, get_catalog, get_criteria_agent
from app.schemas.search import (
    CombinedSearchRequest,
    CombinedSearchResponse,
    ImageSearchRequest,
    ImageSearchResponse,
    MatchCriteria,
    TextSearchRequest,
    TextSearchResponse,
)
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@router.post("/text", response_model=TextSearchResponse)
async def text_search(
    request: TextSearchRequest,
    criteria_agent: CriteriaAgent = Depends(get_criteria_agent),
    store: AnalysisStore = Depends(get_analysis_store),
    catalog: CatalogAgent = Depends(get_catalog)
):
    """
    Rank analyzed artworks against criteria extracted from a text query.
    """
    try:
        text_criteria = await criteria_agent.analyze_text_query(request.query)
        matches = await find_matches(MatchCriteria(text_criteria=text_criteria), store, catalog)
    except Exception as e:
        logger.error(f"Text search failed: {str(e)}")
        return _error(500, str(e) or "Failed to process text search")

    return TextSearchResponse(criteria=text_criteria, results=matches, count=len(matches))


@router.post("/image", response_model=ImageSearchResponse)
async def image_search(
    request: ImageSearchRequest,
    criteria_agent: CriteriaAgent = Depends(get_criteria_agent),
    store: AnalysisStore = Depends(get_analysis_store),
    catalog: CatalogAgent = Depends(get_catalog)
):
    """
    Rank analyzed artworks against an analysis of a room photo.
    """
    if not request.image_url and not request.image_base64:
        return _error(400, "Either imageUrl or imageBase64 must be provided")

    try:
        room_analysis = await criteria_agent.analyze_room_image(request.image_url, request.image_base64)
        matches = await find_matches(MatchCriteria(room_analysis=room_analysis), store, catalog)
    except Exception as e:
        logger.error(f"Image search failed: {str(e)}")
        return _error(500, str(e) or "Failed to process image search")

    return ImageSearchResponse(room_analysis=room_analysis, results=matches, count=len(matches))


@router.post("/combined", response_model=CombinedSearchResponse)
async def combined_search(
    request: CombinedSearchRequest,
    criteria_agent: CriteriaAgent = Depends(get_criteria_agent),
    store: AnalysisStore = Depends(get_analysis_store),
    catalog: CatalogAgent = Depends(get_catalog)
):
    """
    Rank analyzed artworks against a room photo and a text query together.
    Either may be omitted, but not both.
    """
    has_image = bool(request.image_url or request.image_base64)
    if not has_image and not request.query:
        return _error(400, "Either query or image must be provided")

    try:
        room_analysis = None
        text_criteria = None
        if has_image:
            room_analysis = await criteria_agent.analyze_room_image(request.image_url, request.image_base64)
        if request.query:
            text_criteria = await criteria_agent.analyze_text_query(request.query)

        criteria = MatchCriteria(room_analysis=room_analysis, text_criteria=text_criteria)
        matches = await find_matches(criteria, store, catalog)
    except Exception as e:
        logger.error(f"Combined search failed: {str(e)}")
        return _error(500, str(e) or "Failed to process combined search")

    return CombinedSearchResponse(criteria=criteria, results=matches, count=len(matches))
