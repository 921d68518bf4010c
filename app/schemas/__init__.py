from app.schemas.artwork import ArtworkRecord, ArtworkSearchQuery, ArtworkSearchResponse
from app.schemas.analysis import (
    AIAnalysisData,
    AnalysisStats,
    AnalysisResultResponse,
    AnalysisListResponse,
    EnqueueAnalysisRequest,
    EnqueueAnalysisResponse,
)
from app.schemas.search import (
    RoomAnalysis,
    TextQueryCriteria,
    MatchCriteria,
    MatchResult,
    SearchResponse,
    TextSearchResponse,
    ImageSearchResponse,
    CombinedSearchResponse,
)

__all__ = [
    "ArtworkRecord",
    "ArtworkSearchQuery",
    "ArtworkSearchResponse",
    "AIAnalysisData",
    "AnalysisStats",
    "AnalysisResultResponse",
    "AnalysisListResponse",
    "EnqueueAnalysisRequest",
    "EnqueueAnalysisResponse",
    "RoomAnalysis",
    "TextQueryCriteria",
    "MatchCriteria",
    "MatchResult",
    "SearchResponse",
    "TextSearchResponse",
    "ImageSearchResponse",
    "CombinedSearchResponse",
]
