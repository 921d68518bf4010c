from typing import Optional, List, Literal
from pydantic import Field, field_validator, model_validator
from app.schemas.analysis import AIAnalysisData
from app.schemas.artwork import ArtworkRecord
from app.schemas.base import CamelModel

Confidence = Literal["low", "medium", "high"]


class RoomColor(CamelModel):
    """One color detected in a room photo."""
    name: str
    hex: str = ""
    pct: float = 0


class RoomAnalysis(CamelModel):
    """Room characteristics extracted from a photo by the vision model.

    Room size and palette temperature are normally small/medium/large and
    warm/cool/neutral. Other values are kept so scoring falls back instead
    of rejecting the whole room.
    """
    style: str
    colors: List[RoomColor] = Field(default_factory=list)
    lighting: str = ""
    room_size: str
    mood: str = ""
    suitable_art_styles: List[str] = Field(default_factory=list)
    recommended_sizes: List[str] = Field(default_factory=list)
    palette_temperature: str

    @field_validator("room_size", "palette_temperature", mode="before")
    @classmethod
    def normalize_case(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class PriceRange(CamelModel):
    min: Optional[float] = None
    max: Optional[float] = None


class TextQueryCriteria(CamelModel):
    """Search criteria extracted from a free-text query."""
    styles: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
    mood: str = ""
    size: str = ""
    medium: str = ""
    price_range: Optional[PriceRange] = None
    context: str = ""


class MatchCriteria(CamelModel):
    """Search context for one scoring pass: a room analysis, text criteria, or both."""
    room_analysis: Optional[RoomAnalysis] = None
    text_criteria: Optional[TextQueryCriteria] = None

    @model_validator(mode="after")
    def require_one(self):
        if self.room_analysis is None and self.text_criteria is None:
            raise ValueError("Either room analysis or text criteria must be provided")
        return self


class MatchResult(CamelModel):
    """Score of one artwork against one set of criteria."""
    artwork_id: str
    score: float
    reasons: List[str] = Field(default_factory=list, max_length=3)
    confidence: Confidence
    artwork: ArtworkRecord
    analysis: Optional[AIAnalysisData] = None


class TextSearchRequest(CamelModel):
    query: str = Field(..., min_length=1)


class ImageSearchRequest(CamelModel):
    image_url: Optional[str] = None
    image_base64: Optional[str] = None


class CombinedSearchRequest(CamelModel):
    query: Optional[str] = None
    image_url: Optional[str] = None
    image_base64: Optional[str] = None


class SearchResponse(CamelModel):
    """Ranked search results."""
    success: bool = True
    results: List[MatchResult]
    count: int


class TextSearchResponse(SearchResponse):
    criteria: TextQueryCriteria


class ImageSearchResponse(SearchResponse):
    room_analysis: RoomAnalysis


class CombinedSearchResponse(SearchResponse):
    criteria: MatchCriteria
