from datetime import datetime
from typing import Optional, List, Literal
from pydantic import Field
from app.models.analysis import AnalysisStatus
from app.schemas.base import CamelModel

ColorTemperature = Literal["warm", "cool", "neutral"]
Level = Literal["low", "medium", "high"]


class BasicVisualProperties(CamelModel):
    dominant_colors: List[str]
    secondary_colors: List[str]
    color_temperature: ColorTemperature
    color_palette: List[str]


class TextureAnalysis(CamelModel):
    texture_type: str
    texture_description: str
    surface_quality: str


class StyleAndGenre(CamelModel):
    style: str
    genre: str
    movement: Optional[str] = None
    period: Optional[str] = None


class SubjectMatter(CamelModel):
    primary_subject: str
    secondary_subjects: List[str]
    themes: List[str]
    narrative: Optional[str] = None


class MediumAndTechnique(CamelModel):
    medium: str
    technique: str
    materials: Optional[List[str]] = None


class Composition(CamelModel):
    layout: str
    focal_point: str
    balance: str
    perspective: Optional[str] = None


class SpaceAndDisplay(CamelModel):
    recommended_room_types: List[str]
    recommended_wall_color: List[str]
    lighting_recommendations: List[str]
    size_recommendations: str


class PsychologicalImpact(CamelModel):
    mood: List[str]
    energy_level: Level
    emotional_tone: str


class MarketAnalysis(CamelModel):
    target_audience: List[str]
    price_range: Optional[str] = None
    collectibility: Level


class AIAnalysisData(CamelModel):
    """
    Structured metadata produced by the vision model for one artwork.

    Validating a provider payload with ``AIAnalysisData.model_validate`` is the
    gate between the AI response and persistence: missing sub-records or enum
    values outside their literals raise ``pydantic.ValidationError``.
    """
    basic_visual_properties: BasicVisualProperties
    texture_analysis: TextureAnalysis
    style_and_genre: StyleAndGenre
    subject_matter: SubjectMatter
    medium_and_technique: MediumAndTechnique
    composition: Composition
    space_and_display: SpaceAndDisplay
    psychological_impact: PsychologicalImpact
    market_analysis: MarketAnalysis
    tags: List[str]


class EnqueueAnalysisRequest(CamelModel):
    """Schema for enqueuing artworks for analysis."""
    artwork_ids: List[str] = Field(..., min_length=1)


class EnqueueAnalysisResponse(CamelModel):
    success: bool = True
    enqueued: int
    job_ids: List[str]


class AnalysisStats(CamelModel):
    """Counts of analysis records per status."""
    total: int
    pending: int
    processing: int
    done: int
    failed: int
    success_rate: float


class AnalysisResultResponse(CamelModel):
    """Schema for a stored analysis record."""
    id: str
    artwork_id: str
    status: AnalysisStatus
    analysis_date: datetime
    image_url: str
    title: str
    studio_name: str
    ai_data: Optional[dict] = None
    error: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AnalysisListResponse(CamelModel):
    """Schema for paginated analysis list response."""
    results: List[AnalysisResultResponse]
    total: int
    limit: int
    offset: int


class AnalysisExportItem(CamelModel):
    id: str
    artwork_id: str
    analysis_date: datetime
    image_url: str
    title: str
    studio_name: str
    ai_data: Optional[dict] = None

    model_config = {"from_attributes": True}
