from typing import Optional, List
from pydantic import Field
from app.schemas.base import CamelModel


class ArtworkDimensions(CamelModel):
    """Physical size of an artwork in centimeters."""
    width_cm: float
    height_cm: float

    @property
    def area_m2(self) -> float:
        return (self.width_cm * self.height_cm) / 10000


class ArtworkRecord(CamelModel):
    """Catalog entry as stored in the search index."""
    object_id: str = Field(..., alias="objectID")
    title: str
    studio_name: str
    image_urls: List[str] = Field(default_factory=list)
    price: float
    currency: str
    dimensions: ArtworkDimensions
    techniques: List[str] = Field(default_factory=list)
    year: Optional[int] = None
    info_text: Optional[str] = None
    status: str


class ArtworkSearchQuery(CamelModel):
    """Query parameters for a catalog search."""
    q: Optional[str] = None
    artist: Optional[str] = None
    availability: Optional[str] = None
    technique: Optional[str] = None
    page: int = Field(1, ge=1)
    hits_per_page: int = Field(20, ge=1, le=100)


class ArtworkSearchResponse(CamelModel):
    """Paginated catalog search response, with 1-based pages."""
    hits: List[dict]
    nb_hits: int
    page: int
    nb_pages: int
    hits_per_page: int
