from app.models.base import Base
from app.models.analysis import ArtworkAnalysis, AnalysisStatus

__all__ = [
    "Base",
    "ArtworkAnalysis",
    "AnalysisStatus",
]
