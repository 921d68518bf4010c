from app.agents.catalog import CatalogAgent
from app.agents.criteria import CriteriaAgent
from app.agents.inference import InferenceAgent
from app.agents.storage import AnalysisStore
from app.agents.matcher import calculate_match_score, determine_confidence, rank_matches

__all__ = [
    "CatalogAgent",
    "CriteriaAgent",
    "InferenceAgent",
    "AnalysisStore",
    "calculate_match_score",
    "determine_confidence",
    "rank_matches",
]
