"""
Match scoring between catalog artworks and a search context.

An artwork's AI analysis is compared against a room analysis and/or text
criteria along five dimensions. Each dimension yields a sub-score in [0, 1]
and optionally one human-readable reason:

    style (0.25), color (0.30), mood (0.20), size (0.15), psychological (0.10)

The weighted sum is scaled to 0-100 and rounded to two decimals. Reasons are
kept in evaluation order and truncated to the first three, so the order of
SCORERS matters.
"""

import logging
from typing import Callable, Iterable, List, NamedTuple, Optional, Tuple
from app.schemas.analysis import AIAnalysisData
from app.schemas.artwork import ArtworkRecord
from app.schemas.search import MatchCriteria, MatchResult, Confidence

logger = logging.getLogger(__name__)

NO_ANALYSIS_REASON = "No analysis data available"
MAX_REASONS = 3


class SubScore(NamedTuple):
    """Partial score for one dimension."""
    score: float
    reason: Optional[str] = None


def _matches_either_way(a: str, b: str) -> bool:
    """Containment in either direction. Empty strings never match."""
    if not a or not b:
        return False
    return a in b or b in a


def _any_match(candidates: Iterable[str], targets: Iterable[str]) -> bool:
    targets = list(targets)
    return any(_matches_either_way(c, t) for c in candidates for t in targets)


def style_score(artwork: ArtworkRecord, analysis: AIAnalysisData, criteria: MatchCriteria) -> SubScore:
    artwork_styles = [
        analysis.style_and_genre.style.lower(),
        analysis.style_and_genre.genre.lower(),
    ]

    room = criteria.room_analysis
    if room:
        room_styles = [s.lower() for s in room.suitable_art_styles]
        if _any_match(artwork_styles, room_styles):
            return SubScore(1.0, f"{analysis.style_and_genre.style} style matches your {room.style} room")

    text = criteria.text_criteria
    if text and text.styles:
        if _any_match(artwork_styles, [s.lower() for s in text.styles]):
            return SubScore(0.9, f"Matches your {text.styles[0]} style preference")

    return SubScore(0.3)


def color_score(artwork: ArtworkRecord, analysis: AIAnalysisData, criteria: MatchCriteria) -> SubScore:
    artwork_colors = [c.lower() for c in analysis.basic_visual_properties.dominant_colors]
    artwork_temp = analysis.basic_visual_properties.color_temperature

    room = criteria.room_analysis
    if room and artwork_temp == room.palette_temperature:
        room_colors = [c.name.lower() for c in room.colors]
        if _any_match(artwork_colors, room_colors):
            return SubScore(1.0, f"{artwork_temp} tones complement your room's color palette")
        return SubScore(0.8, f"{artwork_temp} color temperature matches your room")

    text = criteria.text_criteria
    if text and text.colors:
        query_colors = [c.lower() for c in text.colors]
        if _any_match(artwork_colors, query_colors):
            return SubScore(0.9, f"Features {text.colors[0]} tones you requested")

    return SubScore(0.4)


def mood_score(artwork: ArtworkRecord, analysis: AIAnalysisData, criteria: MatchCriteria) -> SubScore:
    artwork_moods = [m.lower() for m in analysis.psychological_impact.mood]

    room = criteria.room_analysis
    if room:
        room_mood = room.mood.lower()
        if _any_match(artwork_moods, [room_mood]):
            return SubScore(1.0, f"Creates a {room_mood} atmosphere matching your space")

    text = criteria.text_criteria
    if text and text.mood:
        query_mood = text.mood.lower()
        if _any_match(artwork_moods, [query_mood]):
            return SubScore(0.9, f"Delivers the {query_mood} mood you're looking for")

    return SubScore(0.5)


def size_score(artwork: ArtworkRecord, analysis: AIAnalysisData, criteria: MatchCriteria) -> SubScore:
    artwork_size = analysis.space_and_display.size_recommendations.lower()
    area = artwork.dimensions.area_m2

    room = criteria.room_analysis
    if room:
        recommended = [s.lower() for s in room.recommended_sizes]
        if _any_match([artwork_size], recommended):
            return SubScore(1.0, f"Perfect size for your {room.room_size} room")

        if room.room_size == "small" and area < 0.5:
            return SubScore(0.9, "Compact size fits smaller spaces")
        if room.room_size == "medium" and 0.5 <= area < 1.5:
            return SubScore(0.9, "Medium size balances your space")
        if room.room_size == "large" and area >= 1.5:
            return SubScore(0.9, "Large format makes a statement")
        return SubScore(0.6)

    text = criteria.text_criteria
    if text and text.size:
        query_size = text.size.lower()
        if _matches_either_way(artwork_size, query_size):
            return SubScore(0.9, f"Matches your {query_size} size preference")

    return SubScore(0.6)


def psychological_score(artwork: ArtworkRecord, analysis: AIAnalysisData, criteria: MatchCriteria) -> SubScore:
    energy = analysis.psychological_impact.energy_level

    room = criteria.room_analysis
    if room:
        room_mood = room.mood.lower()
        is_calming = "calm" in room_mood or "peaceful" in room_mood
        is_energetic = "energetic" in room_mood or "vibrant" in room_mood

        if is_calming and energy == "low":
            return SubScore(1.0, "Low energy creates a serene atmosphere")
        if is_energetic and energy == "high":
            return SubScore(1.0, "High energy adds vibrancy to your space")

    return SubScore(0.7)


Scorer = Callable[[ArtworkRecord, AIAnalysisData, MatchCriteria], SubScore]

SCORERS: Tuple[Tuple[float, Scorer], ...] = (
    (0.25, style_score),
    (0.30, color_score),
    (0.20, mood_score),
    (0.15, size_score),
    (0.10, psychological_score),
)


def calculate_match_score(
    artwork: ArtworkRecord,
    analysis: Optional[AIAnalysisData],
    criteria: MatchCriteria
) -> Tuple[float, List[str]]:
    """
    Score an artwork against search criteria.

    Args:
        artwork: Catalog record (used for physical dimensions)
        analysis: AI analysis of the artwork, or None if not analyzed
        criteria: Room analysis and/or text criteria

    Returns:
        Tuple of (score from 0 to 100 with two decimals, up to three reasons)
    """
    if analysis is None:
        return 0.0, [NO_ANALYSIS_REASON]

    total = 0.0
    reasons: List[str] = []

    for weight, scorer in SCORERS:
        sub = scorer(artwork, analysis, criteria)
        total += sub.score * weight
        if sub.reason:
            reasons.append(sub.reason)

    return round(total * 100, 2), reasons[:MAX_REASONS]


def determine_confidence(score: float) -> Confidence:
    """Bucket a 0-100 score into a confidence tier."""
    if score >= 75:
        return "high"
    if score >= 50:
        return "medium"
    return "low"


def build_match_result(
    artwork: ArtworkRecord,
    analysis: Optional[AIAnalysisData],
    criteria: MatchCriteria
) -> MatchResult:
    score, reasons = calculate_match_score(artwork, analysis, criteria)
    return MatchResult(
        artwork_id=artwork.object_id,
        score=score,
        reasons=reasons,
        confidence=determine_confidence(score),
        artwork=artwork,
        analysis=analysis,
    )


def rank_matches(
    criteria: MatchCriteria,
    candidates: Iterable[Tuple[ArtworkRecord, Optional[AIAnalysisData]]],
    limit: int
) -> List[MatchResult]:
    """
    Score every analyzed candidate and return the best ``limit`` results.

    Candidates without analysis are skipped. The sort is stable, so equal
    scores keep their input order.
    """
    results = [
        build_match_result(artwork, analysis, criteria)
        for artwork, analysis in candidates
        if analysis is not None
    ]
    results.sort(key=lambda r: r.score, reverse=True)
    logger.debug(f"Ranked {len(results)} candidates, returning top {limit}")
    return results[:limit]
