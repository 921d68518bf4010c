"""Tests for the match scorer."""

import pytest
from app.agents.matcher import (
    SCORERS,
    calculate_match_score,
    color_score,
    determine_confidence,
    mood_score,
    psychological_score,
    rank_matches,
    size_score,
    style_score,
)
from app.schemas.analysis import AIAnalysisData
from app.schemas.artwork import ArtworkRecord
from app.schemas.search import MatchCriteria, RoomAnalysis, TextQueryCriteria
from conftest import build_analysis_payload, build_artwork_payload


def make_room(**overrides) -> RoomAnalysis:
    data = {
        "style": "modern",
        "colors": [{"name": "red", "hex": "#f00", "pct": 40}],
        "lighting": "natural",
        "roomSize": "large",
        "mood": "energetic",
        "suitableArtStyles": ["abstract"],
        "recommendedSizes": ["large"],
        "paletteTemperature": "warm",
    }
    data.update(overrides)
    return RoomAnalysis.model_validate(data)


def make_text(**overrides) -> TextQueryCriteria:
    data = {
        "styles": [],
        "colors": [],
        "mood": "",
        "size": "",
        "medium": "",
        "priceRange": {"min": 0, "max": 10000},
        "context": "office",
    }
    data.update(overrides)
    return TextQueryCriteria.model_validate(data)


class TestMatchScorer:
    """Test cases for calculate_match_score."""

    def setup_method(self):
        """Setup test fixtures."""
        self.build_analysis = build_analysis_payload
        self.artwork = ArtworkRecord.model_validate(build_artwork_payload())
        self.analysis = AIAnalysisData.model_validate(build_analysis_payload())

    def test_missing_analysis_short_circuits(self):
        """Test that a missing analysis yields zero regardless of criteria."""
        for criteria in [
            MatchCriteria(room_analysis=make_room()),
            MatchCriteria(text_criteria=make_text(styles=["abstract"])),
            MatchCriteria(room_analysis=make_room(), text_criteria=make_text()),
        ]:
            score, reasons = calculate_match_score(self.artwork, None, criteria)
            assert score == 0
            assert reasons == ["No analysis data available"]

    def test_scenario_full_room_match(self):
        """Test a perfect room match on every dimension."""
        criteria = MatchCriteria(room_analysis=make_room())

        score, reasons = calculate_match_score(self.artwork, self.analysis, criteria)

        assert score == 100.0
        assert determine_confidence(score) == "high"
        assert reasons == [
            "Abstract style matches your modern room",
            "warm tones complement your room's color palette",
            "Creates a energetic atmosphere matching your space",
        ]

    def test_scenario_all_fallbacks(self):
        """Test that nothing matching text criteria gives every fallback."""
        analysis = AIAnalysisData.model_validate(self.build_analysis(
            styleAndGenre={"style": "Realism", "genre": "Landscape"},
            basicVisualProperties={"dominantColors": ["green"], "colorTemperature": "cool"},
            psychologicalImpact={"mood": ["serene"], "energyLevel": "low"},
            spaceAndDisplay={"sizeRecommendations": "small"},
        ))
        criteria = MatchCriteria(text_criteria=make_text(
            styles=["pop art"], colors=["pink"], mood="playful", size="huge"
        ))

        score, reasons = calculate_match_score(self.artwork, analysis, criteria)

        assert score == 45.5
        assert determine_confidence(score) == "low"
        assert reasons == []

    def test_weights_sum_to_one(self):
        assert sum(weight for weight, _ in SCORERS) == pytest.approx(1.0)

    def test_evaluation_order(self):
        assert [scorer for _, scorer in SCORERS] == [
            style_score, color_score, mood_score, size_score, psychological_score
        ]

    def test_reasons_truncated_to_three(self):
        """Test that five reasons are cut to the first three in evaluation order."""
        criteria = MatchCriteria(room_analysis=make_room())
        score, reasons = calculate_match_score(self.artwork, self.analysis, criteria)
        assert len(reasons) == 3
        assert reasons[0].startswith("Abstract style")

    def test_idempotent(self):
        criteria = MatchCriteria(room_analysis=make_room(), text_criteria=make_text(colors=["blue"]))
        first = calculate_match_score(self.artwork, self.analysis, criteria)
        second = calculate_match_score(self.artwork, self.analysis, criteria)
        assert first == second

    def test_score_bounds(self):
        """Test that scores stay within 0 to 100 across criteria shapes."""
        criteria_options = [
            MatchCriteria(room_analysis=make_room()),
            MatchCriteria(room_analysis=make_room(mood="calm", paletteTemperature="cool", roomSize="small")),
            MatchCriteria(text_criteria=make_text()),
            MatchCriteria(room_analysis=make_room(), text_criteria=make_text(styles=["abstract"])),
        ]
        for criteria in criteria_options:
            score, reasons = calculate_match_score(self.artwork, self.analysis, criteria)
            assert 0 <= score <= 100
            assert 0 <= len(reasons) <= 3


class TestStyleScore:

    def setup_method(self):
        self.build_analysis = build_analysis_payload
        self.artwork = ArtworkRecord.model_validate(build_artwork_payload())
        self.analysis = AIAnalysisData.model_validate(build_analysis_payload())

    def test_room_match_is_case_insensitive(self):
        criteria = MatchCriteria(room_analysis=make_room(suitableArtStyles=["ABSTRACT"]))
        assert style_score(self.artwork, self.analysis, criteria).score == 1.0

    def test_room_match_on_genre(self):
        criteria = MatchCriteria(room_analysis=make_room(suitableArtStyles=["expressionism"]))
        assert style_score(self.artwork, self.analysis, criteria).score == 1.0

    def test_match_in_either_direction(self):
        """Test that a criterion containing the artwork style also matches."""
        criteria = MatchCriteria(room_analysis=make_room(suitableArtStyles=["abstract art"]))
        assert style_score(self.artwork, self.analysis, criteria).score == 1.0

    def test_room_takes_precedence_over_text(self):
        criteria = MatchCriteria(
            room_analysis=make_room(),
            text_criteria=make_text(styles=["abstract"]),
        )
        sub = style_score(self.artwork, self.analysis, criteria)
        assert sub.score == 1.0
        assert sub.reason == "Abstract style matches your modern room"

    def test_text_match_when_room_misses(self):
        criteria = MatchCriteria(
            room_analysis=make_room(suitableArtStyles=["baroque"]),
            text_criteria=make_text(styles=["Abstract", "minimal"]),
        )
        sub = style_score(self.artwork, self.analysis, criteria)
        assert sub.score == 0.9
        assert sub.reason == "Matches your Abstract style preference"

    def test_fallback(self):
        criteria = MatchCriteria(text_criteria=make_text(styles=["baroque"]))
        sub = style_score(self.artwork, self.analysis, criteria)
        assert sub.score == 0.3
        assert sub.reason is None

    def test_empty_strings_do_not_match(self):
        analysis = AIAnalysisData.model_validate(self.build_analysis(
            styleAndGenre={"style": "Realism", "genre": ""}
        ))
        criteria = MatchCriteria(room_analysis=make_room(suitableArtStyles=["baroque"]))
        assert style_score(self.artwork, analysis, criteria).score == 0.3


class TestColorScore:

    def setup_method(self):
        self.build_analysis = build_analysis_payload
        self.artwork = ArtworkRecord.model_validate(build_artwork_payload())
        self.analysis = AIAnalysisData.model_validate(build_analysis_payload())

    def test_temperature_and_color_match(self):
        criteria = MatchCriteria(room_analysis=make_room())
        sub = color_score(self.artwork, self.analysis, criteria)
        assert sub.score == 1.0
        assert sub.reason == "warm tones complement your room's color palette"

    def test_temperature_only(self):
        criteria = MatchCriteria(room_analysis=make_room(colors=[{"name": "teal", "hex": "#088", "pct": 60}]))
        sub = color_score(self.artwork, self.analysis, criteria)
        assert sub.score == 0.8
        assert sub.reason == "warm color temperature matches your room"

    def test_color_substring_match(self):
        criteria = MatchCriteria(room_analysis=make_room(colors=[{"name": "Dark Red", "hex": "#800", "pct": 60}]))
        assert color_score(self.artwork, self.analysis, criteria).score == 1.0

    def test_temperature_mismatch_falls_through_to_text(self):
        criteria = MatchCriteria(
            room_analysis=make_room(paletteTemperature="cool"),
            text_criteria=make_text(colors=["Orange", "blue"]),
        )
        sub = color_score(self.artwork, self.analysis, criteria)
        assert sub.score == 0.9
        assert sub.reason == "Features Orange tones you requested"

    def test_fallback(self):
        criteria = MatchCriteria(room_analysis=make_room(paletteTemperature="neutral"))
        sub = color_score(self.artwork, self.analysis, criteria)
        assert sub.score == 0.4
        assert sub.reason is None


class TestMoodScore:

    def setup_method(self):
        self.artwork = ArtworkRecord.model_validate(build_artwork_payload())
        self.analysis = AIAnalysisData.model_validate(build_analysis_payload(
            psychologicalImpact={"mood": ["Calm", "reflective"], "energyLevel": "low"}
        ))

    def test_room_mood_match(self):
        criteria = MatchCriteria(room_analysis=make_room(mood="Calming"))
        sub = mood_score(self.artwork, self.analysis, criteria)
        assert sub.score == 1.0
        assert sub.reason == "Creates a calming atmosphere matching your space"

    def test_text_mood_match(self):
        criteria = MatchCriteria(text_criteria=make_text(mood="Reflective"))
        sub = mood_score(self.artwork, self.analysis, criteria)
        assert sub.score == 0.9
        assert sub.reason == "Delivers the reflective mood you're looking for"

    def test_room_miss_falls_through_to_text(self):
        criteria = MatchCriteria(
            room_analysis=make_room(mood="festive"),
            text_criteria=make_text(mood="calm"),
        )
        assert mood_score(self.artwork, self.analysis, criteria).score == 0.9

    def test_empty_room_mood_does_not_match(self):
        criteria = MatchCriteria(room_analysis=make_room(mood=""))
        sub = mood_score(self.artwork, self.analysis, criteria)
        assert sub.score == 0.5
        assert sub.reason is None

    def test_empty_text_mood_is_ignored(self):
        criteria = MatchCriteria(text_criteria=make_text(mood=""))
        sub = mood_score(self.artwork, self.analysis, criteria)
        assert sub.score == 0.5
        assert sub.reason is None


class TestSizeScore:

    def setup_method(self):
        self.build_analysis = build_analysis_payload
        self.build_artwork = build_artwork_payload
        self.artwork = ArtworkRecord.model_validate(build_artwork_payload())
        self.analysis = AIAnalysisData.model_validate(build_analysis_payload(
            spaceAndDisplay={"sizeRecommendations": "statement piece"}
        ))

    def artwork_of(self, width, height):
        return ArtworkRecord.model_validate(
            self.build_artwork(dimensions={"widthCm": width, "heightCm": height})
        )

    def test_recommended_size_match(self):
        criteria = MatchCriteria(room_analysis=make_room(roomSize="medium", recommendedSizes=["Statement"]))
        sub = size_score(self.artwork, self.analysis, criteria)
        assert sub.score == 1.0
        assert sub.reason == "Perfect size for your medium room"

    def test_area_heuristics(self):
        """Test the room size and physical area pairs."""
        test_cases = [
            ("small", (60, 60), 0.9, "Compact size fits smaller spaces"),
            ("medium", (100, 50), 0.9, "Medium size balances your space"),
            ("medium", (100, 100), 0.9, "Medium size balances your space"),
            ("large", (150, 100), 0.9, "Large format makes a statement"),
            ("small", (100, 50), 0.6, None),
            ("medium", (150, 100), 0.6, None),
            ("large", (100, 100), 0.6, None),
        ]

        for room_size, (width, height), expected_score, expected_reason in test_cases:
            criteria = MatchCriteria(room_analysis=make_room(roomSize=room_size, recommendedSizes=["tiny"]))
            sub = size_score(self.artwork_of(width, height), self.analysis, criteria)
            assert sub.score == expected_score, f"Failed for {room_size} {width}x{height}"
            assert sub.reason == expected_reason

    def test_text_size_match_without_room(self):
        analysis = AIAnalysisData.model_validate(
            self.build_analysis(spaceAndDisplay={"sizeRecommendations": "Large format"})
        )
        criteria = MatchCriteria(text_criteria=make_text(size="LARGE"))
        sub = size_score(self.artwork, analysis, criteria)
        assert sub.score == 0.9
        assert sub.reason == "Matches your large size preference"

    def test_text_size_not_used_with_room(self):
        """Test that text size is only consulted when there is no room analysis."""
        criteria = MatchCriteria(
            room_analysis=make_room(roomSize="small", recommendedSizes=["tiny"]),
            text_criteria=make_text(size="statement"),
        )
        assert size_score(self.artwork, self.analysis, criteria).score == 0.6



class TestUnrecognizedRoomValues:
    """Room values outside the usual vocabulary take the fallback branches."""

    def setup_method(self):
        self.artwork = ArtworkRecord.model_validate(build_artwork_payload())
        self.analysis = AIAnalysisData.model_validate(build_analysis_payload())
        self.room = make_room(roomSize="Extra Large", paletteTemperature="Mixed", recommendedSizes=["tiny"])

    def test_color_falls_back(self):
        criteria = MatchCriteria(room_analysis=self.room)
        sub = color_score(self.artwork, self.analysis, criteria)
        assert sub.score == 0.4
        assert sub.reason is None

    def test_color_falls_through_to_text(self):
        criteria = MatchCriteria(room_analysis=self.room, text_criteria=make_text(colors=["orange"]))
        assert color_score(self.artwork, self.analysis, criteria).score == 0.9

    def test_size_falls_back(self):
        criteria = MatchCriteria(room_analysis=self.room)
        sub = size_score(self.artwork, self.analysis, criteria)
        assert sub.score == 0.6
        assert sub.reason is None

    def test_full_score_still_computed(self):
        criteria = MatchCriteria(room_analysis=self.room)
        score, reasons = calculate_match_score(self.artwork, self.analysis, criteria)
        assert 0 < score < 100
        assert reasons[0] == "Abstract style matches your modern room"


class TestPsychologicalScore:

    def setup_method(self):
        self.build_analysis = build_analysis_payload
        self.artwork = ArtworkRecord.model_validate(build_artwork_payload())

    def analysis_with_energy(self, energy):
        return AIAnalysisData.model_validate(
            self.build_analysis(psychologicalImpact={"energyLevel": energy})
        )

    def test_calm_room_low_energy(self):
        for mood in ["calm", "Peaceful retreat", "calming"]:
            criteria = MatchCriteria(room_analysis=make_room(mood=mood))
            sub = psychological_score(self.artwork, self.analysis_with_energy("low"), criteria)
            assert sub.score == 1.0
            assert sub.reason == "Low energy creates a serene atmosphere"

    def test_energetic_room_high_energy(self):
        criteria = MatchCriteria(room_analysis=make_room(mood="Vibrant"))
        sub = psychological_score(self.artwork, self.analysis_with_energy("high"), criteria)
        assert sub.score == 1.0
        assert sub.reason == "High energy adds vibrancy to your space"

    def test_mismatched_energy(self):
        criteria = MatchCriteria(room_analysis=make_room(mood="calm"))
        assert psychological_score(self.artwork, self.analysis_with_energy("high"), criteria).score == 0.7

    def test_text_only_uses_fallback(self):
        criteria = MatchCriteria(text_criteria=make_text(mood="calm"))
        sub = psychological_score(self.artwork, self.analysis_with_energy("low"), criteria)
        assert sub.score == 0.7
        assert sub.reason is None


class TestConfidence:

    def test_boundaries(self):
        """Test confidence tier boundaries."""
        test_cases = [
            (100, "high"),
            (75, "high"),
            (74.99, "medium"),
            (50, "medium"),
            (49.99, "low"),
            (0, "low"),
            (-5, "low"),
            (150, "high"),
        ]

        for score, expected in test_cases:
            assert determine_confidence(score) == expected, f"Failed for {score}"


class TestRankMatches:

    def setup_method(self):
        self.build_analysis = build_analysis_payload
        self.build_artwork = build_artwork_payload

    def candidate(self, artwork_id, style):
        artwork = ArtworkRecord.model_validate(self.build_artwork(objectID=artwork_id))
        analysis = AIAnalysisData.model_validate(
            self.build_analysis(styleAndGenre={"style": style, "genre": style})
        )
        return artwork, analysis

    def test_sorted_descending_and_stable(self):
        criteria = MatchCriteria(text_criteria=make_text(styles=["abstract"]))
        candidates = [
            self.candidate("a", "realism"),
            self.candidate("b", "abstract"),
            self.candidate("c", "realism"),
            self.candidate("d", "abstract"),
        ]

        results = rank_matches(criteria, candidates, limit=10)

        assert [r.artwork_id for r in results] == ["b", "d", "a", "c"]
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)

    def test_skips_missing_analysis_and_applies_limit(self):
        criteria = MatchCriteria(text_criteria=make_text(styles=["abstract"]))
        artwork, _ = self.candidate("x", "abstract")
        candidates = [
            (artwork, None),
            self.candidate("a", "realism"),
            self.candidate("b", "abstract"),
        ]

        results = rank_matches(criteria, candidates, limit=1)

        assert len(results) == 1
        assert results[0].artwork_id == "b"
        assert results[0].confidence == determine_confidence(results[0].score)
        assert results[0].analysis is not None

    def test_result_serializes_with_camel_case(self):
        criteria = MatchCriteria(text_criteria=make_text(styles=["abstract"]))
        result = rank_matches(criteria, [self.candidate("a", "abstract")], limit=5)[0]
        data = result.model_dump(by_alias=True)
        assert data["artworkId"] == "a"
        assert data["artwork"]["objectID"] == "a"
        assert "styleAndGenre" in data["analysis"]
