"""Tests for ranking, bucketing and the engine facade."""

import pytest

from habitat_builder.catalog import AnimalCatalog, UnknownAnimalError
from habitat_builder.models import CompatibilityResult, Recommendation
from habitat_builder.recommendation_engine import (
    RecommendationEngine, categorize_recommendations, passes_care_level_filter,
    rank_animals,
)


def _ids(recommendations):
    return [r.animal_id for r in recommendations]


class TestRanking:

    def test_sorted_descending_with_stable_ties(self, mixed_catalog, make_spec):
        ranked = rank_animals(mixed_catalog, make_spec())

        assert _ids(ranked) == ["tree-frog", "gecko", "skink", "python", "axolotl"]
        assert [r.score for r in ranked] == [100, 100, 100, 65, 45]

    def test_excluded_pairings_are_dropped(self, mixed_catalog, make_spec):
        ranked = rank_animals(mixed_catalog, make_spec(type="screen"))

        assert "tree-frog" not in _ids(ranked)
        assert "axolotl" not in _ids(ranked)
        assert all(not r.result.excluded for r in ranked)

    def test_pvc_excludes_only_aquatic(self, mixed_catalog, make_spec):
        ranked = rank_animals(mixed_catalog, make_spec(type="pvc"))
        assert set(_ids(ranked)) == {"tree-frog", "gecko", "python", "skink"}

    @pytest.mark.parametrize("preference,expected", [
        ("beginner", {"tree-frog", "gecko"}),
        ("intermediate", {"tree-frog", "axolotl", "gecko", "skink"}),
        ("advanced", {"tree-frog", "axolotl", "gecko", "python", "skink"}),
        ("any", {"tree-frog", "axolotl", "gecko", "python", "skink"}),
    ])
    def test_care_level_escalation(self, mixed_catalog, make_spec, preference, expected):
        ranked = rank_animals(mixed_catalog, make_spec(care_level_preference=preference))
        assert set(_ids(ranked)) == expected

    def test_filter_helper(self, make_profile, make_spec):
        advanced = make_profile(care_level="advanced")
        assert passes_care_level_filter(advanced, make_spec())
        assert not passes_care_level_filter(advanced, make_spec(care_level_preference="intermediate"))

    def test_deterministic(self, bundled_catalog, make_spec):
        spec = make_spec(width=36, depth=18, height=18, bioactive=True)
        first = [r.model_dump() for r in rank_animals(bundled_catalog, spec)]
        second = [r.model_dump() for r in rank_animals(bundled_catalog, spec)]
        assert first == second

    def test_empty_catalog(self, make_spec):
        assert rank_animals(AnimalCatalog(), make_spec()) == []

    def test_zero_dimensions(self, mixed_catalog, make_spec):
        ranked = rank_animals(mixed_catalog, make_spec(width=0, depth=0, height=0))
        assert len(ranked) == 5
        assert all(any("Space may be tight" in w for w in r.result.warnings) for r in ranked)

    def test_small_screen_enclosure_has_no_amphibians(self, bundled_catalog, make_spec):
        spec = make_spec(width=12, depth=12, height=12, type="screen")
        for rec in rank_animals(bundled_catalog, spec):
            needs = rec.profile.equipment_needs
            assert not (needs and needs.animal_type == "amphibian")
            assert rec.profile.water_feature.value != "fully-aquatic"


class TestCategorize:

    def _recs(self, make_profile, scores):
        profile = make_profile()
        return [
            Recommendation(
                animal_id=f"animal-{i}",
                profile=profile,
                result=CompatibilityResult(score=score),
            )
            for i, score in enumerate(scores)
        ]

    def test_bucket_boundaries(self, make_profile):
        recs = self._recs(make_profile, [100, 85, 80, 79, 60, 59, 0])
        buckets = categorize_recommendations(recs)

        assert [r.score for r in buckets.perfect_matches] == [100, 85, 80]
        assert [r.score for r in buckets.good_fits] == [79, 60]
        assert [r.score for r in buckets.possible] == [59, 0]

    def test_partition_preserves_order(self, make_profile):
        recs = self._recs(make_profile, [90, 90, 70, 70, 10])
        buckets = categorize_recommendations(recs)
        merged = buckets.perfect_matches + buckets.good_fits + buckets.possible

        assert list(merged) == recs

    def test_empty(self):
        buckets = categorize_recommendations([])
        assert buckets.perfect_matches == buckets.good_fits == buckets.possible == ()


class TestEngine:

    def test_recommend(self, mixed_catalog, make_spec):
        response = RecommendationEngine(mixed_catalog).recommend(make_spec(type="screen"))

        assert response.total == 3
        assert response.excluded_count == 2
        assert [s.animal_id for s in response.perfect_matches] == ["gecko", "skink"]
        assert [s.animal_id for s in response.good_fits] == ["python"]
        assert response.possible == []
        assert [t.step for t in response.decision_trace] == [
            "candidate_pool", "care_level_filter", "hard_exclusion", "ranking",
        ]
        assert response.decision_trace[0].animals_remaining == 5
        assert response.decision_trace[-1].animals_remaining == 3

    def test_recommend_trace_counts_care_filter(self, mixed_catalog, make_spec):
        response = RecommendationEngine(mixed_catalog).recommend(
            make_spec(care_level_preference="beginner"))
        assert response.decision_trace[1].animals_remaining == 2
        assert "beginner" in response.decision_trace[1].detail

    def test_validate(self, mixed_catalog, make_spec):
        report = RecommendationEngine(mixed_catalog).validate(
            "tree-frog", make_spec(type="screen", width=24, depth=18, height=24))

        assert report.common_name == "Tree Frog"
        assert not report.type.compatible
        assert "INCOMPATIBLE" in report.type.warning
        assert report.compatibility.excluded
        assert any("height should exceed width" in w for w in report.size.warnings)

    def test_validate_unknown(self, mixed_catalog, make_spec):
        with pytest.raises(UnknownAnimalError):
            RecommendationEngine(mixed_catalog).validate("dragon", make_spec())
