"""
Habitat Builder — Recommendation & Validation Engine

Responsibilities:
  1. Care-level pre-filter (coarse allow-list by escalation set)
  2. Compatibility scoring of every surviving profile
  3. Removal of hard-excluded pairings
  4. Ranking by score, stable on catalog order
  5. Bucketing into perfect / good / possible matches
  6. Single-species validation (size, type, bioactive)
  7. Decision trace for explainability
"""
from __future__ import annotations
import logging
import time

from .catalog import AnimalCatalog
from .compatibility import evaluate_compatibility
from .models import (
    AnimalProfile, CARE_LEVEL_ESCALATION, CategorizedRecommendations,
    DecisionTrace, EnclosureSpecification, Recommendation,
    RecommendationSummary, RecommendResponse, ValidationReport,
)
from .normalize import resolve_profile
from .validation import (
    validate_bioactive, validate_enclosure_size, validate_enclosure_type,
)

logger = logging.getLogger(__name__)

PERFECT_MATCH_THRESHOLD = 80
GOOD_FIT_THRESHOLD = 60


# ============================================================
# Ranking
# ============================================================

def passes_care_level_filter(profile: AnimalProfile, spec: EnclosureSpecification) -> bool:
    """True when no preference was given or the profile's level is allowed by it."""
    if not spec.has_care_level_preference:
        return True
    return profile.care_level in CARE_LEVEL_ESCALATION[spec.care_level_preference]


def rank_animals(
    catalog: AnimalCatalog,
    spec: EnclosureSpecification,
) -> list[Recommendation]:
    """
    Score every eligible animal in the catalog and sort by score, highest first.

    Animals outside the care-level preference are skipped. Pairings the
    evaluator marks as excluded are dropped rather than listed at zero.
    Ties keep catalog order.
    """
    ranked, _ = _rank_with_counts(catalog, spec)
    return ranked


def _rank_with_counts(
    catalog: AnimalCatalog,
    spec: EnclosureSpecification,
) -> tuple[list[Recommendation], dict[str, int]]:
    counts = {'candidates': len(catalog), 'care_level_filtered': 0, 'excluded': 0}
    recommendations: list[Recommendation] = []

    for animal_id, profile in catalog.items():
        if not passes_care_level_filter(profile, spec):
            counts['care_level_filtered'] += 1
            continue

        result = evaluate_compatibility(resolve_profile(profile), spec)
        if result.excluded:
            counts['excluded'] += 1
            continue

        recommendations.append(Recommendation(
            animal_id=animal_id,
            profile=profile,
            result=result,
        ))

    recommendations.sort(key=lambda r: r.result.score, reverse=True)
    return recommendations, counts


# ============================================================
# Categorization
# ============================================================

def categorize_recommendations(
    recommendations: list[Recommendation],
) -> CategorizedRecommendations:
    """Split a ranked list into ≥80, 60–79 and <60 buckets, preserving order."""
    perfect, good, possible = [], [], []
    for rec in recommendations:
        score = rec.result.score
        if score >= PERFECT_MATCH_THRESHOLD:
            perfect.append(rec)
        elif score >= GOOD_FIT_THRESHOLD:
            good.append(rec)
        else:
            possible.append(rec)
    return CategorizedRecommendations(
        perfect_matches=tuple(perfect),
        good_fits=tuple(good),
        possible=tuple(possible),
    )


# ============================================================
# Engine
# ============================================================

class RecommendationEngine:
    """
    Entry point for the service layer. Orchestrates:
      care-level filter → scoring → exclusion → ranking → bucketing
    and single-species validation against the same catalog.
    """

    def __init__(self, catalog: AnimalCatalog):
        self.catalog = catalog

    def rank(self, spec: EnclosureSpecification) -> list[Recommendation]:
        return rank_animals(self.catalog, spec)

    def recommend(self, spec: EnclosureSpecification) -> RecommendResponse:
        """Rank and bucket the catalog for a specification, with a decision trace."""
        start = time.monotonic()
        trace: list[DecisionTrace] = []

        ranked, counts = _rank_with_counts(self.catalog, spec)

        trace.append(DecisionTrace(
            step='candidate_pool',
            detail=f"Initial candidate pool: {counts['candidates']} animals",
            animals_remaining=counts['candidates'],
        ))

        after_filter = counts['candidates'] - counts['care_level_filtered']
        if spec.has_care_level_preference:
            detail = (f"{counts['care_level_filtered']} outside the "
                      f"{spec.care_level_preference.value} care level preference")
        else:
            detail = 'No care level preference; all levels considered'
        trace.append(DecisionTrace(
            step='care_level_filter',
            detail=detail,
            animals_remaining=after_filter,
        ))

        trace.append(DecisionTrace(
            step='hard_exclusion',
            detail=f"{counts['excluded']} excluded by enclosure material, "
                   f"{len(ranked)} scored",
            animals_remaining=len(ranked),
        ))

        buckets = categorize_recommendations(ranked)
        trace.append(DecisionTrace(
            step='ranking',
            detail=f"{len(buckets.perfect_matches)} perfect matches, "
                   f"{len(buckets.good_fits)} good fits, "
                   f"{len(buckets.possible)} possible",
            animals_remaining=len(ranked),
        ))

        elapsed = int((time.monotonic() - start) * 1000)
        logger.info(
            f"Recommended {len(ranked)}/{counts['candidates']} animals for "
            f"{spec.width:g}x{spec.depth:g}x{spec.height:g}{spec.units.value} "
            f"{spec.type.value} in {elapsed}ms")

        return RecommendResponse(
            perfect_matches=[_to_summary(r) for r in buckets.perfect_matches],
            good_fits=[_to_summary(r) for r in buckets.good_fits],
            possible=[_to_summary(r) for r in buckets.possible],
            total=len(ranked),
            excluded_count=counts['excluded'],
            decision_trace=trace,
            response_time_ms=elapsed,
        )

    def validate(self, animal_id: str, spec: EnclosureSpecification) -> ValidationReport:
        """Run every validator for one species. Raises UnknownAnimalError."""
        profile = self.catalog.require(animal_id)
        rp = resolve_profile(profile)
        return ValidationReport(
            animal_id=animal_id,
            common_name=profile.common_name,
            size=validate_enclosure_size(rp, spec),
            type=validate_enclosure_type(rp, spec),
            bioactive=validate_bioactive(rp, spec),
            compatibility=evaluate_compatibility(rp, spec),
        )


def _to_summary(rec: Recommendation) -> RecommendationSummary:
    return RecommendationSummary(
        animal_id=rec.animal_id,
        common_name=rec.profile.common_name,
        scientific_name=rec.profile.scientific_name,
        care_level=rec.profile.care_level,
        score=rec.result.score,
        reasons=list(rec.result.reasons),
        warnings=list(rec.result.warnings),
    )
