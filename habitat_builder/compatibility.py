"""
Habitat Builder — Compatibility Evaluator

Scores one animal profile against one enclosure specification.

  Phase 1: hard exclusions (score 0, single warning, evaluation stops)
  Phase 2: independent soft adjustments, each recording a reason or a warning
  Phase 3: clamp to [0, 100]
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Optional, Union

from .models import (
    AnimalProfile, CareLevel, CareLevelPreference, CompatibilityResult,
    EnclosureSpecification, EnclosureType, PASSIVE_HUMIDITY_CONTROL,
    format_length, normalize_enclosure, to_fahrenheit,
)
from .normalize import ResolvedProfile, resolve_profile

logger = logging.getLogger(__name__)

BASE_SCORE = 100
MIN_SCORE = 0
MAX_SCORE = 100

# Humidity thresholds (%)
SCREEN_HUMIDITY_LIMIT = 60
PASSIVE_HUMIDITY_LIMIT = 60
ACTIVE_HUMIDITY_FLOOR = 40

# Ambient tolerance (°F) before active cooling / heating is needed
COOLING_TOLERANCE_F = 2
HEATING_TOLERANCE_F = 5


@dataclass
class ScoringPenalties:
    """Score adjustments applied by the evaluator."""
    screen_humidity: int = 50
    undersized: int = 30
    humidity_unachievable: int = 20
    needs_cooling: int = 25
    needs_heating: int = 20
    bioactive_mismatch: int = 15
    over_quantity: int = 30
    beginner_bonus: int = 5
    advanced_penalty: int = 5
    preference_match: int = 10
    preference_mismatch: int = 15


DEFAULT_PENALTIES = ScoringPenalties()


@dataclass
class _Scorecard:
    score: int = BASE_SCORE
    reasons: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def credit(self, reason: str, points: int = 0) -> None:
        self.score += points
        self.reasons.append(reason)

    def debit(self, warning: str, points: int = 0) -> None:
        self.score -= points
        self.warnings.append(warning)

    def freeze(self) -> CompatibilityResult:
        return CompatibilityResult(
            score=max(MIN_SCORE, min(MAX_SCORE, self.score)),
            reasons=tuple(self.reasons),
            warnings=tuple(self.warnings),
        )


# ============================================================
# Hard Exclusions
# ============================================================

def hard_exclusion(
    profile: Union[AnimalProfile, ResolvedProfile],
    spec: EnclosureSpecification,
) -> Optional[str]:
    """
    Return the reason a pairing is impossible, or None.
    These are the only rules that remove an animal from recommendations.
    """
    rp = _resolved(profile)
    if rp.is_fully_aquatic and spec.type != EnclosureType.GLASS:
        return (f"{rp.common_name} is fully aquatic and needs a glass tank; "
                f"{spec.type.value} enclosures cannot hold water")
    if spec.type == EnclosureType.SCREEN and rp.is_amphibian:
        return (f"Screen enclosures cannot hold the humidity {rp.common_name} "
                f"needs; amphibians require glass or PVC")
    return None


# ============================================================
# Evaluator
# ============================================================

def evaluate_compatibility(
    profile: Union[AnimalProfile, ResolvedProfile],
    spec: EnclosureSpecification,
    penalties: ScoringPenalties = DEFAULT_PENALTIES,
) -> CompatibilityResult:
    """
    Score a single profile against an enclosure specification.
    Never raises for a valid specification; always returns a score in [0, 100].
    """
    rp = _resolved(profile)

    # ----------------------------------------------------------
    # Phase 1: Hard Exclusions
    # ----------------------------------------------------------
    reason = hard_exclusion(rp, spec)
    if reason:
        logger.debug(f"Excluded {rp.id}: {reason}")
        return CompatibilityResult(score=0, warnings=(reason,), excluded=True)

    # ----------------------------------------------------------
    # Phase 2: Soft Scoring
    # ----------------------------------------------------------
    card = _Scorecard()
    _score_material(card, rp, spec, penalties)
    _score_space(card, rp, spec, penalties)
    _score_humidity(card, rp, spec, penalties)
    _score_temperature(card, rp, spec, penalties)
    _score_bioactive(card, rp, spec, penalties)
    _score_quantity(card, rp, spec, penalties)
    _score_care_level(card, rp, spec, penalties)

    # ----------------------------------------------------------
    # Phase 3: Clamp
    # ----------------------------------------------------------
    result = card.freeze()
    logger.debug(f"Scored {rp.id}: raw={card.score} final={result.score}")
    return result


def _resolved(profile: Union[AnimalProfile, ResolvedProfile]) -> ResolvedProfile:
    if isinstance(profile, ResolvedProfile):
        return profile
    return resolve_profile(profile)


def _score_material(card, rp, spec, p):
    # Soft penalty only; the amphibian screen rule is in hard_exclusion
    if spec.type == EnclosureType.SCREEN and rp.day_humidity_min > SCREEN_HUMIDITY_LIMIT:
        card.debit(
            f"Screen enclosures struggle to hold the {rp.day_humidity_min:g}%+ "
            f"humidity {rp.common_name} needs",
            p.screen_humidity)
    else:
        card.credit(f"Compatible with {spec.type.value} enclosures")


def _score_space(card, rp, spec, p):
    dims = normalize_enclosure(spec)
    minimum = rp.min_size
    raw = rp.profile.min_enclosure_size
    if (dims.width < minimum.width
            or dims.depth < minimum.depth
            or dims.height < minimum.height):
        card.debit(
            f"Space may be tight (minimum recommended: "
            f"{format_length(raw.width, raw.units)} × "
            f"{format_length(raw.depth, raw.units)} × "
            f"{format_length(raw.height, raw.units)})",
            p.undersized)
    else:
        card.credit("Fits minimum space requirements")


def _score_humidity(card, rp, spec, p):
    needed = rp.day_humidity_min
    if spec.humidity_control in PASSIVE_HUMIDITY_CONTROL:
        if needed > PASSIVE_HUMIDITY_LIMIT:
            card.debit(
                f"{rp.common_name} needs {needed:g}%+ humidity "
                f"(you selected {spec.humidity_control.value} humidity control)",
                p.humidity_unachievable)
    elif needed > ACTIVE_HUMIDITY_FLOOR:
        card.credit(f"Your humidity setup supports {rp.common_name}'s needs")


def _score_temperature(card, rp, spec, p):
    ambient = to_fahrenheit(spec.ambient_temp, spec.temperature_unit)
    if ambient > rp.temp_max_f + COOLING_TOLERANCE_F:
        card.debit(
            f"{rp.common_name} needs temperatures at or below "
            f"{rp.temp_max_f:g}°F - your room is too warm without active cooling",
            p.needs_cooling)
    elif ambient < rp.temp_min_f - HEATING_TOLERANCE_F:
        card.debit(
            f"{rp.common_name} needs at least {rp.temp_min_f:g}°F - "
            f"expect significant heating in your room",
            p.needs_heating)
    else:
        card.credit("Temperature requirements are achievable")


def _score_bioactive(card, rp, spec, p):
    if not spec.bioactive:
        return
    if rp.bioactive_compatible:
        card.credit("Excellent bioactive setup candidate")
    else:
        card.debit("Bioactive setups not recommended for this species",
                   p.bioactive_mismatch)


def _score_quantity(card, rp, spec, p):
    cap = rp.max_recommended
    if cap is not None and spec.quantity > cap:
        card.debit(
            f"Can only house {cap} together (you want {spec.quantity})",
            p.over_quantity)
    elif spec.quantity == 1:
        card.credit("Single animal - compatible")


def _score_care_level(card, rp, spec, p):
    level = rp.care_level
    explicit = spec.has_care_level_preference

    if level == CareLevel.BEGINNER:
        card.credit("Great for beginners", 0 if explicit else p.beginner_bonus)
    elif level == CareLevel.ADVANCED:
        card.debit("This species requires experience",
                   0 if explicit else p.advanced_penalty)

    if not explicit:
        return

    pref = spec.care_level_preference
    if level.value == pref.value:
        card.credit(f"Matches your {pref.value} care level preference",
                    p.preference_match)
    elif pref == CareLevelPreference.BEGINNER:
        card.debit(f"This is a {level.value}-level animal (you selected beginner)",
                   p.preference_mismatch)
