"""
Habitat Builder — Profile Normalization

Resolves every optional field of an AnimalProfile before any scoring runs.
One rule applies throughout: an absent requirement is unconstrained.

  - no quantity rules         → no volume formula, no quantity cap
  - no thermal gradient       → the flat min/max range
  - no day humidity range     → 0 %
  - no layout rules           → no vertical preference, no required zones
  - no equipment needs        → no animal-type tag
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from .models import (
    AMPHIBIAN, AnimalProfile, CareLevel, NormalizedDimensions, QuantityRules,
    WaterFeature, normalize_minimum_size, to_fahrenheit,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedProfile:
    """Fully defaulted view of a profile. Temperatures in °F, lengths in inches."""
    profile: AnimalProfile
    min_size: NormalizedDimensions
    temp_min_f: float
    temp_max_f: float
    day_humidity_min: float
    water_feature: WaterFeature
    animal_type: Optional[str]
    prefer_vertical: bool
    required_zones: tuple[str, ...]
    quantity_rules: Optional[QuantityRules]
    max_recommended: Optional[int]

    @property
    def id(self) -> str:
        return self.profile.id

    @property
    def common_name(self) -> str:
        return self.profile.common_name

    @property
    def care_level(self) -> CareLevel:
        return self.profile.care_level

    @property
    def bioactive_compatible(self) -> bool:
        return self.profile.bioactive_compatible

    @property
    def is_amphibian(self) -> bool:
        return self.animal_type == AMPHIBIAN

    @property
    def is_fully_aquatic(self) -> bool:
        return self.water_feature == WaterFeature.FULLY_AQUATIC

    def required_gallons(self, quantity: int) -> Optional[float]:
        """Minimum volume for `quantity` animals, or None without quantity rules."""
        rules = self.quantity_rules
        if rules is None:
            return None
        return rules.base_gallons + (quantity - 1) * rules.additional_gallons_per_animal


def resolve_profile(profile: AnimalProfile) -> ResolvedProfile:
    temp = profile.care_targets.temperature
    low = temp.cool_side.min if temp.cool_side is not None else temp.min
    high = temp.warm_side.max if temp.warm_side is not None else temp.max

    day = profile.care_targets.humidity.day
    layout = profile.layout_rules
    needs = profile.equipment_needs
    rules = profile.quantity_rules

    animal_type = needs.animal_type.strip().lower() if needs and needs.animal_type else None

    return ResolvedProfile(
        profile=profile,
        min_size=normalize_minimum_size(profile),
        temp_min_f=to_fahrenheit(low, temp.unit),
        temp_max_f=to_fahrenheit(high, temp.unit),
        day_humidity_min=day.min if day is not None else 0.0,
        water_feature=profile.water_feature,
        animal_type=animal_type,
        prefer_vertical=layout.prefer_vertical if layout else False,
        required_zones=layout.required_zones if layout else (),
        quantity_rules=rules,
        max_recommended=rules.max_recommended if rules else None,
    )
