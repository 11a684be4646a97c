"""
Habitat Builder — Enclosure Validators

Checks run once the user has committed to a species:
  1. Size      — per-axis minimums, quantity-based volume, advisory layout notes
  2. Type      — enclosure material vs. animal type and behaviour
  3. Bioactive — substrate configuration vs. species tolerance
"""
from __future__ import annotations
import logging
from typing import Union

from .models import (
    AnimalProfile, BioactiveValidation, EnclosureSpecification, EnclosureType,
    SizeSuggestions, SizeValidation, TypeValidation,
    calculate_gallons, format_length, normalize_enclosure,
)
from .normalize import ResolvedProfile, resolve_profile

logger = logging.getLogger(__name__)

# Tall enclosures lose humidity faster above this height (inches)
TALL_ENCLOSURE_IN = 36
HIGH_HUMIDITY_PCT = 60

# Below an 18" cube an enclosure is "very small" regardless of species
COMFORTABLE_VOLUME_IN3 = 18 * 18 * 18
UPGRADE_MARGIN = 1.1


def _resolved(profile: Union[AnimalProfile, ResolvedProfile]) -> ResolvedProfile:
    if isinstance(profile, ResolvedProfile):
        return profile
    return resolve_profile(profile)


# ============================================================
# Size
# ============================================================

def validate_enclosure_size(
    profile: Union[AnimalProfile, ResolvedProfile],
    spec: EnclosureSpecification,
) -> SizeValidation:
    """
    Validate enclosure dimensions against a species' minimums.

    Either a short axis or insufficient volume for the requested quantity
    makes the enclosure too small. Layout and humidity notes are advisory
    and never affect validity.
    """
    rp = _resolved(profile)
    raw = rp.profile.min_enclosure_size
    dims = normalize_enclosure(spec)
    minimum = rp.min_size
    warnings: list[str] = []
    too_small = False

    suggestions = SizeSuggestions(
        min_width=raw.width,
        min_depth=raw.depth,
        min_height=raw.height,
        units=raw.units,
    )

    def shown(value: float) -> str:
        return format_length(value, spec.units)

    def required(value: float) -> str:
        return format_length(value, raw.units)

    # --- Per-axis minimums ---
    if dims.width < minimum.width:
        too_small = True
        warnings.append(
            f"Width is too small ({shown(spec.width)} vs required "
            f"{required(raw.width)}). This limits horizontal movement.")
    if dims.depth < minimum.depth:
        too_small = True
        warnings.append(
            f"Depth is too small ({shown(spec.depth)} vs required "
            f"{required(raw.depth)}). Front-to-back space is needed for "
            f"hides, a thermal gradient and room to turn around.")
    if dims.height < minimum.height:
        too_small = True
        warnings.append(
            f"Height is too small ({shown(spec.height)} vs required "
            f"{required(raw.height)}). Vertical climbing space is essential.")

    # --- Volume for the requested quantity ---
    required_gallons = rp.required_gallons(spec.quantity)
    current_gallons = None
    if required_gallons is not None:
        rules = rp.quantity_rules
        current_gallons = calculate_gallons(dims)
        if current_gallons < required_gallons:
            too_small = True
            plural = "s" if spec.quantity > 1 else ""
            warnings.append(
                f"For {spec.quantity} animal{plural}, you need at least "
                f"{required_gallons:g} gallons (currently ~{round(current_gallons)} "
                f"gallons). {rules.description}".rstrip())
        if rp.max_recommended is not None and spec.quantity > rp.max_recommended:
            warnings.append(
                f"Warning: {spec.quantity} animals exceeds the recommended maximum "
                f"of {rp.max_recommended} for this species. Overcrowding can lead "
                f"to stress, competition, and health issues.")

    # --- Advisory: proportions ---
    if rp.prefer_vertical and dims.height <= dims.width:
        warnings.append(
            f"For {rp.common_name}, height should exceed width for proper "
            f"vertical space (currently {shown(spec.height)} H vs "
            f"{shown(spec.width)} W).")

    # --- Advisory: humidity loss in tall enclosures ---
    if dims.height > TALL_ENCLOSURE_IN and rp.day_humidity_min > HIGH_HUMIDITY_PCT:
        warnings.append(
            f"Tall enclosure ({shown(spec.height)}) may lose humidity quickly. "
            f"Plan extra misting or use a humidifier to maintain "
            f"{rp.day_humidity_min:g}%+ humidity.")

    # --- Advisory: small but passing ---
    volume = dims.volume_cubic_inches
    if (volume < COMFORTABLE_VOLUME_IN3
            and volume > UPGRADE_MARGIN * minimum.volume_cubic_inches):
        warnings.append(
            "Enclosure is very small. Consider upgrading to provide better "
            "environmental stability and enrichment.")

    logger.debug(f"Size check {rp.id}: too_small={too_small} warnings={len(warnings)}")

    return SizeValidation(
        is_valid=not too_small,
        too_small=too_small,
        warnings=tuple(warnings),
        suggestions=suggestions,
        required_gallons=required_gallons,
        current_gallons=round(current_gallons, 1) if current_gallons is not None else None,
    )


# ============================================================
# Type
# ============================================================

def validate_enclosure_type(
    profile: Union[AnimalProfile, ResolvedProfile],
    spec: EnclosureSpecification,
) -> TypeValidation:
    """
    Check the enclosure material against the species.

    Rule precedence is fixed: the amphibian tag is checked before the
    vertical-layout heuristic, so an arboreal amphibian always gets the
    humidity message.
    """
    rp = _resolved(profile)
    if spec.type != EnclosureType.SCREEN:
        return TypeValidation(compatible=True)

    if rp.is_amphibian:
        return TypeValidation(
            compatible=False,
            warning=(f"Screen enclosures are INCOMPATIBLE with {rp.common_name}. "
                     f"Amphibians need stable, high humidity that screen cannot "
                     f"hold. Use glass or PVC only."),
        )

    if rp.prefer_vertical:
        return TypeValidation(
            compatible=False,
            warning=(f"Screen enclosures are not recommended for {rp.common_name}. "
                     f"Climbing species can injure their snouts and feet on the "
                     f"mesh. Use glass or PVC instead."),
        )

    return TypeValidation(compatible=True)


# ============================================================
# Bioactive
# ============================================================

def validate_bioactive(
    profile: Union[AnimalProfile, ResolvedProfile],
    spec: EnclosureSpecification,
) -> BioactiveValidation:
    rp = _resolved(profile)
    if spec.bioactive and not rp.bioactive_compatible:
        return BioactiveValidation(
            compatible=False,
            warning=f"Bioactive setups are not recommended for {rp.common_name}.",
        )
    return BioactiveValidation(compatible=True)
