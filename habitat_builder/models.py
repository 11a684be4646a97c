"""
Habitat Builder — Core Pydantic Models

Enclosure specifications, animal profiles, and the result types produced by
the compatibility engine. Every engine model is frozen: the catalog shares
profile instances across requests.
"""
from __future__ import annotations
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

# ============================================================
# Enums
# ============================================================

class Units(str, Enum):
    INCHES = "in"
    CENTIMETERS = "cm"

class TemperatureUnit(str, Enum):
    FAHRENHEIT = "F"
    CELSIUS = "C"

class EnclosureType(str, Enum):
    GLASS = "glass"
    PVC = "pvc"
    SCREEN = "screen"

class HumidityControl(str, Enum):
    NONE = "none"
    MANUAL = "manual"
    MISTING_SYSTEM = "misting-system"
    HUMIDIFIER = "humidifier"
    FOGGER = "fogger"

class CareLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

class CareLevelPreference(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    ANY = "any"

class WaterFeature(str, Enum):
    NONE = "none"
    SEMI_AQUATIC = "semi-aquatic"
    FULLY_AQUATIC = "fully-aquatic"


# Humidity control methods that cannot raise humidity on their own
PASSIVE_HUMIDITY_CONTROL = frozenset({HumidityControl.NONE, HumidityControl.MANUAL})

# Care levels a preference admits. Escalation is monotonic.
CARE_LEVEL_ESCALATION: dict[CareLevelPreference, frozenset[CareLevel]] = {
    CareLevelPreference.BEGINNER: frozenset({CareLevel.BEGINNER}),
    CareLevelPreference.INTERMEDIATE: frozenset({
        CareLevel.BEGINNER, CareLevel.INTERMEDIATE,
    }),
    CareLevelPreference.ADVANCED: frozenset({
        CareLevel.BEGINNER, CareLevel.INTERMEDIATE, CareLevel.ADVANCED,
    }),
}

# Animal-type tag that screen enclosures can never house
AMPHIBIAN = "amphibian"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ============================================================
# Enclosure Specification
# ============================================================

class EnclosureSpecification(_Frozen):
    """An enclosure request as entered by the user."""
    width: float = Field(..., ge=0)
    depth: float = Field(..., ge=0)
    height: float = Field(..., ge=0)
    units: Units = Units.INCHES
    type: EnclosureType = EnclosureType.GLASS
    quantity: int = Field(1, ge=1)
    bioactive: bool = False
    ambient_temp: float = 72.0
    temperature_unit: TemperatureUnit = TemperatureUnit.FAHRENHEIT
    ambient_humidity: float = Field(50.0, ge=0, le=100)
    humidity_control: HumidityControl = HumidityControl.MANUAL
    substrate_preference: Optional[str] = None
    care_level_preference: CareLevelPreference = CareLevelPreference.ANY

    @property
    def has_care_level_preference(self) -> bool:
        return self.care_level_preference != CareLevelPreference.ANY


# ============================================================
# Animal Profile
# ============================================================

class Dimensions(_Frozen):
    width: float = Field(..., ge=0)
    depth: float = Field(..., ge=0)
    height: float = Field(..., ge=0)
    units: Units = Units.INCHES

class Range(_Frozen):
    min: float
    max: float

class TemperatureTargets(_Frozen):
    """Flat min/max plus optional gradient sub-ranges."""
    min: float
    max: float
    unit: TemperatureUnit = TemperatureUnit.FAHRENHEIT
    basking: Optional[float] = None
    cool_side: Optional[Range] = None
    warm_side: Optional[Range] = None
    basking_range: Optional[Range] = None
    nighttime: Optional[Range] = None

    @property
    def has_gradient(self) -> bool:
        return self.cool_side is not None or self.warm_side is not None

class HumidityTargets(_Frozen):
    day: Optional[Range] = None
    night: Optional[Range] = None

    @model_validator(mode="before")
    @classmethod
    def accept_flat_range(cls, data: Any) -> Any:
        # Older profiles carry a single {min, max}; treat it as the day range.
        if isinstance(data, dict) and "min" in data and "day" not in data:
            data = dict(data)
            data["day"] = {"min": data.pop("min"), "max": data.pop("max", 100)}
            data.pop("unit", None)
        return data

class LightingRequirements(_Frozen):
    uvb_required: bool = False
    uvb_strength: Optional[str] = None   # e.g. "5.0", "10.0"
    coverage_percent: float = 0.0        # % of enclosure length
    photoperiod: Optional[str] = None    # e.g. "12h day / 12h night"

class CareTargets(_Frozen):
    temperature: TemperatureTargets
    humidity: HumidityTargets = Field(default_factory=HumidityTargets)
    lighting: LightingRequirements = Field(default_factory=LightingRequirements)

class QuantityRules(_Frozen):
    base_gallons: float = Field(..., ge=0)
    additional_gallons_per_animal: float = Field(0.0, ge=0)
    max_recommended: Optional[int] = Field(None, ge=1)
    description: str = ""

class LayoutRules(_Frozen):
    prefer_vertical: bool = False
    required_zones: tuple[str, ...] = ()

class EquipmentNeeds(_Frozen):
    animal_type: Optional[str] = None   # e.g. "amphibian", "reptile"
    tags: tuple[str, ...] = ()

class AnimalProfile(_Frozen):
    id: str
    common_name: str
    scientific_name: str
    care_level: CareLevel
    min_enclosure_size: Dimensions
    care_targets: CareTargets
    water_feature: WaterFeature = WaterFeature.NONE
    bioactive_compatible: bool = False
    quantity_rules: Optional[QuantityRules] = None
    layout_rules: Optional[LayoutRules] = None
    equipment_needs: Optional[EquipmentNeeds] = None
    lifespan: Optional[str] = None
    notes: tuple[str, ...] = ()


# ============================================================
# Engine Results
# ============================================================

class CompatibilityResult(_Frozen):
    score: int = Field(..., ge=0, le=100)
    reasons: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    excluded: bool = False  # a hard-exclusion rule fired

class Recommendation(_Frozen):
    animal_id: str
    profile: AnimalProfile
    result: CompatibilityResult

    @property
    def score(self) -> int:
        return self.result.score

class CategorizedRecommendations(_Frozen):
    perfect_matches: tuple[Recommendation, ...] = ()
    good_fits: tuple[Recommendation, ...] = ()
    possible: tuple[Recommendation, ...] = ()

class SizeSuggestions(_Frozen):
    min_width: float
    min_depth: float
    min_height: float
    units: Units

class SizeValidation(_Frozen):
    is_valid: bool
    too_small: bool
    warnings: tuple[str, ...] = ()
    suggestions: SizeSuggestions
    required_gallons: Optional[float] = None
    current_gallons: Optional[float] = None

class TypeValidation(_Frozen):
    compatible: bool
    warning: Optional[str] = None

class BioactiveValidation(_Frozen):
    compatible: bool
    warning: Optional[str] = None


# ============================================================
# API Request/Response Models
# ============================================================

class DecisionTrace(BaseModel):
    step: str
    detail: str
    animals_remaining: int

class RecommendationSummary(BaseModel):
    animal_id: str
    common_name: str
    scientific_name: str
    care_level: CareLevel
    score: int
    reasons: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

class RecommendResponse(BaseModel):
    perfect_matches: list[RecommendationSummary] = Field(default_factory=list)
    good_fits: list[RecommendationSummary] = Field(default_factory=list)
    possible: list[RecommendationSummary] = Field(default_factory=list)
    total: int = 0
    excluded_count: int = 0
    decision_trace: list[DecisionTrace] = Field(default_factory=list)
    response_time_ms: int = 0

class ValidationReport(BaseModel):
    animal_id: str
    common_name: str
    size: SizeValidation
    type: TypeValidation
    bioactive: BioactiveValidation
    compatibility: CompatibilityResult

class AnimalSummary(BaseModel):
    id: str
    common_name: str
    scientific_name: str
    care_level: CareLevel
    water_feature: WaterFeature
    bioactive_compatible: bool

class HealthResponse(BaseModel):
    status: str
    catalog_size: int
    version: str
    uptime_seconds: int


# ============================================================
# Utility: Unit Normalization
# ============================================================

CM_PER_INCH = 2.54
CUBIC_INCHES_PER_GALLON = 231.0
CUBIC_INCHES_PER_CUBIC_FOOT = 1728.0


class NormalizedDimensions(_Frozen):
    """Dimensions in inches."""
    width: float
    depth: float
    height: float

    @property
    def volume_cubic_inches(self) -> float:
        return self.width * self.depth * self.height


def normalize_to_inches(
    width: float, depth: float, height: float, units: Units,
) -> NormalizedDimensions:
    """Convert a width/depth/height triple in any linear unit to inches."""
    if units == Units.CENTIMETERS:
        return NormalizedDimensions(
            width=width / CM_PER_INCH,
            depth=depth / CM_PER_INCH,
            height=height / CM_PER_INCH,
        )
    return NormalizedDimensions(width=width, depth=depth, height=height)


def normalize_enclosure(spec: EnclosureSpecification) -> NormalizedDimensions:
    return normalize_to_inches(spec.width, spec.depth, spec.height, spec.units)


def normalize_minimum_size(profile: AnimalProfile) -> NormalizedDimensions:
    size = profile.min_enclosure_size
    return normalize_to_inches(size.width, size.depth, size.height, size.units)


def calculate_gallons(dims: NormalizedDimensions) -> float:
    """US gallons for a box measured in inches (231 cubic inches per gallon)."""
    return dims.volume_cubic_inches / CUBIC_INCHES_PER_GALLON


def calculate_cubic_feet(dims: NormalizedDimensions) -> float:
    return dims.volume_cubic_inches / CUBIC_INCHES_PER_CUBIC_FOOT


def to_fahrenheit(value: float, unit: TemperatureUnit) -> float:
    if unit == TemperatureUnit.CELSIUS:
        return value * 9 / 5 + 32
    return value


def format_length(value: float, units: Units) -> str:
    """Render a user-entered length with its unit suffix, e.g. 18" or 45 cm."""
    text = f"{value:g}"
    if units == Units.CENTIMETERS:
        return f"{text} cm"
    return f'{text}"'
