"""Habitat Builder — species recommendation and enclosure validation engine."""

__version__ = "1.0.0"

from .catalog import (
    AnimalCatalog, CatalogError, HabitatBuilderError, UnknownAnimalError,
    load_catalog, load_default_catalog,
)
from .compatibility import evaluate_compatibility, hard_exclusion
from .models import (
    AnimalProfile, BioactiveValidation, CategorizedRecommendations,
    CompatibilityResult, EnclosureSpecification, Recommendation,
    SizeValidation, TypeValidation,
)
from .normalize import ResolvedProfile, resolve_profile
from .recommendation_engine import (
    RecommendationEngine, categorize_recommendations, rank_animals,
)
from .validation import (
    validate_bioactive, validate_enclosure_size, validate_enclosure_type,
)

__all__ = [
    "AnimalCatalog", "AnimalProfile", "BioactiveValidation", "CatalogError",
    "CategorizedRecommendations", "CompatibilityResult",
    "EnclosureSpecification", "HabitatBuilderError", "Recommendation",
    "RecommendationEngine", "ResolvedProfile", "SizeValidation",
    "TypeValidation", "UnknownAnimalError", "categorize_recommendations",
    "evaluate_compatibility", "hard_exclusion", "load_catalog",
    "load_default_catalog", "rank_animals", "resolve_profile",
    "validate_bioactive", "validate_enclosure_size", "validate_enclosure_type",
]
