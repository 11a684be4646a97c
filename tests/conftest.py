"""Pytest configuration and shared fixtures."""

import copy
from typing import Any, Dict

import pytest

from habitat_builder.catalog import AnimalCatalog, load_default_catalog
from habitat_builder.models import AnimalProfile, EnclosureSpecification


BASE_PROFILE: Dict[str, Any] = {
    "id": "test-animal",
    "common_name": "Test Animal",
    "scientific_name": "Testus animalis",
    "care_level": "intermediate",
    "min_enclosure_size": {"width": 18, "depth": 18, "height": 18, "units": "in"},
    "care_targets": {
        "temperature": {"min": 70, "max": 80, "unit": "F"},
        "humidity": {"day": {"min": 40, "max": 60}},
    },
    "water_feature": "none",
    "bioactive_compatible": True,
}

BASE_SPEC: Dict[str, Any] = {
    "width": 24,
    "depth": 24,
    "height": 24,
    "units": "in",
    "type": "glass",
    "quantity": 1,
    "bioactive": False,
    "ambient_temp": 75,
    "humidity_control": "manual",
}


def _build_profile(**overrides) -> AnimalProfile:
    data = copy.deepcopy(BASE_PROFILE)
    data.update(overrides)
    return AnimalProfile.model_validate(data)


def _build_spec(**overrides) -> EnclosureSpecification:
    data = dict(BASE_SPEC)
    data.update(overrides)
    return EnclosureSpecification.model_validate(data)


@pytest.fixture
def make_profile():
    """Factory for profiles; keyword arguments replace top-level fields."""
    return _build_profile


@pytest.fixture
def make_spec():
    """Factory for enclosure specifications."""
    return _build_spec


@pytest.fixture
def mixed_catalog() -> AnimalCatalog:
    """Small catalog covering every exclusion and care-level branch."""
    return AnimalCatalog([
        _build_profile(
            id="tree-frog", common_name="Tree Frog", care_level="beginner",
            care_targets={
                "temperature": {"min": 70, "max": 82},
                "humidity": {"day": {"min": 50, "max": 70}},
            },
            layout_rules={"prefer_vertical": True},
            equipment_needs={"animal_type": "amphibian"},
        ),
        _build_profile(
            id="axolotl", common_name="Axolotl",
            min_enclosure_size={"width": 76, "depth": 30, "height": 30, "units": "cm"},
            care_targets={"temperature": {"min": 16, "max": 20, "unit": "C"}},
            water_feature="fully-aquatic", bioactive_compatible=False,
            equipment_needs={"animal_type": "amphibian"},
        ),
        _build_profile(
            id="gecko", common_name="Gecko", care_level="beginner",
            care_targets={
                "temperature": {
                    "min": 75, "max": 90,
                    "cool_side": {"min": 75, "max": 80},
                    "warm_side": {"min": 88, "max": 92},
                },
                "humidity": {"day": {"min": 30, "max": 40}},
            },
            equipment_needs={"animal_type": "reptile"},
        ),
        _build_profile(
            id="python", common_name="Python", care_level="advanced",
            min_enclosure_size={"width": 48, "depth": 24, "height": 24, "units": "in"},
            care_targets={
                "temperature": {"min": 78, "max": 92},
                "humidity": {"day": {"min": 60, "max": 80}},
            },
            quantity_rules={"base_gallons": 120, "max_recommended": 1},
            equipment_needs={"animal_type": "reptile"},
        ),
        _build_profile(id="skink", common_name="Skink"),
    ])


@pytest.fixture(scope="session")
def bundled_catalog() -> AnimalCatalog:
    return load_default_catalog()
