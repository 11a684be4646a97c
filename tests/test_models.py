"""Tests for data models and unit helpers."""

import pytest
from pydantic import ValidationError

from habitat_builder.models import (
    CareLevel, EnclosureSpecification, HumidityTargets, NormalizedDimensions,
    Units, calculate_cubic_feet, calculate_gallons, format_length,
    normalize_enclosure, normalize_to_inches, to_fahrenheit, TemperatureUnit,
)


class TestEnclosureSpecification:

    def test_defaults(self):
        spec = EnclosureSpecification(width=24, depth=18, height=18)
        assert spec.units == Units.INCHES
        assert spec.type.value == "glass"
        assert spec.quantity == 1
        assert spec.humidity_control.value == "manual"
        assert not spec.has_care_level_preference

    def test_rejects_negative_dimension(self):
        with pytest.raises(ValidationError):
            EnclosureSpecification(width=-1, depth=18, height=18)

    def test_rejects_zero_quantity(self):
        with pytest.raises(ValidationError):
            EnclosureSpecification(width=24, depth=18, height=18, quantity=0)

    def test_rejects_unknown_units(self):
        with pytest.raises(ValidationError):
            EnclosureSpecification(width=24, depth=18, height=18, units="ft")

    def test_frozen(self):
        spec = EnclosureSpecification(width=24, depth=18, height=18)
        with pytest.raises(ValidationError):
            spec.width = 36

    def test_preference(self):
        spec = EnclosureSpecification(width=24, depth=18, height=18,
                                      care_level_preference="advanced")
        assert spec.has_care_level_preference


class TestProfileParts:

    def test_flat_humidity_maps_to_day(self):
        humidity = HumidityTargets.model_validate({"min": 60, "max": 80})
        assert humidity.day.min == 60
        assert humidity.day.max == 80
        assert humidity.night is None

    def test_structured_humidity(self):
        humidity = HumidityTargets.model_validate({
            "day": {"min": 50, "max": 70},
            "night": {"min": 70, "max": 90},
        })
        assert humidity.night.min == 70

    def test_gradient_flag(self, make_profile):
        flat = make_profile()
        assert not flat.care_targets.temperature.has_gradient

        graded = make_profile(care_targets={"temperature": {
            "min": 75, "max": 90, "cool_side": {"min": 75, "max": 80},
        }})
        assert graded.care_targets.temperature.has_gradient

    def test_care_level_enum(self, make_profile):
        assert make_profile(care_level="advanced").care_level is CareLevel.ADVANCED


class TestUnits:

    def test_centimeters_to_inches(self):
        dims = normalize_to_inches(254, 127, 25.4, Units.CENTIMETERS)
        assert dims.width == pytest.approx(100)
        assert dims.depth == pytest.approx(50)
        assert dims.height == pytest.approx(10)

    def test_inches_unchanged(self):
        spec = EnclosureSpecification(width=36, depth=18, height=18)
        assert normalize_enclosure(spec) == NormalizedDimensions(width=36, depth=18, height=18)

    def test_volume(self):
        dims = NormalizedDimensions(width=36, depth=18, height=18)
        assert dims.volume_cubic_inches == 11664
        assert calculate_gallons(dims) == pytest.approx(50.49, abs=0.01)
        assert calculate_cubic_feet(dims) == pytest.approx(6.75)

    def test_temperature(self):
        assert to_fahrenheit(20, TemperatureUnit.CELSIUS) == pytest.approx(68)
        assert to_fahrenheit(75, TemperatureUnit.FAHRENHEIT) == 75

    @pytest.mark.parametrize("value,units,expected", [
        (18, Units.INCHES, '18"'),
        (45, Units.CENTIMETERS, "45 cm"),
        (15.5, Units.INCHES, '15.5"'),
    ])
    def test_format_length(self, value, units, expected):
        assert format_length(value, units) == expected
