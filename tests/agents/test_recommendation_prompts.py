"""
Tests for the recommendation prompt builders.
"""

from datetime import datetime

from plantpal.agents.recommendation.prompts import (
    CONCLUSION_HEADING,
    DEFAULT_GOALS,
    INFRASTRUCTURE_HEADING,
    PLANT_FIELD_LABELS,
    build_plant_image_prompt,
    build_recommendation_prompt,
)
from plantpal.schemas.recommendations import (
    EnvironmentalSnapshot,
    HeightClearance,
    LocationData,
    PlantingAreaSize,
    SunlightExposure,
    UserPreferences,
    WateringFrequency,
)
from plantpal.services.response_parser import parse_recommendations


class TestBuildRecommendationPrompt:
    """Tests for build_recommendation_prompt()."""

    def test_includes_location_and_conditions(self, location, environment, preferences):
        prompt = build_recommendation_prompt(location, environment, preferences)

        assert "Latitude 40.7128, Longitude -74.0060" in prompt
        assert "Name/Description: New York, NY." in prompt
        assert "Temperature: 21.5°C" in prompt
        assert "Relative Humidity: 64.0%" in prompt
        assert "Weather: Partly cloudy" in prompt
        assert "Data Time: Not specified" in prompt

    def test_includes_preferences(self, location, environment, preferences):
        prompt = build_recommendation_prompt(location, environment, preferences)

        assert f"Sunlight Exposure: {SunlightExposure.FULL_SUN.value}" in prompt
        assert "Hours of Direct Sunlight: 7 hours/day" in prompt
        assert "Watering Frequency: Weekly" in prompt
        assert "Drought Tolerance Preference: Yes, prefers drought-tolerant plants" in prompt
        assert f"Planting Area Size: {PlantingAreaSize.MEDIUM.value}" in prompt
        assert "Max Plant Height: No Limit" in prompt
        assert "Desired Plant Type(s): Flowers, Herbs" in prompt
        assert "Key Urban Planning Goals: Pollinator Support, Urban Cooling" in prompt

    def test_blank_fields_get_defaults(self, environment):
        location = LocationData(latitude=0, longitude=0)
        preferences = UserPreferences(
            sunlight_exposure=SunlightExposure.FULL_SHADE,
            sunlight_hours=1,
            watering_frequency=WateringFrequency.DAILY,
            planting_area_size=PlantingAreaSize.SMALL,
            plant_type="   ",
            planning_goals=["", "  "],
        )

        prompt = build_recommendation_prompt(location, environment, preferences)

        assert "Name/Description: Not specified." in prompt
        assert "Desired Plant Type(s): Any suitable type" in prompt
        assert "Overall Project Area (approximate): Not specified" in prompt
        assert f"Key Urban Planning Goals: {DEFAULT_GOALS}" in prompt
        assert "Drought Tolerance Preference: No, fine with regular watering" in prompt

    def test_custom_area_size(self, location, environment, preferences):
        custom = preferences.model_copy(update={
            "planting_area_size": PlantingAreaSize.CUSTOM,
            "custom_planting_area_size": "2m x 3m",
            "height_clearance": HeightClearance.UNDER_3_FT,
        })

        prompt = build_recommendation_prompt(location, environment, custom)

        assert "Planting Area Size: 2m x 3m" in prompt
        assert f"Max Plant Height: {HeightClearance.UNDER_3_FT.value}" in prompt

    def test_custom_area_without_value(self, location, environment, preferences):
        custom = preferences.model_copy(update={"planting_area_size": PlantingAreaSize.CUSTOM})

        prompt = build_recommendation_prompt(location, environment, custom)

        assert "Planting Area Size: Custom size not specified" in prompt

    def test_observation_time_formatted(self, location, preferences):
        environment = EnvironmentalSnapshot(
            temperature_c=10,
            relative_humidity=80,
            weather_description="Light rain",
            observed_at=datetime(2024, 5, 1, 14, 30),
        )

        prompt = build_recommendation_prompt(location, environment, preferences)

        assert "Weather: Light rain" in prompt
        assert "Data Time: 2024-05-01 14:30" in prompt

    def test_output_format_uses_parser_headings_and_labels(self, location, environment, preferences):
        prompt = build_recommendation_prompt(location, environment, preferences)

        assert INFRASTRUCTURE_HEADING in prompt
        assert CONCLUSION_HEADING in prompt
        for label in PLANT_FIELD_LABELS:
            assert f"**{label}:**" in prompt

    def test_is_deterministic(self, location, environment, preferences):
        first = build_recommendation_prompt(location, environment, preferences)
        second = build_recommendation_prompt(location, environment, preferences)

        assert first == second

    def test_format_example_is_parseable(self, location, environment, preferences):
        """The example block shown to the model parses into one plant."""
        prompt = build_recommendation_prompt(location, environment, preferences)
        example = prompt.split("Example for one plant:\n", 1)[1].split("\n\n", 1)[0]

        result = parse_recommendations(example)

        assert len(result.plants) == 1
        plant = result.plants[0]
        assert plant.common_name == "Sunny Delight"
        assert plant.scientific_name == "Helianthus annuus 'Sunny'"
        assert plant.maintenance_tips.startswith("Water regularly")


class TestBuildPlantImagePrompt:
    """Tests for build_plant_image_prompt()."""

    def test_with_scientific_name(self):
        prompt = build_plant_image_prompt("Lavender", "Lavandula angustifolia")

        assert "healthy Lavender (Lavandula angustifolia) plant" in prompt

    def test_without_scientific_name(self):
        assert "healthy Sedum plant" in build_plant_image_prompt("  Sedum ", None)
        assert "healthy Sedum plant" in build_plant_image_prompt("Sedum", "   ")
