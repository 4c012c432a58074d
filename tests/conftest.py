"""
Pytest configuration for PlantPal backend tests.

Sets up test environment and global fixtures.
"""
import os

import pytest

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")

from plantpal.schemas.recommendations import (  # noqa: E402
    EnvironmentalSnapshot,
    LocationData,
    PlantingAreaSize,
    PlantRecord,
    SunlightExposure,
    UserPreferences,
    WateringFrequency,
)


@pytest.fixture
def location():
    return LocationData(latitude=40.712776, longitude=-74.005974, name="New York, NY")


@pytest.fixture
def environment():
    return EnvironmentalSnapshot(temperature_c=21.5, relative_humidity=64, weather_code=2)


@pytest.fixture
def preferences():
    return UserPreferences(
        sunlight_exposure=SunlightExposure.FULL_SUN,
        sunlight_hours=7,
        watering_frequency=WateringFrequency.WEEKLY,
        drought_tolerant=True,
        planting_area_size=PlantingAreaSize.MEDIUM,
        plant_type="Flowers, Herbs",
        planning_goals=["Pollinator Support", "Urban Cooling"],
    )


@pytest.fixture
def sample_plants():
    """Three parsed plants without images."""
    return [
        PlantRecord(id="1-lavender", common_name="Lavender", scientific_name="Lavandula angustifolia"),
        PlantRecord(id="2-yarrow", common_name="Yarrow", scientific_name="Achillea millefolium"),
        PlantRecord(id="3-sedum", common_name="Sedum", scientific_name=None),
    ]


@pytest.fixture
def recorded_sleeps():
    """A sleep function that records requested delays instead of sleeping."""
    delays = []

    async def _sleep(seconds: float) -> None:
        delays.append(seconds)

    _sleep.delays = delays
    return _sleep
