#!/usr/bin/env python3
"""
Recommendation Pipeline Try-Out Script

Runs the full pipeline (prompt -> model fallback -> parser -> optional images)
against the real Gemini API without starting the HTTP server.

Weather is not fetched here: pass the conditions on the command line.

Usage:
    python scripts/try_recommendations.py
    python scripts/try_recommendations.py --lat 40.7128 --lon -74.006 --name "New York"
    python scripts/try_recommendations.py --sunlight partial --watering weekly --drought-tolerant
    python scripts/try_recommendations.py --images --json
"""

import argparse
import asyncio
import json
import logging
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

load_dotenv()

from plantpal.config import settings
from plantpal.schemas.recommendations import (
    EnvironmentalSnapshot,
    HeightClearance,
    LocationData,
    PlantingAreaSize,
    RecommendationQueryResponseOK,
    RecommendationQueryResponseQuotaExceeded,
    SunlightExposure,
    UserPreferences,
    WateringFrequency,
)
from plantpal.services.credentials import (
    EnvironmentCredentialProvider,
    LocalCredentialStore,
    UserFirstCredentialProvider,
)
from plantpal.services.recommendation_service import (
    generate_plant_images,
    query_recommendations,
)


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

SUNLIGHT_CHOICES = {
    "full": SunlightExposure.FULL_SUN,
    "partial": SunlightExposure.PARTIAL_SHADE,
    "shade": SunlightExposure.FULL_SHADE,
}

WATERING_CHOICES = {
    "daily": WateringFrequency.DAILY,
    "few-days": WateringFrequency.EVERY_FEW_DAYS,
    "weekly": WateringFrequency.WEEKLY,
    "rarely": WateringFrequency.BI_WEEKLY_OR_LESS,
}

AREA_CHOICES = {
    "small": PlantingAreaSize.SMALL,
    "medium": PlantingAreaSize.MEDIUM,
    "large": PlantingAreaSize.LARGE,
}

HEIGHT_CHOICES = {
    "none": HeightClearance.NO_LIMIT,
    "under-3ft": HeightClearance.UNDER_3_FT,
    "3-6ft": HeightClearance.BETWEEN_3_AND_6_FT,
    "over-6ft": HeightClearance.OVER_6_FT,
}


def print_result(result) -> None:
    """Pretty print the recommendation result."""
    print("\n" + "=" * 60)
    print(f"STATUS: {result.status}")
    print("=" * 60)

    if isinstance(result, RecommendationQueryResponseOK):
        print(f"\nModel: {result.model_id}")
        print(f"\n🌱 {len(result.plants)} plant(s):\n")
        for plant in result.plants:
            print(f"--- {plant.common_name} ({plant.scientific_name or 'unknown'}) [{plant.id}] ---")
            print(f"  Description:  {plant.description}")
            print(f"  Suitability:  {plant.suitability}")
            print(f"  Benefits:     {plant.key_benefits}")
            print(f"  Maintenance:  {plant.maintenance_tips}")
            if plant.image.status != "not_requested":
                detail = plant.image.model_id if plant.image.status == "succeeded" else plant.image.error
                print(f"  Image:        {plant.image.status} ({detail})")
            print()

        print(f"🏗️  {len(result.infrastructure)} infrastructure idea(s):\n")
        for item in result.infrastructure:
            print(f"  - {item.title}: {item.explanation}")

        if result.conclusion:
            print(f"\nConclusion:\n  {result.conclusion}")

        if not result.plants:
            print("\n⚠️  Nothing could be parsed. Raw response:\n")
            print(result.raw_markdown)

    elif isinstance(result, RecommendationQueryResponseQuotaExceeded):
        print("\n❌ Quota exceeded for every model")
        print(f"  Reason: {result.reason}")
        print("  Set your own key in the credential store or export GOOGLE_API_KEY.\n")

    else:
        print(f"\n❌ {result.error}")
        print(f"  Reason: {result.reason}\n")


async def run(args: argparse.Namespace) -> None:
    provider = UserFirstCredentialProvider(
        user_store=LocalCredentialStore(settings.CREDENTIAL_STORE_PATH),
        fallback=EnvironmentCredentialProvider(settings.GOOGLE_API_KEY),
    )
    if provider.source() is None:
        print("\n⚠️  ERROR: No Gemini API key available!")
        print("   Please set GOOGLE_API_KEY in your .env file or export it:")
        print("   export GOOGLE_API_KEY=your-gemini-api-key")
        print("\n   Get your API key at: https://aistudio.google.com/app/apikey")
        return

    location = LocationData(latitude=args.lat, longitude=args.lon, name=args.name)
    environment = EnvironmentalSnapshot(
        temperature_c=args.temperature,
        relative_humidity=args.humidity,
        weather_code=args.weather_code,
    )
    preferences = UserPreferences(
        sunlight_exposure=SUNLIGHT_CHOICES[args.sunlight],
        sunlight_hours=args.sun_hours,
        watering_frequency=WATERING_CHOICES[args.watering],
        drought_tolerant=args.drought_tolerant,
        planting_area_size=AREA_CHOICES[args.area] if not args.custom_area else PlantingAreaSize.CUSTOM,
        custom_planting_area_size=args.custom_area,
        height_clearance=HEIGHT_CHOICES[args.height],
        plant_type=args.plant_type,
        project_area=args.project_area,
        planning_goals=args.goal,
    )

    print(f"\nCalling Gemini ({', '.join(settings.GEMINI_TEXT_MODELS)}) using the {provider.source()} key...")
    result = await query_recommendations(location, environment, preferences, credential_provider=provider)

    if args.images and isinstance(result, RecommendationQueryResponseOK) and result.plants:
        print(f"\nGenerating {len(result.plants)} image(s), one at a time...")
        await generate_plant_images(result.plants, credential_provider=provider)

    if args.json:
        # Data URIs are large; keep the dump readable
        payload = result.model_dump(mode="json")
        for plant in payload.get("plants", []):
            if plant["image"].get("data_uri"):
                plant["image"]["data_uri"] = f"<{len(plant['image']['data_uri'])} chars>"
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print_result(result)


def main():
    parser = argparse.ArgumentParser(
        description="Try the plant recommendation pipeline locally",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Defaults (New York, full sun, weekly watering)
  python scripts/try_recommendations.py

  # Shady balcony with herbs, including images
  python scripts/try_recommendations.py \\
    --lat 51.5072 --lon -0.1276 --name "London" \\
    --sunlight shade --sun-hours 2 --area small \\
    --plant-type "Herbs" --goal "Pollinator Support" --images
        """
    )

    parser.add_argument("--lat", type=float, default=40.7128, help="Latitude")
    parser.add_argument("--lon", type=float, default=-74.006, help="Longitude")
    parser.add_argument("--name", type=str, default=None, help="Location display name")
    parser.add_argument("--temperature", type=float, default=21.0, help="Current temperature (°C)")
    parser.add_argument("--humidity", type=float, default=60.0, help="Relative humidity (%%)")
    parser.add_argument("--weather-code", type=int, default=2, help="WMO weather code")
    parser.add_argument("--sunlight", choices=SUNLIGHT_CHOICES, default="full")
    parser.add_argument("--sun-hours", type=int, default=6, help="Hours of direct sun (0-12)")
    parser.add_argument("--watering", choices=WATERING_CHOICES, default="weekly")
    parser.add_argument("--drought-tolerant", action="store_true")
    parser.add_argument("--area", choices=AREA_CHOICES, default="medium")
    parser.add_argument("--custom-area", type=str, default=None, help="Custom planting area, e.g. '2m x 3m'")
    parser.add_argument("--height", choices=HEIGHT_CHOICES, default="none")
    parser.add_argument("--plant-type", type=str, default="")
    parser.add_argument("--project-area", type=str, default="")
    parser.add_argument("--goal", action="append", default=[], help="Planning goal (repeatable)")
    parser.add_argument("--images", action="store_true", help="Also generate plant illustrations")
    parser.add_argument("--json", action="store_true", help="Print the response model as JSON")

    args = parser.parse_args()
    asyncio.run(run(args))


if __name__ == "__main__":
    main()
