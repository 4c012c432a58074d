"""
Static reference data for the PlantPal backend.

- WMO weather interpretation codes (as returned by Open-Meteo's
  `current.weather_code`), used to describe an environmental snapshot
  when the caller did not supply a description.
- Selectable planning goals and plant type suggestions offered to clients.

See: https://open-meteo.com/en/docs (WMO Weather interpretation codes table)
"""

from typing import Optional

UNKNOWN_WEATHER_DESCRIPTION = "Unknown weather condition"

WMO_WEATHER_CODES = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm: Slight or moderate",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

PLANNING_GOALS = [
    "Biodiversity Enhancement",
    "Flood Mitigation",
    "Urban Cooling",
    "Air Quality Improvement",
    "Wildlife Habitat",
    "Community Garden",
    "Water Conservation",
    "Soil Health Improvement",
    "Native Species Restoration",
    "Carbon Sequestration",
]

PLANT_TYPE_SUGGESTIONS = [
    "Flowers",
    "Vegetables",
    "Fruits",
    "Herbs",
    "Trees (Small)",
    "Trees (Medium)",
    "Trees (Large)",
    "Shrubs",
    "Ground Cover",
    "Vines",
    "Grasses (Ornamental)",
    "Succulents/Cacti",
    "Native Wildflowers",
    "Pollinator Plants",
]

# Key of the user-supplied API key in the local credential store
USER_API_KEY_STORAGE_KEY = "plantpal-user-gemini-api-key"


def describe_weather_code(code: Optional[int]) -> str:
    """Map a WMO weather code to its description."""
    if code is None:
        return UNKNOWN_WEATHER_DESCRIPTION
    return WMO_WEATHER_CODES.get(code, UNKNOWN_WEATHER_DESCRIPTION)
