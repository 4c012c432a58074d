"""
Recommendation Prompt Templates

Contains the prompt builders for the plant recommendation pipeline.

Architecture:
- Pattern: Single-shot LLM call returning Markdown (no JSON mode)
- Models: Gemini text models tried in fallback order (see recommendation_invoker)
- Temperature: 0.7 (some creativity in plant selection)
- Output: Markdown in a rigid layout parsed by services/response_parser.py

CONTRACT WITH THE PARSER:
The section headings and field labels below are shared with
plantpal/services/response_parser.py. Change them here and the parser
follows; never hard-code them in the template text.
"""

from typing import Optional

from plantpal.schemas.recommendations import (
    EnvironmentalSnapshot,
    LocationData,
    PlantingAreaSize,
    UserPreferences,
)

INFRASTRUCTURE_HEADING = "### Green Infrastructure Ideas"
CONCLUSION_HEADING = "### Conclusion"

# Markdown label -> PlantRecord field
PLANT_FIELD_LABELS = {
    "Description": "description",
    "Suitability": "suitability",
    "Key Benefits": "key_benefits",
    "Maintenance Tips": "maintenance_tips",
}

MIN_PLANTS = 3
MAX_PLANTS = 7

DEFAULT_GOALS = "General beautification and sustainability"


# =============================================================================
# INPUT FORMATTING
# =============================================================================

def _format_planting_area(preferences: UserPreferences) -> str:
    if preferences.planting_area_size == PlantingAreaSize.CUSTOM:
        custom = (preferences.custom_planting_area_size or "").strip()
        return custom or "Custom size not specified"
    return preferences.planting_area_size.value


def _format_drought_tolerance(drought_tolerant: bool) -> str:
    if drought_tolerant:
        return "Yes, prefers drought-tolerant plants"
    return "No, fine with regular watering"


def _format_goals(goals: list[str]) -> str:
    cleaned = [goal.strip() for goal in goals if goal and goal.strip()]
    return ", ".join(cleaned) if cleaned else DEFAULT_GOALS


def _format_observed_at(environment: EnvironmentalSnapshot) -> str:
    if environment.observed_at is None:
        return "Not specified"
    return environment.observed_at.strftime("%Y-%m-%d %H:%M")


# =============================================================================
# OUTPUT FORMAT TEMPLATE
# =============================================================================

def _output_format_section() -> str:
    description, suitability, benefits, maintenance = PLANT_FIELD_LABELS
    return f"""**Output Format (Use Markdown - CRITICAL: FOLLOW THIS STRUCTURE PRECISELY):**
Provide a list of {MIN_PLANTS}-{MAX_PLANTS} specific plant recommendations. For each plant, use the following numbered format:
1.  **Common Name** (Scientific Name in parentheses)
2.  **{description}:** Brief overview (1-2 sentences).
3.  **{suitability}:** Why it fits the user's criteria (sunlight, water, space, goals).
4.  **{benefits}:** e.g., Pollinator-friendly, edible, air purifying, etc.
5.  **{maintenance}:** Brief, essential care notes.

Example for one plant:
1. **Sunny Delight** (Helianthus annuus 'Sunny')
2. **{description}:** A vibrant sunflower variety known for its bright yellow petals. Grows quickly.
3. **{suitability}:** Perfect for full sun (6+ hours) and well-draining soil. Fits medium to large spaces.
4. **{benefits}:** Attracts pollinators, edible seeds, adds striking vertical interest.
5. **{maintenance}:** Water regularly until established, then less frequently. May need staking in windy areas.

Then, after all plant recommendations, include a section titled:
{INFRASTRUCTURE_HEADING}
Suggest 1-2 green infrastructure ideas relevant to the user's goals (e.g., rain garden for flood mitigation, green wall for urban cooling). Write each idea as ONE bullet, title in bold followed by a colon, then the explanation on the same line:
- **Idea Title:** Why it is suitable and which of the recommended plants might fit.

Example:
{INFRASTRUCTURE_HEADING}
- **Pollinator Patch:** Create a dedicated area with flowering plants from the recommendations to support local bees and butterflies.

Finally, conclude with a section titled:
{CONCLUSION_HEADING}
A friendly, encouraging remark and a reminder to consult local horticultural experts or resources.
Do not add any other headings."""


# =============================================================================
# PROMPT BUILDERS
# =============================================================================

def build_recommendation_prompt(
    location: LocationData,
    environment: EnvironmentalSnapshot,
    preferences: UserPreferences,
) -> str:
    """
    Build the complete recommendation prompt.

    Pure function: no side effects, never fails for valid models.
    Empty optional fields are rendered with explicit defaults so the
    model never sees a blank value.

    Args:
        location: Coordinates and optional display name
        environment: Current conditions at the location
        preferences: User's gardening preferences

    Returns:
        str: Prompt ready to be sent to a Gemini text model
    """
    location_name = (location.name or "").strip() or "Not specified"
    plant_type = preferences.plant_type.strip() or "Any suitable type"
    project_area = preferences.project_area.strip() or "Not specified"

    return f"""You are PlantPal, an expert AI assistant for urban sustainability and green planning.
Generate plant and green infrastructure recommendations based on the following information:

**Location:**
- Coordinates: Latitude {location.latitude:.4f}, Longitude {location.longitude:.4f}.
- Name/Description: {location_name}.

**Current Environmental Conditions:**
- Temperature: {environment.temperature_c}°C
- Relative Humidity: {environment.relative_humidity}%
- Weather: {environment.weather_description}
- Data Time: {_format_observed_at(environment)}

**User Preferences & Project Details:**
- Sunlight Exposure: {preferences.sunlight_exposure.value}
- Hours of Direct Sunlight: {preferences.sunlight_hours} hours/day
- Watering Frequency: {preferences.watering_frequency.value}
- Drought Tolerance Preference: {_format_drought_tolerance(preferences.drought_tolerant)}
- Planting Area Size: {_format_planting_area(preferences)}
- Max Plant Height: {preferences.height_clearance.value}
- Desired Plant Type(s): {plant_type}
- Overall Project Area (approximate): {project_area}
- Key Urban Planning Goals: {_format_goals(preferences.planning_goals)}

**Recommendation Guidelines:**
- Prioritize native or well-adapted species for the specified location and climate.
- Consider typical soil types and topography for the area. Suggest soil testing if critical.
- If relevant, briefly mention how microclimate factors (e.g., urban heat island, wind channels) might influence choices.
- Aim to enhance local biodiversity and ecological resilience.
- Suggest plants that are relatively low-maintenance and suitable for urban environments.

{_output_format_section()}
"""


def build_plant_image_prompt(common_name: str, scientific_name: Optional[str] = None) -> str:
    """Build the illustration prompt for one plant."""
    subject = common_name.strip()
    if scientific_name and scientific_name.strip():
        subject = f"{subject} ({scientific_name.strip()})"
    return (
        f"A high-quality, realistic botanical photograph of a healthy {subject} plant "
        "growing in an urban garden, natural daylight, clear focus on foliage and flowers, "
        "no text, no people."
    )
