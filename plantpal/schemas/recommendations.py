"""
Pydantic schemas for the plant recommendation pipeline.

These models define the request/response contracts for the recommendation
endpoints and the domain records produced by the response parser:

- Inputs: LocationData, EnvironmentalSnapshot, UserPreferences
- Parsed records: PlantRecord (with its PlantImage state), InfrastructureRecord
- Parse output: RecommendationResult (immutable aggregate)
- Responses: OK / QUOTA_EXCEEDED / ERROR
"""

from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from plantpal.utils.constants import describe_weather_code

# ============================================================================
# INPUT MODELS
# ============================================================================


class SunlightExposure(str, Enum):
    FULL_SUN = "Full Sun (6+ hours direct sun)"
    PARTIAL_SHADE = "Partial Shade (3-6 hours direct sun)"
    FULL_SHADE = "Full Shade (less than 3 hours direct sun)"


class WateringFrequency(str, Enum):
    DAILY = "Daily"
    EVERY_FEW_DAYS = "Every 2-3 Days"
    WEEKLY = "Weekly"
    BI_WEEKLY_OR_LESS = "Bi-weekly or Less"


class PlantingAreaSize(str, Enum):
    SMALL = "Small (less than 10 sq ft / 1 sq m)"
    MEDIUM = "Medium (10-50 sq ft / 1-5 sq m)"
    LARGE = "Large (more than 50 sq ft / 5+ sq m)"
    CUSTOM = "Custom Size (Specify)"


class HeightClearance(str, Enum):
    NO_LIMIT = "No Limit"
    UNDER_3_FT = "Under 3 ft (approx 1 m)"
    BETWEEN_3_AND_6_FT = "3-6 ft (approx 1-2 m)"
    OVER_6_FT = "Over 6 ft (approx 2+ m)"


class LocationData(BaseModel):
    """Where the planting project is."""
    latitude: float = Field(..., ge=-90, le=90, examples=[40.7128])
    longitude: float = Field(..., ge=-180, le=180, examples=[-74.006])
    name: Optional[str] = Field(
        None,
        description="Display name, e.g. 'Current Location' or a geocoded address",
        max_length=300,
        examples=["Brooklyn, New York"]
    )


class EnvironmentalSnapshot(BaseModel):
    """
    Current conditions at the location, as fetched by the client
    (e.g. from Open-Meteo's `current` block).

    If weather_description is omitted it is resolved from weather_code.
    """
    temperature_c: float = Field(..., description="Air temperature at 2m, in °C", examples=[21.4])
    relative_humidity: float = Field(..., ge=0, le=100, description="Relative humidity at 2m, in %")
    weather_code: Optional[int] = Field(None, description="WMO weather interpretation code", examples=[2])
    weather_description: Optional[str] = Field(None, examples=["Partly cloudy"])
    observed_at: Optional[datetime] = Field(None, description="Time of the observation")

    @model_validator(mode="after")
    def _resolve_weather_description(self) -> "EnvironmentalSnapshot":
        if not self.weather_description:
            self.weather_description = describe_weather_code(self.weather_code)
        return self


class UserPreferences(BaseModel):
    """Gardening preferences collected from the user."""
    sunlight_exposure: SunlightExposure
    sunlight_hours: int = Field(..., ge=0, le=12, description="Hours of direct sunlight per day")
    watering_frequency: WateringFrequency
    drought_tolerant: bool = False
    planting_area_size: PlantingAreaSize
    custom_planting_area_size: Optional[str] = Field(
        None,
        description="Resolved custom size when planting_area_size is CUSTOM",
        max_length=100,
        examples=["25 sq ft", "2m x 3m"]
    )
    height_clearance: HeightClearance = HeightClearance.NO_LIMIT
    plant_type: str = Field("", max_length=300, examples=["Flowers, Herbs"])
    project_area: str = Field("", max_length=300, examples=["100 sq m"])
    planning_goals: List[str] = Field(default_factory=list, examples=[["Urban Cooling"]])


# ============================================================================
# PARSED RECORDS
# ============================================================================

ImageStatus = Literal["not_requested", "pending", "succeeded", "failed"]


class PlantImage(BaseModel):
    """Illustration state of a plant record."""
    status: ImageStatus = "not_requested"
    data_uri: Optional[str] = Field(
        None,
        description="Embeddable data URI (data:image/jpeg;base64,...) when succeeded"
    )
    model_id: Optional[str] = Field(None, description="Image model that produced the payload")
    error: Optional[str] = Field(None, description="Failure reason when failed")


class PlantRecord(BaseModel):
    """
    One recommended plant, created by the response parser.

    Only the image field is updated afterwards (by the image enricher).
    """
    id: str = Field(..., description="Ordinal + slug, unique within one result", examples=["1-aloe-vera"])
    common_name: str = Field(..., examples=["Aloe Vera"])
    scientific_name: Optional[str] = Field(None, examples=["Aloe barbadensis"])
    description: Optional[str] = None
    suitability: Optional[str] = None
    key_benefits: Optional[str] = None
    maintenance_tips: Optional[str] = None
    image: PlantImage = Field(default_factory=PlantImage)


class InfrastructureRecord(BaseModel):
    """One green infrastructure idea, created by the response parser."""
    id: str = Field(..., examples=["1-rain-garden"])
    title: str = Field(..., examples=["Rain Garden"])
    explanation: Optional[str] = None


class RecommendationResult(BaseModel):
    """Everything one parse call extracted from a model response."""
    model_config = ConfigDict(frozen=True)

    plants: List[PlantRecord] = Field(default_factory=list)
    infrastructure: List[InfrastructureRecord] = Field(default_factory=list)
    conclusion: Optional[str] = None


# ============================================================================
# REQUEST MODELS
# ============================================================================


class RecommendationQueryRequest(BaseModel):
    """
    Request plant recommendations for a location.

    The client fetches the environmental snapshot itself (weather and
    geocoding are outside this service) and submits it with the preferences.
    """
    location: LocationData
    environment: EnvironmentalSnapshot
    preferences: UserPreferences
    include_images: bool = Field(
        False,
        description=(
            "Generate one illustration per plant before responding. "
            "Slower; images can also be requested later via /recommendations/images."
        )
    )


class PlantImagesRequest(BaseModel):
    """Request illustrations for already-parsed plants."""
    plants: List[PlantRecord] = Field(..., min_length=1, max_length=10)


# ============================================================================
# RESPONSE MODELS
# ============================================================================


class RecommendationQueryResponseOK(BaseModel):
    """
    Response when a model produced recommendations.

    plants/infrastructure may be empty if the response could not be
    structured; raw_markdown is always returned so the client can fall back
    to rendering it directly.
    """
    status: Literal["OK"] = Field("OK", description="Indicates successful recommendations")
    plants: List[PlantRecord]
    infrastructure: List[InfrastructureRecord]
    conclusion: Optional[str] = None
    model_id: str = Field(..., description="Text model that answered", examples=["gemini-2.5-flash"])
    raw_markdown: str


class RecommendationQueryResponseQuotaExceeded(BaseModel):
    """
    Response when every configured model was rate limited.

    Frontend should:
    1. Explain that the shared quota is exhausted
    2. Offer PUT /credentials/api-key so the user can supply their own key
    3. Retry the query afterwards
    """
    status: Literal["QUOTA_EXCEEDED"] = "QUOTA_EXCEEDED"
    reason: str
    requires_user_api_key: bool = True


class RecommendationQueryResponseError(BaseModel):
    """
    Response for configuration, transport and other non-recoverable failures.
    """
    status: Literal["ERROR"] = "ERROR"
    error: Literal["not_configured", "transport_error", "all_models_failed"]
    reason: str


# Union type for response (FastAPI will use correct model based on status)
RecommendationQueryResponse = (
    RecommendationQueryResponseOK |
    RecommendationQueryResponseQuotaExceeded |
    RecommendationQueryResponseError
)


class PlantImagesResponse(BaseModel):
    """Plants with their image state filled in."""
    plants: List[PlantRecord]
    succeeded: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)


class RecommendationOptionsResponse(BaseModel):
    """Selectable values for building a preferences form."""
    sunlight_exposure: List[str]
    watering_frequency: List[str]
    planting_area_size: List[str]
    height_clearance: List[str]
    planning_goals: List[str]
    plant_type_suggestions: List[str]
