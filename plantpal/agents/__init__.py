"""
AI Components for the PlantPal backend.

Contains the prompt side of the recommendation pipeline:

1. Recommendation prompts (Single-Shot Markdown Generation)
   - One prompt embedding location, conditions and preferences
   - Rigid Markdown output template shared with the response parser
   - Per-plant illustration prompts for the image enricher

Model invocation, fallback and parsing live in plantpal/services/.
"""

from plantpal.agents.recommendation import (
    build_plant_image_prompt,
    build_recommendation_prompt,
)

__all__ = [
    "build_plant_image_prompt",
    "build_recommendation_prompt",
]
