"""
Recommendation Prompts

Prompt templates for the Gemini-based plant recommendation pipeline.

Architecture:
- Pattern: Single-shot Markdown generation with model fallback
- Output: Markdown parsed by services/response_parser.py

The service layer is in:
- plantpal/services/recommendation_service.py

Prompt templates are in:
- plantpal/agents/recommendation/prompts.py
"""

from plantpal.agents.recommendation.prompts import (
    CONCLUSION_HEADING,
    INFRASTRUCTURE_HEADING,
    PLANT_FIELD_LABELS,
    build_plant_image_prompt,
    build_recommendation_prompt,
)

__all__ = [
    "CONCLUSION_HEADING",
    "INFRASTRUCTURE_HEADING",
    "PLANT_FIELD_LABELS",
    "build_plant_image_prompt",
    "build_recommendation_prompt",
]
