"""
Response Parser - Markdown recommendations -> typed records

Turns the Markdown produced by the recommendation prompt into
PlantRecord / InfrastructureRecord lists and an optional conclusion.

The parser is a line-oriented state machine:

    INIT ──plant header──▶ PLANTS ──infra heading──▶ INFRASTRUCTURE
      │                      │                            │
      └──────────── conclusion heading ───────────────────┴──▶ CONCLUSION

State is an immutable ParserState value and `step(state, line)` is a pure
transition function, so individual transitions can be tested in isolation.
`finish(state)` flushes open records and builds the RecommendationResult.

parse_recommendations() never raises: malformed, partial, out-of-order or
empty input degrades to partial or empty output.
"""

import logging
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from plantpal.agents.recommendation.prompts import (
    CONCLUSION_HEADING,
    INFRASTRUCTURE_HEADING,
    PLANT_FIELD_LABELS,
)
from plantpal.schemas.recommendations import (
    InfrastructureRecord,
    PlantRecord,
    RecommendationResult,
)

logger = logging.getLogger(__name__)


# =============================================================================
# PATTERNS
# =============================================================================

def _heading_pattern(heading: str) -> re.Pattern:
    # "### Conclusion" -> ^###\s*Conclusion, tolerant to spacing and case
    hashes, _, title = heading.partition(" ")
    words = r"\s+".join(re.escape(word) for word in title.split())
    return re.compile(rf"^{re.escape(hashes)}\s*{words}", re.IGNORECASE)


def _label_alternation(labels) -> str:
    return "|".join(r"\s+".join(re.escape(word) for word in label.split()) for label in labels)


INFRASTRUCTURE_HEADING_RE = _heading_pattern(INFRASTRUCTURE_HEADING)
CONCLUSION_HEADING_RE = _heading_pattern(CONCLUSION_HEADING)

# 1. **Aloe Vera** (Aloe barbadensis)
PLANT_HEADER_RE = re.compile(r"^\d+\.\s+\*\*([^*]+?)\*\*\s*\(([^)]+?)\)")

# 2. **Description:** text   |   **Description**: text   |   - **Description:** text
PLANT_PROPERTY_RE = re.compile(
    rf"^(?:\d+\.\s+|[-*]\s+)?\*\*({_label_alternation(PLANT_FIELD_LABELS)})(?::\*\*|\*\*\s*:)\s*(.*)$",
    re.IGNORECASE,
)

# - **Rain Garden:** text   |   - **Rain Garden**: text
INFRA_ITEM_RE = re.compile(r"^[-*]\s+\*\*([^*]+?)(?::\*\*|\*\*\s*:)\s*(.*)$")

# - **Explanation:** text (continues the open idea instead of starting one)
INFRA_EXPLANATION_RE = re.compile(r"^[-*]\s+\*\*explanation(?::\*\*|\*\*\s*:)\s*(.*)$", re.IGNORECASE)

_FIELD_BY_LABEL = {re.sub(r"\s+", " ", label.lower()): name for label, name in PLANT_FIELD_LABELS.items()}


# =============================================================================
# STATE
# =============================================================================

class Phase(str, Enum):
    INIT = "init"
    PLANTS = "plants"
    INFRASTRUCTURE = "infrastructure"
    CONCLUSION = "conclusion"


@dataclass(frozen=True)
class PlantDraft:
    common_name: str
    scientific_name: Optional[str] = None
    description: Optional[str] = None
    suitability: Optional[str] = None
    key_benefits: Optional[str] = None
    maintenance_tips: Optional[str] = None


@dataclass(frozen=True)
class InfrastructureDraft:
    title: str
    explanation: str = ""


@dataclass(frozen=True)
class ParserState:
    phase: Phase = Phase.INIT
    open_plant: Optional[PlantDraft] = None
    active_field: Optional[str] = None
    open_infrastructure: Optional[InfrastructureDraft] = None
    plants: Tuple[PlantDraft, ...] = ()
    infrastructure: Tuple[InfrastructureDraft, ...] = ()
    # None until the conclusion heading is seen
    conclusion_lines: Optional[Tuple[str, ...]] = None


def _append(existing: Optional[str], text: str) -> str:
    if not existing:
        return text
    return f"{existing} {text}"


def _flush_plant(state: ParserState) -> ParserState:
    if state.open_plant is None:
        return replace(state, active_field=None)
    return replace(
        state,
        plants=state.plants + (state.open_plant,),
        open_plant=None,
        active_field=None,
    )


def _flush_infrastructure(state: ParserState) -> ParserState:
    if state.open_infrastructure is None:
        return state
    return replace(
        state,
        infrastructure=state.infrastructure + (state.open_infrastructure,),
        open_infrastructure=None,
    )


# =============================================================================
# TRANSITIONS
# =============================================================================

def _step_plants(state: ParserState, stripped: str) -> ParserState:
    # Labels first: "3. **Suitability:** (Full sun) ..." also looks like a plant header
    prop = PLANT_PROPERTY_RE.match(stripped)
    if prop:
        if state.open_plant is None:
            return state
        label = re.sub(r"\s+", " ", prop.group(1).lower())
        field_name = _FIELD_BY_LABEL[label]
        plant = replace(state.open_plant, **{field_name: prop.group(2)})
        return replace(state, open_plant=plant, active_field=field_name)

    header = PLANT_HEADER_RE.match(stripped)
    if header:
        state = _flush_plant(state)
        draft = PlantDraft(
            common_name=header.group(1).strip(),
            scientific_name=header.group(2).strip().strip("*_").strip() or None,
        )
        return replace(state, phase=Phase.PLANTS, open_plant=draft)

    if state.phase is Phase.INIT:
        return state

    if stripped and state.open_plant is not None and state.active_field:
        current = getattr(state.open_plant, state.active_field)
        plant = replace(state.open_plant, **{state.active_field: _append(current, stripped)})
        return replace(state, open_plant=plant)

    return state


def _step_infrastructure(state: ParserState, stripped: str) -> ParserState:
    explanation = INFRA_EXPLANATION_RE.match(stripped)
    if explanation and state.open_infrastructure is not None:
        item = state.open_infrastructure
        return replace(
            state,
            open_infrastructure=replace(item, explanation=_append(item.explanation, explanation.group(1))),
        )

    title = INFRA_ITEM_RE.match(stripped)
    if title:
        state = _flush_infrastructure(state)
        return replace(
            state,
            open_infrastructure=InfrastructureDraft(title=title.group(1).strip(), explanation=title.group(2)),
        )

    if stripped and state.open_infrastructure is not None and not stripped.startswith("- **"):
        item = state.open_infrastructure
        return replace(
            state,
            open_infrastructure=replace(item, explanation=_append(item.explanation, stripped)),
        )

    return state


def step(state: ParserState, line: str) -> ParserState:
    """Apply one input line to the parser state."""
    if state.phase is Phase.CONCLUSION:
        return replace(state, conclusion_lines=state.conclusion_lines + (line,))

    stripped = line.strip()

    if CONCLUSION_HEADING_RE.match(stripped):
        state = _flush_infrastructure(_flush_plant(state))
        return replace(state, phase=Phase.CONCLUSION, conclusion_lines=())

    if INFRASTRUCTURE_HEADING_RE.match(stripped):
        state = _flush_plant(state)
        return replace(state, phase=Phase.INFRASTRUCTURE)

    if state.phase is Phase.INFRASTRUCTURE:
        return _step_infrastructure(state, stripped)

    return _step_plants(state, stripped)


# =============================================================================
# RESULT
# =============================================================================

def slugify(name: str) -> str:
    """Lowercase, whitespace runs collapsed to single hyphens."""
    return re.sub(r"\s+", "-", name.strip().lower())


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _strip_title_prefix(title: str, explanation: str) -> str:
    # Models sometimes repeat the title: "- **Rain Garden:** Rain Garden: ..."
    return re.sub(rf"^{re.escape(title)}\s*:\s*", "", explanation.strip(), flags=re.IGNORECASE)


def finish(state: ParserState) -> RecommendationResult:
    """Flush open records and build the result."""
    state = _flush_infrastructure(_flush_plant(state))

    plants = [
        PlantRecord(
            id=f"{ordinal}-{slugify(draft.common_name)}",
            common_name=draft.common_name.strip(),
            scientific_name=_clean(draft.scientific_name),
            description=_clean(draft.description),
            suitability=_clean(draft.suitability),
            key_benefits=_clean(draft.key_benefits),
            maintenance_tips=_clean(draft.maintenance_tips),
        )
        for ordinal, draft in enumerate(state.plants, start=1)
    ]

    infrastructure = [
        InfrastructureRecord(
            id=f"{ordinal}-{slugify(draft.title)}",
            title=draft.title.strip(),
            explanation=_clean(_strip_title_prefix(draft.title.strip(), draft.explanation)),
        )
        for ordinal, draft in enumerate(state.infrastructure, start=1)
    ]

    conclusion = None
    if state.conclusion_lines is not None:
        conclusion = _clean("".join(f"{line}\n" for line in state.conclusion_lines))

    return RecommendationResult(plants=plants, infrastructure=infrastructure, conclusion=conclusion)


def parse_recommendations(markdown_text: Optional[str]) -> RecommendationResult:
    """
    Parse a Markdown recommendation response.

    Args:
        markdown_text: Raw model output (None or any non-string is treated as empty)

    Returns:
        RecommendationResult; empty lists and conclusion=None in the worst case
    """
    if not isinstance(markdown_text, str) or not markdown_text.strip():
        return RecommendationResult()

    try:
        state = ParserState()
        for line in markdown_text.splitlines():
            state = step(state, line)
        result = finish(state)
    except Exception as e:
        logger.error(f"Unexpected error parsing recommendations, returning empty result: {e}", exc_info=True)
        return RecommendationResult()

    logger.info(
        f"Parsed {len(result.plants)} plant(s), {len(result.infrastructure)} infrastructure idea(s), "
        f"conclusion={'yes' if result.conclusion else 'no'}"
    )
    return result
