"""
Map analysis service.

Sends a map image to the vision model, parses the JSON array of areas it
answers with and replaces the map's stored areas with the result. Bounding
boxes that are not normalized, ordered rectangles are dropped (the area is
kept without geometry).
"""

from __future__ import annotations

import json
import re
import time
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic_ai import ImageUrl
from pydantic_ai.exceptions import AgentRunError, ModelHTTPError
from pydantic_ai.models import Model

from slumbering_ancients.core.coordinates import bounding_box_to_polygon, is_valid_bounding_box
from slumbering_ancients.core.database.base import utc_now
from slumbering_ancients.core.database.entities.map_areas import MapArea
from slumbering_ancients.core.database.entities.maps import Map
from slumbering_ancients.core.database.repositories.map_areas import MapAreaRepository
from slumbering_ancients.core.database.repositories.maps import MapRepository
from slumbering_ancients.core.errors import AnalysisParseError, NotFoundError, ValidationFailedError
from slumbering_ancients.core.logging_config import get_logger
from slumbering_ancients.core.monitoring import log_llm_call
from slumbering_ancients.llm.agents import chat_settings, map_analysis_agent
from slumbering_ancients.llm.errors import OpenAIApiError
from slumbering_ancients.llm.prompts import MAP_ANALYSIS_PROMPT

logger = get_logger(__name__)

_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")

DEFAULT_AREA_NAME = "Unknown Area"
DEFAULT_AREA_TYPE = "other"
DEFAULT_CONFIDENCE = 0.5


def extract_areas(analysis_text: str) -> List[Dict[str, Any]]:
    """The JSON array embedded in the model's answer.

    Raises:
        AnalysisParseError: when no array is present or it is not valid JSON.
    """
    match = _JSON_ARRAY.search(analysis_text)
    if not match:
        raise AnalysisParseError("Failed to parse analysis results", details={"reason": "no JSON array found"})
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise AnalysisParseError("Failed to parse analysis results", details={"reason": str(e)}) from e
    return [item for item in parsed if isinstance(item, dict)]


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def _confidence(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool) and 0 <= value <= 1:
        return float(value)
    return DEFAULT_CONFIDENCE


def build_area(
    map_id: UUID,
    raw: Dict[str, Any],
    *,
    model_used: str,
    analyzed_at: str,
    original_analysis: str,
) -> MapArea:
    """Turn one model-reported area into a ``MapArea`` with defaults applied."""
    bbox = raw.get("bounding_box")
    if bbox is not None and not is_valid_bounding_box(bbox):
        logger.warning(f"Dropping invalid bounding box for area {raw.get('area_name')!r}: {bbox}")
        bbox = None
    if bbox is not None:
        bbox = {key: float(bbox[key]) for key in ("x1", "y1", "x2", "y2")}

    return MapArea(
        map_id=map_id,
        area_name=str(raw.get("area_name") or DEFAULT_AREA_NAME),
        area_type=str(raw.get("area_type") or DEFAULT_AREA_TYPE),
        description=raw.get("description"),
        terrain_features=_string_list(raw.get("terrain_features")),
        landmarks=_string_list(raw.get("landmarks")),
        general_location=raw.get("general_location"),
        bounding_box=bbox,
        polygon_coordinates=bounding_box_to_polygon(bbox) if bbox else None,
        confidence_score=_confidence(raw.get("confidence_score")),
        analysis_metadata={
            "analyzed_at": analyzed_at,
            "model_used": model_used,
            "original_analysis": original_analysis,
            "has_coordinates": bbox is not None,
        },
    )


class MapAnalysisService:
    """Detect and store the areas of an uploaded map."""

    def __init__(
        self,
        maps: MapRepository,
        areas: MapAreaRepository,
        model: Model | str,
        *,
        max_tokens: int = 3000,
    ) -> None:
        self.maps = maps
        self.areas = areas
        self.model = model
        self.max_tokens = max_tokens

    @property
    def model_name(self) -> str:
        return str(getattr(self.model, "model_name", self.model))

    async def analyze(self, map_id: Optional[UUID]) -> tuple[Map, List[MapArea]]:
        """Analyse the image of ``map_id`` and replace its areas.

        Raises:
            ValidationFailedError: when no map id is given.
            NotFoundError: when the map does not exist.
            AnalysisParseError: when the answer holds no usable JSON array.
            OpenAIApiError: when the model call fails.
        """
        if map_id is None:
            raise ValidationFailedError("Map ID is required")

        map_ = await self.maps.get_by_id(map_id)
        if map_ is None:
            raise NotFoundError(f"Map {map_id} not found")

        logger.info(f"Analyzing map {map_.name} ({map_.id})")
        analysis_text = await self._run_model(map_.image_url)
        raw_areas = extract_areas(analysis_text)

        analyzed_at = utc_now().isoformat()
        areas = [
            build_area(
                map_.id,
                raw,
                model_used=self.model_name,
                analyzed_at=analyzed_at,
                original_analysis=analysis_text,
            )
            for raw in raw_areas
        ]
        stored = await self.areas.replace_for_map(map_.id, areas)
        logger.info(
            f"Stored {len(stored)} areas for map {map_.id} "
            f"({sum(1 for a in stored if a.bounding_box)} with coordinates)"
        )
        return map_, stored

    async def _run_model(self, image_url: str) -> str:
        started = time.perf_counter()
        try:
            result = await map_analysis_agent.run(
                [MAP_ANALYSIS_PROMPT, ImageUrl(url=image_url)],
                model=self.model,
                model_settings=chat_settings(max_tokens=self.max_tokens),
            )
        except ModelHTTPError as e:
            raise OpenAIApiError(
                f"Map analysis request failed: {e.status_code}",
                upstream_status=e.status_code,
                details={"body": e.body},
            ) from e
        except AgentRunError as e:
            raise OpenAIApiError(f"Map analysis request failed: {e}") from e

        log_llm_call(
            model=self.model_name,
            purpose="map-analysis",
            tokens_used=result.usage.total_tokens,
            duration_ms=(time.perf_counter() - started) * 1000,
        )
        return result.output
