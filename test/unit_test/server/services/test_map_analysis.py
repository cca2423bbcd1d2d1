import json
from uuid import uuid4

import pytest
from pydantic_ai.models.test import TestModel

from slumbering_ancients.core.database.entities import MapArea
from slumbering_ancients.core.database.repositories import MapAreaRepository, MapRepository
from slumbering_ancients.core.errors import AnalysisParseError, NotFoundError, ValidationFailedError
from slumbering_ancients.server.services.map_analysis import (
    DEFAULT_AREA_NAME,
    DEFAULT_AREA_TYPE,
    DEFAULT_CONFIDENCE,
    MapAnalysisService,
    build_area,
    extract_areas,
)


class TestExtractAreas:
    def test_array_inside_prose(self):
        text = 'Sure! Here you go:\n```json\n[{"area_name": "Glass Lake"}, 3]\n```\nEnjoy.'
        assert extract_areas(text) == [{"area_name": "Glass Lake"}]

    def test_no_array(self):
        with pytest.raises(AnalysisParseError):
            extract_areas("No areas detected.")

    def test_broken_json(self):
        with pytest.raises(AnalysisParseError) as exc_info:
            extract_areas('[{"area_name": "Glass Lake",]')
        assert "reason" in exc_info.value.details


class TestBuildArea:
    def _build(self, raw: dict) -> MapArea:
        return build_area(
            uuid4(), raw, model_used="gpt-4o", analyzed_at="2026-10-19T00:00:00+00:00", original_analysis="[]"
        )

    def test_defaults(self):
        area = self._build({})
        assert area.area_name == DEFAULT_AREA_NAME
        assert area.area_type == DEFAULT_AREA_TYPE
        assert area.confidence_score == DEFAULT_CONFIDENCE
        assert area.terrain_features == []
        assert area.landmarks == []
        assert area.bounding_box is None
        assert area.polygon_coordinates is None
        assert area.analysis_metadata["has_coordinates"] is False
        assert area.analysis_metadata["model_used"] == "gpt-4o"

    def test_valid_box_gets_polygon(self):
        area = self._build({"area_name": "Iron Hills", "bounding_box": {"x1": 0, "y1": 0.5, "x2": 1, "y2": 1}})
        assert area.bounding_box == {"x1": 0.0, "y1": 0.5, "x2": 1.0, "y2": 1.0}
        assert area.polygon_coordinates == [
            {"x": 0.0, "y": 0.5},
            {"x": 1.0, "y": 0.5},
            {"x": 1.0, "y": 1.0},
            {"x": 0.0, "y": 1.0},
        ]
        assert area.analysis_metadata["has_coordinates"] is True

    @pytest.mark.parametrize(
        "bbox",
        [
            {"x1": 0.5, "y1": 0.1, "x2": 0.5, "y2": 0.2},
            {"x1": 0.1, "y1": 0.1, "x2": 1.5, "y2": 0.2},
            {"x1": 0.1, "y1": 0.1, "x2": "0.4", "y2": 0.2},
            {"x1": 0.1, "y1": 0.1},
            [0.1, 0.1, 0.2, 0.2],
        ],
    )
    def test_invalid_box_dropped(self, bbox):
        area = self._build({"area_name": "Odd", "bounding_box": bbox})
        assert area.bounding_box is None
        assert area.polygon_coordinates is None

    @pytest.mark.parametrize("score", [1.5, -0.1, "high", True])
    def test_out_of_range_confidence_defaults(self, score):
        assert self._build({"confidence_score": score}).confidence_score == DEFAULT_CONFIDENCE

    def test_non_list_features_ignored(self):
        area = self._build({"terrain_features": "forest", "landmarks": ["tower", 7]})
        assert area.terrain_features == []
        assert area.landmarks == ["tower", "7"]


@pytest.mark.asyncio
async def test_analyze_replaces_areas(in_memory_session, make_map):
    map_ = await MapRepository(in_memory_session).create(make_map())
    areas_repo = MapAreaRepository(in_memory_session)
    await areas_repo.create(MapArea(map_id=map_.id, area_name="Stale"))

    answer = json.dumps([{"area_name": "Whispering Woods", "bounding_box": {"x1": 0.1, "y1": 0.1, "x2": 0.2, "y2": 0.3}}])
    service = MapAnalysisService(
        MapRepository(in_memory_session), areas_repo, TestModel(custom_output_text=answer)
    )

    analysed_map, areas = await service.analyze(map_.id)

    assert analysed_map.id == map_.id
    assert [a.area_name for a in areas] == ["Whispering Woods"]
    assert areas[0].analysis_metadata["model_used"] == "test"
    assert [a.area_name for a in await areas_repo.list_for_map(map_.id)] == ["Whispering Woods"]


@pytest.mark.asyncio
async def test_analyze_errors(in_memory_session):
    service = MapAnalysisService(
        MapRepository(in_memory_session), MapAreaRepository(in_memory_session), TestModel(custom_output_text="[]")
    )
    with pytest.raises(ValidationFailedError):
        await service.analyze(None)
    with pytest.raises(NotFoundError):
        await service.analyze(uuid4())
