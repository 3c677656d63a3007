"""
Tests for pipeline data models
"""

import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from walkthrough.models import (
    ScriptSegment,
    TextOverlay,
    Workflow,
    dump_overlays,
    dump_segments,
    key_steps,
    load_workflow,
)
from walkthrough.testing import SAMPLE_WORKFLOW, sample_overlays


class TestWorkflow:
    def test_reads_camel_case(self, workflow):
        assert workflow.duration == 15
        assert len(workflow.steps) == 5
        assert workflow.metadata.viewport.width == 1920
        assert workflow.metadata.recorded_at == "2024-01-01T00:00:00Z"
        assert workflow.steps[1].coordinates.x == 1700

    def test_key_steps(self, workflow):
        assert [step.action for step in key_steps(workflow)] == ["navigate", "click", "click"]

    def test_rejects_unknown_action(self):
        data = dict(SAMPLE_WORKFLOW, steps=[{"timestamp": 0, "action": "teleport"}])
        with pytest.raises(PydanticValidationError):
            Workflow.model_validate(data)

    def test_immutable(self, workflow):
        with pytest.raises(PydanticValidationError):
            workflow.duration = 20

    def test_load_workflow(self, tmp_path):
        path = tmp_path / "workflow.json"
        path.write_text(json.dumps(SAMPLE_WORKFLOW), encoding="utf-8")

        loaded = load_workflow(path)

        assert loaded.id == "test-workflow-1"
        assert loaded.actions()[0] == "navigate"


class TestSerialization:
    def test_dump_segments_uses_wire_names(self, script):
        data = json.loads(dump_segments(script))

        assert data[0]["startTime"] == 0
        assert data[0]["endTime"] == 3
        assert data[0]["emphasis"] == ["easy", "started"]
        assert "start_time" not in data[0]

    def test_dump_overlays(self):
        data = json.loads(dump_overlays(sample_overlays(1)))

        assert data[0]["style"]["fontSize"] == 28
        assert data[0]["style"]["backgroundColor"] == "#00000080"
        assert data[0]["position"] == {"x": 80, "y": 15}

    def test_snake_case_construction(self):
        segment = ScriptSegment(start_time=1, end_time=2, text="hi")
        assert segment.duration == 1
        assert segment.emphasis == []

    def test_overlay_model_allows_invalid_values(self):
        overlay = TextOverlay(text="", start_time=-1, end_time=-2)
        assert overlay.text == ""
