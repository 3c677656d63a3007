"""
Tests for overlay generation on the AI and fallback paths
"""

import pytest

from walkthrough.models import ScriptSegment
from walkthrough.services.llm import MockTextProvider
from walkthrough.services.pipeline.assembly import OverlayGenerator, assert_valid_overlay, generate_basic_overlays
from walkthrough.testing import SAMPLE_OVERLAYS


def assert_all_valid(overlays, duration):
    assert overlays
    for overlay in overlays:
        assert_valid_overlay(overlay)
        assert overlay.end_time <= duration


class TestBasicOverlays:
    def test_three_bands_cycle(self, script):
        overlays = generate_basic_overlays(script, 15)

        assert len(overlays) == 4
        assert [o.position.y for o in overlays] == [20, 50, 80, 20]
        assert overlays[0].position == overlays[3].position
        assert all(o.position.x == 50 for o in overlays)
        assert_all_valid(overlays, 15)

    def test_style_and_truncation(self, script):
        first = generate_basic_overlays(script, 15)[0]

        assert first.text == script[0].text[:50].strip()
        assert len(first.text) <= 50
        assert first.style.font_size == 32
        assert first.style.background_color == "#00000080"
        assert first.style.font_family == "Arial"

    def test_skips_zero_length_segments(self):
        script = [
            ScriptSegment(start_time=5, end_time=5, text="instant"),
            ScriptSegment(start_time=6, end_time=8, text="   "),
            ScriptSegment(start_time=8, end_time=20, text="kept"),
        ]

        overlays = generate_basic_overlays(script, 10)

        assert [o.text for o in overlays] == ["kept"]
        assert overlays[0].end_time == 10
        assert overlays[0].position.y == 80


class TestOverlayGenerator:
    @pytest.mark.asyncio
    async def test_ai_path(self, workflow, script):
        provider = MockTextProvider()

        overlays = await OverlayGenerator(provider).generate_overlays(workflow, script)

        assert [o.text for o in overlays] == [item["text"] for item in SAMPLE_OVERLAYS]
        assert overlays[0].position.x == 80
        assert overlays[2].style.font_size == 36
        assert "Video Editing" in provider.prompts[0]
        assert "personalized dashboard" in provider.prompts[0]
        assert_all_valid(overlays, workflow.duration)

    @pytest.mark.asyncio
    async def test_without_provider(self, workflow, script):
        overlays = await OverlayGenerator().generate_overlays(workflow, script)
        assert [o.position.y for o in overlays] == [20, 50, 80, 20]

    @pytest.mark.asyncio
    async def test_provider_error_falls_back(self, workflow, script):
        generator = OverlayGenerator(MockTextProvider(fail_with="rate limited"))

        overlays = await generator.generate_overlays(workflow, script)

        assert len(overlays) == 4
        assert_all_valid(overlays, workflow.duration)

    @pytest.mark.asyncio
    async def test_garbage_response_falls_back(self, workflow, script):
        provider = MockTextProvider(responses=[("video editing", "Sorry, no overlays today")])

        overlays = await OverlayGenerator(provider).generate_overlays(workflow, script)

        assert overlays[0].text == script[0].text[:50].strip()

    @pytest.mark.asyncio
    async def test_invalid_ai_overlays_are_repaired_or_dropped(self, workflow, script):
        raw = """```json
[
  {"text": "Too wide", "startTime": 1, "endTime": 40, "position": {"x": 250, "y": 50}},
  {"text": "", "startTime": 1, "endTime": 2},
  {"text": "Backwards", "startTime": 5, "endTime": 2},
  {"startTime": 0, "endTime": 1}
]
```"""
        provider = MockTextProvider(responses=[("video editing", raw)])

        overlays = await OverlayGenerator(provider).generate_overlays(workflow, script)

        assert len(overlays) == 1
        assert overlays[0].text == "Too wide"
        assert overlays[0].end_time == 15
        assert overlays[0].position.x == 100
        assert_all_valid(overlays, workflow.duration)
