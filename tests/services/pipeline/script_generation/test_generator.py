"""
Tests for the two-stage script generator
"""

import pytest

from walkthrough.core import ProviderError
from walkthrough.services.llm import MockTextProvider
from walkthrough.services.pipeline.script_generation import FALLBACK_NARRATION, ScriptGenerator
from walkthrough.testing import SAMPLE_ANALYSIS, SAMPLE_SCRIPT


def assert_valid_script(segments, duration):
    assert segments
    starts = [segment.start_time for segment in segments]
    assert starts == sorted(starts)
    for segment in segments:
        assert 0 <= segment.start_time <= segment.end_time <= duration


class TestScriptGenerator:
    """Login-flow scenario and fallbacks"""

    @pytest.mark.asyncio
    async def test_canonical_login_flow(self, workflow):
        generator = ScriptGenerator(MockTextProvider())

        segments = await generator.generate_script(workflow)

        assert len(segments) == 4
        assert segments[0].start_time == 0
        assert segments[-1].end_time == 15
        assert [s.text for s in segments] == [item["text"] for item in SAMPLE_SCRIPT]
        assert segments[3].emphasis == ["personalized", "dashboard"]
        assert_valid_script(segments, workflow.duration)

    @pytest.mark.asyncio
    async def test_prompts_sent_in_order(self, workflow):
        provider = MockTextProvider()
        await ScriptGenerator(provider).generate_script(
            workflow, tone="friendly", style="upbeat", audience="sales teams"
        )

        assert len(provider.prompts) == 2
        assert "Workflow Analysis" in provider.prompts[0]
        assert "Script Generation" in provider.prompts[1]
        assert "Tone: friendly" in provider.prompts[1]
        assert "Target audience: sales teams" in provider.prompts[1]
        assert "User authentication" in provider.prompts[1]

    @pytest.mark.asyncio
    async def test_invalid_script_json_falls_back_to_key_steps(self, workflow):
        provider = MockTextProvider(responses=[("script generation", "I cannot do that")])

        segments = await ScriptGenerator(provider).generate_script(workflow)

        assert [s.text for s in segments] == [
            "Step 1: navigate on https://example.com",
            "Step 2: click on #login-button",
            "Step 3: click on #submit",
        ]
        assert segments[0].end_time == pytest.approx(5.0)
        assert segments[2].start_time == 8
        assert segments[2].end_time == pytest.approx(13.0)
        assert_valid_script(segments, workflow.duration)

    @pytest.mark.asyncio
    async def test_all_segments_invalid_falls_back(self, workflow):
        bad = '```json\n[{"text": "no times"}, {"startTime": "soon", "endTime": 2, "text": "x"}]\n```'
        provider = MockTextProvider(responses=[("script generation", bad)])

        segments = await ScriptGenerator(provider).generate_script(workflow)

        assert segments[0].text.startswith("Step 1:")
        assert_valid_script(segments, workflow.duration)

    @pytest.mark.asyncio
    async def test_deeply_nested_response_falls_back(self, workflow):
        provider = MockTextProvider(responses=[("script generation", "[" * 5000 + "]" * 5000)])

        segments = await ScriptGenerator(provider).generate_script(workflow)

        assert segments[0].text.startswith("Step 1:")
        assert_valid_script(segments, workflow.duration)

    @pytest.mark.asyncio
    async def test_no_key_steps_single_segment(self, workflow):
        provider = MockTextProvider(responses=[("script generation", "nope")])
        quiet = workflow.model_copy(update={"steps": []})

        segments = await ScriptGenerator(provider).generate_script(quiet)

        assert len(segments) == 1
        assert segments[0].text == FALLBACK_NARRATION
        assert (segments[0].start_time, segments[0].end_time) == (0, 15)

    @pytest.mark.asyncio
    async def test_out_of_range_segments_are_clamped_and_sorted(self, workflow):
        raw = (
            '[{"startTime": 12, "endTime": 40, "text": "late"},'
            ' {"startTime": -3, "endTime": 2, "text": "early", "emphasis": "not-a-list"},'
            ' {"startTime": 5, "endTime": 4, "text": "inverted"}]'
        )
        provider = MockTextProvider(responses=[("script generation", raw)])

        segments = await ScriptGenerator(provider).generate_script(workflow)

        assert [s.text for s in segments] == ["early", "inverted", "late"]
        assert segments[0].start_time == 0
        assert segments[0].emphasis == []
        assert (segments[1].start_time, segments[1].end_time) == (5, 5)
        assert segments[2].end_time == 15
        assert_valid_script(segments, workflow.duration)


class TestAnalyzeWorkflow:
    @pytest.mark.asyncio
    async def test_parses_analysis(self, workflow):
        analysis = await ScriptGenerator(MockTextProvider()).analyze_workflow(workflow)
        assert analysis == SAMPLE_ANALYSIS

    @pytest.mark.asyncio
    async def test_unparseable_analysis_is_empty(self, workflow):
        provider = MockTextProvider(responses=[("workflow analysis", "no idea")])

        analysis = await ScriptGenerator(provider).analyze_workflow(workflow)

        assert analysis == {
            "features": [],
            "journey": [],
            "highlights": [],
            "uiElements": [],
            "valueProps": [],
        }

    @pytest.mark.asyncio
    async def test_partial_analysis_is_completed(self, workflow):
        provider = MockTextProvider(responses=[("workflow analysis", '{"features": ["Search"]}')])

        analysis = await ScriptGenerator(provider).analyze_workflow(workflow)

        assert analysis["features"] == ["Search"]
        assert analysis["highlights"] == []

    @pytest.mark.asyncio
    async def test_provider_errors_propagate(self, workflow):
        generator = ScriptGenerator(MockTextProvider(fail_with="401 unauthorized"))

        with pytest.raises(ProviderError):
            await generator.generate_script(workflow)
