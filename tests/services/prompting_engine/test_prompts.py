"""
Tests for prompt templates and the registry
"""

import json

import pytest

from walkthrough.services.prompting_engine import (
    PromptRegistry,
    PromptTemplate,
    format_prompt,
    get_prompt,
    list_prompts,
)


class TestPromptTemplate:
    def test_replaces_every_occurrence(self):
        template = PromptTemplate(template="{a} and {a} but {b}")
        assert template.format(a="x", b=1) == "x and x but 1"

    def test_leaves_other_braces(self):
        template = PromptTemplate(template='{"startTime": 0, "name": "{name}"}')
        assert template.format(name="Bo") == '{"startTime": 0, "name": "Bo"}'

    def test_unknown_placeholders_stay(self):
        assert PromptTemplate(template="{missing}").format(other="x") == "{missing}"


class TestRegistry:
    def test_builtin_names(self):
        assert list_prompts() == ["SCRIPT_GENERATION", "VIDEO_EDITING", "WORKFLOW_ANALYSIS"]

    def test_unknown_name(self):
        with pytest.raises(KeyError):
            get_prompt("NOPE")

    def test_format_prompt(self):
        text = format_prompt("VIDEO_EDITING", workflow="{}", script="[]")
        assert "Video Editing" in text
        assert "{workflow}" not in text

    def test_workflow_analysis_builder(self, workflow):
        registry = PromptRegistry()
        text = registry.workflow_analysis(
            url=workflow.url, duration=workflow.duration, actions=workflow.actions()
        )

        assert "https://example.com" in text
        assert "15 seconds" in text
        assert "Number of interactions: 5" in text
        assert json.dumps(workflow.actions()) in text

    def test_script_generation_defaults(self):
        text = PromptRegistry().script_generation(analysis={"features": []}, duration=15)

        assert "Target audience: general users" in text
        assert "Tone: professional" in text
        assert "Style: informative" in text

    def test_script_generation_overrides(self):
        text = PromptRegistry().script_generation(
            analysis={}, duration=9.5, audience="developers", tone="casual", style="playful"
        )

        assert "Target audience: developers" in text
        assert "Tone: casual" in text
        assert "9.5 seconds" in text


class TestPromptDirectory:
    def test_file_overrides_builtin(self, tmp_path):
        (tmp_path / "script-generation.md").write_text("Custom for {audience}", encoding="utf-8")
        registry = PromptRegistry(prompts_dir=tmp_path)

        assert registry.format("SCRIPT_GENERATION", audience="devs") == "Custom for devs"
        assert "Workflow Analysis" in registry.get("WORKFLOW_ANALYSIS").template

    def test_extra_templates_are_listed(self, tmp_path):
        (tmp_path / "release-notes.md").write_text("Notes {version}", encoding="utf-8")
        registry = PromptRegistry(prompts_dir=tmp_path)

        assert "RELEASE_NOTES" in registry.list_prompts()
        assert registry.format("RELEASE_NOTES", version="2") == "Notes 2"

    def test_missing_template(self, tmp_path):
        with pytest.raises(KeyError):
            PromptRegistry(prompts_dir=tmp_path).get("RELEASE_NOTES")
