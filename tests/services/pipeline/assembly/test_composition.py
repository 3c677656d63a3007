"""
Tests for the composition engine state machine and its cleanup guarantees
"""

from unittest.mock import AsyncMock, patch

import pytest

from walkthrough.config import VoiceoverConfig
from walkthrough.core import ExecutionError, NotFoundError, ProviderError, ValidationError
from walkthrough.models import TextOverlay
from walkthrough.services.pipeline.assembly import (
    CompositionEngine,
    CompositionState,
    MockVideoCommandExecutor,
)
from walkthrough.services.pipeline.audio import MockTTSBackend, OpenAITTSBackend, VoiceoverGenerator
from walkthrough.testing import sample_overlays


def make_engine(backend=None, executor=None, work_dir=None):
    voiceover = VoiceoverGenerator(VoiceoverConfig(output_format="wav"), backend or MockTTSBackend())
    return CompositionEngine(voiceover, executor or MockVideoCommandExecutor(), work_dir=work_dir)


@pytest.fixture
def out_dir(tmp_path):
    return tmp_path / "out"


class TestComposeVideo:
    @pytest.mark.asyncio
    async def test_success(self, recording, workflow, script, out_dir):
        executor = MockVideoCommandExecutor()
        engine = make_engine(executor=executor)
        states = []
        output = out_dir / "final.mp4"

        await engine.compose_video(
            str(recording), workflow, script, sample_overlays(), str(output), on_state_change=states.append
        )

        assert output.exists()
        assert [p.name for p in out_dir.iterdir()] == ["final.mp4"]
        assert executor.operations() == ["overlay", "mux"]
        assert executor.commands[0].args["video"] == str(recording)
        assert states == [
            CompositionState.VOICEOVER_GENERATING,
            CompositionState.OVERLAY_BURNING,
            CompositionState.MUXING,
            CompositionState.DONE,
        ]

    @pytest.mark.asyncio
    async def test_voiceover_written_to_work_dir(self, recording, workflow, script, tmp_path, out_dir):
        executor = MockVideoCommandExecutor()
        work_dir = tmp_path / "work"
        engine = make_engine(executor=executor, work_dir=work_dir)

        await engine.compose_video(str(recording), workflow, script, [], str(out_dir / "final.mp4"))

        audio_path = executor.commands[1].args["audio"]
        assert audio_path.startswith(str(work_dir))
        assert audio_path.endswith(".wav")
        assert list(work_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_mux_failure_leaves_nothing(self, recording, workflow, script, out_dir):
        executor = MockVideoCommandExecutor()
        executor.set_should_fail("mux exploded", operation="mux")
        states = []

        with pytest.raises(ExecutionError) as exc_info:
            await make_engine(executor=executor).compose_video(
                str(recording), workflow, script, sample_overlays(), str(out_dir / "final.mp4"),
                on_state_change=states.append,
            )

        assert exc_info.value.stage == "muxing"
        assert states[-1] == CompositionState.FAILED
        assert list(out_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_voiceover_failure_aborts_before_overlay(self, recording, workflow, script, out_dir):
        executor = MockVideoCommandExecutor()
        engine = make_engine(backend=OpenAITTSBackend(None), executor=executor)

        with pytest.raises(ProviderError) as exc_info:
            await engine.compose_video(str(recording), workflow, script, [], str(out_dir / "final.mp4"))

        assert exc_info.value.stage == "voiceover_generating"
        assert executor.commands == []
        assert list(out_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_missing_recording(self, workflow, script, tmp_path):
        states = []
        with pytest.raises(NotFoundError) as exc_info:
            await make_engine().compose_video(
                str(tmp_path / "missing.webm"), workflow, script, [], str(tmp_path / "final.mp4"),
                on_state_change=states.append,
            )

        assert exc_info.value.stage == "input"
        assert states == []

    @pytest.mark.asyncio
    async def test_invalid_overlay(self, recording, workflow, script, out_dir):
        bad = TextOverlay(text="Late", start_time=5, end_time=4)

        with pytest.raises(ValidationError) as exc_info:
            await make_engine().compose_video(str(recording), workflow, script, [bad], str(out_dir / "final.mp4"))

        assert exc_info.value.stage == "overlay_burning"
        assert list(out_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_empty_voiceover(self, recording, workflow, script, out_dir):
        engine = make_engine()

        with patch.object(engine.voiceover, "generate_voiceover", AsyncMock(return_value=b"")):
            with pytest.raises(ExecutionError, match="no audio") as exc_info:
                await engine.compose_video(str(recording), workflow, script, [], str(out_dir / "final.mp4"))

        assert exc_info.value.stage == "voiceover_generating"

    @pytest.mark.asyncio
    async def test_unexpected_errors_are_wrapped(self, recording, workflow, script, out_dir):
        executor = MockVideoCommandExecutor()
        executor.add_text_overlays = AsyncMock(side_effect=OSError("disk gone"))

        with pytest.raises(ExecutionError, match="disk gone") as exc_info:
            await make_engine(executor=executor).compose_video(
                str(recording), workflow, script, [], str(out_dir / "final.mp4")
            )

        assert exc_info.value.stage == "overlay_burning"
        assert isinstance(exc_info.value.__cause__, OSError)


class TestGenerateOverlays:
    @pytest.mark.asyncio
    async def test_defaults_to_basic_overlays(self, workflow, script):
        overlays = await make_engine().generate_overlays(workflow, script)
        assert len(overlays) == len(script)
