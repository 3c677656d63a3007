"""
Tests for resolving a finished recording session
"""

import pytest

from walkthrough.core import NotFoundError
from walkthrough.services.capture import RecordingSession, resolve_recording


class FakeSession:
    def __init__(self, path):
        self.path = path
        self.closed = False

    async def close(self):
        self.closed = True
        return self.path


class TestResolveRecording:
    def test_protocol(self):
        assert isinstance(FakeSession(None), RecordingSession)

    @pytest.mark.asyncio
    async def test_returns_path(self, recording):
        session = FakeSession(str(recording))
        assert await resolve_recording(session) == str(recording)
        assert session.closed

    @pytest.mark.asyncio
    async def test_no_video(self):
        with pytest.raises(NotFoundError, match="produced no video") as exc_info:
            await resolve_recording(FakeSession(None))
        assert exc_info.value.stage == "capture"

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        with pytest.raises(NotFoundError, match="not found"):
            await resolve_recording(FakeSession(str(tmp_path / "gone.webm")))
