"""
Contract with the capture layer

Recording is done elsewhere; the pipeline only needs a way to ask a
finished session where its video went.
"""

import os
from typing import Optional, Protocol, runtime_checkable

from walkthrough.core import NotFoundError


@runtime_checkable
class RecordingSession(Protocol):
    async def close(self) -> Optional[str]:
        """Finish the session and return the recorded video path, if any."""
        ...


async def resolve_recording(session: RecordingSession) -> str:
    """Close ``session`` and return its video path.

    Raises:
        NotFoundError: the session produced no video, or the file is missing
    """
    video_path = await session.close()
    if not video_path:
        raise NotFoundError("Recording session produced no video", stage="capture")
    if not os.path.exists(video_path):
        raise NotFoundError(f"Recorded video not found: {video_path}", stage="capture")
    return video_path
