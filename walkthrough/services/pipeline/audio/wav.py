"""
WAV container helpers
"""

import io
import wave


def pcm_to_wav(pcm: bytes, channels: int = 1, rate: int = 24000, sample_width: int = 2) -> bytes:
    """Wrap raw little-endian PCM in a WAV header"""
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(sample_width)
        wf.setframerate(rate)
        wf.writeframes(pcm)
    return buffer.getvalue()


def silent_wav(seconds: float, rate: int = 16000, channels: int = 1, sample_width: int = 2) -> bytes:
    frames = int(round(max(0.0, seconds) * rate))
    return pcm_to_wav(b"\x00" * frames * channels * sample_width, channels, rate, sample_width)
