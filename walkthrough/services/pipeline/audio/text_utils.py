"""
Narration text cleanup before synthesis
"""

import re

_EMPHASIS_RE = re.compile(r"\[EMPHASIS:\s*([^\]]*)\]", re.IGNORECASE)
_PAUSE_RE = re.compile(r"\[PAUSE\]", re.IGNORECASE)
_DIRECTIVE_RE = re.compile(r"\[([^\]]*)\]")
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_for_tts(text: str) -> str:
    """Strip script directions so TTS engines do not read them aloud.

    ``[EMPHASIS: word]`` becomes ``word``, ``[PAUSE]`` becomes a sentence
    break, and any other bracketed direction is replaced by its inner text.
    """
    text = _EMPHASIS_RE.sub(lambda m: m.group(1).strip(), text)
    text = _PAUSE_RE.sub(". ", text)
    text = _DIRECTIVE_RE.sub(lambda m: m.group(1).strip(), text)
    return _WHITESPACE_RE.sub(" ", text).strip()
