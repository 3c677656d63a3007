"""
JSON extraction from LLM responses.

Models often wrap JSON in markdown fences, add prose around it, or emit
invalid escape sequences. The helpers here recover the payload when they
can and fall back to a caller-supplied default when they cannot.
"""

import json
import re
from typing import Any, Dict, List, Optional

from walkthrough.core.exceptions import ParseError

FENCED_JSON_RE = re.compile(r"```json\s*\n([\s\S]*?)\n?```")
BARE_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
BARE_ARRAY_RE = re.compile(r"\[[\s\S]*\]")
VALID_ESCAPE_RE = re.compile(r'\\(["\\/bfnrt]|u[0-9a-fA-F]{4})|\\')


def extract_largest_balanced_json(text: str, expect_array: bool = False) -> Optional[str]:
    """Extract the largest balanced JSON object/array from text.

    Scans for balanced braces/brackets while respecting string literals and escapes.

    Args:
        text: Source text potentially containing JSON.
        expect_array: If True, only return a JSON array (starts with '[').

    Returns:
        The largest balanced JSON substring, or None if not found.
    """
    if not text:
        return None

    in_string = False
    escape = False
    stack: List[str] = []
    start_idx: Optional[int] = None
    best: Optional[str] = None

    for i, ch in enumerate(text):
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
            continue

        if ch in "{[":
            if not stack:
                start_idx = i
            stack.append(ch)
            continue

        if ch in "}]":
            if not stack:
                continue
            open_ch = stack[-1]
            if (open_ch == "{" and ch == "}") or (open_ch == "[" and ch == "]"):
                stack.pop()
                if not stack and start_idx is not None:
                    candidate = text[start_idx:i + 1]
                    start_idx = None
                    if expect_array != candidate.startswith("["):
                        continue
                    if best is None or len(candidate) > len(best):
                        best = candidate
            else:
                # Mismatched closing; reset state.
                stack.clear()
                start_idx = None

    return best


def fix_json_escapes(text: str) -> str:
    """Escape lone backslashes while preserving valid JSON escapes.

    Valid JSON escapes: \\", \\\\, \\/, \\b, \\f, \\n, \\r, \\t, \\uXXXX
    """
    return VALID_ESCAPE_RE.sub(lambda m: m.group(0) if m.group(1) else "\\\\", text)


def extract_json_candidate(text: str, expect_array: bool = False) -> Optional[str]:
    """Locate the JSON payload inside a model response.

    Tries a fenced ```json block first, then the widest bare ``{...}`` (or
    ``[...]``) span.
    """
    if not text:
        return None

    fenced = FENCED_JSON_RE.search(text)
    if fenced:
        return fenced.group(1).strip()

    bare = (BARE_ARRAY_RE if expect_array else BARE_OBJECT_RE).search(text)
    if bare:
        return bare.group(0)
    return None


def _loads_lenient(candidate: str) -> Any:
    try:
        return json.loads(candidate)
    except json.JSONDecodeError:
        pass
    return json.loads(fix_json_escapes(candidate))


def _parse(text: str, expect_array: bool) -> Any:
    expected = list if expect_array else dict
    candidates = [extract_json_candidate(text, expect_array)]
    candidates.append(extract_largest_balanced_json(text or "", expect_array=expect_array))

    for candidate in candidates:
        if not candidate:
            continue
        try:
            result = _loads_lenient(candidate)
        except (ValueError, RecursionError):
            # Malformed or too deeply nested for the decoder
            continue
        if isinstance(result, expected):
            return result

    kind = "array" if expect_array else "object"
    raise ParseError(f"No JSON {kind} found in model response")


def parse_json_object(text: str) -> Dict[str, Any]:
    """Strict variant of ``parse_json_response``; raises ParseError."""
    return _parse(text, expect_array=False)


def parse_json_array(text: str) -> List[Any]:
    """Strict variant of ``parse_json_array_response``; raises ParseError."""
    return _parse(text, expect_array=True)


def parse_json_response(text: str, default: Optional[Dict[str, Any]] = None) -> Optional[Dict[str, Any]]:
    """Parse a JSON object from an LLM response.

    Handles:
    - Markdown code block wrapping (```json ... ```)
    - Prose before or after the payload
    - Invalid escape sequences

    Returns:
        Parsed dict, or ``default`` if no object could be recovered
    """
    try:
        return parse_json_object(text)
    except ParseError:
        return default


def parse_json_array_response(text: str, default: Optional[List[Any]] = None) -> Optional[List[Any]]:
    """Parse a JSON array from an LLM response, or return ``default``."""
    try:
        return parse_json_array(text)
    except ParseError:
        return default
