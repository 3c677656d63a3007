"""
Parsing utilities for model output
"""

from .json_parser import (
    extract_json_candidate,
    extract_largest_balanced_json,
    fix_json_escapes,
    parse_json_array,
    parse_json_array_response,
    parse_json_object,
    parse_json_response,
)

__all__ = [
    "extract_json_candidate",
    "extract_largest_balanced_json",
    "fix_json_escapes",
    "parse_json_array",
    "parse_json_array_response",
    "parse_json_object",
    "parse_json_response",
]
