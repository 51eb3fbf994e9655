"""
Lenient JSON extraction from model output.

Models sometimes wrap the requested JSON in prose or markdown code fences.
"""

import json
from typing import Any, Optional

import structlog

from dispatch.core.exceptions import VoiceAnalysisParseError

logger = structlog.get_logger(__name__)


def find_balanced_object(text: str) -> Optional[str]:
    """
    Return the first balanced {...} region of text, or None.

    Braces inside JSON string literals (including escaped quotes) are ignored.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False

    for index in range(start, len(text)):
        char = text[index]

        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start:index + 1]

    return None


def extract_json_object(text: str) -> dict[str, Any]:
    """
    Parse a JSON object from model output.

    Tries a strict parse first, then the first balanced {...} block.

    Raises:
        VoiceAnalysisParseError: neither attempt yields a JSON object
    """
    stripped = text.strip()

    try:
        parsed = json.loads(stripped)
    except json.JSONDecodeError:
        parsed = None

    if isinstance(parsed, dict):
        return parsed

    candidate = find_balanced_object(stripped)
    if candidate is None:
        logger.warning("No JSON object found in model output", length=len(stripped))
        raise VoiceAnalysisParseError("Failed to parse voice analysis response.")

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.warning("Embedded JSON block did not parse", error=str(e))
        raise VoiceAnalysisParseError("Failed to parse voice analysis response.") from e

    if not isinstance(parsed, dict):
        raise VoiceAnalysisParseError("Failed to parse voice analysis response.")

    return parsed
