"""Utility functions and helpers"""

from dispatch.utils.parsing import extract_json_object
from dispatch.utils.prompts import (
    PromptPair,
    build_cascade_prompt,
    build_draft_prompt,
    build_voice_analysis_prompt,
)

__all__ = [
    "PromptPair",
    "build_cascade_prompt",
    "build_draft_prompt",
    "build_voice_analysis_prompt",
    "extract_json_object",
]
