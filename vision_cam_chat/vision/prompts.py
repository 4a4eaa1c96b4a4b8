"""Prompt templates that keep model answers grounded in the visible frame."""
from vision_cam_chat.constants import ANALYZE_PROMPT, VISIBILITY_CONSTRAINT


def build_analysis_prompt() -> str:
    return ANALYZE_PROMPT


def build_question_prompt(question: str) -> str:
    return f"{question}\n\n{VISIBILITY_CONSTRAINT}"
