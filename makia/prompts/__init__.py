"""Prompt templates for tutor replies."""

from makia.prompts.tutors import (
    APOLOGY_REPLY,
    BUILTIN_PROFILES,
    CONFUSED_GUIDANCE,
    build_system_prompt,
)

__all__ = ["APOLOGY_REPLY", "BUILTIN_PROFILES", "CONFUSED_GUIDANCE", "build_system_prompt"]
