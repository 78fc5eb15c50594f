"""Prompt templates for brief generation, suggestions and translation"""

from .brief import BRIEF_PROMPT_TEMPLATE, compose_brief_instruction, render_dialogue
from .suggestion import SUGGESTION_PROMPT_TEMPLATES, compose_suggestion_instruction
from .translation import TRANSLATION_PROMPT_TEMPLATE, compose_translation_instruction

__all__ = [
    'BRIEF_PROMPT_TEMPLATE',
    'SUGGESTION_PROMPT_TEMPLATES',
    'TRANSLATION_PROMPT_TEMPLATE',
    'compose_brief_instruction',
    'compose_suggestion_instruction',
    'compose_translation_instruction',
    'render_dialogue',
]
