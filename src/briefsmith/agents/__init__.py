"""Agent implementations for brief generation, suggestions and translation"""

from .base import clean_json_response, decode_response, parse_json_payload
from .brief_agent import generate_video_prompt
from .suggestion_agent import (
    REFRESH_ORDER,
    RefreshReport,
    SuggestionOrchestrator,
    apply_suggestion,
    suggest_field,
)
from .translation_agent import TranslationAdapter, restore_fixed_fields

__all__ = [
    'clean_json_response',
    'decode_response',
    'parse_json_payload',
    'generate_video_prompt',
    'REFRESH_ORDER',
    'RefreshReport',
    'SuggestionOrchestrator',
    'apply_suggestion',
    'suggest_field',
    'TranslationAdapter',
    'restore_fixed_fields',
]
