"""
Schema registry for structured output.
Each output contract names the Gemini schema the backend must follow.
"""

import importlib
from enum import Enum
from typing import Dict, Any, Optional


class OutputContract(str, Enum):
    """Expected shape of a model response"""
    VIDEO_PROMPT = "video_prompt"
    PLAIN_TEXT = "plain_text"
    DIALOGUE_LINES = "dialogue_suggestion"

    @property
    def schema_name(self) -> Optional[str]:
        """Registered schema name, or None for unstructured text"""
        if self is OutputContract.PLAIN_TEXT:
            return None
        return self.value


# Available schemas
AVAILABLE_SCHEMAS = [
    "video_prompt",
    "dialogue_suggestion",
]


def get_schema(schema_name: str) -> Dict[str, Any]:
    """
    Load the Gemini response schema registered under a name.

    Args:
        schema_name: Name of the schema module (e.g., "video_prompt")

    Returns:
        Schema dictionary accepted by GenerateContentConfig.response_schema

    Raises:
        ValueError: If schema_name is not registered
    """
    if schema_name not in AVAILABLE_SCHEMAS:
        raise ValueError(f"Invalid schema_name: {schema_name}. Must be one of {AVAILABLE_SCHEMAS}")

    module = importlib.import_module(f"{__name__}.{schema_name}")
    return module.GEMINI_SCHEMA


__all__ = ['OutputContract', 'AVAILABLE_SCHEMAS', 'get_schema']
