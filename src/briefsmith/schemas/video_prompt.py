"""
Schema for full-brief generation and translation.
Gemini structured output; the decoder validates the same fields.
"""

from ..core.config import SHOT_COUNT

REQUIRED_SHOT_FIELDS = ["shot_number", "description", "camera_angle", "duration_seconds"]
REQUIRED_FIELDS = ["title", "overall_prompt", "total_duration_seconds", "aspect_ratio", "shots"]

GEMINI_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "title": {
            "type": "STRING",
            "description": "A short, catchy title for the video."
        },
        "overall_prompt": {
            "type": "STRING",
            "description": "A comprehensive, single-paragraph prompt combining all elements for an AI video generator like Sora or Veo."
        },
        "total_duration_seconds": {
            "type": "NUMBER",
            "description": "The total length of the video in seconds."
        },
        "aspect_ratio": {
            "type": "STRING",
            "description": "The aspect ratio of the video (e.g., \"9:16\")."
        },
        "shots": {
            "type": "ARRAY",
            "description": f"An array of {SHOT_COUNT} distinct shots that make up the video.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "shot_number": {"type": "INTEGER"},
                    "description": {
                        "type": "STRING",
                        "description": "A detailed description of the action and visuals in this specific shot."
                    },
                    "camera_angle": {
                        "type": "STRING",
                        "description": "The camera angle or movement for this shot."
                    },
                    "duration_seconds": {
                        "type": "NUMBER",
                        "description": "The duration of this specific shot in seconds."
                    }
                },
                "required": REQUIRED_SHOT_FIELDS
            }
        }
    },
    "required": REQUIRED_FIELDS
}
