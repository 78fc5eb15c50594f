"""
Schema for dialogue suggestions: a bare array of speaker/line objects.
"""

GEMINI_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "speaker": {"type": "STRING"},
            "line": {"type": "STRING"}
        },
        "required": ["speaker", "line"]
    }
}
