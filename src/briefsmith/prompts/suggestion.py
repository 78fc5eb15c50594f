"""Single-field suggestion prompts"""

from ..core.models import SuggestionField

# Exemplar-guided instructions for the free-text fields
SUGGESTION_PROMPT_TEMPLATES = {
    SuggestionField.SUBJECT: (
        "Suggest a visually interesting and creative subject for a 10-second viral video. "
        "Be concise. Example: 'A cat riding a skateboard'. "
        "Respond in {language} with only the subject text, without any labels or quotes."
    ),
    SuggestionField.STYLE: (
        "Suggest a single, specific, and visually descriptive art style for an AI-generated video. "
        "Example: 'cinematic hyperrealism'. "
        "Respond in {language} with only the style name, without any labels or quotes."
    ),
    SuggestionField.SETTING: (
        "Suggest a creative and vivid setting for a 10-second viral video. "
        "Be concise. Example: 'Streets of Neo-Seoul at night'. "
        "Respond in {language} with only the setting text, without any labels or quotes."
    ),
    SuggestionField.COLOR_PALETTE: (
        "Suggest a compelling and descriptive color palette for an AI-generated video. "
        "Be concise. Example: 'Vibrant neon and cyberpunk blues'. "
        "Respond in {language} with only the color palette text, without any labels or quotes."
    ),
    SuggestionField.MUSIC: (
        "Suggest a music style or soundtrack for a 10-second viral video. "
        "Be concise. Example: 'Epic orchestral score'. "
        "Respond in {language} with only the music text, without any labels or quotes."
    ),
    SuggestionField.SOUND_EFFECTS: (
        "Suggest key sound effects for a 10-second viral video. "
        "Be concise. Example: 'City ambiance, cat meow'. "
        "Respond in {language} with only the sound effects text, without any labels or quotes."
    ),
    SuggestionField.DIALOGUE: (
        "Suggest a short, 2-3 line dialogue for a 10-second viral video. "
        "It can be a one-on-one or multi-person conversation. "
        'Respond ONLY with a valid JSON array of objects in this format: [{{"speaker": "string", "line": "string"}}]. '
        "The language of the 'speaker' and 'line' values must be {language}. "
        "Do not include any other text or markdown formatting."
    ),
}


def compose_suggestion_instruction(field: SuggestionField, language) -> str:
    """Build the instruction asking for one value of a brief field"""
    return SUGGESTION_PROMPT_TEMPLATES[field].format(language=language.prompt_language)
