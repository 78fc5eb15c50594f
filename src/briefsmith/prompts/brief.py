"""Full-brief generation prompt"""

from ..core.config import DIALOGUE_NONE_MARKER, SHOT_COUNT


BRIEF_PROMPT_TEMPLATE = {
    "template": """You are an expert AI video director named "Jason". Your task is to create a detailed shot list for a short-form video for platforms like TikTok or Reels, designed for AI video generators like Sora and Veo.
The final output must be in JSON format, adhering to the provided schema.
All text descriptions in the JSON output (title, overall_prompt, shot descriptions) must be in {language}.

User's Video Concept:
- Main Subject: {subject}
- Visual Style: {style}
- Setting/Background: {setting}
- Color Palette: {color_palette}
- Music/Soundtrack: {music}
- Key Sound Effects: {sound_effects}
- Dialogue/Narration:
{dialogue}
- Total Video Length: {video_length} seconds
- Aspect Ratio: {aspect_ratio}
- Shot List ({shot_count} cuts): {camera_angles}

Instructions:
1. Create a compelling, coherent narrative or visual sequence across exactly {shot_count} shots.
2. The 'overall_prompt' should be a single, powerful paragraph that synthesizes all elements (visuals, audio, story) into one master prompt. This is the most important and most information-dense field.
3. The total duration of all shots combined must equal exactly {video_length} seconds. Distribute the time logically across the {shot_count} shots.
4. Ensure the JSON is perfectly structured according to the schema.""",
    "schema": "video_prompt"
}


def render_dialogue(dialogue) -> str:
    """Render non-blank dialogue as `speaker: "line"` lines, or the none marker"""
    lines = [f'{d.speaker}: "{d.line}"' for d in dialogue if not d.is_blank()]
    return "\n".join(lines) or DIALOGUE_NONE_MARKER


def compose_brief_instruction(brief, language) -> str:
    """
    Build the instruction for a full shot-by-shot video prompt.

    Args:
        brief: Brief to serialize
        language: Language every free-text output field must use

    Returns:
        Instruction text for the video_prompt output contract
    """
    return BRIEF_PROMPT_TEMPLATE["template"].format(
        language=language.prompt_language,
        subject=brief.subject,
        style=brief.style,
        setting=brief.setting,
        color_palette=brief.color_palette,
        music=brief.music,
        sound_effects=brief.sound_effects,
        dialogue=render_dialogue(brief.dialogue),
        video_length=brief.video_length,
        aspect_ratio=brief.aspect_ratio,
        shot_count=SHOT_COUNT,
        camera_angles=", ".join(brief.camera_angles),
    )
