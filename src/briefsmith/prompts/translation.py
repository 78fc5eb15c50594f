"""Translation prompt for an already generated result"""

TRANSLATION_PROMPT_TEMPLATE = {
    "template": """You are a professional localization specialist for AI video prompts.
Below is a complete, already generated video prompt in JSON format.

Re-express every natural-language field in {language}: title, overall_prompt, each shot's description and camera_angle.
Keep the structure identical: the same keys, the same number of shots in the same order.
Do NOT change numeric values or tokens: shot_number, duration_seconds, total_duration_seconds and aspect_ratio must stay exactly as given.
Return only the JSON object, adhering to the provided schema.

Video prompt:
{result_json}""",
    "schema": "video_prompt"
}


def compose_translation_instruction(result, language) -> str:
    """Build the instruction re-expressing a GeneratedResult in another language"""
    return TRANSLATION_PROMPT_TEMPLATE["template"].format(
        language=language.prompt_language,
        result_json=result.model_dump_json(indent=2),
    )
