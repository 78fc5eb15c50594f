"""Localized user-facing messages"""

UI_TEXTS = {
    "ko": {
        "error": {
            "title": "오류가 발생했습니다",
            "generation": "프롬프트를 생성하지 못했습니다. 잠시 후 다시 시도해 주세요.",
            "suggestion": "추천을 가져오지 못했습니다.",
            "unknown": "알 수 없는 오류가 발생했습니다.",
        },
    },
    "en": {
        "error": {
            "title": "An error occurred",
            "generation": "Failed to generate the prompt. Please try again shortly.",
            "suggestion": "Could not fetch a suggestion.",
            "unknown": "An unknown error occurred.",
        },
    },
}


def get_text(language, section: str, key: str) -> str:
    """Look up a localized message by language code or Language member"""
    code = getattr(language, "value", language)
    return UI_TEXTS.get(code, UI_TEXTS["en"])[section][key]
