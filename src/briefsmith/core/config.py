"""Configuration and constants for the video brief studio"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Gemini Configuration
GEMINI_API_KEY = os.getenv('GEMINI_API_KEY') or os.getenv('API_KEY')
GEMINI_MODEL = os.getenv('GEMINI_MODEL', 'gemini-2.5-flash')
REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT', '60'))  # seconds

GEMINI_CONFIGS = {
    'temperature': 1.0,
}

# Suggestions favor speed over depth: thinking is disabled for them
SUGGESTION_THINKING_BUDGET = 0

# History Configuration
HISTORY_LIMIT = 50
HISTORY_STORAGE_KEY = os.getenv('HISTORY_STORAGE_KEY', 'videoPromptHistory')
HISTORY_FILE = Path(os.getenv('HISTORY_FILE', Path.home() / '.briefsmith' / 'store.json'))
REDIS_URL = os.getenv('REDIS_URL', '')

# Logging Configuration
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

# Brief Configuration
SHOT_COUNT = 10
MIN_VIDEO_LENGTH = 6  # seconds
MAX_VIDEO_LENGTH = 10  # seconds
DEFAULT_VIDEO_LENGTH = 8

# Marker rendered in place of an empty dialogue block
DIALOGUE_NONE_MARKER = "none"

# Language names used inside model instructions
PROMPT_LANGUAGES = {
    "ko": "Korean",
    "en": "English",
}

ASPECT_RATIOS = [
    {"value": "9:16", "label": "9:16 (Shorts/Reels)"},
    {"value": "16:9", "label": "16:9 (YouTube)"},
    {"value": "1:1", "label": "1:1 (Feed)"},
]

ART_STYLES = [
    {"value": "Cinematic", "ko": "시네마틱", "en": "Cinematic"},
    {"value": "Photorealistic", "ko": "포토리얼리즘", "en": "Photorealistic"},
    {"value": "Anime", "ko": "애니메이션", "en": "Anime"},
    {"value": "3D Animation", "ko": "3D 애니메이션", "en": "3D Animation"},
    {"value": "Watercolor", "ko": "수채화", "en": "Watercolor"},
    {"value": "Cyberpunk", "ko": "사이버펑크", "en": "Cyberpunk"},
    {"value": "Vintage Film", "ko": "빈티지 필름", "en": "Vintage Film"},
    {"value": "Claymation", "ko": "클레이메이션", "en": "Claymation"},
]

CAMERA_ANGLES = [
    {"value": "Wide Shot", "ko": "와이드 샷", "en": "Wide Shot"},
    {"value": "Medium Shot", "ko": "미디엄 샷", "en": "Medium Shot"},
    {"value": "Close-up", "ko": "클로즈업", "en": "Close-up"},
    {"value": "Extreme Close-up", "ko": "익스트림 클로즈업", "en": "Extreme Close-up"},
    {"value": "Over-the-shoulder", "ko": "오버 더 숄더", "en": "Over-the-shoulder"},
    {"value": "Point of View", "ko": "시점 샷", "en": "Point of View"},
    {"value": "Low Angle", "ko": "로우 앵글", "en": "Low Angle"},
    {"value": "High Angle", "ko": "하이 앵글", "en": "High Angle"},
    {"value": "Bird's-eye View", "ko": "버드아이 뷰", "en": "Bird's-eye View"},
    {"value": "Dutch Angle", "ko": "더치 앵글", "en": "Dutch Angle"},
    {"value": "Tracking Shot", "ko": "트래킹 샷", "en": "Tracking Shot"},
    {"value": "Drone Shot", "ko": "드론 샷", "en": "Drone Shot"},
]


def configure_logging(level: str = None):
    """Configure root logging once for CLI or embedding applications"""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
