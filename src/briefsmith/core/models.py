"""Data model for briefs, generated results, suggestions and history"""

import time
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import (
    ART_STYLES,
    ASPECT_RATIOS,
    CAMERA_ANGLES,
    DEFAULT_VIDEO_LENGTH,
    MAX_VIDEO_LENGTH,
    MIN_VIDEO_LENGTH,
    PROMPT_LANGUAGES,
    SHOT_COUNT,
)

ASPECT_RATIO_VALUES = [ratio["value"] for ratio in ASPECT_RATIOS]


class Language(str, Enum):
    """Target language for composed instructions and model output"""
    KO = "ko"
    EN = "en"

    @property
    def prompt_language(self) -> str:
        return PROMPT_LANGUAGES[self.value]


class DialogueLine(BaseModel):
    speaker: str = ""
    line: str = ""

    def is_blank(self) -> bool:
        """A line is blank when either the speaker or the line is empty"""
        return not self.speaker.strip() or not self.line.strip()


def default_dialogue() -> List[DialogueLine]:
    return [DialogueLine()]


def default_camera_angles() -> List[str]:
    return [CAMERA_ANGLES[0]["value"]] * SHOT_COUNT


class Brief(BaseModel):
    """Everything the user specified for one video"""

    model_config = ConfigDict(validate_assignment=True)

    subject: str = ""
    style: str = ART_STYLES[0]["value"]
    setting: str = ""
    color_palette: str = ""
    music: str = ""
    sound_effects: str = ""
    dialogue: List[DialogueLine] = Field(default_factory=default_dialogue, min_length=1)
    camera_angles: List[str] = Field(
        default_factory=default_camera_angles,
        min_length=SHOT_COUNT,
        max_length=SHOT_COUNT,
    )
    video_length: int = Field(DEFAULT_VIDEO_LENGTH, ge=MIN_VIDEO_LENGTH, le=MAX_VIDEO_LENGTH)
    aspect_ratio: str = ASPECT_RATIO_VALUES[0]

    @field_validator("aspect_ratio")
    @classmethod
    def _known_aspect_ratio(cls, value: str) -> str:
        if value not in ASPECT_RATIO_VALUES:
            raise ValueError(f"aspect_ratio must be one of {ASPECT_RATIO_VALUES}, got {value!r}")
        return value


class Shot(BaseModel):
    shot_number: int
    description: str
    camera_angle: str
    duration_seconds: float


class GeneratedResult(BaseModel):
    """Shot-by-shot video prompt returned by the model"""
    title: str
    overall_prompt: str
    total_duration_seconds: float
    aspect_ratio: str
    shots: List[Shot]

    def shot_duration_sum(self) -> float:
        return sum(shot.duration_seconds for shot in self.shots)


class SuggestionField(str, Enum):
    """Suggestible brief slots, declared in refresh order"""
    SUBJECT = "subject"
    STYLE = "style"
    SETTING = "setting"
    COLOR_PALETTE = "color_palette"
    MUSIC = "music"
    SOUND_EFFECTS = "sound_effects"
    DIALOGUE = "dialogue"

    @property
    def is_structured(self) -> bool:
        return self is SuggestionField.DIALOGUE


def new_history_id() -> str:
    return str(time.time_ns())


class HistoryEntry(BaseModel):
    """Immutable snapshot of one successful generation"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_history_id)
    timestamp: datetime = Field(default_factory=datetime.now)
    brief: Brief
    result: GeneratedResult
    language: Optional[Language] = None  # language the result was generated in

    @classmethod
    def snapshot(cls, brief: Brief, result: GeneratedResult, language: Optional[Language] = None) -> "HistoryEntry":
        """Build an entry holding deep copies, detached from the live brief"""
        return cls(
            brief=brief.model_copy(deep=True),
            result=result.model_copy(deep=True),
            language=language,
        )
