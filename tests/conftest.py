"""Pytest configuration and fixtures."""

import json
from unittest.mock import AsyncMock, Mock

import pytest

from briefsmith.core.client import GenerationClient
from briefsmith.core.models import Brief, DialogueLine, GeneratedResult, SuggestionField
from briefsmith.prompts.suggestion import SUGGESTION_PROMPT_TEMPLATES
from briefsmith.prompts.translation import TRANSLATION_PROMPT_TEMPLATE
from briefsmith.session.history import HistoryManager, HistoryRepository, MemoryKeyValueStore

SHOT_DURATIONS = [1, 1, 1, 1, 1, 1, 0.5, 0.5, 0.5, 0.5]

SUGGESTIONS = {
    SuggestionField.SUBJECT: "A fox surfing a giant wave",
    SuggestionField.STYLE: '"Neon noir"',
    SuggestionField.SETTING: "Rainy Tokyo rooftop",
    SuggestionField.COLOR_PALETTE: "Teal and orange",
    SuggestionField.MUSIC: "Lo-fi beats",
    SuggestionField.SOUND_EFFECTS: "Rain, distant thunder",
    SuggestionField.DIALOGUE: (
        '```json\n[{"speaker": "Fox", "line": "Surf is up!"}, '
        '{"speaker": "Gull", "line": "Show-off."}]\n```'
    ),
}


def make_result_payload(title="Skate Cat", total=8, aspect_ratio="9:16", durations=None):
    durations = durations or SHOT_DURATIONS
    return {
        "title": title,
        "overall_prompt": f"{title}: a cinematic vertical video of a cat riding a skateboard.",
        "total_duration_seconds": total,
        "aspect_ratio": aspect_ratio,
        "shots": [
            {
                "shot_number": i,
                "description": f"{title} shot {i}",
                "camera_angle": "Wide Shot",
                "duration_seconds": duration,
            }
            for i, duration in enumerate(durations, start=1)
        ],
    }


def field_for_instruction(instruction):
    for field, template in SUGGESTION_PROMPT_TEMPLATES.items():
        if instruction.startswith(template[:40]):
            return field
    return None


def is_translation(instruction):
    return instruction.startswith(TRANSLATION_PROMPT_TEMPLATE["template"][:40])


class ScriptedLLM:
    """Backend double answering by instruction kind"""

    def __init__(self):
        self.calls = []
        self.fail_fields = set()
        self.generation_error = None
        self.translation_error = None
        self.generation_title = "Skate Cat"

    async def ainvoke(self, instruction, response_schema=None, low_latency=False):
        self.calls.append({
            "instruction": instruction,
            "response_schema": response_schema,
            "low_latency": low_latency,
        })
        if is_translation(instruction):
            if self.translation_error:
                raise self.translation_error
            return json.dumps(make_result_payload(title="Translated"))
        if response_schema == "video_prompt":
            if self.generation_error:
                raise self.generation_error
            return json.dumps(make_result_payload(title=self.generation_title))

        field = field_for_instruction(instruction)
        if field in self.fail_fields:
            raise RuntimeError(f"backend refused {field.value}")
        return SUGGESTIONS[field]

    def calls_of(self, kind):
        if kind == "translation":
            return [c for c in self.calls if is_translation(c["instruction"])]
        if kind == "generation":
            return [c for c in self.calls if c["response_schema"] == "video_prompt" and not is_translation(c["instruction"])]
        return [c for c in self.calls if field_for_instruction(c["instruction"]) is not None]


@pytest.fixture
def result_payload():
    return make_result_payload()


@pytest.fixture
def sample_result(result_payload):
    return GeneratedResult.model_validate(result_payload)


@pytest.fixture
def brief():
    return Brief(
        subject="A cat riding a skateboard",
        style="cinematic",
        setting="Venice Beach boardwalk",
        color_palette="Warm sunset oranges",
        music="Upbeat surf rock",
        sound_effects="Wheels on wood, seagulls",
        dialogue=[DialogueLine(speaker="Cat", line="Watch this!")],
        video_length=8,
        aspect_ratio="9:16",
    )


@pytest.fixture
def fake_llm():
    llm = Mock()
    llm.ainvoke = AsyncMock(return_value="ok")
    return llm


@pytest.fixture
def scripted_llm():
    return ScriptedLLM()


@pytest.fixture
def client(scripted_llm):
    return GenerationClient(llm=scripted_llm)


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def history(store):
    return HistoryManager(HistoryRepository(store))
