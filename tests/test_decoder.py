"""Tests for response cleaning and decoding."""

import json
import logging

import pytest

from briefsmith.agents.base import (
    clean_json_response,
    decode_response,
    parse_json_payload,
    strip_wrapping_quotes,
    trim_extra_closing_braces,
)
from briefsmith.core.errors import MalformedResponseError
from briefsmith.core.models import DialogueLine, GeneratedResult
from briefsmith.schemas import OutputContract
from conftest import make_result_payload


class TestCleanJsonResponse:
    @pytest.mark.parametrize("raw", [
        '```json\n{"a": 1}\n```',
        '```JSON\n{"a": 1}\n```',
        '```\n{"a": 1}\n```',
        '  \n```json {"a": 1}```  \n',
        '{"a": 1}',
    ])
    def test_strips_one_fence(self, raw):
        assert clean_json_response(raw) == '{"a": 1}'

    def test_interior_markers_are_kept(self):
        raw = '```json\n{"text": "use ``` for code"}\n```'
        assert clean_json_response(raw) == '{"text": "use ``` for code"}'

    def test_only_one_pair_removed(self):
        assert clean_json_response("```json\n```json\n{}\n```\n```") == "```json\n{}\n```"


def test_trim_extra_closing_braces():
    assert trim_extra_closing_braces('{"a": {"b": 1}}}}') == '{"a": {"b": 1}}'
    assert trim_extra_closing_braces('{"a": 1}') == '{"a": 1}'


@pytest.mark.parametrize("raw, expected", [
    ('"Neon noir"', "Neon noir"),
    ("'Neon noir'", "Neon noir"),
    ("“Neon noir”", "Neon noir"),
    ('Neon "noir"', 'Neon "noir"'),
    ("x", "x"),
])
def test_strip_wrapping_quotes(raw, expected):
    assert strip_wrapping_quotes(raw) == expected


class TestVideoPromptDecoding:
    def test_fenced_and_bare_decode_identically(self, result_payload):
        bare = json.dumps(result_payload)

        fenced = decode_response(f"```json\n{bare}\n```", OutputContract.VIDEO_PROMPT)
        untagged = decode_response(f"```\n{bare}\n```", OutputContract.VIDEO_PROMPT)

        assert fenced == decode_response(bare, OutputContract.VIDEO_PROMPT)
        assert untagged == fenced
        assert isinstance(fenced, GeneratedResult)
        assert len(fenced.shots) == 10

    def test_decoding_a_serialized_result_is_identity(self, sample_result):
        decoded = decode_response(sample_result.model_dump_json(), OutputContract.VIDEO_PROMPT)
        assert decoded == sample_result

    def test_prose_around_the_object(self, result_payload):
        raw = f"Here is your shot list:\n{json.dumps(result_payload)}\nEnjoy!"
        assert decode_response(raw, OutputContract.VIDEO_PROMPT).title == "Skate Cat"

    def test_brackets_in_prose_before_the_object(self, result_payload):
        raw = f"Here is [the] result: {json.dumps(result_payload)}"
        assert decode_response(raw, OutputContract.VIDEO_PROMPT).title == "Skate Cat"

    def test_braces_in_prose_before_dialogue(self):
        raw = 'Sure {as asked}: [{"speaker": "Fox", "line": "Hi"}]'
        assert decode_response(raw, OutputContract.DIALOGUE_LINES) == [DialogueLine(speaker="Fox", line="Hi")]

    def test_surplus_closing_braces(self, result_payload):
        raw = json.dumps(result_payload) + "}}"
        assert decode_response(raw, OutputContract.VIDEO_PROMPT).title == "Skate Cat"

    def test_not_json_carries_raw_text(self):
        raw = "Sorry, I cannot help with that."
        with pytest.raises(MalformedResponseError) as exc_info:
            decode_response(raw, OutputContract.VIDEO_PROMPT)
        assert exc_info.value.raw_text == raw

    def test_missing_required_field(self, result_payload):
        del result_payload["overall_prompt"]
        raw = json.dumps(result_payload)
        with pytest.raises(MalformedResponseError) as exc_info:
            decode_response(raw, OutputContract.VIDEO_PROMPT)
        assert exc_info.value.raw_text == raw

    def test_shot_count_mismatch_is_reported_not_rejected(self, caplog):
        payload = make_result_payload(durations=[1] * 9, total=9)
        with caplog.at_level(logging.WARNING, logger="briefsmith.agents.base"):
            result = decode_response(json.dumps(payload), OutputContract.VIDEO_PROMPT)
        assert len(result.shots) == 9
        assert "Expected 10 shots, got 9" in caplog.text

    def test_duration_mismatch_is_reported_not_rescaled(self, caplog):
        payload = make_result_payload(total=10)
        with caplog.at_level(logging.WARNING, logger="briefsmith.agents.base"):
            result = decode_response(json.dumps(payload), OutputContract.VIDEO_PROMPT)
        assert result.total_duration_seconds == 10
        assert result.shot_duration_sum() == 8
        assert "sum to 8s" in caplog.text


class TestDialogueDecoding:
    def test_fenced_array(self):
        raw = '```json\n[{"speaker": "Fox", "line": "Surf is up!"}, {"speaker": "Gull", "line": "Show-off."}]\n```'
        lines = decode_response(raw, OutputContract.DIALOGUE_LINES)
        assert lines == [
            DialogueLine(speaker="Fox", line="Surf is up!"),
            DialogueLine(speaker="Gull", line="Show-off."),
        ]

    @pytest.mark.parametrize("raw", [
        "[]",
        '{"speaker": "Fox", "line": "Hi"}',
        '[{"speaker": "Fox"}]',
        "not json at all",
    ])
    def test_rejected_shapes(self, raw):
        with pytest.raises(MalformedResponseError) as exc_info:
            decode_response(raw, OutputContract.DIALOGUE_LINES)
        assert exc_info.value.raw_text == raw


class TestPlainTextDecoding:
    def test_trims_whitespace_and_quotes(self):
        assert decode_response('  "A fox surfing"\n', OutputContract.PLAIN_TEXT) == "A fox surfing"

    def test_keeps_inner_text(self):
        assert decode_response("Rain, distant thunder", OutputContract.PLAIN_TEXT) == "Rain, distant thunder"

    @pytest.mark.parametrize("raw, expected", [
        ("```Neon noir```", "Neon noir"),
        ("```yes```", "yes"),
        ("```\nNeon noir\n```", "Neon noir"),
        ("```text\nNeon noir\n```", "Neon noir"),
    ])
    def test_inline_fence_keeps_first_word(self, raw, expected):
        assert decode_response(raw, OutputContract.PLAIN_TEXT) == expected

    def test_empty_value_is_malformed(self):
        with pytest.raises(MalformedResponseError):
            decode_response('""', OutputContract.PLAIN_TEXT)


def test_parse_json_payload_prefers_cleaned_text():
    assert parse_json_payload('```json\n[1, 2]\n```') == [1, 2]
