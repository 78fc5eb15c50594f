"""Shared utilities for agents: response cleaning and decoding"""

import json
import logging
import re
from typing import Any, List, Optional, Union

from pydantic import TypeAdapter, ValidationError

from ..core.config import SHOT_COUNT
from ..core.errors import MalformedResponseError
from ..core.models import DialogueLine, GeneratedResult
from ..schemas import OutputContract

logger = logging.getLogger(__name__)

# Opening fence; a word after it is a language tag only when a newline or the payload follows
_OPEN_FENCE = re.compile(r"\A```[ \t]*(?:[A-Za-z0-9_+.-]+(?=[ \t]*(?:\r?\n|[{\[]))[ \t]*)?(?:\r?\n)?")
_CLOSE_FENCE = re.compile(r"(?:\r?\n)?[ \t]*```\Z")

_QUOTE_PAIRS = {'"': '"', "'": "'", "“": "”", "‘": "’", "`": "`"}

_DIALOGUE_ADAPTER = TypeAdapter(List[DialogueLine])

DecodedValue = Union[GeneratedResult, str, List[DialogueLine]]


def clean_json_response(response_text: str) -> str:
    """
    Strip surrounding whitespace and one markdown code fence.

    LLMs may wrap JSON in ```json...``` blocks which need to be stripped.
    At most one opening and one closing marker are removed; interior content
    is left untouched.

    Args:
        response_text: Raw text that might contain markdown-wrapped JSON

    Returns:
        Text ready for parsing
    """
    text = response_text.strip()
    text = _OPEN_FENCE.sub("", text, count=1)
    text = _CLOSE_FENCE.sub("", text, count=1)
    return text.strip()


def trim_extra_closing_braces(text: str, max_removals: int = 3) -> str:
    """Remove surplus trailing '}' characters when closers outnumber openers"""
    removals = 0
    while removals < max_removals:
        if text.count('}') <= text.count('{'):
            break
        if not text.rstrip().endswith('}'):
            break  # Extra } is not at the end, don't touch it
        text = text.rstrip()[:-1]
        removals += 1
    return text


def extract_json_span(text: str, opener: Optional[str] = None) -> str:
    """Return the outermost {...} or [...] span of text, or the text unchanged

    With an opener ('{' or '['), the span starts at that character only, so
    brackets in surrounding prose are not taken for the payload.
    """
    openers = (opener,) if opener else ('{', '[')
    starts = [i for i in (text.find(c) for c in openers) if i != -1]
    if not starts:
        return text
    start = min(starts)
    closer = '}' if text[start] == '{' else ']'
    end = text.rfind(closer)
    if end <= start:
        return text
    return text[start:end + 1]


def parse_json_payload(raw_text: str, opener: Optional[str] = None) -> Any:
    """Parse JSON from model text, repairing common formatting deviations

    Tries the fence-stripped text first, then the outermost JSON span (starting
    at `opener` when given), then the span with surplus trailing braces trimmed.

    Raises:
        MalformedResponseError: No candidate parses
    """
    cleaned = clean_json_response(raw_text)
    span = extract_json_span(cleaned, opener)
    candidates = [cleaned, span, trim_extra_closing_braces(span)]

    last_error = None
    for candidate in dict.fromkeys(candidates):
        try:
            return json.loads(candidate)
        except json.JSONDecodeError as e:
            last_error = e

    raise MalformedResponseError(f"Response is not valid JSON: {last_error}", raw_text=raw_text)


def strip_wrapping_quotes(text: str) -> str:
    """Remove one pair of matching quotes wrapping the whole value"""
    if len(text) >= 2 and _QUOTE_PAIRS.get(text[0]) == text[-1]:
        return text[1:-1].strip()
    return text


def _decode_video_prompt(raw_text: str) -> GeneratedResult:
    payload = parse_json_payload(raw_text, opener="{")
    try:
        result = GeneratedResult.model_validate(payload)
    except ValidationError as e:
        raise MalformedResponseError(f"Response misses required fields: {e.error_count()} error(s)", raw_text=raw_text) from e

    # Backend schema adherence is trusted; mismatches are reported, not repaired
    if len(result.shots) != SHOT_COUNT:
        logger.warning(f"[Decoder] Expected {SHOT_COUNT} shots, got {len(result.shots)}")
    if abs(result.shot_duration_sum() - result.total_duration_seconds) > 0.01:
        logger.warning(
            f"[Decoder] Shot durations sum to {result.shot_duration_sum():g}s, "
            f"total is {result.total_duration_seconds:g}s"
        )
    return result


def _decode_dialogue(raw_text: str) -> List[DialogueLine]:
    payload = parse_json_payload(raw_text, opener="[")
    if not isinstance(payload, list) or not payload:
        raise MalformedResponseError("Dialogue suggestion must be a non-empty array", raw_text=raw_text)
    if not all(isinstance(item, dict) and {"speaker", "line"} <= item.keys() for item in payload):
        raise MalformedResponseError("Dialogue suggestion must contain speaker/line objects", raw_text=raw_text)
    try:
        return _DIALOGUE_ADAPTER.validate_python(payload)
    except ValidationError as e:
        raise MalformedResponseError("Dialogue suggestion must contain speaker/line objects", raw_text=raw_text) from e


def _decode_plain_text(raw_text: str) -> str:
    value = strip_wrapping_quotes(clean_json_response(raw_text))
    if not value:
        raise MalformedResponseError("Suggestion response is empty", raw_text=raw_text)
    return value


def decode_response(raw_text: str, contract: OutputContract) -> DecodedValue:
    """
    Turn raw model text into typed data for an output contract.

    Args:
        raw_text: Text returned by the generation client
        contract: Shape the response was requested in

    Returns:
        GeneratedResult, str or list of DialogueLine depending on the contract

    Raises:
        MalformedResponseError: The text cannot be coerced (carries raw_text)
    """
    try:
        if contract is OutputContract.VIDEO_PROMPT:
            return _decode_video_prompt(raw_text)
        if contract is OutputContract.DIALOGUE_LINES:
            return _decode_dialogue(raw_text)
        return _decode_plain_text(raw_text)
    except MalformedResponseError as e:
        logger.warning(f"[Decoder] {contract.value} decode failed: {e} | raw: {raw_text!r}")
        raise
