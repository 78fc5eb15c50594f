"""Session state and actions for the video brief studio

StudioSession is what a presentation layer binds to: it owns the live brief,
the current result, loading/in-flight flags and the history, and routes every
action through the composer -> client -> decoder pipelines.
"""

import json
import logging
import random
from typing import Callable, Dict, Optional, Set

from .client import GenerationClient
from .config import CAMERA_ANGLES, SHOT_COUNT
from .errors import BriefsmithError
from .models import Brief, DialogueLine, GeneratedResult, Language, SuggestionField
from .texts import get_text
from ..agents.brief_agent import generate_video_prompt
from ..agents.suggestion_agent import (
    REFRESH_ORDER,
    RefreshReport,
    SuggestionOrchestrator,
    apply_suggestion,
    suggest_field,
)
from ..agents.translation_agent import TranslationAdapter
from ..session.history import HistoryManager, create_history_manager

logger = logging.getLogger(__name__)

CAMERA_ANGLE_VALUES = [angle["value"] for angle in CAMERA_ANGLES]
OUTPUT_VIEWS = ("prompt", "json")


class StudioSession:
    """One editing session: brief, generation result, suggestions and history"""

    def __init__(
        self,
        client: Optional[GenerationClient] = None,
        history: Optional[HistoryManager] = None,
        clipboard: Optional[Callable[[str], None]] = None,
        language: Language = Language.KO,
    ):
        self.client = client or GenerationClient()
        self.history = history if history is not None else create_history_manager()
        self.clipboard = clipboard
        self.language = Language(language)

        self.brief = Brief()

        # Generation pipeline state
        self.result: Optional[GeneratedResult] = None
        self.result_language: Optional[Language] = None
        self.displayed_result: Optional[GeneratedResult] = None
        self.display_language: Optional[Language] = None
        self.error: Optional[str] = None
        self.is_loading = False

        # Suggestion pipeline state
        self.is_refreshing_all = False
        self.suggesting: Set[SuggestionField] = set()
        self.suggestion_errors: Dict[SuggestionField, str] = {}

        self.orchestrator = SuggestionOrchestrator(self.client)
        self.translator = TranslationAdapter(self.client)

        # Stale-resolution guards
        self._generation = 0
        self._field_tokens: Dict[SuggestionField, int] = {field: 0 for field in SuggestionField}

    # ------------------------------------------------------------------
    # Language
    # ------------------------------------------------------------------

    def set_language(self, language):
        self.language = Language(language)

    # ------------------------------------------------------------------
    # Brief editing
    # ------------------------------------------------------------------

    def update_field(self, name: str, value):
        """Assign one brief field; pydantic validation applies"""
        if name not in Brief.model_fields:
            raise ValueError(f"Unknown brief field: {name}")
        setattr(self.brief, name, value)

    def add_dialogue_line(self):
        self.brief.dialogue = [*self.brief.dialogue, DialogueLine()]

    def update_dialogue_line(self, index: int, speaker: Optional[str] = None, line: Optional[str] = None):
        dialogue = [d.model_copy() for d in self.brief.dialogue]
        if speaker is not None:
            dialogue[index].speaker = speaker
        if line is not None:
            dialogue[index].line = line
        self.brief.dialogue = dialogue

    def remove_dialogue_line(self, index: int):
        """Remove one line; removing the last one leaves a single blank line"""
        remaining = [d for i, d in enumerate(self.brief.dialogue) if i != index]
        self.brief.dialogue = remaining or [DialogueLine()]

    def set_camera_angle(self, index: int, angle: str):
        if angle not in CAMERA_ANGLE_VALUES:
            raise ValueError(f"Unknown camera angle: {angle}")
        angles = list(self.brief.camera_angles)
        angles[index] = angle
        self.brief.camera_angles = angles

    def randomize_camera_angles(self, rng: Optional[random.Random] = None):
        rng = rng or random
        self.brief.camera_angles = [rng.choice(CAMERA_ANGLE_VALUES) for _ in range(SHOT_COUNT)]

    def reset_brief(self):
        self.brief = Brief()
        self._invalidate_suggestions()

    # ------------------------------------------------------------------
    # Full-brief generation
    # ------------------------------------------------------------------

    async def generate(self) -> Optional[GeneratedResult]:
        """
        Generate a shot-by-shot prompt from the current brief.

        On failure the result stays empty and `error` holds a localized
        message. A generation superseded by a newer one (or by loading a
        history entry) is ignored when it resolves.
        """
        self._generation += 1
        token = self._generation
        language = self.language
        brief = self.brief.model_copy(deep=True)

        self.is_loading = True
        self.error = None
        self._set_result(None, None)

        try:
            result = await generate_video_prompt(self.client, brief, language)
        except BriefsmithError as e:
            if token == self._generation:
                logger.error(f"[Studio] Generation failed: {type(e).__name__}: {e}")
                self.error = get_text(language, "error", "generation")
            return None
        except Exception:
            if token == self._generation:
                logger.exception("[Studio] Unexpected generation failure")
                self.error = get_text(language, "error", "unknown")
            return None
        finally:
            if token == self._generation:
                self.is_loading = False

        if token != self._generation:
            logger.info(f"[Studio] Discarding superseded generation #{token}")
            return None

        self._set_result(result, language)
        self.history.add(brief, result, language)
        return result

    def _set_result(self, result: Optional[GeneratedResult], language: Optional[Language]):
        self.translator.invalidate()
        self.result = result
        self.result_language = language
        self.displayed_result = result
        self.display_language = language

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    async def show_language(self, language) -> Optional[GeneratedResult]:
        """Display the current result in a language, translating when needed

        Translation failures keep the previously displayed content.
        """
        language = Language(language)
        result = self.result
        if result is None:
            return None

        if language == self.result_language:
            self.displayed_result = result
            self.display_language = language
            return result

        try:
            translated = await self.translator.translate(result, language)
        except BriefsmithError as e:
            logger.warning(f"[Studio] Translation to {language.value} failed: {type(e).__name__}: {e}")
            return self.displayed_result

        if self.result is not result:
            logger.info("[Studio] Result replaced during translation, ignoring it")
            return self.displayed_result

        self.displayed_result = translated
        self.display_language = language
        return translated

    # ------------------------------------------------------------------
    # Suggestions
    # ------------------------------------------------------------------

    async def suggest(self, field) -> Optional[object]:
        """
        Suggest and apply a value for one field (manual, single-field path).

        Rejected while the same field is in flight or a refresh-all batch runs.
        A failure is logged and recorded in `suggestion_errors[field]`.
        """
        field = SuggestionField(field)
        if self.is_refreshing_all or field in self.suggesting:
            logger.info(f"[Studio] Suggestion for {field.value} already in flight, ignoring")
            return None

        token = self._begin_suggestion(field)
        language = self.language
        self.suggesting.add(field)
        self.suggestion_errors.pop(field, None)
        try:
            value = await suggest_field(self.client, field, language)
        except BriefsmithError as e:
            logger.warning(f"[Studio] Suggestion for {field.value} failed: {type(e).__name__}: {e}")
            if self._field_tokens[field] == token:
                self.suggestion_errors[field] = get_text(language, "error", "suggestion")
            return None
        finally:
            self.suggesting.discard(field)

        if not self._apply_if_current(field, token, value):
            return None
        return value

    async def refresh_all(self) -> Optional[RefreshReport]:
        """Refresh every suggestible field sequentially

        Ignored while another refresh-all or any manual suggestion is in flight,
        so no field ever has two suggestion pipelines running at once.
        """
        if self.is_refreshing_all:
            logger.info("[Studio] Refresh-all already in flight, ignoring")
            return None
        if self.suggesting:
            pending = ", ".join(sorted(field.value for field in self.suggesting))
            logger.info(f"[Studio] Suggestions in flight ({pending}), ignoring refresh-all")
            return None

        self.is_refreshing_all = True
        self.suggesting.update(REFRESH_ORDER)
        tokens = {field: self._begin_suggestion(field) for field in REFRESH_ORDER}
        try:
            return await self.orchestrator.refresh_all(
                self.brief,
                self.language,
                apply=lambda field, value: self._apply_if_current(field, tokens[field], value),
            )
        finally:
            self.suggesting.difference_update(REFRESH_ORDER)
            self.is_refreshing_all = False

    def _begin_suggestion(self, field: SuggestionField) -> int:
        self._field_tokens[field] += 1
        return self._field_tokens[field]

    def _invalidate_suggestions(self):
        for field in self._field_tokens:
            self._field_tokens[field] += 1

    def _apply_if_current(self, field: SuggestionField, token: int, value) -> bool:
        if self._field_tokens[field] != token:
            logger.info(f"[Studio] Discarding stale suggestion for {field.value}")
            return False
        apply_suggestion(self.brief, field, value)
        return True

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def load_history_entry(self, entry_id: str) -> bool:
        """Restore a past brief and result; pending work on the old brief is dropped"""
        entry = self.history.get(entry_id)
        if entry is None:
            return False

        self._generation += 1
        self._invalidate_suggestions()
        self.brief = entry.brief.model_copy(deep=True)
        self.error = None
        self.is_loading = False
        self._set_result(entry.result.model_copy(deep=True), entry.language)
        return True

    def delete_history_entry(self, entry_id: str) -> bool:
        return self.history.remove(entry_id)

    def clear_history(self):
        self.history.clear()

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def output_text(self, view: str = "prompt") -> str:
        """Text of the displayed result: the overall prompt or the full JSON"""
        if view not in OUTPUT_VIEWS:
            raise ValueError(f"view must be one of {OUTPUT_VIEWS}")
        if self.displayed_result is None:
            return ""
        if view == "json":
            return json.dumps(self.displayed_result.model_dump(), indent=2, ensure_ascii=False)
        return self.displayed_result.overall_prompt

    def copy_output(self, view: str = "prompt") -> bool:
        """Write the displayed output to the clipboard (fire-and-forget)"""
        text = self.output_text(view)
        if not text or self.clipboard is None:
            return False
        try:
            self.clipboard(text)
        except Exception as e:
            logger.warning(f"[Studio] Clipboard write failed: {type(e).__name__}: {e}")
            return False
        return True
