"""Field suggestion agent and the sequential refresh-all orchestrator"""

import logging
import dataclasses
from typing import Any, Callable, Dict, List, Optional, Union

from ..core.models import Brief, DialogueLine, Language, SuggestionField
from ..prompts.suggestion import compose_suggestion_instruction
from ..schemas import OutputContract
from .base import decode_response

logger = logging.getLogger(__name__)

SuggestionValue = Union[str, List[DialogueLine]]

# Fields are refreshed one after another in declaration order
REFRESH_ORDER = list(SuggestionField)


def contract_for(field: SuggestionField) -> OutputContract:
    return OutputContract.DIALOGUE_LINES if field.is_structured else OutputContract.PLAIN_TEXT


async def suggest_field(client, field: SuggestionField, language: Language) -> SuggestionValue:
    """Compose, execute (low latency) and decode a suggestion for one field"""
    contract = contract_for(field)
    instruction = compose_suggestion_instruction(field, language)
    raw_text = await client.execute(instruction, contract, low_latency=True)
    return decode_response(raw_text, contract)


def apply_suggestion(brief: Brief, field: SuggestionField, value: SuggestionValue) -> None:
    """Write a decoded suggestion into the matching brief field"""
    if field.is_structured:
        if value:
            brief.dialogue = [line.model_copy() for line in value]
        return
    setattr(brief, field.value, value)


@dataclasses.dataclass
class RefreshReport:
    """Outcome of one refresh-all batch"""
    updated: Dict[SuggestionField, Any] = dataclasses.field(default_factory=dict)
    failed: Dict[SuggestionField, Exception] = dataclasses.field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return not self.failed


class SuggestionOrchestrator:
    """Runs every field suggestion sequentially as one best-effort batch"""

    def __init__(self, client):
        self.client = client

    async def refresh_all(
        self,
        brief: Brief,
        language: Language,
        apply: Optional[Callable[[SuggestionField, SuggestionValue], Any]] = None,
    ) -> RefreshReport:
        """
        Suggest a value for each field in the fixed order, one call at a time.

        A failing step is logged and skipped; the remaining steps still run.

        Args:
            brief: Brief updated in place when no custom apply is given
            language: Language of the suggested values
            apply: Optional setter(field, value); returning False marks the
                value as discarded (e.g. stale)

        Returns:
            RefreshReport with updated and failed fields
        """
        report = RefreshReport()
        for step, suggestion_field in enumerate(REFRESH_ORDER, start=1):
            try:
                value = await suggest_field(self.client, suggestion_field, language)
                if apply is None:
                    apply_suggestion(brief, suggestion_field, value)
                elif apply(suggestion_field, value) is False:
                    logger.info(f"[Suggestion] Step {step}/{len(REFRESH_ORDER)} {suggestion_field.value}: discarded")
                    continue
            except Exception as e:
                logger.warning(
                    f"[Suggestion] Step {step}/{len(REFRESH_ORDER)} {suggestion_field.value} failed: "
                    f"{type(e).__name__}: {e}"
                )
                report.failed[suggestion_field] = e
                continue
            report.updated[suggestion_field] = value

        logger.info(f"[Suggestion] Refresh finished: {len(report.updated)} updated, {len(report.failed)} failed")
        return report
