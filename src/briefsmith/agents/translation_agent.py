"""Translation agent for generated video prompts"""

import logging
from typing import Dict, Optional

from ..core.models import GeneratedResult, Language
from ..prompts.translation import compose_translation_instruction
from ..schemas import OutputContract
from .base import decode_response

logger = logging.getLogger(__name__)


def restore_fixed_fields(source: GeneratedResult, translated: GeneratedResult) -> GeneratedResult:
    """Copy numeric fields and the aspect ratio back from the source result

    Only applied when both results have the same number of shots.
    """
    if len(source.shots) != len(translated.shots):
        logger.warning(
            f"[Translation] Shot count changed ({len(source.shots)} -> {len(translated.shots)}), keeping as returned"
        )
        return translated

    shots = [
        shot.model_copy(update={
            "shot_number": original.shot_number,
            "duration_seconds": original.duration_seconds,
        })
        for original, shot in zip(source.shots, translated.shots)
    ]
    return translated.model_copy(update={
        "total_duration_seconds": source.total_duration_seconds,
        "aspect_ratio": source.aspect_ratio,
        "shots": shots,
    })


class TranslationAdapter:
    """Re-expresses a generated result in another language, cached per result"""

    def __init__(self, client):
        self.client = client
        self._source: Optional[GeneratedResult] = None
        self._cache: Dict[Language, GeneratedResult] = {}
        self._epoch = 0

    def invalidate(self):
        """Drop cached translations; in-flight ones will not be cached"""
        self._source = None
        self._cache = {}
        self._epoch += 1

    def cached(self, result: GeneratedResult, language: Language) -> Optional[GeneratedResult]:
        if self._source is not result:
            return None
        return self._cache.get(language)

    async def translate(self, result: GeneratedResult, language: Language) -> GeneratedResult:
        """
        Translate every natural-language field of a result.

        Returns the cached translation when this result was already translated
        into the language. Raises TransportError, BackendError or
        MalformedResponseError on failure.
        """
        if self._source is not result:
            self.invalidate()
            self._source = result

        cached = self._cache.get(language)
        if cached is not None:
            return cached

        epoch = self._epoch
        instruction = compose_translation_instruction(result, language)
        raw_text = await self.client.execute(instruction, OutputContract.VIDEO_PROMPT)
        translated = restore_fixed_fields(result, decode_response(raw_text, OutputContract.VIDEO_PROMPT))

        if epoch == self._epoch:
            self._cache[language] = translated
        else:
            logger.info(f"[Translation] Result replaced while translating to {language.value}, not caching")

        logger.info(f"[Translation] Translated '{result.title}' to {language.value}")
        return translated
