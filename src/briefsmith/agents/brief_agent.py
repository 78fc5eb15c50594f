"""Full-brief generation agent"""

import logging
import time

from ..core.models import Brief, GeneratedResult, Language
from ..prompts.brief import compose_brief_instruction
from ..schemas import OutputContract
from .base import decode_response

logger = logging.getLogger(__name__)


async def generate_video_prompt(client, brief: Brief, language: Language) -> GeneratedResult:
    """Compose, execute and decode one full-brief generation

    Computation depth is not restricted. Failures propagate to the caller
    unchanged (TransportError, BackendError, MalformedResponseError).
    """
    start_time = time.time()
    instruction = compose_brief_instruction(brief, language)

    raw_text = await client.execute(instruction, OutputContract.VIDEO_PROMPT)
    result = decode_response(raw_text, OutputContract.VIDEO_PROMPT)

    logger.info(
        f"[Brief Agent] Generated '{result.title}' ({len(result.shots)} shots, "
        f"{result.total_duration_seconds:g}s) in {time.time() - start_time:.1f}s"
    )
    return result
