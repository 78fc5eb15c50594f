"""Single outbound call boundary to the generative backend"""

import asyncio
import logging

import httpx
from google.genai import errors as genai_errors

from .errors import BackendError, BriefsmithError, TransportError
from ..schemas import OutputContract

logger = logging.getLogger(__name__)

TRANSPORT_EXCEPTIONS = (httpx.TransportError, ConnectionError, TimeoutError, asyncio.TimeoutError)


class GenerationClient:
    """Executes one instruction against the backend and returns its raw text

    The backend is any object exposing ``async ainvoke(prompt, **kwargs) -> str``;
    by default a GeminiLLM. No retries happen here: retry policy belongs to callers.
    """

    def __init__(self, llm=None):
        if llm is None:
            from .llm import get_llm
            llm = get_llm()
        self.llm = llm

    async def execute(self, instruction: str, contract: OutputContract, low_latency: bool = False) -> str:
        """Send an instruction and return the raw response text

        Args:
            instruction: Fully composed instruction text
            contract: Expected output shape; structured contracts enable JSON mode
            low_latency: Restrict computation depth (used for suggestions)

        Raises:
            TransportError: Backend unreachable
            BackendError: Backend reachable but declined, errored or returned nothing
        """
        try:
            raw_text = await self.llm.ainvoke(
                instruction,
                response_schema=contract.schema_name,
                low_latency=low_latency,
            )
        except BriefsmithError:
            raise
        except genai_errors.APIError as e:
            logger.error(f"[GenerationClient] Backend error {e.code} for {contract.value}: {e}")
            raise BackendError(f"Backend rejected the request: {e}", status_code=e.code) from e
        except TRANSPORT_EXCEPTIONS as e:
            logger.error(f"[GenerationClient] Transport failure for {contract.value}: {type(e).__name__}: {e}")
            raise TransportError(f"Backend unreachable: {e}") from e
        except Exception as e:
            logger.error(f"[GenerationClient] Unexpected backend failure for {contract.value}: {type(e).__name__}: {e}")
            raise BackendError(f"Backend call failed: {e}") from e

        if not raw_text or not raw_text.strip():
            logger.error(f"[GenerationClient] Empty response for {contract.value}")
            raise BackendError("Backend returned an empty response")

        return raw_text
