"""Gemini LLM integration for brief generation and field suggestions"""

import logging
from typing import Any, Dict, List, Optional

from google import genai
from google.genai import types
from langchain_core.callbacks import AsyncCallbackManagerForLLMRun, CallbackManagerForLLMRun
from langchain_core.language_models.llms import LLM
from pydantic import ConfigDict

from .config import GEMINI_API_KEY, GEMINI_CONFIGS, GEMINI_MODEL, REQUEST_TIMEOUT, SUGGESTION_THINKING_BUDGET
from ..schemas import get_schema

logger = logging.getLogger(__name__)


class GeminiLLM(LLM):
    """Gemini LLM implementation using the Gemini Developer API"""

    model_config = ConfigDict(protected_namespaces=())

    model_name: str = GEMINI_MODEL
    api_key: Optional[str] = None
    gemini_configs: Dict = dict(GEMINI_CONFIGS)
    system_instruction: Optional[str] = None
    client: Any = None  # genai.Client, created lazily unless injected

    def setup_gemini(self):
        """Initialize (once) the Gemini client with the configured key and timeout"""
        if self.client is None:
            self.client = genai.Client(
                api_key=self.api_key or GEMINI_API_KEY,
                http_options=types.HttpOptions(timeout=int(REQUEST_TIMEOUT * 1000)),
            )
        return self.client

    def build_config(self, response_schema: Optional[str] = None, low_latency: bool = False) -> types.GenerateContentConfig:
        """Build the generation config for one call

        Args:
            response_schema: Registered schema name; enables JSON mode when set
            low_latency: Disable thinking so the call favors speed over depth
        """
        config_params = dict(self.gemini_configs)

        if low_latency:
            config_params["thinking_config"] = types.ThinkingConfig(
                thinking_budget=SUGGESTION_THINKING_BUDGET
            )

        if self.system_instruction:
            config_params["system_instruction"] = self.system_instruction

        if response_schema:
            config_params["response_mime_type"] = "application/json"
            config_params["response_schema"] = get_schema(response_schema)

        return types.GenerateContentConfig(**config_params)

    def _call(
        self,
        prompt: str,
        stop: Optional[List[str]] = None,
        run_manager: Optional[CallbackManagerForLLMRun] = None,
        response_schema: Optional[str] = None,
        low_latency: bool = False,
        **kwargs: Any,
    ) -> str:
        """Blocking call, kept for scripts and notebooks"""
        client = self.setup_gemini()
        response = client.models.generate_content(
            model=self.model_name,
            contents=prompt,
            config=self.build_config(response_schema, low_latency),
        )
        return response.text or ""

    async def _acall(
        self,
        prompt: str,
        stop: Optional[List[str]] = None,
        run_manager: Optional[AsyncCallbackManagerForLLMRun] = None,
        response_schema: Optional[str] = None,
        low_latency: bool = False,
        **kwargs: Any,
    ) -> str:
        """Non-blocking call used by every pipeline"""
        client = self.setup_gemini()
        logger.debug(
            f"[GeminiLLM] {self.model_name} schema={response_schema or 'none'} low_latency={low_latency}"
        )
        response = await client.aio.models.generate_content(
            model=self.model_name,
            contents=prompt,
            config=self.build_config(response_schema, low_latency),
        )
        return response.text or ""

    @property
    def _identifying_params(self) -> Dict[str, Any]:
        return {"model_name": self.model_name}

    @property
    def _llm_type(self) -> str:
        return "gemini"


def get_llm(**kwargs):
    """Get Gemini LLM instance

    Args:
        **kwargs: Configuration parameters passed to GeminiLLM

    Returns:
        GeminiLLM instance
    """
    # Remove any model parameter (always use Gemini)
    kwargs.pop('model', None)

    return GeminiLLM(**kwargs)
