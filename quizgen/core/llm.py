import asyncio
import logging
from typing import Any, Dict, Optional

import openai
from openai import AsyncOpenAI
from huggingface_hub import AsyncInferenceClient

from quizgen.core.config import settings
from quizgen.core.exceptions import TransportError

logger = logging.getLogger(__name__)


class LLMClient:
    """
    Thin async wrapper over the configured chat-completion provider.

    Every provider failure surfaces as TransportError; whatever text the
    model produced is returned untouched for the caller to parse.
    """

    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.provider = provider or settings.LLM_PROVIDER
        self.timeout = timeout or settings.LLM_TIMEOUT

        if self.provider == "huggingface":
            self.model = model or settings.HF_MODEL_ID
            self.client = AsyncInferenceClient(
                token=settings.HUGGINGFACE_API_TOKEN,
                model=self.model,
                timeout=self.timeout,
            )
            logger.info(f"🔹 LLM Client Initialized: Hugging Face ({self.model})")
        else:
            if not settings.OPENAI_API_KEY:
                logger.warning("OPENAI_API_KEY is not set; model calls will fail")
            self.model = model or settings.MODEL_NAME
            # Retries are a policy of the service layer, not of the SDK
            self.client = AsyncOpenAI(
                api_key=settings.OPENAI_API_KEY or "missing-key",
                base_url=settings.OPENAI_BASE_URL,
                timeout=self.timeout,
                max_retries=0,
            )
            logger.info(f"🔹 LLM Client Initialized: OpenAI Compatible ({self.model})")

    async def generate(
        self,
        prompt: str,
        system_prompt: str = "You are a helpful assistant.",
        response_format: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Send one system + user exchange and return the raw completion text.

        Raises:
            TransportError: network failure, non-success status or timeout
        """
        if self.provider == "huggingface":
            return await self._generate_hf(prompt, system_prompt, response_format)
        return await self._generate_openai(prompt, system_prompt, response_format)

    async def _generate_openai(
        self,
        prompt: str,
        system_prompt: str,
        response_format: Optional[Dict[str, Any]],
    ) -> str:
        kwargs: Dict[str, Any] = {}
        if response_format:
            kwargs["response_format"] = response_format

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt}
                ],
                max_tokens=settings.LLM_MAX_TOKENS,
                temperature=settings.LLM_TEMPERATURE,
                **kwargs
            )
        except openai.APITimeoutError as e:
            raise TransportError(f"Model request timed out after {self.timeout}s") from e
        except openai.APIStatusError as e:
            raise TransportError(f"Model endpoint returned HTTP {e.status_code}: {e.message}") from e
        except openai.APIError as e:
            raise TransportError(f"Model request failed: {e}") from e

        if not response.choices:
            logger.warning("Model response contained no choices")
            return ""

        message = response.choices[0].message
        if getattr(message, "refusal", None):
            logger.warning(f"Model refused the request: {message.refusal}")
        return message.content or ""

    async def _generate_hf(
        self,
        prompt: str,
        system_prompt: str,
        response_format: Optional[Dict[str, Any]],
    ) -> str:
        kwargs: Dict[str, Any] = {}
        if response_format:
            # TGI grammar format: {"type": "json", "value": <schema>}
            schema = response_format.get("json_schema", {}).get("schema")
            if schema:
                kwargs["response_format"] = {"type": "json", "value": schema}

        try:
            response = await self.client.chat_completion(
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt}
                ],
                max_tokens=settings.LLM_MAX_TOKENS,
                temperature=settings.LLM_TEMPERATURE,
                **kwargs
            )
        except asyncio.TimeoutError as e:
            raise TransportError(f"Model request timed out after {self.timeout}s") from e
        except Exception as e:
            raise TransportError(f"Model request failed: {e}") from e

        if not response.choices:
            logger.warning("Model response contained no choices")
            return ""
        return response.choices[0].message.content or ""

    async def aclose(self) -> None:
        """Release the underlying HTTP session."""
        close = getattr(self.client, "close", None)
        if close is not None:
            await close()
