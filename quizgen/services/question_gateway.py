"""
Question Generation Gateway.

One invocation = one outbound model call:
prompt -> model (with output schema) -> parse -> validate.
Every failure leaves as a GenerationError subclass.
"""

import logging
import time
from typing import List, Optional, Tuple

from quizgen.core.config import settings
from quizgen.core.constants import get_difficulty_levels, get_response_format
from quizgen.core.exceptions import GenerationError, SchemaViolationError, TransportError
from quizgen.core.llm import LLMClient
from quizgen.core.parsers import QuestionBatchOutputParser
from quizgen.core.prompt_manager import PromptManager, get_prompt_manager
from quizgen.schemas import Question, TopicRequest, ValidationFailure
from quizgen.services.output_validator import validate_question_batch

logger = logging.getLogger(__name__)


class QuestionGenerationGateway:
    def __init__(
        self,
        llm: LLMClient,
        prompt_manager: Optional[PromptManager] = None,
        question_count: Optional[int] = None,
        log_raw_responses: Optional[bool] = None,
    ):
        self.llm = llm
        self.prompts = prompt_manager or get_prompt_manager()
        self.question_count = question_count or settings.QUESTION_COUNT
        self.log_raw_responses = (
            settings.LOG_RAW_RESPONSES if log_raw_responses is None else log_raw_responses
        )
        self.parser = QuestionBatchOutputParser()

    def build_prompts(self, topic: str) -> Tuple[str, str]:
        """Return (system_prompt, user_prompt); the topic goes in verbatim."""
        system_prompt = self.prompts.load_prompt(
            "question_system",
            QUESTION_COUNT=self.question_count,
            DIFFICULTY_LEVELS=", ".join(get_difficulty_levels()),
            FORMAT_INSTRUCTIONS=self.parser.get_format_instructions(),
        )
        user_prompt = self.prompts.load_prompt("question_user", TOPIC=topic)
        return system_prompt.strip(), user_prompt.strip()

    async def generate(self, request: TopicRequest) -> List[Question]:
        """
        Generate a validated question batch for one topic.

        Raises:
            TransportError: the model call failed
            MalformedOutputError: the response is not JSON
            SchemaViolationError: the JSON is not a valid question batch
        """
        system_prompt, user_prompt = self.build_prompts(request.topic)

        start = time.perf_counter()
        try:
            raw = await self.llm.generate(
                user_prompt,
                system_prompt,
                response_format=get_response_format(),
            )
        except GenerationError:
            raise
        except Exception as e:
            raise TransportError(f"Model request failed: {e}") from e
        duration_ms = (time.perf_counter() - start) * 1000

        logger.info(
            f"🤖 AI REQUEST | Topic: {request.topic[:80]} | "
            f"Duration: {duration_ms:.2f}ms | Chars: {len(raw or '')}"
        )
        if self.log_raw_responses:
            logger.debug(f"Raw model response: {raw}")

        data = self.parser.parse(raw)

        result = validate_question_batch(data, expected_count=self.question_count)
        if isinstance(result, ValidationFailure):
            raise SchemaViolationError(result.summary(), issues=result.issues)

        return result
