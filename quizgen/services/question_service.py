import logging
from typing import List, Optional

from quizgen.core.config import settings
from quizgen.core.exceptions import TransportError
from quizgen.schemas import Question, TopicRequest
from quizgen.services.question_gateway import QuestionGenerationGateway

logger = logging.getLogger(__name__)

# Upper bound for the retry policy, whatever the configuration says
MAX_GENERATION_RETRIES = 1


class QuestionService:
    """Retry policy layered over the gateway. Only transport failures are retried."""

    def __init__(self, gateway: QuestionGenerationGateway, max_retries: Optional[int] = None):
        self.gateway = gateway
        retries = settings.GENERATION_MAX_RETRIES if max_retries is None else max_retries
        self.max_retries = max(0, min(retries, MAX_GENERATION_RETRIES))

    async def generate_questions(self, request: TopicRequest) -> List[Question]:
        attempts = self.max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return await self.gateway.generate(request)
            except TransportError as e:
                if attempt >= attempts:
                    raise
                logger.warning(f"Transport failure (attempt {attempt}/{attempts}), retrying: {e}")
