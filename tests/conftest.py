import json
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from quizgen.core.prompt_manager import PromptManager
from quizgen.main import create_app
from quizgen.services.question_gateway import QuestionGenerationGateway

CATEGORIES = ["Definitions", "Operations", "Complexity", "Applications"]
DIFFICULTIES = ["easy", "medium", "hard"]


class FakeLLMClient:
    """Stands in for LLMClient; replays canned responses or raises canned errors."""

    def __init__(self, *responses: Any):
        self.responses: List[Any] = list(responses)
        self.calls: List[Dict[str, Any]] = []

    async def generate(
        self,
        prompt: str,
        system_prompt: str = "",
        response_format: Optional[Dict[str, Any]] = None,
    ) -> str:
        self.calls.append({
            "prompt": prompt,
            "system_prompt": system_prompt,
            "response_format": response_format,
        })
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, BaseException):
            raise item
        return item

    async def aclose(self) -> None:
        pass


def make_question(index: int, **overrides: Any) -> Dict[str, Any]:
    options = [f"Answer {index}{letter}" for letter in "ABCD"]
    question = {
        "id": index,
        "question": f"Question number {index}?",
        "difficulty": DIFFICULTIES[(index - 1) % 3],
        "category": CATEGORIES[(index - 1) % len(CATEGORIES)],
        "options": options,
        "correctAnswer": options[index % 4],
    }
    question.update(overrides)
    return question


def make_questions(count: int = 10) -> List[Dict[str, Any]]:
    return [make_question(i) for i in range(1, count + 1)]


def as_model_output(questions: List[Dict[str, Any]]) -> str:
    return json.dumps({"questions": questions})


@pytest.fixture
def questions() -> List[Dict[str, Any]]:
    return make_questions(10)


@pytest.fixture
def prompt_manager() -> PromptManager:
    return PromptManager()


@pytest.fixture
def gateway_factory(prompt_manager):
    def _factory(*responses: Any, question_count: int = 10) -> QuestionGenerationGateway:
        return QuestionGenerationGateway(
            llm=FakeLLMClient(*responses),
            prompt_manager=prompt_manager,
            question_count=question_count,
        )
    return _factory


@pytest.fixture
def api():
    """Yield a factory building a TestClient around a FakeLLMClient."""
    clients = []

    def _api(*responses: Any):
        llm = FakeLLMClient(*responses)
        client = TestClient(create_app(llm_client=llm, configure_logging=False))
        client.__enter__()
        clients.append(client)
        return client, llm

    yield _api

    for client in clients:
        client.__exit__(None, None, None)
