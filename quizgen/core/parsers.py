"""
Output parser for model-generated question batches.

Only turns text into JSON. Whether that JSON is a valid question batch
is decided afterwards by the output validator, so a parse failure and a
schema failure stay distinguishable.
"""

import json
import re
import logging
from typing import Any

from langchain_core.output_parsers import BaseOutputParser

from quizgen.core.constants import get_difficulty_levels
from quizgen.core.exceptions import MalformedOutputError

logger = logging.getLogger(__name__)


class QuestionBatchOutputParser(BaseOutputParser):
    """
    Parser for question generation JSON responses.

    Features:
    - Strips BOM and markdown code fences
    - Extracts a JSON document from surrounding chatter
    - Raises MalformedOutputError for empty or unparseable text
    """

    def parse(self, text: str) -> Any:
        """Parse LLM output into a JSON value (object or array)."""
        if text is None or not text.strip():
            raise MalformedOutputError("Model returned an empty response", raw_text=text)

        cleaned = self._clean_text(text)
        json_str = self._extract_json(cleaned)

        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            logger.debug(f"Failed JSON: {text[:500]}")
            raise MalformedOutputError(f"Invalid JSON format: {e}", raw_text=text) from e
        except RecursionError as e:
            raise MalformedOutputError("JSON is nested too deeply to parse", raw_text=text) from e

        logger.debug(f"✅ Parsed question JSON ({len(json_str)} chars)")
        return data

    def _clean_text(self, text: str) -> str:
        """Remove formatting issues."""
        text = text.strip()
        if text.startswith('\ufeff'):
            text = text[1:]
        return text

    def _extract_json(self, text: str) -> str:
        """Extract JSON from markdown or plain text."""
        if text.startswith(("{", "[")):
            return text

        # Try markdown code block
        fence_match = re.search(r'```(?:json)?\s*(.*?)\s*```', text, re.DOTALL)
        if fence_match:
            logger.debug("Extracted from markdown")
            return fence_match.group(1)

        # Try to find a JSON object or array
        json_match = re.search(r'(\{.*\}|\[.*\])', text, re.DOTALL)
        if json_match:
            return json_match.group(0)

        return text

    def get_format_instructions(self) -> str:
        """Return format instructions for the LLM."""
        levels = ", ".join(f'"{level}"' for level in get_difficulty_levels())
        return f"""Return a JSON object with the following structure:
{{
  "questions": [
    {{
      "id": 1,
      "question": "string",
      "difficulty": one of {levels},
      "category": "string",
      "options": ["array of distinct strings"] or null,
      "correctAnswer": "string (one of the options)" or null
    }}
  ]
}}

CRITICAL: Include ONLY the JSON object. No explanations or conversational text."""

    @property
    def _type(self) -> str:
        return "question_batch_json"


def parse_question_batch(text: str) -> Any:
    """Parse question batch JSON from LLM output."""
    return QuestionBatchOutputParser().parse(text)
