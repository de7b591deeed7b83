"""
OpenAI Client
"""
import json
import re
from openai import OpenAI
from typing import Dict, Any, Optional

from careerprep.core.config import settings
from careerprep.core.exceptions import CollaboratorError
from careerprep.core.logging import logger


_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


def parse_json_response(text: Optional[str]) -> Dict[str, Any]:
    """
    Parse a model reply into a JSON object

    Strips markdown fences and, failing a direct parse, falls back to the
    outermost {...} block.
    """
    if not text:
        raise CollaboratorError("Empty response from language model")

    cleaned = _FENCE_RE.sub("", text).strip()
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError:
        match = re.search(r"\{[\s\S]*\}", cleaned)
        if not match:
            raise CollaboratorError("Invalid JSON response from language model")
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError:
            raise CollaboratorError("Invalid JSON response from language model")

    if not isinstance(data, dict):
        raise CollaboratorError("Language model did not return a JSON object")
    return data


class OpenAIClient:
    """OpenAI chat client returning JSON objects"""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        self.model = model or settings.OPENAI_MODEL
        self.client = None

        if self.api_key:
            self.client = OpenAI(api_key=self.api_key)
        else:
            logger.warning("OPENAI_API_KEY not found. LLM features disabled.")

    @property
    def available(self) -> bool:
        return self.client is not None

    def generate_json(
        self,
        prompt: str,
        system_prompt: str = "You are a helpful assistant that always answers with valid JSON.",
        temperature: float = 0.2,
        max_tokens: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Run one chat completion and parse the reply as a JSON object

        Raises:
            CollaboratorError: client unavailable, API failure, or unparseable reply
        """
        if not self.client:
            raise CollaboratorError("Language model is not configured")

        completion_params = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            "response_format": {"type": "json_object"},
        }

        # reasoning models reject temperature
        if "gpt-5" not in self.model.lower():
            completion_params["temperature"] = temperature
        if max_tokens:
            completion_params["max_tokens"] = max_tokens

        try:
            response = self.client.chat.completions.create(**completion_params)
        except Exception as e:
            logger.error(f"OpenAI request failed: {e}")
            raise CollaboratorError(f"Language model request failed: {e}")

        if not response.choices:
            raise CollaboratorError("Language model returned no choices")
        return parse_json_response(response.choices[0].message.content)


_client: Optional[OpenAIClient] = None


def get_llm_client() -> OpenAIClient:
    """Shared client instance"""
    global _client
    if _client is None:
        _client = OpenAIClient()
    return _client
