"""OpenRouter LLM client and stateful chat sessions."""

import hashlib
import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from chatagent.config import settings
from chatagent.schemas.chat import MODEL_ROLE, Message

logger = logging.getLogger(__name__)


class LLMClient:
    """Client for the OpenRouter chat completions API."""

    def __init__(
        self,
        model: Optional[str] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize the LLM client."""
        if not settings.OPENROUTER_API_KEY:
            raise RuntimeError("OPENROUTER_API_KEY is not set")
        self.api_key = settings.OPENROUTER_API_KEY
        self.base_url = settings.OPENROUTER_BASE_URL
        self.site_url = settings.SITE_URL
        self.site_name = settings.SITE_NAME
        self.model = model or settings.CHAT_MODEL
        self.timeout = settings.LLM_TIMEOUT
        self._transport = transport

    def _hash_text(self, text: str) -> str:
        """Hash text using SHA256."""
        return hashlib.sha256(text.encode()).hexdigest()

    def _build_headers(self) -> Dict[str, str]:
        """Build HTTP headers for OpenRouter."""
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if self.site_url:
            headers["HTTP-Referer"] = self.site_url
        if self.site_name:
            headers["X-Title"] = self.site_name
        return headers

    def chat_completion(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Call OpenRouter chat completions API.

        Args:
            messages: List of message dicts with 'role' and 'content'
            temperature: Sampling temperature, defaults to settings
            max_tokens: Maximum tokens in response, defaults to settings

        Returns:
            Response content as string

        Raises:
            httpx.HTTPError: On transport or API errors
            ValueError: If the response carries no completion text
        """
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": settings.CHAT_TEMPERATURE if temperature is None else temperature,
            "max_tokens": max_tokens or settings.CHAT_MAX_TOKENS,
        }

        # Log request hash
        request_hash = self._hash_text(json.dumps(payload, sort_keys=True))
        logger.info(f"LLM request to {self.model} ({len(messages)} messages), hash: {request_hash[:16]}")

        with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
            response = client.post(
                f"{self.base_url}/chat/completions",
                headers=self._build_headers(),
                json=payload,
            )
            response.raise_for_status()
            result = response.json()

        try:
            content = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            raise ValueError(f"Malformed completion response: {str(result)[:200]}")
        if content is None:
            raise ValueError("Completion response has no content")

        # Log response hash
        response_hash = self._hash_text(content)
        logger.info(f"LLM response hash: {response_hash[:16]}")

        return content

    def generate(self, prompt: str) -> str:
        """Single-turn completion for a prompt."""
        return self.chat_completion([{"role": "user", "content": prompt}])

    def start_chat(self, history: Optional[List[Message]] = None) -> "ChatSession":
        """Open a chat session seeded with prior turns."""
        return ChatSession(self, history or [])


class ChatSession:
    """A conversation whose prior turns are fixed at construction."""

    def __init__(self, client: LLMClient, history: List[Message]):
        self.client = client
        self.history = list(history)

    @staticmethod
    def _to_openai(message: Message) -> Dict[str, str]:
        role = "assistant" if message.role == MODEL_ROLE else "user"
        return {"role": role, "content": "\n".join(part.text for part in message.parts)}

    def send_message(self, text: str) -> str:
        """Send a user message after the session history and return the reply text."""
        messages = [self._to_openai(m) for m in self.history]
        messages.append({"role": "user", "content": text})
        return self.client.chat_completion(messages)
