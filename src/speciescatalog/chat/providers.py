"""Completion service access with typed failures."""

import logging
import os
from enum import Enum

import openai
from openai import AsyncOpenAI

from speciescatalog.config.models import ChatConfig

logger = logging.getLogger(__name__)

API_KEY_ENV = "OPENAI_API_KEY"


class ChatErrorKind(str, Enum):
    """Why a completion could not be produced."""

    NOT_CONFIGURED = "not_configured"
    INVALID_CREDENTIAL = "invalid_credential"
    QUOTA_EXCEEDED = "quota_exceeded"
    EMPTY_RESPONSE = "empty_response"
    UNAVAILABLE = "unavailable"


class CompletionError(Exception):
    """Raised by a completion provider with the kind of failure."""

    def __init__(self, kind: ChatErrorKind, detail: str = ""):
        super().__init__(detail or kind.value)
        self.kind = kind
        self.detail = detail


def create_completion_client() -> AsyncOpenAI | None:
    """Create the process-wide completion client, or None without a credential."""
    api_key = os.getenv(API_KEY_ENV, "").strip()
    if not api_key:
        logger.warning("%s is not set; the chat assistant will reply with a notice", API_KEY_ENV)
        return None
    return AsyncOpenAI(api_key=api_key)


def classify_openai_error(error: openai.OpenAIError) -> ChatErrorKind:
    """Map an OpenAI client exception to a chat failure kind."""
    if isinstance(error, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return ChatErrorKind.INVALID_CREDENTIAL
    if isinstance(error, openai.RateLimitError):
        return ChatErrorKind.QUOTA_EXCEEDED
    return ChatErrorKind.UNAVAILABLE


class OpenAICompletionProvider:
    """Single-turn chat completions through the OpenAI API."""

    def __init__(self, client: AsyncOpenAI | None, config: ChatConfig):
        self.client = client
        self.config = config

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    async def complete(self, system_prompt: str, user_message: str) -> str:
        """Return the assistant's reply to one user turn.

        Raises:
            CompletionError: If no client is configured, the provider fails,
                or it returns no text
        """
        if self.client is None:
            raise CompletionError(ChatErrorKind.NOT_CONFIGURED)

        try:
            completion = await self.client.chat.completions.create(
                model=self.config.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
                temperature=self.config.temperature,
                max_tokens=self.config.max_tokens,
            )
        except openai.OpenAIError as e:
            kind = classify_openai_error(e)
            logger.error("Completion request failed", extra={"kind": kind.value, "error": str(e)})
            raise CompletionError(kind, str(e)) from e

        text = completion.choices[0].message.content if completion.choices else None
        if not text:
            raise CompletionError(ChatErrorKind.EMPTY_RESPONSE)
        return text

    async def close(self) -> None:
        """Release the HTTP connection pool of the underlying client."""
        if self.client is not None:
            await self.client.close()
