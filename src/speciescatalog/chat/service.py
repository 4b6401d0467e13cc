"""Species chat assistant."""

import logging
from typing import Protocol

from speciescatalog.chat.providers import ChatErrorKind, CompletionError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a specialized chatbot that answers questions about animals and species. "
    "You can provide information about habitat, diet, conservation status, behavior, "
    "physical characteristics, and other animal-related facts. If a user asks about "
    "something unrelated to animals or species, politely remind them that you specialize "
    "in species-related queries only. Be friendly, informative, and accurate in your responses."
)


class CompletionProvider(Protocol):
    async def complete(self, system_prompt: str, user_message: str) -> str: ...


def fallback_reply(kind: ChatErrorKind) -> str:
    """The fixed chat reply shown in place of a completion that failed."""
    match kind:
        case ChatErrorKind.NOT_CONFIGURED:
            return (
                "I apologize, but the chatbot service is not configured. "
                "Please add OPENAI_API_KEY to your .env file."
            )
        case ChatErrorKind.INVALID_CREDENTIAL:
            return (
                "I apologize, but there's an issue with the API key. "
                "Please check OPENAI_API_KEY in your .env file."
            )
        case ChatErrorKind.QUOTA_EXCEEDED:
            return "I apologize, but the API quota has been exceeded. Please try again later."
        case ChatErrorKind.EMPTY_RESPONSE:
            return "I apologize, but I couldn't generate a response. Please try again."
        case ChatErrorKind.UNAVAILABLE:
            return (
                "I apologize, but I'm experiencing technical difficulties. "
                "Please try again later."
            )


class SpeciesChatService:
    """Answers animal and species questions through a completion provider."""

    def __init__(self, provider: CompletionProvider):
        self.provider = provider

    async def generate_response(self, message: str) -> str:
        """Reply to a user message, substituting a fixed sentence for provider failures."""
        try:
            return await self.provider.complete(SYSTEM_PROMPT, message)
        except CompletionError as e:
            logger.warning("Chat completion unavailable", extra={"kind": e.kind.value})
            return fallback_reply(e.kind)
