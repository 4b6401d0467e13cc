"""Species chat assistant backed by an external completion service."""

from speciescatalog.chat.providers import ChatErrorKind, CompletionError, OpenAICompletionProvider
from speciescatalog.chat.service import SpeciesChatService

__all__ = [
    "ChatErrorKind",
    "CompletionError",
    "OpenAICompletionProvider",
    "SpeciesChatService",
]
