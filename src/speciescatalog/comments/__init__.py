"""Species comments: threads, author enrichment and relative timestamps."""

from speciescatalog.comments.formatting import format_relative_time
from speciescatalog.comments.manager import CommentThread, SpeciesCommentService
from speciescatalog.comments.models import (
    EnrichedComment,
    MutationResult,
    Notice,
    NoticeVariant,
)

__all__ = [
    "CommentThread",
    "EnrichedComment",
    "MutationResult",
    "Notice",
    "NoticeVariant",
    "SpeciesCommentService",
    "format_relative_time",
]
