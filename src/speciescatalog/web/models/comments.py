"""Comment thread API contract models."""

from datetime import datetime

from pydantic import BaseModel, Field

from speciescatalog.comments.formatting import format_relative_time
from speciescatalog.comments.manager import CommentThread
from speciescatalog.comments.models import EnrichedComment, Notice

# ==================== Request Models ====================


class CreateCommentRequest(BaseModel):
    """Request body for posting a comment."""

    content: str = Field(..., description="Comment text; surrounding whitespace is trimmed")


# ==================== Response Models ====================


class CommentView(BaseModel):
    """One comment as displayed in a thread."""

    id: int
    species_id: int
    author: str = Field(..., description="Profile id of the author")
    author_display_name: str = Field(..., description="Author name, or 'Unknown User'")
    content: str
    created_at: datetime
    relative_time: str = Field(..., description="Human readable age such as '3 hours ago'")
    can_delete: bool = Field(..., description="Whether the viewer wrote this comment")

    @classmethod
    def from_comment(cls, comment: EnrichedComment, thread: CommentThread) -> "CommentView":
        """Build the view of an enriched comment for the thread's viewer."""
        return cls(
            id=comment.id,
            species_id=comment.species_id,
            author=comment.author,
            author_display_name=comment.author_display_name,
            content=comment.content,
            created_at=comment.created_at,
            relative_time=format_relative_time(comment.created_at),
            can_delete=thread.can_delete(comment),
        )


class CommentThreadResponse(BaseModel):
    """Comments of one species, newest first, with any notices raised."""

    species_id: int
    count: int
    comments: list[CommentView]
    notices: list[Notice] = Field(default_factory=list)

    @classmethod
    def from_thread(cls, thread: CommentThread) -> "CommentThreadResponse":
        """Snapshot a loaded thread."""
        return cls(
            species_id=thread.species_id,
            count=len(thread.comments),
            comments=[CommentView.from_comment(c, thread) for c in thread.comments],
            notices=list(thread.notices),
        )
