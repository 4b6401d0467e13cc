"""View models for species comment threads."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

UNKNOWN_AUTHOR_NAME = "Unknown User"


class AuthorProfile(BaseModel):
    """The part of a profile shown next to a comment."""

    id: str
    display_name: str
    email: str


class KnownAuthor(BaseModel):
    """Comment author whose profile was found."""

    kind: Literal["known"] = "known"
    profile: AuthorProfile

    @property
    def display_name(self) -> str:
        return self.profile.display_name or UNKNOWN_AUTHOR_NAME


class UnknownAuthor(BaseModel):
    """Comment author whose profile is missing or could not be loaded."""

    kind: Literal["unknown"] = "unknown"

    @property
    def display_name(self) -> str:
        return UNKNOWN_AUTHOR_NAME


CommentAuthor = Annotated[KnownAuthor | UnknownAuthor, Field(discriminator="kind")]


class EnrichedComment(BaseModel):
    """A stored comment joined with its author's profile."""

    id: int
    species_id: int
    author: str
    content: str
    created_at: datetime
    author_profile: CommentAuthor = Field(default_factory=UnknownAuthor)

    @property
    def author_display_name(self) -> str:
        return self.author_profile.display_name


class NoticeVariant(str, Enum):
    """How prominently a notice should be shown."""

    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notice(BaseModel):
    """Transient user-facing notification raised by a thread operation."""

    title: str
    description: str | None = None
    variant: NoticeVariant = NoticeVariant.DEFAULT


class MutationResult(str, Enum):
    """Outcome of posting or deleting a comment."""

    APPLIED = "applied"
    INVALID = "invalid"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    IN_PROGRESS = "in_progress"
    FAILED = "failed"
