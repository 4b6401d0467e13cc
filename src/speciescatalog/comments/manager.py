"""Species comment threads: listing with author enrichment, posting and deleting."""

import contextlib
import logging
from collections.abc import Hashable, Iterator

from blinker import NamedSignal

from speciescatalog.catalog.models import Profile, SpeciesComment
from speciescatalog.catalog.store import CatalogStore, StoreError
from speciescatalog.comments.models import (
    AuthorProfile,
    EnrichedComment,
    KnownAuthor,
    MutationResult,
    Notice,
    NoticeVariant,
    UnknownAuthor,
)
from speciescatalog.notifications.signals import comments_changed_signal

logger = logging.getLogger(__name__)


def enrich_comments(
    comments: list[SpeciesComment], profiles: list[Profile]
) -> list[EnrichedComment]:
    """Attach each comment's author profile, falling back to an unknown author."""
    by_id = {
        profile.id: AuthorProfile(
            id=profile.id, display_name=profile.display_name, email=profile.email
        )
        for profile in profiles
    }
    enriched = []
    for comment in comments:
        profile = by_id.get(comment.author)
        enriched.append(
            EnrichedComment(
                id=comment.id,  # type: ignore[arg-type]
                species_id=comment.species_id,
                author=comment.author,
                content=comment.content,
                created_at=comment.created_at,
                author_profile=KnownAuthor(profile=profile) if profile else UnknownAuthor(),
            )
        )
    return enriched


class SpeciesCommentService:
    """Opens comment threads and coordinates requests across them.

    One instance lives for the whole process. It owns the registry of
    outstanding mutations so that a repeated create or delete for the same
    target is refused while the first one is still running.
    """

    def __init__(
        self, store: CatalogStore, changed_signal: NamedSignal = comments_changed_signal
    ):
        self.store = store
        self.changed_signal = changed_signal
        self._in_flight: set[Hashable] = set()

    async def open_thread(self, species_id: int, viewer_id: str | None) -> "CommentThread":
        """Create a thread for one species and viewer and load its comments."""
        thread = CommentThread(self, species_id, viewer_id)
        await thread.load()
        return thread

    @contextlib.contextmanager
    def claim(self, key: Hashable) -> Iterator[bool]:
        """Mark ``key`` as in flight for the duration of the block.

        Yields False without claiming when the key is already taken.
        """
        if key in self._in_flight:
            yield False
            return
        self._in_flight.add(key)
        try:
            yield True
        finally:
            self._in_flight.discard(key)

    def notify_changed(self, species_id: int) -> None:
        """Tell other surfaces showing this species to refresh."""
        self.changed_signal.send(self, species_id=species_id)


class CommentThread:
    """The comment thread of one species, as seen by one viewer."""

    def __init__(self, service: SpeciesCommentService, species_id: int, viewer_id: str | None):
        self._service = service
        self.species_id = species_id
        self.viewer_id = viewer_id
        self.comments: list[EnrichedComment] = []
        self.draft = ""
        self.is_loading = False
        self.is_submitting = False
        self.notices: list[Notice] = []

    @property
    def store(self) -> CatalogStore:
        return self._service.store

    @property
    def can_submit(self) -> bool:
        """Whether the post button should be enabled."""
        return not self.is_submitting and bool(self.draft.strip())

    def can_delete(self, comment: EnrichedComment) -> bool:
        """Only a comment's own author is offered the delete action."""
        return self.viewer_id is not None and comment.author == self.viewer_id

    def _notify(self, title: str, description: str | None = None, error: bool = False) -> None:
        variant = NoticeVariant.DESTRUCTIVE if error else NoticeVariant.DEFAULT
        self.notices.append(Notice(title=title, description=description, variant=variant))

    async def load(self) -> bool:
        """Fetch the comments for the species and join their authors.

        Returns:
            True if the comments were loaded, False if the comment query failed
        """
        self.is_loading = True
        try:
            try:
                comments = await self.store.list_comments(self.species_id)
            except StoreError as e:
                self._notify("Error loading comments", e.message, error=True)
                return False

            if not comments:
                self.comments = []
                return True

            author_ids = {comment.author for comment in comments}
            try:
                profiles = await self.store.get_profiles(author_ids)
            except StoreError as e:
                self._notify("Error loading user profiles", e.message, error=True)
                profiles = []

            self.comments = enrich_comments(comments, profiles)
            return True
        finally:
            self.is_loading = False

    async def change_species(self, species_id: int) -> bool:
        """Switch the thread to another species and load it from scratch."""
        self.species_id = species_id
        self.comments = []
        return await self.load()

    async def submit(self, draft: str | None = None) -> MutationResult:
        """Post the draft as a new comment by the viewer.

        The draft is cleared only when the comment was stored.
        """
        if draft is not None:
            self.draft = draft

        content = self.draft.strip()
        if not content:
            self._notify("Comment cannot be empty", error=True)
            return MutationResult.INVALID
        if self.viewer_id is None:
            self._notify("Error adding comment", "You must be signed in to comment", error=True)
            return MutationResult.UNAUTHENTICATED

        with self._service.claim(("create", self.species_id, self.viewer_id)) as claimed:
            if not claimed:
                self._notify("Request already in progress", error=True)
                return MutationResult.IN_PROGRESS

            self.is_submitting = True
            try:
                try:
                    await self.store.insert_comment(self.species_id, self.viewer_id, content)
                except StoreError as e:
                    self._notify("Error adding comment", e.message, error=True)
                    return MutationResult.FAILED

                logger.info(
                    "Comment added",
                    extra={"species_id": self.species_id, "author": self.viewer_id},
                )
                self.draft = ""
                await self.load()
                self._service.notify_changed(self.species_id)
                self._notify("Comment added!")
                return MutationResult.APPLIED
            finally:
                self.is_submitting = False

    async def delete(self, comment_id: int) -> MutationResult:
        """Delete one of the viewer's own comments."""
        if self.viewer_id is None:
            self._notify("Error deleting comment", "You must be signed in to delete", error=True)
            return MutationResult.UNAUTHENTICATED

        known = next((c for c in self.comments if c.id == comment_id), None)
        if known is not None and not self.can_delete(known):
            self._notify(
                "Error deleting comment", "You can only delete your own comments", error=True
            )
            return MutationResult.FORBIDDEN

        with self._service.claim(("delete", comment_id)) as claimed:
            if not claimed:
                self._notify("Request already in progress", error=True)
                return MutationResult.IN_PROGRESS

            try:
                await self.store.delete_comment(self.species_id, comment_id, self.viewer_id)
            except StoreError as e:
                self._notify("Error deleting comment", e.message, error=True)
                return MutationResult.FAILED

            logger.info(
                "Comment deleted",
                extra={"species_id": self.species_id, "comment_id": comment_id},
            )
            await self.load()
            self._service.notify_changed(self.species_id)
            self._notify("Comment deleted")
            return MutationResult.APPLIED
