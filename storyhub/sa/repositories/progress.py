import logging
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from storyhub.errors import ValidationFailed
from storyhub.sa.models import ReadingProgress, User, Story, Chapter
from storyhub.sa.models.base import utcnow

logger = logging.getLogger(__name__)


class ProgressRepository:
    """Tracks how far each user got in each story.

    There is at most one row per (user, story); recording progress again
    overwrites it.
    """

    def __init__(self, session: Session):
        self.session = session

    def get_progress(self, user_id: int, story_id: int) -> Optional[ReadingProgress]:
        return (
            self.session.query(ReadingProgress)
            .filter(ReadingProgress.user_id == user_id, ReadingProgress.story_id == story_id)
            .first()
        )

    def _validate_refs(self, user_id: int, story_id: int, chapter_id: Optional[int]) -> None:
        if self.session.get(User, user_id) is None:
            raise ValidationFailed(f"User {user_id} does not exist")
        if self.session.get(Story, story_id) is None:
            raise ValidationFailed(f"Story {story_id} does not exist")
        if chapter_id is not None:
            chapter = self.session.get(Chapter, chapter_id)
            if chapter is None or chapter.story_id != story_id:
                raise ValidationFailed(f"Chapter {chapter_id} does not belong to story {story_id}")

    @staticmethod
    def _apply(progress: ReadingProgress, chapter_id: Optional[int], position: int, completed: bool) -> None:
        progress.chapter_id = chapter_id
        progress.current_position = position
        progress.completed = completed
        progress.last_read_at = utcnow()

    def record_progress(
        self,
        user_id: int,
        story_id: int,
        position: int = 0,
        chapter_id: Optional[int] = None,
        completed: bool = False,
    ) -> ReadingProgress:
        """Insert or overwrite the user's position in a story.

        Args:
            user_id: The reader
            story_id: The story being read
            position: Character offset into the story or chapter
            chapter_id: Chapter the offset refers to, if any
            completed: Whether the reader finished the story

        Returns:
            The single ReadingProgress row for (user_id, story_id)

        Raises:
            ValidationFailed: If a referenced row does not exist or position is negative
        """
        if position < 0:
            raise ValidationFailed("position must not be negative")
        self._validate_refs(user_id, story_id, chapter_id)

        existing = self.get_progress(user_id, story_id)
        if existing:
            self._apply(existing, chapter_id, position, completed)
            self.session.commit()
            return existing

        progress = ReadingProgress(user_id=user_id, story_id=story_id)
        self._apply(progress, chapter_id, position, completed)
        try:
            with self.session.begin_nested():
                self.session.add(progress)
        except IntegrityError as e:
            # A concurrent first read inserted the row; overwrite it instead
            existing = self.get_progress(user_id, story_id)
            if existing is None:
                raise ValidationFailed(f"Cannot record progress: {e.orig}") from e
            self._apply(existing, chapter_id, position, completed)
            self.session.commit()
            return existing

        self.session.commit()
        logger.debug("Started progress for user %s on story %s", user_id, story_id)
        return progress
