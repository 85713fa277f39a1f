# storyhub/services/story_service.py
import logging
from typing import Any, Dict, Union
from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.orm import Session

from storyhub.errors import NotFound, ValidationFailed
from storyhub.models.schemas import ChapterCreate, StoryCreate, StoryWithChapters
from storyhub.sa.models import Chapter, Story
from storyhub.sa.models.base import utcnow
from storyhub.sa.repositories import ChapterRepository, StoryRepository

logger = logging.getLogger(__name__)


class StoryService:
    """Writes that touch a story and its chapters together.

    Every operation here commits once, so the story's chapter_count always
    agrees with its chapter rows.
    """

    def __init__(self, session: Session):
        self.session = session
        self.stories = StoryRepository(session)
        self.chapters = ChapterRepository(session)

    def _count_chapters(self, story_id: int) -> int:
        return (
            self.session.query(func.count(Chapter.id))
            .filter(Chapter.story_id == story_id)
            .scalar()
        ) or 0

    def create_story_with_chapters(self, payload: Union[StoryWithChapters, Dict[str, Any]]) -> Story:
        """Create a story and its chapters in one transaction.

        Chapters are numbered by their position in the payload, starting at 1.
        A chapter without a title is called "Chapter <n>"; one with blank
        content is skipped but still uses up its number.

        Args:
            payload: A StoryWithChapters, or a dict of the same shape

        Returns:
            The created Story with chapter_count set

        Raises:
            ValidationFailed: If the payload is malformed or the author does not exist
            DuplicateKey: If two chapters end up with the same number
        """
        if not isinstance(payload, StoryWithChapters):
            try:
                payload = StoryWithChapters.model_validate(payload)
            except ValidationError as e:
                raise ValidationFailed(f"Invalid story payload: {e}") from e

        story_data = StoryCreate(**payload.model_dump(exclude={'chapters'}, exclude_none=True))
        try:
            story = self.stories.add_story(story_data)
            created = 0
            for position, draft in enumerate(payload.chapters, start=1):
                if not draft.content or not draft.content.strip():
                    continue
                self.chapters.add_chapter(ChapterCreate(
                    story_id=story.id,
                    title=draft.title or f"Chapter {position}",
                    content=draft.content,
                    chapter_number=position,
                ))
                created += 1
            story.chapter_count = created
            self.session.commit()
        except Exception:
            self.session.rollback()
            logger.warning("Rolled back story %r and its chapters", payload.title)
            raise

        logger.info("Created story %s %r with %d chapters", story.id, story.title, story.chapter_count)
        return story

    def add_chapter(self, data: ChapterCreate) -> Chapter:
        """Create a chapter and recount the parent story's chapters.

        Raises:
            NotFound: If the story does not exist
            DuplicateKey: If the story already has a chapter with this number
        """
        story = self.stories.get_by_id(data.story_id)
        if story is None:
            raise NotFound("Story", data.story_id)

        try:
            chapter = self.chapters.add_chapter(data)
            story.chapter_count = self._count_chapters(story.id)
            story.updated_at = utcnow()
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        logger.info("Added chapter %s to story %s (%d chapters)", chapter.chapter_number, story.id, story.chapter_count)
        return chapter

    def remove_chapter(self, chapter_id: int) -> bool:
        """Delete a chapter and recount the parent story's chapters.

        Returns:
            True if the chapter existed
        """
        chapter = self.chapters.get_by_id(chapter_id)
        if chapter is None:
            return False
        story = self.stories.get_by_id(chapter.story_id)

        self.session.query(Chapter).filter(Chapter.id == chapter_id).delete()
        story.chapter_count = self._count_chapters(story.id)
        story.updated_at = utcnow()
        self.session.commit()
        # Rows removed by ON DELETE CASCADE are still in the identity map
        self.session.expire_all()
        logger.info("Removed chapter %s from story %s (%d chapters)", chapter_id, story.id, story.chapter_count)
        return True
