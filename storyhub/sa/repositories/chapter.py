import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from storyhub.errors import DuplicateKey, ValidationFailed
from storyhub.models.schemas import ChapterCreate, ChapterUpdate
from storyhub.sa.models import Chapter, Story
from storyhub.sa.models.base import utcnow

logger = logging.getLogger(__name__)


class ChapterRepository:
    """Repository for managing Chapter entities.

    Creating or deleting chapters does not touch the parent story's
    chapter_count; see StoryService for the variant that does.
    """

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, chapter_id: int) -> Optional[Chapter]:
        return self.session.get(Chapter, chapter_id)

    def list_by_story(self, story_id: int) -> List[Chapter]:
        """Chapters of a story in reading order"""
        return (
            self.session.query(Chapter)
            .filter(Chapter.story_id == story_id)
            .order_by(Chapter.chapter_number)
            .all()
        )

    def get_by_number(self, story_id: int, chapter_number: int) -> Optional[Chapter]:
        return (
            self.session.query(Chapter)
            .filter(Chapter.story_id == story_id, Chapter.chapter_number == chapter_number)
            .first()
        )

    def add_chapter(self, data: ChapterCreate) -> Chapter:
        """Add a chapter to the session without committing.

        Raises:
            ValidationFailed: If the story does not exist
            DuplicateKey: If the story already has a chapter with this number
        """
        if self.session.get(Story, data.story_id) is None:
            raise ValidationFailed(f"Story {data.story_id} does not exist")
        if self.get_by_number(data.story_id, data.chapter_number) is not None:
            raise DuplicateKey(f"Story {data.story_id} already has chapter {data.chapter_number}")

        chapter = Chapter(**data.model_dump(exclude_none=True))
        self.session.add(chapter)
        self.session.flush()
        return chapter

    def create_chapter(self, data: ChapterCreate) -> Chapter:
        try:
            chapter = self.add_chapter(data)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateKey(f"Story {data.story_id} already has chapter {data.chapter_number}") from e
        logger.info("Created chapter %s (#%s) of story %s", chapter.id, chapter.chapter_number, chapter.story_id)
        return chapter

    def update_chapter(self, chapter_id: int, data: ChapterUpdate) -> Optional[Chapter]:
        """Apply a partial update.

        Returns:
            The updated Chapter if found, None otherwise

        Raises:
            ValidationFailed: If a required field would be cleared
            DuplicateKey: If renumbering collides with a sibling chapter
        """
        chapter = self.get_by_id(chapter_id)
        if not chapter:
            return None

        changes = data.model_dump(exclude_unset=True)
        nulled = sorted(f for f, v in changes.items() if v is None and not Chapter.__table__.c[f].nullable)
        if nulled:
            raise ValidationFailed(f"Cannot clear {', '.join(nulled)} on chapter {chapter_id}")
        new_number = changes.get('chapter_number')
        if new_number is not None and new_number != chapter.chapter_number:
            if self.get_by_number(chapter.story_id, new_number) is not None:
                raise DuplicateKey(f"Story {chapter.story_id} already has chapter {new_number}")

        for field, value in changes.items():
            setattr(chapter, field, value)
        chapter.updated_at = utcnow()
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateKey(f"Story {chapter.story_id} already has chapter {new_number}") from e
        return chapter

    def delete_chapter(self, chapter_id: int) -> bool:
        result = self.session.query(Chapter).filter(Chapter.id == chapter_id).delete()
        self.session.commit()
        # Rows removed by ON DELETE CASCADE are still in the identity map
        self.session.expire_all()
        return result > 0
