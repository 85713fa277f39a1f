import logging
from typing import List, Optional
from sqlalchemy import desc, func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from storyhub.errors import NotFound, ValidationFailed
from storyhub.models.schemas import StoryCreate, StoryUpdate
from storyhub.sa.models import Story, Chapter, User
from storyhub.sa.models.base import utcnow

logger = logging.getLogger(__name__)


class StoryRepository:
    """Repository for managing Story entities."""

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_by_id(self, story_id: int) -> Optional[Story]:
        return self.session.get(Story, story_id)

    def require(self, story_id: int) -> Story:
        story = self.get_by_id(story_id)
        if story is None:
            raise NotFound("Story", story_id)
        return story

    def list_by_author(self, author_id: int) -> List[Story]:
        """Every story written by the author, drafts included"""
        return (
            self.session.query(Story)
            .filter(Story.author_id == author_id)
            .order_by(Story.id)
            .all()
        )

    def list_published(self, limit: int = 50) -> List[Story]:
        """Published stories, newest first"""
        return (
            self.session.query(Story)
            .filter(Story.is_published.is_(True))
            .order_by(desc(Story.created_at), desc(Story.id))
            .limit(limit)
            .all()
        )

    def list_featured(self) -> List[Story]:
        """Stories both published and featured, most read first"""
        return (
            self.session.query(Story)
            .filter(Story.is_published.is_(True), Story.is_featured.is_(True))
            .order_by(desc(Story.read_count), Story.id)
            .all()
        )

    def search(self, query: str) -> List[Story]:
        """Case-insensitive title search among published stories.

        Args:
            query: Substring to look for in the title

        Returns:
            List of matching Story objects
        """
        return (
            self.session.query(Story)
            .filter(Story.is_published.is_(True), Story.title.ilike(f"%{query}%"))
            .order_by(desc(Story.created_at), desc(Story.id))
            .all()
        )

    def count_stories(self) -> int:
        return self.session.query(func.count(Story.id)).scalar() or 0

    def add_story(self, data: StoryCreate) -> Story:
        """Add a story to the session without committing.

        Used where a story must be committed together with other rows.

        Raises:
            ValidationFailed: If the author does not exist
        """
        if self.session.get(User, data.author_id) is None:
            logger.warning("Rejected story %r: author %s does not exist", data.title, data.author_id)
            raise ValidationFailed(f"Author {data.author_id} does not exist")

        story = Story(**data.model_dump(exclude_none=True))
        self.session.add(story)
        self.session.flush()
        return story

    def create_story(self, data: StoryCreate) -> Story:
        """Create a new story.

        Args:
            data: Validated story fields. Unset fields take the column defaults,
                  so a new story is a draft with zeroed counters.

        Returns:
            The created Story object

        Raises:
            ValidationFailed: If the author does not exist
        """
        try:
            story = self.add_story(data)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ValidationFailed(f"Cannot create story {data.title!r}: {e.orig}") from e
        logger.info("Created story %s %r by author %s", story.id, story.title, story.author_id)
        return story

    def update_story(self, story_id: int, data: StoryUpdate) -> Optional[Story]:
        """Apply a partial update. The update timestamp is always refreshed.

        Returns:
            The updated Story object if found, None otherwise

        Raises:
            ValidationFailed: If the change violates a column constraint
        """
        story = self.get_by_id(story_id)
        if not story:
            return None

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(story, field, value)
        story.updated_at = utcnow()
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ValidationFailed(f"Cannot update story {story_id}: {e.orig}") from e
        return story

    def delete_story(self, story_id: int) -> bool:
        """Delete a story. Chapters and every row hanging off it go with it.

        Returns:
            True if a row was removed
        """
        result = self.session.query(Story).filter(Story.id == story_id).delete()
        self.session.commit()
        # Rows removed by ON DELETE CASCADE are still in the identity map
        self.session.expire_all()
        if result:
            logger.info("Deleted story %s", story_id)
        return result > 0

    def refresh_chapter_count(self, story_id: int) -> Optional[Story]:
        """Recount the story's chapters into chapter_count"""
        story = self.get_by_id(story_id)
        if not story:
            return None

        story.chapter_count = (
            self.session.query(func.count(Chapter.id))
            .filter(Chapter.story_id == story_id)
            .scalar()
        ) or 0
        story.updated_at = utcnow()
        self.session.commit()
        return story

    def increment_read_count(self, story_id: int) -> bool:
        """Bump read_count by one in a single UPDATE"""
        result = (
            self.session.query(Story)
            .filter(Story.id == story_id)
            .update({Story.read_count: Story.read_count + 1}, synchronize_session='fetch')
        )
        self.session.commit()
        return result > 0
