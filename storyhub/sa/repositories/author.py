import logging
from typing import List
from sqlalchemy import desc, func, select, union
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from storyhub.errors import NotFound, ValidationFailed
from storyhub.models.schemas import AuthorStats
from storyhub.sa.models import User, Story, FeaturedAuthor, AuthorLike, FavoriteAuthor, UserSubscription

logger = logging.getLogger(__name__)


class AuthorRepository:
    """Authors are users who write stories. Featured shelf and aggregate stats."""

    def __init__(self, session: Session):
        self.session = session

    def list_featured_authors(self) -> List[User]:
        """Featured authors by display order, most recently featured first on ties"""
        return (
            self.session.query(User)
            .join(FeaturedAuthor, FeaturedAuthor.author_id == User.id)
            .order_by(FeaturedAuthor.display_order, desc(FeaturedAuthor.created_at), desc(FeaturedAuthor.id))
            .all()
        )

    def add_featured_author(self, author_id: int, display_order: int = 0) -> FeaturedAuthor:
        """Feature an author. Featuring an already featured author moves them.

        Raises:
            ValidationFailed: If the author does not exist
        """
        if self.session.get(User, author_id) is None:
            raise ValidationFailed(f"Author {author_id} does not exist")

        featured = self.session.query(FeaturedAuthor).filter(FeaturedAuthor.author_id == author_id).first()
        if featured:
            featured.display_order = display_order
        else:
            featured = FeaturedAuthor(author_id=author_id, display_order=display_order)
            self.session.add(featured)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise ValidationFailed(f"Cannot feature author {author_id}: {e.orig}") from e
        logger.info("Featured author %s at position %s", author_id, display_order)
        return featured

    def remove_featured_author(self, author_id: int) -> bool:
        result = (
            self.session.query(FeaturedAuthor)
            .filter(FeaturedAuthor.author_id == author_id)
            .delete()
        )
        self.session.commit()
        return result > 0

    def count_followers(self, author_id: int) -> int:
        """Distinct users who follow or subscribe to the author"""
        followers = union(
            select(FavoriteAuthor.user_id.label('user_id')).where(FavoriteAuthor.author_id == author_id),
            select(UserSubscription.subscriber_id.label('user_id')).where(UserSubscription.subscribed_to_id == author_id),
        ).subquery()
        return self.session.execute(select(func.count()).select_from(followers)).scalar() or 0

    def get_author_stats(self, author_id: int) -> AuthorStats:
        """Story, like and follower counts, all computed from the tables.

        Raises:
            NotFound: If the author does not exist
        """
        if self.session.get(User, author_id) is None:
            raise NotFound("Author", author_id)

        story_count = (
            self.session.query(func.count(Story.id))
            .filter(Story.author_id == author_id)
            .scalar()
        ) or 0
        like_count = (
            self.session.query(func.count(AuthorLike.id))
            .filter(AuthorLike.author_id == author_id)
            .scalar()
        ) or 0

        return AuthorStats(
            author_id=author_id,
            story_count=story_count,
            like_count=like_count,
            follower_count=self.count_followers(author_id),
        )
