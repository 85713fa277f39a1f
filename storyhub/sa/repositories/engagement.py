from typing import List
from sqlalchemy.orm import Session

from storyhub.sa.models import (
    User, Story, UserLibrary, StoryLike, FavoriteStory, FavoriteAuthor,
    AuthorLike, FavoriteAuthorUser, AuthorLibrary, UserSubscription
)
from .edge import EdgeRepository


class EngagementRepository:
    """The engagement graph: likes, favorites, follows, libraries, subscriptions.

    Each edge kind is one EdgeRepository. The named methods below are the
    operations the API layer calls; anything else can go through the edge
    repositories directly (e.g. ``repo.story_likes.list_subjects(story_id)``).
    """

    def __init__(self, session: Session):
        self.session = session
        self.library = EdgeRepository(session, UserLibrary, 'user_id', 'story_id', User, Story)
        self.story_likes = EdgeRepository(session, StoryLike, 'user_id', 'story_id', User, Story)
        self.favorite_stories = EdgeRepository(session, FavoriteStory, 'user_id', 'story_id', User, Story)
        self.followed_authors = EdgeRepository(session, FavoriteAuthor, 'user_id', 'author_id', User, User)
        self.author_likes = EdgeRepository(session, AuthorLike, 'user_id', 'author_id', User, User)
        self.favorite_authors = EdgeRepository(session, FavoriteAuthorUser, 'user_id', 'author_id', User, User)
        self.author_library = EdgeRepository(session, AuthorLibrary, 'user_id', 'author_id', User, User)
        self.subscriptions = EdgeRepository(
            session, UserSubscription, 'subscriber_id', 'subscribed_to_id', User, User
        )

    # Library

    def add_to_library(self, user_id: int, story_id: int) -> UserLibrary:
        return self.library.add(user_id, story_id)

    def remove_from_library(self, user_id: int, story_id: int) -> bool:
        return self.library.remove(user_id, story_id)

    def get_library(self, user_id: int) -> List[Story]:
        return self.library.list_objects(user_id)

    def is_in_library(self, user_id: int, story_id: int) -> bool:
        return self.library.exists(user_id, story_id)

    # Story likes

    def like_story(self, user_id: int, story_id: int) -> StoryLike:
        return self.story_likes.add(user_id, story_id)

    def unlike_story(self, user_id: int, story_id: int) -> bool:
        return self.story_likes.remove(user_id, story_id)

    def count_story_likes(self, story_id: int) -> int:
        return self.story_likes.count(story_id)

    def is_story_liked(self, user_id: int, story_id: int) -> bool:
        return self.story_likes.exists(user_id, story_id)

    # Favorite stories

    def favorite_story(self, user_id: int, story_id: int) -> FavoriteStory:
        return self.favorite_stories.add(user_id, story_id)

    def unfavorite_story(self, user_id: int, story_id: int) -> bool:
        return self.favorite_stories.remove(user_id, story_id)

    def get_favorite_stories(self, user_id: int) -> List[Story]:
        return self.favorite_stories.list_objects(user_id)

    def is_story_favorited(self, user_id: int, story_id: int) -> bool:
        return self.favorite_stories.exists(user_id, story_id)

    # Following authors

    def follow_author(self, user_id: int, author_id: int) -> FavoriteAuthor:
        return self.followed_authors.add(user_id, author_id)

    def unfollow_author(self, user_id: int, author_id: int) -> bool:
        return self.followed_authors.remove(user_id, author_id)

    def get_followed_authors(self, user_id: int) -> List[User]:
        return self.followed_authors.list_objects(user_id)

    def is_following_author(self, user_id: int, author_id: int) -> bool:
        return self.followed_authors.exists(user_id, author_id)

    # Author likes

    def like_author(self, user_id: int, author_id: int) -> AuthorLike:
        return self.author_likes.add(user_id, author_id)

    def unlike_author(self, user_id: int, author_id: int) -> bool:
        return self.author_likes.remove(user_id, author_id)

    def count_author_likes(self, author_id: int) -> int:
        return self.author_likes.count(author_id)

    def is_author_liked(self, user_id: int, author_id: int) -> bool:
        return self.author_likes.exists(user_id, author_id)

    # Favorite authors

    def favorite_author(self, user_id: int, author_id: int) -> FavoriteAuthorUser:
        return self.favorite_authors.add(user_id, author_id)

    def unfavorite_author(self, user_id: int, author_id: int) -> bool:
        return self.favorite_authors.remove(user_id, author_id)

    def get_favorite_authors(self, user_id: int) -> List[User]:
        return self.favorite_authors.list_objects(user_id)

    def is_author_favorited(self, user_id: int, author_id: int) -> bool:
        return self.favorite_authors.exists(user_id, author_id)

    # Author library

    def add_author_to_library(self, user_id: int, author_id: int) -> AuthorLibrary:
        return self.author_library.add(user_id, author_id)

    def remove_author_from_library(self, user_id: int, author_id: int) -> bool:
        return self.author_library.remove(user_id, author_id)

    def get_author_library(self, user_id: int) -> List[User]:
        return self.author_library.list_objects(user_id)

    def is_author_in_library(self, user_id: int, author_id: int) -> bool:
        return self.author_library.exists(user_id, author_id)

    # Subscriptions

    def subscribe(self, subscriber_id: int, subscribed_to_id: int) -> UserSubscription:
        return self.subscriptions.add(subscriber_id, subscribed_to_id)

    def unsubscribe(self, subscriber_id: int, subscribed_to_id: int) -> bool:
        return self.subscriptions.remove(subscriber_id, subscribed_to_id)

    def get_subscriptions(self, user_id: int) -> List[User]:
        """Users this user subscribed to"""
        return self.subscriptions.list_objects(user_id)

    def get_subscribers(self, user_id: int) -> List[User]:
        """Users subscribed to this user"""
        return self.subscriptions.list_subjects(user_id)

    def count_subscribers(self, user_id: int) -> int:
        return self.subscriptions.count(user_id)

    def is_subscribed(self, subscriber_id: int, subscribed_to_id: int) -> bool:
        return self.subscriptions.exists(subscriber_id, subscribed_to_id)
