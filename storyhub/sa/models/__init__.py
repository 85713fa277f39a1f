# storyhub/sa/models/__init__.py
from .base import Base, TimestampMixin, CreatedAtMixin
from .user import User
from .story import Story, Chapter
from .reading import ReadingProgress
from .media import Translation, Audiobook, AudioRecording
from .engagement import (
    UserLibrary, StoryLike, FavoriteStory, FavoriteAuthor, AuthorLike,
    FavoriteAuthorUser, AuthorLibrary, FeaturedAuthor, UserSubscription,
    AudioRecordingLike
)

__all__ = [
    'Base',
    'TimestampMixin',
    'CreatedAtMixin',
    'User',
    'Story',
    'Chapter',
    'ReadingProgress',
    'Translation',
    'Audiobook',
    'AudioRecording',
    'UserLibrary',
    'StoryLike',
    'FavoriteStory',
    'FavoriteAuthor',
    'AuthorLike',
    'FavoriteAuthorUser',
    'AuthorLibrary',
    'FeaturedAuthor',
    'UserSubscription',
    'AudioRecordingLike'
]
