# storyhub/sa/__init__.py
from .database import Database
from .models import (
    Base, User, Story, Chapter, ReadingProgress, Translation, Audiobook,
    AudioRecording, UserLibrary, StoryLike, FavoriteStory, FavoriteAuthor,
    AuthorLike, FavoriteAuthorUser, AuthorLibrary, FeaturedAuthor,
    UserSubscription, AudioRecordingLike
)

__all__ = [
    'Database',
    'Base',
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
