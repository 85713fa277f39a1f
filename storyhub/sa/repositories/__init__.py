# storyhub/sa/repositories/__init__.py
from .edge import EdgeRepository
from .user import UserRepository
from .story import StoryRepository
from .chapter import ChapterRepository
from .progress import ProgressRepository
from .translation import TranslationRepository
from .audio import AudioRepository
from .engagement import EngagementRepository
from .author import AuthorRepository

__all__ = [
    'EdgeRepository',
    'UserRepository',
    'StoryRepository',
    'ChapterRepository',
    'ProgressRepository',
    'TranslationRepository',
    'AudioRepository',
    'EngagementRepository',
    'AuthorRepository'
]
