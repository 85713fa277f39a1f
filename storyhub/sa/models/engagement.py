# storyhub/sa/models/engagement.py
"""Join tables of the engagement graph.

Each row is one directed edge. Edges are physically deleted on the inverse
action; the (subject, object) pair is unique per table.
"""
from sqlalchemy import Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, CreatedAtMixin


class UserLibrary(Base, CreatedAtMixin):
    """Stories a user saved to their library"""
    __tablename__ = 'user_library'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    story_id: Mapped[int] = mapped_column(ForeignKey('stories.id', ondelete='CASCADE'), nullable=False)

    user = relationship('User')
    story = relationship('Story')

    __table_args__ = (
        UniqueConstraint('user_id', 'story_id', name='uix_user_library_user_story'),
    )


class StoryLike(Base, CreatedAtMixin):
    __tablename__ = 'story_likes'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    story_id: Mapped[int] = mapped_column(ForeignKey('stories.id', ondelete='CASCADE'), nullable=False)

    user = relationship('User')
    story = relationship('Story')

    __table_args__ = (
        UniqueConstraint('user_id', 'story_id', name='uix_story_likes_user_story'),
    )


class FavoriteStory(Base, CreatedAtMixin):
    __tablename__ = 'favorite_stories'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    story_id: Mapped[int] = mapped_column(ForeignKey('stories.id', ondelete='CASCADE'), nullable=False)

    user = relationship('User')
    story = relationship('Story')

    __table_args__ = (
        UniqueConstraint('user_id', 'story_id', name='uix_favorite_stories_user_story'),
    )


class FavoriteAuthor(Base, CreatedAtMixin):
    """A user following an author"""
    __tablename__ = 'favorite_authors'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    author_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    user = relationship('User', foreign_keys=[user_id])
    author = relationship('User', foreign_keys=[author_id])

    __table_args__ = (
        UniqueConstraint('user_id', 'author_id', name='uix_favorite_authors_user_author'),
    )


class AuthorLike(Base, CreatedAtMixin):
    __tablename__ = 'author_likes'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    author_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    user = relationship('User', foreign_keys=[user_id])
    author = relationship('User', foreign_keys=[author_id])

    __table_args__ = (
        UniqueConstraint('user_id', 'author_id', name='uix_author_likes_user_author'),
    )


class FavoriteAuthorUser(Base, CreatedAtMixin):
    """Author marked as favorite. Kept apart from FavoriteAuthor (following)."""
    __tablename__ = 'favorite_authors_users'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    author_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    user = relationship('User', foreign_keys=[user_id])
    author = relationship('User', foreign_keys=[author_id])

    __table_args__ = (
        UniqueConstraint('user_id', 'author_id', name='uix_favorite_authors_users_user_author'),
    )


class AuthorLibrary(Base, CreatedAtMixin):
    __tablename__ = 'author_library'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    author_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    user = relationship('User', foreign_keys=[user_id])
    author = relationship('User', foreign_keys=[author_id])

    __table_args__ = (
        UniqueConstraint('user_id', 'author_id', name='uix_author_library_user_author'),
    )


class FeaturedAuthor(Base, CreatedAtMixin):
    """Authors shown on the featured shelf, lowest display_order first"""
    __tablename__ = 'featured_authors'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    author_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    author = relationship('User')


class UserSubscription(Base, CreatedAtMixin):
    """Follower graph edge: subscriber -> subscribed_to"""
    __tablename__ = 'user_subscriptions'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    subscriber_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    subscribed_to_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)

    subscriber = relationship('User', foreign_keys=[subscriber_id])
    subscribed_to = relationship('User', foreign_keys=[subscribed_to_id])

    __table_args__ = (
        UniqueConstraint('subscriber_id', 'subscribed_to_id', name='uix_user_subscriptions_pair'),
    )


class AudioRecordingLike(Base, CreatedAtMixin):
    __tablename__ = 'audio_recording_likes'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    recording_id: Mapped[int] = mapped_column(ForeignKey('audio_recordings.id', ondelete='CASCADE'), nullable=False)

    user = relationship('User')
    recording = relationship('AudioRecording')

    __table_args__ = (
        UniqueConstraint('user_id', 'recording_id', name='uix_audio_recording_likes_user_recording'),
    )
