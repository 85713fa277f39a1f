# storyhub/sa/models/media.py
from sqlalchemy import Integer, String, Text, Boolean, ForeignKey, Index, text
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, CreatedAtMixin, TimestampMixin

_WHOLE_STORY = text('chapter_id IS NULL')
_PER_CHAPTER = text('chapter_id IS NOT NULL')


class Translation(Base, CreatedAtMixin):
    """Cached translation of a story, or of one of its chapters"""
    __tablename__ = 'translations'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    story_id: Mapped[int] = mapped_column(ForeignKey('stories.id', ondelete='CASCADE'), nullable=False)
    chapter_id: Mapped[int | None] = mapped_column(ForeignKey('chapters.id', ondelete='CASCADE'), nullable=True)
    language: Mapped[str] = mapped_column(String(16), nullable=False)  # source language
    target_language: Mapped[str] = mapped_column(String(16), nullable=False)
    translated_content: Mapped[str] = mapped_column(Text, nullable=False)

    story = relationship('Story')
    chapter = relationship('Chapter')

    __table_args__ = (
        # NULL chapter ids never collide in a plain unique constraint
        Index('uix_translations_story_target', 'story_id', 'target_language',
              unique=True, sqlite_where=_WHOLE_STORY, postgresql_where=_WHOLE_STORY),
        Index('uix_translations_story_target_chapter', 'story_id', 'target_language', 'chapter_id',
              unique=True, sqlite_where=_PER_CHAPTER, postgresql_where=_PER_CHAPTER),
    )


class Audiobook(Base, CreatedAtMixin):
    """System generated narration of a story or chapter in one language"""
    __tablename__ = 'audiobooks'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    story_id: Mapped[int] = mapped_column(ForeignKey('stories.id', ondelete='CASCADE'), nullable=False)
    chapter_id: Mapped[int | None] = mapped_column(ForeignKey('chapters.id', ondelete='CASCADE'), nullable=True)
    language: Mapped[str] = mapped_column(String(16), nullable=False)
    audio_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds

    story = relationship('Story')
    chapter = relationship('Chapter')

    __table_args__ = (
        Index('uix_audiobooks_story_language', 'story_id', 'language',
              unique=True, sqlite_where=_WHOLE_STORY, postgresql_where=_WHOLE_STORY),
        Index('uix_audiobooks_story_language_chapter', 'story_id', 'language', 'chapter_id',
              unique=True, sqlite_where=_PER_CHAPTER, postgresql_where=_PER_CHAPTER),
    )


class AudioRecording(Base, TimestampMixin):
    """Narration uploaded by a user. Only the storage reference is kept."""
    __tablename__ = 'audio_recordings'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    story_id: Mapped[int] = mapped_column(ForeignKey('stories.id', ondelete='CASCADE'), nullable=False)
    chapter_id: Mapped[int | None] = mapped_column(ForeignKey('chapters.id', ondelete='CASCADE'), nullable=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    audio_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    file_size: Mapped[int | None] = mapped_column(Integer, nullable=True)  # bytes
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_subscriber_only: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    play_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    user = relationship('User', back_populates='audio_recordings')
    story = relationship('Story')
    chapter = relationship('Chapter')

    __table_args__ = (
        Index('idx_audio_recordings_user_id', 'user_id'),
        Index('idx_audio_recordings_story_id', 'story_id'),
        Index('idx_audio_recordings_chapter_id', 'chapter_id'),
    )
