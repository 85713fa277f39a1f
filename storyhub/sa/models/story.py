# storyhub/sa/models/story.py
from sqlalchemy import Integer, String, Text, Boolean, JSON, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin


class Story(Base, TimestampMixin):
    __tablename__ = 'stories'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    cover_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    genre: Mapped[str] = mapped_column(String(100), nullable=False)
    language: Mapped[str] = mapped_column(String(16), nullable=False, default="en")
    author_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_draft: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    read_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    chapter_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    estimated_read_time: Mapped[int | None] = mapped_column(Integer, nullable=True)  # minutes
    tags: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    # Relationships
    author = relationship('User', back_populates='stories')
    chapters = relationship(
        'Chapter',
        back_populates='story',
        order_by='Chapter.chapter_number',
        passive_deletes=True,
    )

    __table_args__ = (
        Index('idx_stories_author_id', 'author_id'),
        Index('idx_stories_published_created', 'is_published', 'created_at'),
        Index('idx_stories_title', 'title'),
    )

    def __repr__(self) -> str:
        return f"<Story id={self.id} title={self.title!r}>"


class Chapter(Base, TimestampMixin):
    __tablename__ = 'chapters'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    story_id: Mapped[int] = mapped_column(ForeignKey('stories.id', ondelete='CASCADE'), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    chapter_number: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-based
    word_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    story = relationship('Story', back_populates='chapters')

    __table_args__ = (
        UniqueConstraint('story_id', 'chapter_number', name='uix_chapters_story_number'),
    )

    def __repr__(self) -> str:
        return f"<Chapter id={self.id} story_id={self.story_id} number={self.chapter_number}>"
