# storyhub/sa/models/reading.py
from datetime import datetime
from sqlalchemy import Integer, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, utcnow


class ReadingProgress(Base):
    """Where a user is within a story. One row per (user, story)."""
    __tablename__ = 'reading_progress'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    story_id: Mapped[int] = mapped_column(ForeignKey('stories.id', ondelete='CASCADE'), nullable=False)
    chapter_id: Mapped[int | None] = mapped_column(ForeignKey('chapters.id', ondelete='CASCADE'), nullable=True)
    current_position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)  # character offset
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    last_read_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    user = relationship('User', back_populates='reading_progress')
    story = relationship('Story')
    chapter = relationship('Chapter')

    __table_args__ = (
        UniqueConstraint('user_id', 'story_id', name='uix_reading_progress_user_story'),
    )
