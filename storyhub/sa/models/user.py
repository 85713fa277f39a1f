# storyhub/sa/models/user.py
from sqlalchemy import Integer, String, Text, Boolean, JSON, Index
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .base import Base, TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = 'users'

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    external_id: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)  # identity provider uid
    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    preferred_language: Mapped[str] = mapped_column(String(16), nullable=False, default="en")

    # Onboarding
    user_types: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)  # educator, writer, casual_reader
    preferred_genres: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    topics_of_interest: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    onboarding_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    stories = relationship('Story', back_populates='author', passive_deletes=True)
    reading_progress = relationship('ReadingProgress', back_populates='user', passive_deletes=True)
    audio_recordings = relationship('AudioRecording', back_populates='user', passive_deletes=True)

    __table_args__ = (
        Index('idx_users_display_name', 'display_name'),
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r}>"
