# storyhub/models/schemas.py

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator


# Users

class UserCreate(BaseModel):
    model_config = ConfigDict(extra='forbid')

    external_id: str = Field(min_length=1)
    username: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    preferred_language: Optional[str] = None
    user_types: Optional[List[str]] = None
    preferred_genres: Optional[List[str]] = None
    topics_of_interest: Optional[List[str]] = None
    onboarding_completed: Optional[bool] = None

    @field_validator('email')
    @classmethod
    def email_has_at(cls, v: str) -> str:
        if '@' not in v:
            raise ValueError('email must contain @')
        return v.lower()

    @field_validator('user_types', 'preferred_genres', 'topics_of_interest')
    @classmethod
    def drop_blank_tags(cls, values: Optional[List[str]]) -> Optional[List[str]]:
        if values is None:
            return None
        return [v.strip() for v in values if v and v.strip()]


class UserUpdate(BaseModel):
    model_config = ConfigDict(extra='forbid')

    username: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    preferred_language: Optional[str] = None
    user_types: Optional[List[str]] = None
    preferred_genres: Optional[List[str]] = None
    topics_of_interest: Optional[List[str]] = None
    onboarding_completed: Optional[bool] = None

    @field_validator('username', 'email', 'preferred_language', 'onboarding_completed')
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError('cannot be null')
        return v

    @field_validator('email')
    @classmethod
    def email_has_at(cls, v: str) -> str:
        if v is None:
            return v
        if '@' not in v:
            raise ValueError('email must contain @')
        return v.lower()


class UserSchema(BaseModel):
    id: int
    external_id: str
    username: str
    email: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    preferred_language: str
    onboarding_completed: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Stories and chapters

class StoryCreate(BaseModel):
    """Fields a client may set on a new story. Counters are not among them."""
    model_config = ConfigDict(extra='forbid')

    title: str = Field(min_length=1, max_length=500)
    content: str
    genre: str = Field(min_length=1)
    author_id: int
    description: Optional[str] = None
    cover_image: Optional[str] = None
    language: Optional[str] = None
    is_published: Optional[bool] = None
    is_draft: Optional[bool] = None
    is_featured: Optional[bool] = None
    chapter_count: Optional[int] = Field(default=None, ge=0)
    estimated_read_time: Optional[int] = Field(default=None, ge=0)
    tags: Optional[List[str]] = None


class StoryUpdate(BaseModel):
    model_config = ConfigDict(extra='forbid')

    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    content: Optional[str] = None
    genre: Optional[str] = None
    description: Optional[str] = None
    cover_image: Optional[str] = None
    language: Optional[str] = None
    is_published: Optional[bool] = None
    is_draft: Optional[bool] = None
    is_featured: Optional[bool] = None
    chapter_count: Optional[int] = Field(default=None, ge=0)
    estimated_read_time: Optional[int] = Field(default=None, ge=0)
    tags: Optional[List[str]] = None

    @field_validator('title', 'content', 'genre', 'language',
                     'is_published', 'is_draft', 'is_featured', 'chapter_count')
    @classmethod
    def not_null(cls, v):
        # Clearing these would break the NOT NULL columns
        if v is None:
            raise ValueError('cannot be null')
        return v


class ChapterCreate(BaseModel):
    model_config = ConfigDict(extra='forbid')

    story_id: int
    title: str = Field(min_length=1, max_length=500)
    content: str
    chapter_number: int = Field(ge=1)
    word_count: Optional[int] = Field(default=None, ge=0)


class ChapterUpdate(BaseModel):
    model_config = ConfigDict(extra='forbid')

    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    content: Optional[str] = None
    chapter_number: Optional[int] = Field(default=None, ge=1)
    word_count: Optional[int] = Field(default=None, ge=0)

    @field_validator('title', 'content', 'chapter_number', 'word_count')
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError('cannot be null')
        return v


class ChapterDraft(BaseModel):
    """A chapter submitted together with its story; numbered by position"""
    title: Optional[str] = None
    content: str


class StoryWithChapters(StoryCreate):
    chapters: List[ChapterDraft] = []


class ChapterSchema(BaseModel):
    id: int
    story_id: int
    title: str
    chapter_number: int
    word_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StorySchema(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    genre: str
    language: str
    author_id: int
    is_published: bool
    is_draft: bool
    is_featured: bool
    read_count: int
    like_count: int
    chapter_count: int
    estimated_read_time: Optional[int] = None
    tags: Optional[List[str]] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Audio

class AudiobookCreate(BaseModel):
    model_config = ConfigDict(extra='forbid')

    story_id: int
    language: str = Field(min_length=1)
    chapter_id: Optional[int] = None
    audio_url: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=0)


class AudioRecordingCreate(BaseModel):
    model_config = ConfigDict(extra='forbid')

    user_id: int
    story_id: int
    chapter_id: Optional[int] = None
    title: str = Field(min_length=1, max_length=500)
    audio_url: str = Field(min_length=1)
    duration: Optional[int] = Field(default=None, ge=0)
    file_size: Optional[int] = Field(default=None, ge=0)
    is_public: Optional[bool] = None
    is_subscriber_only: Optional[bool] = None


class AudioRecordingUpdate(BaseModel):
    model_config = ConfigDict(extra='forbid')

    chapter_id: Optional[int] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    audio_url: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=0)
    file_size: Optional[int] = Field(default=None, ge=0)
    is_public: Optional[bool] = None
    is_subscriber_only: Optional[bool] = None

    @field_validator('title', 'audio_url', 'is_public', 'is_subscriber_only')
    @classmethod
    def not_null(cls, v):
        """chapter_id may be cleared; these may not"""
        if v is None:
            raise ValueError('cannot be null')
        return v


# Aggregates

class AuthorStats(BaseModel):
    author_id: int
    story_count: int
    like_count: int
    follower_count: int
