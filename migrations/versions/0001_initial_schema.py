"""Initial schema: users, stories, chapters, progress, media and engagement edges

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

WHOLE_STORY = sa.text('chapter_id IS NULL')
PER_CHAPTER = sa.text('chapter_id IS NOT NULL')

# (table, subject column, subject table, object column, object table, unique constraint)
EDGE_TABLES = [
    ('user_library', 'user_id', 'users', 'story_id', 'stories', 'uix_user_library_user_story'),
    ('story_likes', 'user_id', 'users', 'story_id', 'stories', 'uix_story_likes_user_story'),
    ('favorite_stories', 'user_id', 'users', 'story_id', 'stories', 'uix_favorite_stories_user_story'),
    ('favorite_authors', 'user_id', 'users', 'author_id', 'users', 'uix_favorite_authors_user_author'),
    ('author_likes', 'user_id', 'users', 'author_id', 'users', 'uix_author_likes_user_author'),
    ('favorite_authors_users', 'user_id', 'users', 'author_id', 'users', 'uix_favorite_authors_users_user_author'),
    ('author_library', 'user_id', 'users', 'author_id', 'users', 'uix_author_library_user_author'),
    ('user_subscriptions', 'subscriber_id', 'users', 'subscribed_to_id', 'users', 'uix_user_subscriptions_pair'),
    ('audio_recording_likes', 'user_id', 'users', 'recording_id', 'audio_recordings',
     'uix_audio_recording_likes_user_recording'),
]


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('external_id', sa.String(length=255), nullable=False),
        sa.Column('username', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('display_name', sa.String(length=255), nullable=True),
        sa.Column('avatar_url', sa.String(length=1024), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('preferred_language', sa.String(length=16), nullable=False),
        sa.Column('user_types', sa.JSON(), nullable=True),
        sa.Column('preferred_genres', sa.JSON(), nullable=True),
        sa.Column('topics_of_interest', sa.JSON(), nullable=True),
        sa.Column('onboarding_completed', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('external_id'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('email')
    )
    op.create_index('idx_users_display_name', 'users', ['display_name'])

    op.create_table('stories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('cover_image', sa.String(length=1024), nullable=True),
        sa.Column('genre', sa.String(length=100), nullable=False),
        sa.Column('language', sa.String(length=16), nullable=False),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.Column('is_published', sa.Boolean(), nullable=False),
        sa.Column('is_draft', sa.Boolean(), nullable=False),
        sa.Column('is_featured', sa.Boolean(), nullable=False),
        sa.Column('read_count', sa.Integer(), nullable=False),
        sa.Column('like_count', sa.Integer(), nullable=False),
        sa.Column('chapter_count', sa.Integer(), nullable=False),
        sa.Column('estimated_read_time', sa.Integer(), nullable=True),
        sa.Column('tags', sa.JSON(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['author_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_stories_author_id', 'stories', ['author_id'])
    op.create_index('idx_stories_published_created', 'stories', ['is_published', 'created_at'])
    op.create_index('idx_stories_title', 'stories', ['title'])

    op.create_table('chapters',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('story_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('chapter_number', sa.Integer(), nullable=False),
        sa.Column('word_count', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['story_id'], ['stories.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('story_id', 'chapter_number', name='uix_chapters_story_number')
    )

    op.create_table('reading_progress',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('story_id', sa.Integer(), nullable=False),
        sa.Column('chapter_id', sa.Integer(), nullable=True),
        sa.Column('current_position', sa.Integer(), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False),
        sa.Column('last_read_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['story_id'], ['stories.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['chapter_id'], ['chapters.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'story_id', name='uix_reading_progress_user_story')
    )

    op.create_table('translations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('story_id', sa.Integer(), nullable=False),
        sa.Column('chapter_id', sa.Integer(), nullable=True),
        sa.Column('language', sa.String(length=16), nullable=False),
        sa.Column('target_language', sa.String(length=16), nullable=False),
        sa.Column('translated_content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['story_id'], ['stories.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['chapter_id'], ['chapters.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('uix_translations_story_target', 'translations', ['story_id', 'target_language'],
                    unique=True, sqlite_where=WHOLE_STORY, postgresql_where=WHOLE_STORY)
    op.create_index('uix_translations_story_target_chapter', 'translations',
                    ['story_id', 'target_language', 'chapter_id'],
                    unique=True, sqlite_where=PER_CHAPTER, postgresql_where=PER_CHAPTER)

    op.create_table('audiobooks',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('story_id', sa.Integer(), nullable=False),
        sa.Column('chapter_id', sa.Integer(), nullable=True),
        sa.Column('language', sa.String(length=16), nullable=False),
        sa.Column('audio_url', sa.String(length=1024), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['story_id'], ['stories.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['chapter_id'], ['chapters.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('uix_audiobooks_story_language', 'audiobooks', ['story_id', 'language'],
                    unique=True, sqlite_where=WHOLE_STORY, postgresql_where=WHOLE_STORY)
    op.create_index('uix_audiobooks_story_language_chapter', 'audiobooks',
                    ['story_id', 'language', 'chapter_id'],
                    unique=True, sqlite_where=PER_CHAPTER, postgresql_where=PER_CHAPTER)

    op.create_table('audio_recordings',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('story_id', sa.Integer(), nullable=False),
        sa.Column('chapter_id', sa.Integer(), nullable=True),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('audio_url', sa.String(length=1024), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('file_size', sa.Integer(), nullable=True),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        sa.Column('is_subscriber_only', sa.Boolean(), nullable=False),
        sa.Column('play_count', sa.Integer(), nullable=False),
        sa.Column('like_count', sa.Integer(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['story_id'], ['stories.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['chapter_id'], ['chapters.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_audio_recordings_user_id', 'audio_recordings', ['user_id'])
    op.create_index('idx_audio_recordings_story_id', 'audio_recordings', ['story_id'])
    op.create_index('idx_audio_recordings_chapter_id', 'audio_recordings', ['chapter_id'])

    op.create_table('featured_authors',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.Column('display_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['author_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('author_id')
    )

    for table, subject, subject_table, obj, obj_table, constraint in EDGE_TABLES:
        op.create_table(table,
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column(subject, sa.Integer(), nullable=False),
            sa.Column(obj, sa.Integer(), nullable=False),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
            sa.ForeignKeyConstraint([subject], [f'{subject_table}.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint([obj], [f'{obj_table}.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint(subject, obj, name=constraint)
        )


def downgrade() -> None:
    # Drop tables in reverse order
    for table, *_ in reversed(EDGE_TABLES):
        op.drop_table(table)
    op.drop_table('featured_authors')
    op.drop_table('audio_recordings')
    op.drop_table('audiobooks')
    op.drop_table('translations')
    op.drop_table('reading_progress')
    op.drop_table('chapters')
    op.drop_table('stories')
    op.drop_table('users')
