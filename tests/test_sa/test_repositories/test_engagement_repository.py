# tests/test_sa/test_repositories/test_engagement_repository.py

import pytest
from storyhub.models.schemas import StoryCreate, ChapterCreate, UserCreate
from storyhub.sa.models import StoryLike
from storyhub.sa.repositories import (
    EngagementRepository, UserRepository, StoryRepository, ChapterRepository, ProgressRepository
)

@pytest.fixture
def engagement(db_session):
    return EngagementRepository(db_session)

def test_reader_journey(db_session):
    """Author publishes, a reader reads and likes."""
    users = UserRepository(db_session)
    stories = StoryRepository(db_session)
    author = users.create_user(UserCreate(external_id="uid-a", username="demo_author", email="a@example.com"))
    reader = users.create_user(UserCreate(external_id="uid-b", username="reader_b", email="b@example.com"))

    story = stories.create_story(StoryCreate(
        title="S1", content="Once", genre="Fable", author_id=author.id, is_published=True
    ))
    ChapterRepository(db_session).create_chapter(ChapterCreate(
        story_id=story.id, title="Chapter 1", content="Once", chapter_number=1
    ))
    assert [s.id for s in stories.list_by_author(author.id)] == [story.id]

    progress_repo = ProgressRepository(db_session)
    progress_repo.record_progress(reader.id, story.id, position=120)
    progress = progress_repo.get_progress(reader.id, story.id)
    assert progress.current_position == 120
    assert progress.completed is False

    engagement = EngagementRepository(db_session)
    engagement.story_likes.add(reader.id, story.id)
    assert engagement.story_likes.count(story.id) == 1
    assert engagement.story_likes.exists(reader.id, story.id) is True

def test_library(engagement, sample_user, sample_story):
    engagement.add_to_library(sample_user.id, sample_story.id)
    assert engagement.is_in_library(sample_user.id, sample_story.id) is True
    assert [s.id for s in engagement.get_library(sample_user.id)] == [sample_story.id]
    assert engagement.remove_from_library(sample_user.id, sample_story.id) is True
    assert engagement.get_library(sample_user.id) == []

def test_story_likes(engagement, multiple_users, sample_story):
    for user in multiple_users[:2]:
        engagement.like_story(user.id, sample_story.id)
    assert engagement.count_story_likes(sample_story.id) == 2
    assert engagement.is_story_liked(multiple_users[0].id, sample_story.id) is True
    assert engagement.unlike_story(multiple_users[0].id, sample_story.id) is True
    assert engagement.is_story_liked(multiple_users[0].id, sample_story.id) is False
    assert engagement.count_story_likes(sample_story.id) == 1

def test_favorite_stories(engagement, sample_user, sample_story):
    engagement.favorite_story(sample_user.id, sample_story.id)
    assert engagement.is_story_favorited(sample_user.id, sample_story.id) is True
    assert [s.id for s in engagement.get_favorite_stories(sample_user.id)] == [sample_story.id]
    assert engagement.unfavorite_story(sample_user.id, sample_story.id) is True
    assert engagement.unfavorite_story(sample_user.id, sample_story.id) is False

def test_edge_kinds_are_independent(engagement, sample_user, sample_story):
    """Liking a story does not favorite it or add it to the library."""
    engagement.like_story(sample_user.id, sample_story.id)
    assert engagement.is_story_favorited(sample_user.id, sample_story.id) is False
    assert engagement.is_in_library(sample_user.id, sample_story.id) is False

def test_follow_author(engagement, sample_user, sample_author):
    engagement.follow_author(sample_user.id, sample_author.id)
    assert engagement.is_following_author(sample_user.id, sample_author.id) is True
    assert [u.id for u in engagement.get_followed_authors(sample_user.id)] == [sample_author.id]
    assert engagement.unfollow_author(sample_user.id, sample_author.id) is True
    assert engagement.is_following_author(sample_user.id, sample_author.id) is False

def test_author_likes(engagement, multiple_users, sample_author):
    for user in multiple_users:
        engagement.like_author(user.id, sample_author.id)
    assert engagement.count_author_likes(sample_author.id) == 5
    assert engagement.is_author_liked(multiple_users[4].id, sample_author.id) is True
    engagement.unlike_author(multiple_users[4].id, sample_author.id)
    assert engagement.count_author_likes(sample_author.id) == 4

def test_favorite_authors(engagement, sample_user, sample_author):
    engagement.favorite_author(sample_user.id, sample_author.id)
    assert engagement.is_author_favorited(sample_user.id, sample_author.id) is True
    assert engagement.is_following_author(sample_user.id, sample_author.id) is False
    assert [u.id for u in engagement.get_favorite_authors(sample_user.id)] == [sample_author.id]
    assert engagement.unfavorite_author(sample_user.id, sample_author.id) is True

def test_author_library(engagement, sample_user, sample_author):
    engagement.add_author_to_library(sample_user.id, sample_author.id)
    assert engagement.is_author_in_library(sample_user.id, sample_author.id) is True
    assert [u.id for u in engagement.get_author_library(sample_user.id)] == [sample_author.id]
    assert engagement.remove_author_from_library(sample_user.id, sample_author.id) is True
    assert engagement.get_author_library(sample_user.id) == []

def test_subscriptions(engagement, multiple_users, sample_author):
    for user in multiple_users[:3]:
        engagement.subscribe(user.id, sample_author.id)
    assert engagement.count_subscribers(sample_author.id) == 3
    assert {u.id for u in engagement.get_subscribers(sample_author.id)} == {u.id for u in multiple_users[:3]}
    assert [u.id for u in engagement.get_subscriptions(multiple_users[0].id)] == [sample_author.id]
    assert engagement.is_subscribed(multiple_users[0].id, sample_author.id) is True
    assert engagement.is_subscribed(sample_author.id, multiple_users[0].id) is False

    assert engagement.unsubscribe(multiple_users[0].id, sample_author.id) is True
    assert engagement.count_subscribers(sample_author.id) == 2

def test_subscribe_twice(engagement, sample_user, sample_author):
    first = engagement.subscribe(sample_user.id, sample_author.id)
    second = engagement.subscribe(sample_user.id, sample_author.id)
    assert first.id == second.id
    assert engagement.count_subscribers(sample_author.id) == 1

def test_like_lost_race_returns_winner(engagement, db_session, sample_user, sample_story, stale_lookup):
    """An insert that collides with an existing like hands back that like."""
    winner = engagement.like_story(sample_user.id, sample_story.id)
    lookup = stale_lookup(engagement.story_likes, 'get')

    edge = engagement.like_story(sample_user.id, sample_story.id)

    assert edge.id == winner.id
    assert lookup.call_count == 2
    assert db_session.query(StoryLike).count() == 1
    assert engagement.count_story_likes(sample_story.id) == 1
