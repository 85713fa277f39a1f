# tests/test_sa/test_services/test_seeder.py

from storyhub.sa.models import User, Story, Chapter, FeaturedAuthor
from storyhub.sa.repositories import StoryRepository, AuthorRepository
from storyhub.services.seeder import seed_sample_data, SAMPLE_STORIES

def test_seed_empty_library(db_session):
    assert seed_sample_data(db_session) is True

    author = db_session.query(User).filter_by(username="african_storyteller").one()
    assert author.external_id == "demo-author-uid"
    assert author.display_name == "Noma Themba"
    assert db_session.query(Story).count() == 4
    assert db_session.query(Chapter).count() == 22
    featured = db_session.query(FeaturedAuthor).one()
    assert featured.author_id == author.id
    assert featured.display_order == 1

def test_seed_is_idempotent(db_session):
    """A second run inserts nothing."""
    seed_sample_data(db_session)
    assert seed_sample_data(db_session) is False
    assert db_session.query(Story).count() == len(SAMPLE_STORIES)
    assert db_session.query(User).count() == 1

def test_seed_skips_when_any_story_exists(db_session, sample_story):
    assert seed_sample_data(db_session) is False
    assert db_session.query(User).filter_by(username="african_storyteller").first() is None

def test_seeded_stories_are_featured(db_session):
    seed_sample_data(db_session)
    featured = StoryRepository(db_session).list_featured()
    assert [s.title for s in featured] == [
        "A Christmas Carol",
        "The Adventures of Tom Sawyer",
        "Alice's Adventures in Wonderland",
        "Ubuntu: The Village That Learned to Share",
    ]
    assert all(not s.is_draft for s in featured)

def test_seeded_chapter_counts_match_rows(db_session):
    seed_sample_data(db_session)
    for story in db_session.query(Story):
        assert story.chapter_count == len(story.chapters)

def test_seeded_author_is_featured(db_session):
    seed_sample_data(db_session)
    authors = AuthorRepository(db_session).list_featured_authors()
    assert [a.username for a in authors] == ["african_storyteller"]
    assert AuthorRepository(db_session).get_author_stats(authors[0].id).story_count == 4

def test_reseed_after_stories_deleted(db_session):
    """The demo author is reused when only the stories were removed"""
    seed_sample_data(db_session)
    story_repo = StoryRepository(db_session)
    for story in db_session.query(Story).all():
        story_repo.delete_story(story.id)
    assert story_repo.count_stories() == 0

    assert seed_sample_data(db_session) is True
    assert db_session.query(User).count() == 1
    assert story_repo.count_stories() == len(SAMPLE_STORIES)
    assert db_session.query(FeaturedAuthor).count() == 1
