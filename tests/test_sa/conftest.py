# tests/test_sa/conftest.py
import os
import pytest
from unittest.mock import patch
from sqlalchemy.orm import Session

from storyhub.sa.models import Base, User, Story, Chapter
from storyhub.sa.database import Database

@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory):
    """Create a temporary directory for the test database."""
    test_dir = tmp_path_factory.mktemp("test_db")
    return str(test_dir / "test_stories.db")

@pytest.fixture(scope="session")
def database(test_db_path):
    """Create a test database instance"""
    db = Database(connection_string=f"sqlite:///{test_db_path}")

    # Drop all tables and recreate schema
    Base.metadata.drop_all(db.engine)
    Base.metadata.create_all(db.engine)

    yield db

    db.dispose()
    # Clean up the test database file after all tests
    try:
        os.remove(test_db_path)
    except OSError:
        pass

@pytest.fixture(scope="function")
def db_session(database):
    """Create a new database session for a test"""
    session: Session = database._SessionFactory()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture(autouse=True)
def cleanup_db(db_session):
    """Clean up database tables before each test"""
    # Children before parents so foreign keys never block a delete
    for table in reversed(Base.metadata.sorted_tables):
        db_session.execute(table.delete())
    db_session.commit()
    yield
    # Clean up after test as well
    db_session.rollback()

@pytest.fixture
def sample_user(db_session):
    """Create a sample reader for testing."""
    user = User(
        external_id="uid-reader",
        username="reader",
        email="reader@example.com",
        display_name="Test Reader"
    )
    db_session.add(user)
    db_session.commit()
    return user

@pytest.fixture
def sample_author(db_session):
    """Create a sample author for testing."""
    author = User(
        external_id="uid-author",
        username="demo_author",
        email="author@example.com",
        display_name="Test Author",
        bio="Writes tests"
    )
    db_session.add(author)
    db_session.commit()
    return author

@pytest.fixture
def sample_story(db_session, sample_author):
    """Create a published story by the sample author."""
    story = Story(
        title="The Singing River",
        content="Once upon a time, a river sang.",
        genre="Folk Tale",
        author_id=sample_author.id,
        is_published=True,
        is_draft=False
    )
    db_session.add(story)
    db_session.commit()
    return story

@pytest.fixture
def sample_chapter(db_session, sample_story):
    """Create chapter 1 of the sample story."""
    chapter = Chapter(
        story_id=sample_story.id,
        title="The Source",
        content="The river began in the mountains.",
        chapter_number=1,
        word_count=6
    )
    db_session.add(chapter)
    db_session.commit()
    return chapter

@pytest.fixture
def multiple_users(db_session):
    """Create five readers for testing counts."""
    users = []
    for i in range(5):
        user = User(
            external_id=f"uid-{i}",
            username=f"reader_{i}",
            email=f"reader_{i}@example.com"
        )
        db_session.add(user)
        users.append(user)
    db_session.commit()
    return users

@pytest.fixture
def stale_lookup():
    """Make a repository lookup miss once, as if another writer inserted the row
    between the existence check and the insert."""
    patches = []

    def _stale(obj, method_name):
        real = getattr(obj, method_name)
        calls = []

        def lookup(*args, **kwargs):
            calls.append(args)
            if len(calls) == 1:
                return None
            return real(*args, **kwargs)

        patcher = patch.object(obj, method_name, side_effect=lookup)
        patches.append(patcher)
        return patcher.start()

    yield _stale
    for patcher in patches:
        patcher.stop()
