# tests/test_sa/test_repositories/test_user_repository.py

import pytest
from pydantic import ValidationError
from storyhub.errors import DuplicateKey, NotFound, ValidationFailed
from storyhub.models.schemas import UserCreate, UserUpdate
from storyhub.sa.models import User, Story
from storyhub.sa.repositories.user import UserRepository

@pytest.fixture
def user_repo(db_session):
    """Fixture to create a UserRepository instance."""
    return UserRepository(db_session)

def _user_data(**overrides):
    data = dict(external_id="uid-new", username="new_writer", email="New@Example.com")
    data.update(overrides)
    return UserCreate(**data)

def test_create_user(user_repo):
    """Test creating a new user with column defaults."""
    user = user_repo.create_user(_user_data(display_name="New Writer"))
    assert user.id is not None
    assert user.username == "new_writer"
    assert user.email == "new@example.com"
    assert user.preferred_language == "en"
    assert user.onboarding_completed is False
    assert user.created_at is not None

def test_create_user_duplicate_username(user_repo, sample_user):
    """Test that a taken username is rejected."""
    with pytest.raises(DuplicateKey, match="User with username 'reader' already exists"):
        user_repo.create_user(_user_data(username="reader"))

def test_create_user_duplicate_email(user_repo, sample_user):
    """Test that emails are compared case-insensitively."""
    with pytest.raises(DuplicateKey, match="email"):
        user_repo.create_user(_user_data(email="READER@example.com"))

def test_create_user_duplicate_external_id(user_repo, sample_user):
    with pytest.raises(DuplicateKey, match="external id"):
        user_repo.create_user(_user_data(external_id="uid-reader"))

def test_duplicate_key_is_value_error(user_repo, sample_user):
    """DuplicateKey stays catchable as a ValueError."""
    with pytest.raises(ValueError):
        user_repo.create_user(_user_data(username="reader"))

def test_user_create_rejects_bad_email():
    with pytest.raises(ValidationError):
        UserCreate(external_id="x", username="x", email="not-an-email")

def test_user_create_drops_blank_tags(user_repo):
    user = user_repo.create_user(_user_data(preferred_genres=["Fantasy", " ", "", " Folk "]))
    assert user.preferred_genres == ["Fantasy", "Folk"]

def test_update_user(user_repo, sample_user):
    """Test a partial update leaves other fields alone."""
    updated = user_repo.update_user(sample_user.id, UserUpdate(bio="Loves folk tales"))
    assert updated is not None
    assert updated.bio == "Loves folk tales"
    assert updated.username == "reader"
    assert updated.display_name == "Test Reader"

def test_update_user_to_taken_username(user_repo, sample_user, sample_author):
    with pytest.raises(DuplicateKey, match="demo_author"):
        user_repo.update_user(sample_user.id, UserUpdate(username="demo_author"))

def test_update_user_nonexistent(user_repo):
    """Test updating a non-existent user."""
    assert user_repo.update_user(999, UserUpdate(bio="x")) is None

def test_get_by_id(user_repo, sample_user):
    fetched = user_repo.get_by_id(sample_user.id)
    assert fetched is not None
    assert fetched.username == "reader"

def test_get_by_id_missing(user_repo):
    assert user_repo.get_by_id(999) is None

def test_require_missing(user_repo):
    with pytest.raises(NotFound, match="User 999 not found"):
        user_repo.require(999)

def test_lookups(user_repo, sample_user):
    """Test lookups by external id, username and email."""
    assert user_repo.get_by_external_id("uid-reader").id == sample_user.id
    assert user_repo.get_by_username("reader").id == sample_user.id
    assert user_repo.get_by_email("Reader@Example.com").id == sample_user.id
    assert user_repo.get_by_username("nobody") is None

def test_search_users(user_repo, sample_user, sample_author):
    results = user_repo.search_users("author")
    assert [u.username for u in results] == ["demo_author"]

def test_delete_user_removes_their_stories(user_repo, db_session, sample_story, sample_author):
    """Deleting an author cascades to the stories they wrote."""
    assert user_repo.delete_user(sample_author.id) is True
    assert db_session.query(User).filter_by(id=sample_author.id).first() is None
    assert db_session.query(Story).count() == 0

def test_delete_user_nonexistent(user_repo):
    assert user_repo.delete_user(999) is False

def test_update_schema_rejects_null_email():
    with pytest.raises(ValidationError, match="cannot be null"):
        UserUpdate(email=None)

def test_update_schema_lowercases_email():
    assert UserUpdate(email="New@Example.com").email == "new@example.com"

def test_update_null_email_is_not_a_duplicate(user_repo, sample_user):
    with pytest.raises(ValidationFailed, match="Cannot clear email"):
        user_repo.update_user(sample_user.id, UserUpdate.model_construct(email=None))
    assert user_repo.get_by_id(sample_user.id).email == "reader@example.com"
