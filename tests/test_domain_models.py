"""Tests for domain models."""
import dataclasses

import pytest

from repo_pager.domain.errors import (
    DecodeError,
    FetchErrorKind,
    HttpStatusError,
    TransportError,
)
from repo_pager.domain.models import PageResult, RepositoryRecord, SessionState


def test_repository_record_creation():
    """Test creating an immutable RepositoryRecord entity."""
    repo = RepositoryRecord(id=1296269, name="Hello-World", description="My first repo")

    assert repo.id == 1296269
    assert repo.name == "Hello-World"
    assert repo.description == "My first repo"

    with pytest.raises(dataclasses.FrozenInstanceError):
        repo.name = "Renamed"


def test_repository_record_identity_is_id():
    """Test that records with the same id compare equal."""
    before = RepositoryRecord(id=7, name="tool", description=None)
    after = RepositoryRecord(id=7, name="tool", description="Now documented")

    assert before == after
    assert len({before, after}) == 1
    assert before != RepositoryRecord(id=8, name="tool")


def test_page_result_length():
    """Test PageResult reports its repository count."""
    page = PageResult(
        page=1,
        repositories=(RepositoryRecord(1, "a"), RepositoryRecord(2, "b")),
        has_more=True
    )

    assert len(page) == 2
    assert page.has_more is True


def test_session_state_defaults():
    """Test the empty state of a fresh session."""
    state = SessionState()

    assert state.username is None
    assert state.current_page == 1
    assert state.repos == ()
    assert state.is_loading is False
    assert state.error is None
    assert state.has_more is False
    assert state.repo_count == 0


def test_session_state_loading_helpers():
    """Test the derived loading flags used to place a spinner."""
    initial = SessionState(username="octocat", is_loading=True)
    more = SessionState(
        username="octocat",
        repos=(RepositoryRecord(1, "a"),),
        is_loading=True
    )
    idle = SessionState(username="octocat", repos=(RepositoryRecord(1, "a"),))

    assert initial.is_initial_load and not initial.is_loading_more
    assert more.is_loading_more and not more.is_initial_load
    assert not idle.is_initial_load and not idle.is_loading_more


def test_http_status_error_message():
    """Test HttpStatusError formats code and reason."""
    error = HttpStatusError(404, "Not Found")

    assert str(error) == "404 Not Found"
    assert error.code == 404
    assert error.reason == "Not Found"
    assert error.kind is FetchErrorKind.HTTP_STATUS


def test_http_status_error_without_reason():
    """Test HttpStatusError when the server sends no reason phrase."""
    assert str(HttpStatusError(599)) == "599"


def test_error_kinds():
    """Test each fetch error carries its kind."""
    assert TransportError("boom").kind is FetchErrorKind.TRANSPORT
    assert DecodeError("bad").kind is FetchErrorKind.DECODE
    assert str(TransportError("Connection refused")) == "Connection refused"
    assert TransportError("x").code is None
