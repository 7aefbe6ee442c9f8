# ABOUTME: Shared pytest fixtures for all test modules (unit and integration).
# ABOUTME: Provides performer/film test data, fake HTTP responses, and mock authority/search clients.

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
import requests

from movie_chain.client.authority_client import AuthorityClient
from movie_chain.client.search_client import SearchClient
from movie_chain.models.entities import Film, NewGameResult, Performer, StepValidation


# --- Helper Functions ---

def make_performer(performer_id: int, name: str | None = None, profile_path: str | None = None) -> Performer:
    """Helper to build a Performer with a predictable default name"""
    return Performer(
        id=performer_id,
        name=name or f"Performer {performer_id}",
        profile_path=profile_path,
    )


def make_film(film_id: int, title: str | None = None, year: int = 2000, poster_path: str | None = None) -> Film:
    """Helper to build a Film with a predictable default title"""
    return Film(
        id=film_id,
        title=title or f"Film {film_id}",
        year=year,
        poster_path=poster_path,
    )


def make_response(
    status_code: int = 200,
    json_data: Any = None,
    reason: str = "OK",
    json_error: Exception | None = None,
) -> MagicMock:
    """Helper to build a requests.Response stand-in"""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.reason = reason
    response.ok = 200 <= status_code < 400
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    return response


def performer_wire(performer: Performer) -> dict[str, Any]:
    """Wire (camelCase) representation of a performer"""
    return performer.model_dump(by_alias=True)


def film_wire(film: Film) -> dict[str, Any]:
    """Wire (camelCase) representation of a film"""
    return film.model_dump(by_alias=True)


# --- Entity Fixtures ---

@pytest.fixture
def kevin_bacon() -> Performer:
    """Start performer used across scenarios (id 1)"""
    return Performer(id=1, name="Kevin Bacon", profile_path="/bacon.jpg")


@pytest.fixture
def tom_hanks() -> Performer:
    """Target performer used across scenarios (id 2)"""
    return Performer(id=2, name="Tom Hanks", profile_path="/hanks.jpg")


@pytest.fixture
def meg_ryan() -> Performer:
    """Intermediate performer (id 3)"""
    return Performer(id=3, name="Meg Ryan", profile_path=None)


@pytest.fixture
def apollo_13() -> Film:
    """Film 10: connects Kevin Bacon and Tom Hanks"""
    return Film(id=10, title="Apollo 13", year=1995, poster_path="/apollo.jpg")


@pytest.fixture
def footloose() -> Film:
    """Film 11: does not connect Kevin Bacon and Meg Ryan"""
    return Film(id=11, title="Footloose", year=1984)


@pytest.fixture
def in_the_cut() -> Film:
    """Film 12: connects Kevin Bacon and Meg Ryan"""
    return Film(id=12, title="In the Cut", year=2003)


# --- Mock Client Fixtures ---

@pytest.fixture
def mock_session() -> MagicMock:
    """Mock requests.Session; configure .request.return_value per test"""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def mock_authority(kevin_bacon, tom_hanks) -> AsyncMock:
    """Mock AuthorityClient that starts Bacon -> Hanks and accepts every step"""
    authority = AsyncMock(spec=AuthorityClient)
    authority.start_game.return_value = NewGameResult(
        start_performer=kevin_bacon,
        target_performer=tom_hanks,
    )
    authority.validate_step.return_value = StepValidation(valid=True, connecting_films=[])
    return authority


@pytest.fixture
def mock_search() -> AsyncMock:
    """Mock SearchClient returning no results"""
    search = AsyncMock(spec=SearchClient)
    search.search_performers.return_value = []
    search.search_films.return_value = []
    return search
