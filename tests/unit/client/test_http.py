# ABOUTME: Unit tests for the JSON HTTP helper shared by the authority and search clients.
# ABOUTME: Verifies request shape and mapping of timeouts, connection errors, and bad statuses to TransportError.

import pytest
import requests

from conftest import make_response
from movie_chain.client.exceptions import TransportError
from movie_chain.client.http import JsonHttpClient


@pytest.fixture
def http(mock_session):
    return JsonHttpClient("http://authority.test/api/", session=mock_session, timeout=5.0)


class TestUrlBuilding:
    """Test suite for URL joining"""

    def test_url_for_joins_without_double_slash(self, http):
        """Test base URL trailing slash and path leading slash are merged"""
        assert http.url_for("/game") == "http://authority.test/api/game"
        assert http.url_for("search/people") == "http://authority.test/api/search/people"


class TestPostJson:
    """Test suite for POST requests"""

    @pytest.mark.asyncio
    async def test_post_sends_json_and_returns_body(self, http, mock_session):
        """Test payload, headers and timeout are passed to the session"""
        mock_session.request.return_value = make_response(json_data={"valid": True})

        data = await http.post_json("/game/validate-step", {"movieId": 10}, operation="validate_step")

        assert data == {"valid": True}
        args, kwargs = mock_session.request.call_args
        assert args == ("POST", "http://authority.test/api/game/validate-step")
        assert kwargs["json"] == {"movieId": 10}
        assert kwargs["timeout"] == 5.0
        assert kwargs["headers"]["Content-Type"] == "application/json"

    @pytest.mark.asyncio
    async def test_non_2xx_raises_transport_error_with_status(self, http, mock_session):
        """Test error statuses surface as TransportError carrying the status code"""
        mock_session.request.return_value = make_response(
            status_code=503, reason="Service Unavailable"
        )

        with pytest.raises(TransportError, match="503 Service Unavailable") as exc_info:
            await http.post_json("/game", {}, operation="start_game")

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_error(self, http, mock_session):
        """Test timeouts keep the transport's diagnostic text"""
        mock_session.request.side_effect = requests.Timeout("read timed out")

        with pytest.raises(TransportError, match="read timed out") as exc_info:
            await http.post_json("/game", {}, operation="start_game")

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_connection_error_raises_transport_error(self, http, mock_session):
        """Test connection failures surface as TransportError"""
        mock_session.request.side_effect = requests.ConnectionError("connection refused")

        with pytest.raises(TransportError, match="connection refused"):
            await http.post_json("/game", {}, operation="start_game")

    @pytest.mark.asyncio
    async def test_invalid_json_raises_transport_error(self, http, mock_session):
        """Test an unparseable body surfaces as TransportError"""
        mock_session.request.return_value = make_response(json_error=ValueError("Expecting value"))

        with pytest.raises(TransportError, match="invalid JSON"):
            await http.post_json("/game", {}, operation="start_game")

    @pytest.mark.asyncio
    async def test_failed_request_is_not_retried(self, http, mock_session):
        """Test a failure is reported once without automatic retries"""
        mock_session.request.side_effect = requests.ConnectionError("down")

        with pytest.raises(TransportError):
            await http.post_json("/game", {}, operation="start_game")

        assert mock_session.request.call_count == 1


class TestGetJson:
    """Test suite for GET requests"""

    @pytest.mark.asyncio
    async def test_get_passes_query_params(self, http, mock_session):
        """Test query params are forwarded"""
        mock_session.request.return_value = make_response(json_data=[])

        await http.get_json("/search/people", operation="search_people", params={"q": "bacon"})

        args, kwargs = mock_session.request.call_args
        assert args == ("GET", "http://authority.test/api/search/people")
        assert kwargs["params"] == {"q": "bacon"}
