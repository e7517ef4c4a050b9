"""Tests for the SaltyBet HTTP client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from betting_tools.clients.saltybet.client import SaltyBetClient
from betting_tools.clients.saltybet.exceptions import (
    BalanceUnavailableError,
    BetRejectedError,
    FeedParseError,
    SaltyBetAPIError,
)
from betting_tools.clients.saltybet.models import MatchState, Side
from betting_tools.core.config import ConfigLoader

_HTTP_OK = 200
_HTTP_SERVER_ERROR = 503
_BALANCE = 12345
_INDEX_PAGE = '<div><span class="dollar" id="balance">12,345</span></div>'


def _response(
    status_code: int = _HTTP_OK, text: str = "", json_value: object = None
) -> MagicMock:
    """Build a mock httpx response.

    Args:
        status_code: HTTP status to report.
        text: Response body.
        json_value: Value returned by ``json()``.

    Returns:
        MagicMock standing in for ``httpx.Response``.

    """
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = json_value
    return response


class TestSaltyBetClient:
    """Test suite for the SaltyBet client."""

    @pytest.fixture
    def client(self) -> SaltyBetClient:
        """Create a SaltyBetClient with test credentials."""
        return SaltyBetClient("bettor@example.com", "hunter2")

    def test_default_urls(self, client: SaltyBetClient) -> None:
        """Test the client targets the public site by default."""
        assert client.state_url == "https://www.saltybet.com/state.json"
        assert client.bet_url == "https://www.saltybet.com/ajax_place_bet.php"
        assert client.referer_url == client.index_url

    def test_from_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test URLs and credentials are read from settings."""
        monkeypatch.setenv("SB_USERNAME", "someone@example.com")
        monkeypatch.setenv("SB_STATE_URL", "http://localhost:8080/state.json")

        client = SaltyBetClient.from_config(ConfigLoader())

        assert client._username == "someone@example.com"
        assert client.state_url == "http://localhost:8080/state.json"
        assert client.login_url == SaltyBetClient.LOGIN_URL

    @pytest.mark.asyncio
    async def test_get_state(self, client: SaltyBetClient) -> None:
        """Test the state feed is parsed into a MatchState."""
        payload = {
            "p1name": "Ryu",
            "p2name": "Ken",
            "p1total": "0",
            "p2total": "0",
            "status": "open",
            "alert": "",
            "x": 1,
            "remaining": "42 more matches until the next tournament!",
        }
        mock_request = AsyncMock(return_value=_response(json_value=payload))

        with patch.object(client._http_client, "request", new=mock_request):
            state = await client.get_state()

        assert state == MatchState(
            p1name="Ryu",
            p2name="Ken",
            status="open",
            p1total="0",
            p2total="0",
            x=1,
            remaining="42 more matches until the next tournament!",
        )
        assert mock_request.call_args[0] == ("GET", client.state_url)

    @pytest.mark.asyncio
    async def test_get_state_invalid_json(self, client: SaltyBetClient) -> None:
        """Test an unparseable body raises FeedParseError."""
        response = _response(text="<html>")
        response.json.side_effect = ValueError("Expecting value")

        with (
            patch.object(client._http_client, "request", new=AsyncMock(return_value=response)),
            pytest.raises(FeedParseError, match="invalid JSON"),
        ):
            await client.get_state()

    @pytest.mark.asyncio
    async def test_get_state_error_status(self, client: SaltyBetClient) -> None:
        """Test an error status raises SaltyBetAPIError with the code."""
        response = _response(status_code=_HTTP_SERVER_ERROR)

        with (
            patch.object(client._http_client, "request", new=AsyncMock(return_value=response)),
            pytest.raises(SaltyBetAPIError, match="get_state") as exc_info,
        ):
            await client.get_state()

        assert exc_info.value.status_code == _HTTP_SERVER_ERROR

    @pytest.mark.asyncio
    async def test_transport_error_wrapped(self, client: SaltyBetClient) -> None:
        """Test httpx transport errors surface as SaltyBetAPIError."""
        failing = AsyncMock(side_effect=httpx.ConnectError("connection refused"))

        with (
            patch.object(client._http_client, "request", new=failing),
            pytest.raises(SaltyBetAPIError, match="HTTP request failed") as exc_info,
        ):
            await client.get_state()

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_login_posts_credentials(self, client: SaltyBetClient) -> None:
        """Test login posts the sign-in form with a Referer."""
        mock_request = AsyncMock(return_value=_response())

        with patch.object(client._http_client, "request", new=mock_request):
            await client.login()

        args, kwargs = mock_request.call_args
        assert args == ("POST", client.login_url)
        assert kwargs["data"] == {
            "email": "bettor@example.com",
            "pword": "hunter2",
            "authenticate": "signin",
        }
        assert kwargs["headers"] == {"Referer": client.referer_url}

    @pytest.mark.asyncio
    async def test_get_balance(self, client: SaltyBetClient) -> None:
        """Test the balance is scraped and thousands separators removed."""
        mock_request = AsyncMock(return_value=_response(text=_INDEX_PAGE))

        with patch.object(client._http_client, "request", new=mock_request):
            assert await client.get_balance() == _BALANCE

    @pytest.mark.asyncio
    async def test_get_balance_missing(self, client: SaltyBetClient) -> None:
        """Test a page without the balance raises BalanceUnavailableError."""
        response = _response(text="<html>Please sign in</html>")

        with (
            patch.object(client._http_client, "request", new=AsyncMock(return_value=response)),
            pytest.raises(BalanceUnavailableError, match="not found"),
        ):
            await client.get_balance()

    @pytest.mark.asyncio
    async def test_place_bet_accepted(self, client: SaltyBetClient) -> None:
        """Test an accepted bet posts the side and wager."""
        mock_request = AsyncMock(return_value=_response(text="1"))

        with patch.object(client._http_client, "request", new=mock_request):
            await client.place_bet(Side.SECOND, 420)

        args, kwargs = mock_request.call_args
        assert args == ("POST", client.bet_url)
        assert kwargs["data"] == {"selectedplayer": "player2", "wager": "420"}
        assert kwargs["headers"]["X-Requested-With"] == "XMLHttpRequest"

    @pytest.mark.asyncio
    async def test_place_bet_rejected(self, client: SaltyBetClient) -> None:
        """Test a body not ending in "1" raises BetRejectedError."""
        response = _response(text="")

        with (
            patch.object(client._http_client, "request", new=AsyncMock(return_value=response)),
            pytest.raises(BetRejectedError, match="place_bet"),
        ):
            await client.place_bet(Side.FIRST, 420)

    @pytest.mark.asyncio
    async def test_context_manager_closes(self) -> None:
        """Test leaving the context closes the HTTP client."""
        client = SaltyBetClient("bettor@example.com", "hunter2")

        with patch.object(client._http_client, "aclose", new=AsyncMock()) as mock_close:
            async with client:
                pass

        mock_close.assert_awaited_once()
