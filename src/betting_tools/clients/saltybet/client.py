"""Async HTTP client for the SaltyBet site.

Wrap a single ``httpx.AsyncClient`` whose cookie jar holds the login
session. Every call that needs to be authenticated goes through the same
instance, so logging in again refreshes the session for all later calls.

Note:
    SaltyBet has no JSON API for the account. The balance is scraped from
    the index page and a bet is accepted when the response body ends with
    ``"1"``.

"""

import logging
import re
from typing import Any

import httpx

from betting_tools.clients.saltybet.exceptions import (
    BalanceUnavailableError,
    BetRejectedError,
    FeedParseError,
    SaltyBetAPIError,
)
from betting_tools.clients.saltybet.models import MatchState, SaltyBetCredentials, Side
from betting_tools.core.config import ConfigLoader

logger = logging.getLogger(__name__)

_HTTP_BAD_REQUEST = 400
_BALANCE_RE = re.compile(r'<span class="dollar" id="balance">([0-9,]+)</span>')
_BET_ACCEPTED_SUFFIX = "1"


class SaltyBetClient:
    """Cookie-holding async client for the SaltyBet site.

    Provide the feed read used by the poller and the session operations
    (login, balance, bet) used by the decision loop.

    Args:
        username: Account e-mail address.
        password: Account password.
        index_url: Page that shows the current balance.
        state_url: JSON match state feed.
        login_url: Sign-in form endpoint.
        bet_url: Bet placement endpoint.
        referer_url: Referer header sent with form posts.
        timeout: Request timeout in seconds.

    """

    INDEX_URL = "https://www.saltybet.com/"
    STATE_URL = "https://www.saltybet.com/state.json"
    LOGIN_URL = "https://www.saltybet.com/authenticate?signin=1"
    BET_URL = "https://www.saltybet.com/ajax_place_bet.php"

    def __init__(  # noqa: PLR0913
        self,
        username: str,
        password: str,
        *,
        index_url: str = INDEX_URL,
        state_url: str = STATE_URL,
        login_url: str = LOGIN_URL,
        bet_url: str = BET_URL,
        referer_url: str = INDEX_URL,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the SaltyBet client.

        Args:
            username: Account e-mail address.
            password: Account password.
            index_url: Page that shows the current balance.
            state_url: JSON match state feed.
            login_url: Sign-in form endpoint.
            bet_url: Bet placement endpoint.
            referer_url: Referer header sent with form posts.
            timeout: Request timeout in seconds.

        """
        self._username = username
        self._password = password
        self.index_url = index_url
        self.state_url = state_url
        self.login_url = login_url
        self.bet_url = bet_url
        self.referer_url = referer_url
        self._http_client = httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_config(cls, config: ConfigLoader) -> "SaltyBetClient":
        """Build a client from the ``saltybet`` section of the settings.

        Args:
            config: Loaded configuration.

        Returns:
            A new, not yet logged-in client.

        Raises:
            ConfigError: If the credentials or an endpoint are missing.

        """
        return cls.from_credentials(SaltyBetCredentials.from_config(config))

    @classmethod
    def from_credentials(cls, credentials: SaltyBetCredentials) -> "SaltyBetClient":
        """Build a client for one account.

        Args:
            credentials: Login and endpoints.

        Returns:
            A new, not yet logged-in client.

        """
        return cls(
            username=credentials.username,
            password=credentials.password,
            index_url=credentials.index_url,
            state_url=credentials.state_url,
            login_url=credentials.login_url,
            bet_url=credentials.bet_url,
            referer_url=credentials.referer_url,
        )

    async def get_state(self) -> MatchState:
        """Fetch the current match state snapshot.

        Returns:
            The parsed snapshot.

        Raises:
            SaltyBetAPIError: On transport failure or an error status.
            FeedParseError: If the body is not a valid state payload.

        """
        response = await self._request("get_state", "GET", self.state_url)
        try:
            data: Any = response.json()
        except ValueError as exc:
            msg = f"State feed returned invalid JSON: {exc}"
            raise FeedParseError(msg) from exc
        return MatchState.from_json(data)

    async def login(self) -> None:
        """Sign in and store the session cookies on this client.

        Raises:
            SaltyBetAPIError: On transport failure or an error status.

        """
        form = {
            "email": self._username,
            "pword": self._password,
            "authenticate": "signin",
        }
        await self._request(
            "login",
            "POST",
            self.login_url,
            data=form,
            headers={"Referer": self.referer_url},
        )
        logger.info("Logged in as %s", self._username)

    async def get_balance(self) -> int:
        """Read the current wagering balance from the index page.

        Returns:
            Balance in whole currency units.

        Raises:
            SaltyBetAPIError: On transport failure or an error status.
            BalanceUnavailableError: If the balance is missing from the page.

        """
        response = await self._request("get_balance", "GET", self.index_url)
        match = _BALANCE_RE.search(response.text)
        if match is None:
            raise BalanceUnavailableError("get_balance", "Balance not found on index page")
        try:
            return int(match.group(1).replace(",", ""))
        except ValueError as exc:
            raise BalanceUnavailableError(
                "get_balance", f"Unreadable balance {match.group(1)!r}"
            ) from exc

    async def place_bet(self, side: Side, amount: int) -> None:
        """Submit a wager on one side of the open match.

        Args:
            side: Which contestant to back.
            amount: Wager in whole currency units.

        Raises:
            SaltyBetAPIError: On transport failure or an error status.
            BetRejectedError: If the response does not confirm the bet.

        """
        form = {"selectedplayer": side.value, "wager": str(amount)}
        headers = {
            "Referer": self.referer_url,
            "Accept": "*/*",
            "X-Requested-With": "XMLHttpRequest",
        }
        logger.debug("Placing bet: %s", form)
        response = await self._request("place_bet", "POST", self.bet_url, data=form, headers=headers)
        body = response.text
        if not body.endswith(_BET_ACCEPTED_SUFFIX):
            logger.error("Bet rejected: status=%d body=%r", response.status_code, body)
            raise BetRejectedError("place_bet", f"Bet not accepted: {body!r}", response.status_code)

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        *,
        data: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send a request and return the response if it succeeded.

        Args:
            operation: Operation name used in error messages.
            method: HTTP method.
            url: Absolute URL.
            data: Form fields for POST requests.
            headers: Extra request headers.

        Returns:
            The HTTP response with a status code below 400.

        Raises:
            SaltyBetAPIError: On transport failure or an error status.

        """
        try:
            response = await self._http_client.request(method, url, data=data, headers=headers)
        except httpx.HTTPError as exc:
            raise SaltyBetAPIError(operation, f"HTTP request failed: {exc}") from exc

        if response.status_code >= _HTTP_BAD_REQUEST:
            raise SaltyBetAPIError(
                operation, f"HTTP {response.status_code}", status_code=response.status_code
            )
        return response

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http_client.aclose()

    async def __aenter__(self) -> "SaltyBetClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit async context manager."""
        await self.close()
