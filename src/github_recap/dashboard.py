"""Dashboard state machine.

Four views, one at a time::

    UNAUTHENTICATED --login--> (GitHub consent page) --callback code--> LOADING
    LOADING --success--> RESULTS
    LOADING --failure--> ERROR          (retry by logging in again)
    LOADING --401------> UNAUTHENTICATED (credential cleared)
    RESULTS --logout--> UNAUTHENTICATED
"""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum

from github_recap.auth.credentials import CredentialStore
from github_recap.auth.token_exchange import TokenExchangeClient, build_authorize_url
from github_recap.config import Config, get_config
from github_recap.exceptions import AuthError, AuthExchangeError, GitHubRecapError
from github_recap.models.stats import Recap
from github_recap.sdk import GitHubRecap

logger = logging.getLogger(__name__)


class ViewState(str, Enum):
    """Which view the dashboard is showing."""

    UNAUTHENTICATED = "unauthenticated"
    LOADING = "loading"
    ERROR = "error"
    RESULTS = "results"


class Dashboard:
    """Drives login, loading, error and results views for one user.

    Args:
        config: Configuration (defaults to the global one)
        store: Where the bearer token is persisted
        exchange_client: Trades OAuth codes for tokens
        recap_factory: Builds a GitHubRecap for a token
        on_change: Called with the dashboard after every state change
    """

    def __init__(
        self,
        config: Config | None = None,
        store: CredentialStore | None = None,
        exchange_client: TokenExchangeClient | None = None,
        recap_factory: Callable[[str], GitHubRecap] | None = None,
        on_change: Callable[["Dashboard"], None] | None = None,
    ):
        self.config = config or get_config()
        self.store = store or CredentialStore(self.config.credentials_path)
        self.exchange_client = exchange_client or TokenExchangeClient(self.config)
        self.recap_factory = recap_factory or (
            lambda token: GitHubRecap(token, config=self.config)
        )
        self.on_change = on_change

        self.state = ViewState.UNAUTHENTICATED
        self.token: str | None = None
        self.recap: Recap | None = None
        self.error: str | None = None

    def _set_state(self, state: ViewState) -> None:
        logger.debug("Dashboard %s -> %s", self.state.value, state.value)
        self.state = state
        if self.on_change:
            self.on_change(self)

    def login_url(self) -> str:
        """Where to send the user to grant access."""
        return build_authorize_url(self.config)

    async def initialize(self, code: str | None = None) -> ViewState:
        """Start a session from the stored token, or else from ``code``.

        A stored token always wins; the code is only exchanged when nothing
        is stored.
        """
        stored = self.store.load()
        if stored:
            logger.debug("Restoring stored session")
            self.token = stored
            await self.load(stored)
        elif code:
            await self.authenticate(code)
        return self.state

    async def authenticate(self, code: str) -> None:
        """Exchange an OAuth callback code, persist the token and load stats."""
        self.error = None
        self._set_state(ViewState.LOADING)

        try:
            token = await self.exchange_client.exchange(code)
        except AuthExchangeError as e:
            logger.error("Auth error: %s", e)
            self.error = f"Authentication failed: {e}"
            self._set_state(ViewState.ERROR)
            return

        self.store.save(token)
        self.token = token
        await self.load(token)

    async def load(self, token: str) -> None:
        """Fetch and aggregate the recap for ``token``."""
        self.error = None
        self._set_state(ViewState.LOADING)

        try:
            async with self.recap_factory(token) as client:
                recap = await client.build_recap()
        except AuthError as e:
            # Token is invalid, clear it
            self.store.clear()
            self.token = None
            self.recap = None
            self.error = str(e)
            self._set_state(ViewState.UNAUTHENTICATED)
        except GitHubRecapError as e:
            self.error = str(e)
            self._set_state(ViewState.ERROR)
        except asyncio.CancelledError:
            self.error = "Cancelled"
            self._set_state(ViewState.ERROR)
            raise
        except Exception as e:
            logger.exception("Loading the recap failed")
            self.error = str(e) or e.__class__.__name__
            self._set_state(ViewState.ERROR)
        else:
            self.recap = recap
            self._set_state(ViewState.RESULTS)

    def logout(self) -> None:
        """Forget the credential and everything that was shown."""
        self.store.clear()
        self.token = None
        self.recap = None
        self.error = None
        self._set_state(ViewState.UNAUTHENTICATED)
