"""OAuth web flow: authorize URL and code-for-token exchange."""

import logging
from typing import Optional
from urllib.parse import parse_qs, urlencode, urlparse

import httpx

from github_recap.config import Config, get_config
from github_recap.exceptions import AuthExchangeError

logger = logging.getLogger(__name__)


def build_authorize_url(config: Config) -> str:
    """URL of GitHub's consent page for this OAuth app."""
    query = urlencode(
        {
            "client_id": config.client_id or "",
            "redirect_uri": config.redirect_uri,
            "scope": config.oauth_scope,
        }
    )
    return f"{config.authorize_url}?{query}"


def extract_code(value: str) -> Optional[str]:
    """Get the authorization code from a callback URL or a bare code.

    Example:
        >>> extract_code("http://localhost:3000/?code=abc123")
        'abc123'
        >>> extract_code("abc123")
        'abc123'
    """
    value = value.strip()
    if not value:
        return None
    if "?" not in value and "=" not in value:
        return value

    query = urlparse(value).query or value.lstrip("?")
    codes = parse_qs(query).get("code", [])
    return codes[0] if codes else None


class TokenExchangeClient:
    """Trades an authorization code for a bearer token via the trusted backend.

    The client secret lives on the backend; this side only ever sees the code
    and the resulting token.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or get_config()
        self._transport = transport

    async def exchange(self, code: str) -> str:
        """Exchange ``code`` for an access token.

        Raises:
            AuthExchangeError: Non-success status, provider denial, or no token
        """
        logger.debug("Exchanging code for token...")

        async with httpx.AsyncClient(
            timeout=self.config.request_timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(
                    self.config.token_exchange_url,
                    json={"code": code},
                )
            except httpx.HTTPError as e:
                raise AuthExchangeError(f"Token exchange request failed: {e}") from e

        logger.debug("Response status: %d", response.status_code)

        if not response.is_success:
            logger.error("Token exchange error: %s", response.text)
            raise AuthExchangeError(
                f"Failed to exchange code for token: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise AuthExchangeError("Token exchange returned a non-JSON body") from e

        if not isinstance(data, dict):
            raise AuthExchangeError("Token exchange returned an unexpected body")

        if data.get("error"):
            message = f"GitHub error: {data['error']}"
            if data.get("error_description"):
                message += f" - {data['error_description']}"
            raise AuthExchangeError(message)

        token = data.get("access_token")
        if not token:
            raise AuthExchangeError("No access token received from GitHub")

        return token
