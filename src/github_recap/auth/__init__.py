"""Authentication: credential storage and the OAuth code exchange."""

from github_recap.auth.credentials import CredentialStore
from github_recap.auth.token_exchange import (
    TokenExchangeClient,
    build_authorize_url,
    extract_code,
)

__all__ = [
    "CredentialStore",
    "TokenExchangeClient",
    "build_authorize_url",
    "extract_code",
]
