"""Credential store for the session's bearer token."""

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

TOKEN_KEY = "gh_access_token"


class CredentialStore:
    """Persists a single bearer token in a JSON file.

    The token is stored in clear text with owner-only permissions; anyone
    who can read the file can act as the user within the granted scopes.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def save(self, token: str) -> None:
        """Store ``token``, replacing any previous one."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        # os.open only applies the mode to a newly created file
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            os.chmod(self.path, 0o600)
            json.dump({TOKEN_KEY: token}, f)
        logger.debug("Saved credential to %s", self.path)

    def load(self) -> str | None:
        """Return the stored token, or None if there is none."""
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable credential file %s: %s", self.path, e)
            return None

        token = data.get(TOKEN_KEY) if isinstance(data, dict) else None
        return token or None

    def clear(self) -> None:
        """Forget the stored token."""
        try:
            self.path.unlink()
            logger.debug("Removed credential %s", self.path)
        except FileNotFoundError:
            pass
