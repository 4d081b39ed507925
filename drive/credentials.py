"""Service-account OAuth2 tokens for the Google Drive API.

Implements the JWT-bearer grant: a short-lived RS256 assertion signed with
the service account's private key is exchanged for an access token.
"""

import json
import logging
import time
from pathlib import Path
from typing import Any

import requests
from jose import JWTError, jwt

from config import DRIVE_SCOPE, DRIVE_TIMEOUT
from richtext.errors import RemoteError

logger = logging.getLogger(__name__)

_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:jwt-bearer"
_DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"
_ASSERTION_LIFETIME = 3600
# Refresh this many seconds before the token actually expires
_EXPIRY_MARGIN = 60


class ServiceAccountCredentials:
    """Cached access tokens for one service account."""

    def __init__(
        self,
        client_email: str,
        private_key: str,
        token_uri: str = _DEFAULT_TOKEN_URI,
        scope: str = DRIVE_SCOPE,
        session: requests.Session | None = None,
    ) -> None:
        self.client_email = client_email
        self.private_key = private_key
        self.token_uri = token_uri
        self.scope = scope
        self._session = session or requests.Session()
        self._token: str | None = None
        self._expires_at = 0.0

    @classmethod
    def from_file(cls, path: str | Path, **kwargs: Any) -> "ServiceAccountCredentials":
        """Load a service-account JSON key file."""
        info = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(
            client_email=info["client_email"],
            private_key=info["private_key"],
            token_uri=info.get("token_uri", _DEFAULT_TOKEN_URI),
            **kwargs,
        )

    def _assertion(self, now: int) -> str:
        claims = {
            "iss": self.client_email,
            "scope": self.scope,
            "aud": self.token_uri,
            "iat": now,
            "exp": now + _ASSERTION_LIFETIME,
        }
        try:
            return jwt.encode(claims, self.private_key, algorithm="RS256")
        except JWTError as e:
            raise RemoteError(f"Could not sign service account assertion: {e}") from e

    def _refresh(self) -> str:
        now = int(time.time())
        logger.debug("Requesting Drive access token for %s", self.client_email)
        try:
            resp = self._session.post(
                self.token_uri,
                data={"grant_type": _GRANT_TYPE, "assertion": self._assertion(now)},
                timeout=DRIVE_TIMEOUT,
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            raise RemoteError(f"Token request failed: {e}") from e
        except ValueError as e:
            raise RemoteError("Token endpoint returned non-JSON response") from e

        token = data.get("access_token")
        if not token:
            raise RemoteError("Token endpoint response has no access_token")
        self._token = token
        self._expires_at = now + int(data.get("expires_in", _ASSERTION_LIFETIME))
        return token

    def token(self) -> str:
        """Return a valid access token, refreshing it when close to expiry."""
        if self._token is None or time.time() >= self._expires_at - _EXPIRY_MARGIN:
            return self._refresh()
        return self._token
