"""
HTTP client for the WHOOP internal web API.

Only the endpoints the tools need are wrapped: the home screen payload and the
per-domain deep dives. Payloads are validated into widget models before they
are handed out.
"""
import json
from pathlib import Path
from typing import Any, Dict, Optional

import requests
from loguru import logger

from whoop_mcp.config import WhoopSettings
from whoop_mcp.widgets import DeepDive, HomeData

DEEP_DIVE_KINDS = ("recovery", "strain", "sleep")


class WhoopError(Exception):
    """Base class for WHOOP client failures."""


class WhoopAuthenticationError(WhoopError):
    """Credentials are missing or were rejected."""


class WhoopApiError(WhoopError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class WhoopClient:
    """Thin wrapper over a requests session with bearer-token auth."""

    def __init__(self, settings: WhoopSettings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json", "User-Agent": "whoop-mcp/1.0"})
        self.token_store = Path(settings.token_store).expanduser()
        self._access_token: Optional[str] = settings.access_token

    def login(self) -> str:
        """Return a usable access token, logging in with credentials when needed."""
        if self._access_token:
            return self._access_token

        cached = self._load_token()
        if cached:
            logger.info(f"Using WHOOP token from '{self.token_store}'")
            self._access_token = cached
            return cached

        return self._login_with_credentials()

    def get_home_data(self, date: Optional[str] = None) -> HomeData:
        payload = self._get(self.settings.home_path, date)
        return HomeData.model_validate(payload)

    def get_recovery_deep_dive(self, date: Optional[str] = None) -> DeepDive:
        return self._get_deep_dive("recovery", date)

    def get_strain_deep_dive(self, date: Optional[str] = None) -> DeepDive:
        return self._get_deep_dive("strain", date)

    def get_sleep_deep_dive(self, date: Optional[str] = None) -> DeepDive:
        return self._get_deep_dive("sleep", date)

    def _get_deep_dive(self, kind: str, date: Optional[str]) -> DeepDive:
        if kind not in DEEP_DIVE_KINDS:
            raise ValueError(f"Unknown deep dive '{kind}'")
        payload = self._get(self.settings.deep_dive_path.format(kind=kind), date)
        return DeepDive.model_validate(payload)

    def _login_with_credentials(self) -> str:
        email, password = self.settings.email, self.settings.password
        if not email or not password:
            raise WhoopAuthenticationError(
                "No WHOOP token available. Set WHOOP_ACCESS_TOKEN, or WHOOP_EMAIL and WHOOP_PASSWORD."
            )

        logger.info("Logging in to WHOOP with account credentials")
        try:
            response = self.session.post(
                self._url(self.settings.auth_path),
                json={"username": email, "password": password, "grant_type": "password"},
                timeout=self.settings.request_timeout_s,
            )
        except requests.exceptions.RequestException as e:
            raise WhoopAuthenticationError(f"Login request failed: {e}") from e

        if response.status_code in (400, 401, 403):
            raise WhoopAuthenticationError(f"WHOOP rejected the credentials (HTTP {response.status_code})")
        if not response.ok:
            raise WhoopApiError(f"Login failed with HTTP {response.status_code}", response.status_code)

        token = _token_from_login_response(self._decode(response))
        if not token:
            raise WhoopAuthenticationError("Login response did not contain an access token")

        self._access_token = token
        self._store_token(token)
        return token

    def _get(self, path: str, date: Optional[str], retry_auth: bool = True) -> Dict[str, Any]:
        token = self.login()
        params = {"date": date} if date else None
        try:
            response = self.session.get(
                self._url(path),
                params=params,
                headers={"Authorization": f"Bearer {token}"},
                timeout=self.settings.request_timeout_s,
            )
        except requests.exceptions.RequestException as e:
            raise WhoopApiError(f"Request to {path} failed: {e}") from e

        if response.status_code == 401 and retry_auth:
            logger.info("WHOOP token expired, logging in again")
            self._forget_token()
            return self._get(path, date, retry_auth=False)

        if not response.ok:
            raise WhoopApiError(f"{path} returned HTTP {response.status_code}", response.status_code)

        payload = self._decode(response)
        if not isinstance(payload, dict):
            raise WhoopApiError(f"{path} returned an unexpected payload", response.status_code)
        return payload

    def _url(self, path: str) -> str:
        return self.settings.api_base_url.rstrip("/") + "/" + path.lstrip("/")

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise WhoopApiError("Response body is not JSON", response.status_code) from e

    def _load_token(self) -> Optional[str]:
        if not self.token_store.exists():
            return None
        try:
            with open(self.token_store, "r") as f:
                return json.load(f).get("access_token")
        except (OSError, ValueError, AttributeError) as e:
            logger.warning(f"Ignoring unreadable token store '{self.token_store}': {e}")
            return None

    def _store_token(self, token: str) -> None:
        try:
            self.token_store.parent.mkdir(parents=True, exist_ok=True)
            with open(self.token_store, "w") as f:
                json.dump({"access_token": token}, f)
            logger.info(f"WHOOP token stored in '{self.token_store}' for future use")
        except OSError as e:
            logger.warning(f"Could not store WHOOP token: {e}")

    def _forget_token(self) -> None:
        self._access_token = None
        if self.token_store.exists():
            self.token_store.unlink()


def _token_from_login_response(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    token = body.get("access_token") or body.get("accessToken")
    if token:
        return token
    # Cognito-style sign-in responses nest the token
    result = body.get("AuthenticationResult")
    if isinstance(result, dict):
        return result.get("AccessToken")
    return None
