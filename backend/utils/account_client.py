# backend/utils/account_client.py
import logging
import threading
import time

import httpx
from jose import jwt, JWTError

logger = logging.getLogger(__name__)

# Refresh the access token this many seconds before it expires
REFRESH_MARGIN_SECONDS = 60


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def _jwt_expiry(jwt_token: str):
    # The client only schedules refreshes, the server verifies the signature
    try:
        return jwt.get_unverified_claims(jwt_token).get("exp")
    except JWTError:
        return None


class AccountClient:
    """Session-aware client for the accounts API.

    Keeps the logged in account (including its JWT) in memory, sends the JWT as
    a bearer token, relies on the httpOnly refresh cookie kept by the underlying
    ``httpx.Client`` and re-arms a timer that refreshes the JWT one minute
    before it expires.
    """

    def __init__(self, base_url: str = None, http_client: httpx.Client = None, auto_refresh: bool = True):
        if http_client is None:
            http_client = httpx.Client(base_url=base_url or "http://localhost:4000", timeout=30)
        self.http = http_client
        self.auto_refresh = auto_refresh
        self.account = None
        self._refresh_timer = None
        self._lock = threading.Lock()

    # session

    def login(self, email: str, password: str) -> dict:
        account = self._request("POST", "/accounts/authenticate", json={"email": email, "password": password})
        self._set_account(account)
        return account

    def logout(self):
        try:
            self._request("POST", "/accounts/revoke-token", json={})
        except (ApiError, httpx.HTTPError) as e:
            # The session is cleared locally even when the server refuses
            logger.warning("Token revoke failed during logout: %s", e)
        self.stop_refresh_token_timer()
        self.account = None

    def refresh_token(self) -> dict:
        account = self._request("POST", "/accounts/refresh-token", json={})
        self._set_account(account)
        return account

    # registration and password reset

    def register(self, params: dict) -> dict:
        return self._request("POST", "/accounts/register", json=params)

    def verify_email(self, token: str) -> dict:
        return self._request("POST", "/accounts/verify-email", json={"token": token})

    def forgot_password(self, email: str) -> dict:
        return self._request("POST", "/accounts/forgot-password", json={"email": email})

    def validate_reset_token(self, token: str) -> dict:
        return self._request("POST", "/accounts/validate-reset-token", json={"token": token})

    def reset_password(self, token: str, password: str, confirm_password: str) -> dict:
        return self._request("POST", "/accounts/reset-password", json={
            "token": token, "password": password, "confirm_password": confirm_password,
        })

    # account CRUD

    def get_all(self) -> list:
        return self._request("GET", "/accounts")

    def get_by_id(self, account_id: int) -> dict:
        return self._request("GET", f"/accounts/{account_id}")

    def create(self, params: dict) -> dict:
        return self._request("POST", "/accounts", json=params)

    def update(self, account_id: int, params: dict) -> dict:
        account = self._request("PUT", f"/accounts/{account_id}", json=params)
        # Keep the stored session in sync when the logged in account updated itself
        if self.account and account.get("id") == self.account.get("id"):
            self.account = {**self.account, **account}
        return account

    def delete(self, account_id: int) -> dict:
        try:
            return self._request("DELETE", f"/accounts/{account_id}")
        finally:
            # Deleting the logged in account ends the session
            if self.account and account_id == self.account.get("id"):
                self.logout()

    def close(self):
        self.stop_refresh_token_timer()
        self.http.close()

    # helper methods

    def _headers(self) -> dict:
        if self.account and self.account.get("jwt_token"):
            return {"Authorization": f"Bearer {self.account['jwt_token']}"}
        return {}

    def _request(self, method: str, url: str, **kwargs):
        response = self.http.request(method, url, headers=self._headers(), **kwargs)
        if response.status_code >= 400:
            try:
                message = response.json().get("message") or response.reason_phrase
            except ValueError:
                message = response.text or response.reason_phrase
            raise ApiError(response.status_code, message)
        return response.json()

    def _set_account(self, account: dict):
        self.account = account
        if self.auto_refresh:
            self.start_refresh_token_timer()

    def refresh_delay(self):
        """Seconds until the next refresh, or None when the JWT carries no expiry."""
        if not self.account or not self.account.get("jwt_token"):
            return None
        expires = _jwt_expiry(self.account["jwt_token"])
        if expires is None:
            return None
        return max(expires - time.time() - REFRESH_MARGIN_SECONDS, 0)

    def start_refresh_token_timer(self):
        delay = self.refresh_delay()
        with self._lock:
            if self._refresh_timer is not None:
                self._refresh_timer.cancel()
                self._refresh_timer = None
            if delay is None:
                return
            self._refresh_timer = threading.Timer(delay, self._on_refresh_timer)
            self._refresh_timer.daemon = True
            self._refresh_timer.start()

    def stop_refresh_token_timer(self):
        with self._lock:
            if self._refresh_timer is not None:
                self._refresh_timer.cancel()
                self._refresh_timer = None

    def _on_refresh_timer(self):
        try:
            self.refresh_token()
        except (ApiError, httpx.HTTPError) as e:
            logger.error("Automatic token refresh failed: %s", e)
