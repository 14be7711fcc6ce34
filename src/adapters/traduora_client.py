"""Traduora REST client.

Three calls are consumed:
- `POST /api/v1/auth/token` (password grant)
- `GET  /api/v1/projects/{id}/translations`
- `GET  /api/v1/projects/{id}/exports`

The access token lives on the client instance for one run and is never
written to disk.
"""

from __future__ import annotations

from types import TracebackType

import httpx
from pydantic import ValidationError

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.errors import AuthenticationFailed, NoToken, RequestFailed
from core.domain.models import (
    AuthRequest,
    AuthResponse,
    LocalizationConfig,
    TranslationsResponse,
)

API_PREFIX = "/api/v1"
# httpx raises InvalidURL for unbuildable URLs and UnicodeError when IDNA
# encoding of the host fails; neither derives from HTTPError.
_TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, UnicodeError)


class TraduoraClient:
    """Blocking client bound to one `LocalizationConfig`."""

    def __init__(
        self,
        config: LocalizationConfig,
        *,
        settings: AppSettings | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        self._access_token: str | None = None
        self._http = build_client(settings, transport=transport)

    def __enter__(self) -> "TraduoraClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    @property
    def is_authenticated(self) -> bool:
        return self._access_token is not None

    def _url(self, path: str) -> str:
        return f"{self._config.base_url}{API_PREFIX}{path}"

    def _project_url(self, path: str) -> str:
        return self._url(f"/projects/{self._config.project_id}{path}")

    def _auth_headers(self) -> dict[str, str]:
        if self._access_token is None:
            raise NoToken()
        return {"Authorization": f"Bearer {self._access_token}"}

    def _get(self, url: str, *, params: dict[str, str] | None = None) -> httpx.Response:
        headers = self._auth_headers()
        try:
            response = self._http.get(url, params=params, headers=headers)
        except _TRANSPORT_ERRORS as exc:
            raise RequestFailed(f"GET {url} failed: {exc}", url=url) from exc
        if response.status_code != 200:
            raise RequestFailed(
                f"GET {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
                url=url,
            )
        return response

    def authenticate(self) -> None:
        """Exchange email/password for an access token.

        Calling it again replaces the stored token.
        """

        url = self._url("/auth/token")
        payload = AuthRequest(username=self._config.email, password=self._config.password)
        try:
            response = self._http.post(url, json=payload.model_dump())
        except _TRANSPORT_ERRORS as exc:
            raise AuthenticationFailed(f"POST {url} failed: {exc}") from exc

        if response.status_code != 200:
            raise AuthenticationFailed(f"Authentication failed: HTTP {response.status_code}")

        try:
            auth = AuthResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise AuthenticationFailed("Authentication failed: malformed token response") from exc
        self._access_token = auth.access_token

    def get_available_locales(self) -> list[str]:
        """Locale codes present in the project, in server order."""

        url = self._project_url("/translations")
        response = self._get(url)
        try:
            body = TranslationsResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise RequestFailed(
                f"GET {url} returned a malformed body",
                status_code=response.status_code,
                url=url,
            ) from exc
        return body.codes()

    def download_strings(self, locale: str) -> str:
        """Export one locale in the configured format.

        Bytes that are not valid UTF-8 yield an empty string.
        """

        url = self._project_url("/exports")
        params = {
            "locale": locale,
            "format": self._config.format,
            "untranslated": "false",
        }
        response = self._get(url, params=params)
        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError:
            return ""
