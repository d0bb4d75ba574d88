from __future__ import annotations

from typing import Any, Mapping

import requests

DEFAULT_API_URL = "https://api.github.com"


class GitHubApiError(RuntimeError):
    def __init__(self, message: str, *, status: int, url: str):
        super().__init__(message)
        self.status = status
        self.url = url


class GitHubClient:
    """Minimal GitHub REST client: JSON GETs and page-numbered listing."""

    def __init__(
        self,
        *,
        token: str | None,
        base_url: str = DEFAULT_API_URL,
        user_agent: str = "set-up-telemetry",
        api_version: str = "2022-11-28",
        timeout_sec: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._api_version = api_version
        self._timeout_sec = timeout_sec
        self._session = session or requests.Session()
        self._owns_session = session is None

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _headers(self, extra: Mapping[str, str] | None) -> dict[str, str]:
        req_headers: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "User-Agent": self._user_agent,
            "X-GitHub-Api-Version": self._api_version,
        }
        if extra:
            req_headers.update(dict(extra))
        if self._token:
            req_headers["Authorization"] = f"Bearer {self._token}"
        return req_headers

    def request_json(
        self,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        url = f"{self._base_url}{path}"
        params = {k: v for k, v in (query or {}).items() if v is not None}

        try:
            response = self._session.get(
                url,
                params=params or None,
                headers=self._headers(headers),
                timeout=self._timeout_sec,
            )
        except requests.RequestException as error:
            raise GitHubApiError(str(error), status=0, url=url) from None

        if response.status_code >= 400:
            try:
                payload = response.json()
            except ValueError:
                payload = {}
            if not isinstance(payload, dict):
                payload = {}
            message = str(
                payload.get("message")
                or f"GitHub API request failed ({response.status_code})"
            )
            raise GitHubApiError(message, status=response.status_code, url=url)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            raise GitHubApiError(
                f"GitHub API returned a non-JSON body ({response.status_code})",
                status=response.status_code,
                url=url,
            ) from None

    def _page_items(self, payload: Any, *, path: str, item_key: str | None) -> list[Any]:
        if item_key is not None:
            if not isinstance(payload, dict):
                raise GitHubApiError(
                    f"Expected an object with {item_key!r} from GitHub",
                    status=200,
                    url=f"{self._base_url}{path}",
                )
            payload = payload.get(item_key, [])
        if not isinstance(payload, list):
            raise GitHubApiError(
                f"Expected a list of items from GitHub (item_key={item_key!r})",
                status=200,
                url=f"{self._base_url}{path}",
            )
        return payload

    def paginate(
        self,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        per_page: int = 100,
        max_pages: int = 10,
        item_key: str | None = None,
    ) -> list[Any]:
        """
        Collect items from pages 1..max_pages of a listing endpoint.

        Stops at the first empty or short page. Payloads of the wrong shape raise
        `GitHubApiError` like any other bad response.
        """
        base_query = dict(query or {})
        collected: list[Any] = []
        page = 1
        while page <= max_pages:
            payload = self.request_json(
                path, query={**base_query, "per_page": per_page, "page": page}
            )
            if payload is None:
                break
            items = self._page_items(payload, path=path, item_key=item_key)
            collected.extend(items)
            if len(items) < per_page:
                break
            page += 1
        return collected
