"""GitHub Client — fetches a user's most recent public repositories.

Invariants:
    - Every call bounded by timeout_seconds
    - Non-200 from GitHub -> ResourceNotFoundError ("No Github profile found")
    - Transport errors, timeouts and undecodable bodies -> ExternalServiceError
    - username is percent-encoded as a single path segment
    - Client id/secret sent only when both are configured

Design Decisions:
    - httpx.AsyncClient injected via constructor: tests pass a MockTransport-backed client
    - No retry: a profile page degrades gracefully without repositories
"""

import logging
from urllib.parse import quote

import httpx

from devlink.core.errors import ExternalServiceError, ResourceNotFoundError

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
REPO_LIMIT = 5


class GitHubClient:
    """Thin async wrapper over the GitHub REST API."""

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        timeout_seconds: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.timeout_seconds = timeout_seconds
        self._http_client = http_client

    def _params(self) -> dict:
        params = {"per_page": REPO_LIMIT, "sort": "created", "direction": "desc"}
        if self.client_id and self.client_secret:
            params["client_id"] = self.client_id
            params["client_secret"] = self.client_secret
        return params

    async def list_recent_repos(self, username: str) -> list[dict]:
        url = f"{GITHUB_API_URL}/users/{quote(username, safe='')}/repos"
        headers = {
            "User-Agent": "devlink",
            "Accept": "application/vnd.github+json",
        }
        try:
            if self._http_client is not None:
                response = await self._http_client.get(
                    url, params=self._params(), headers=headers,
                    timeout=self.timeout_seconds,
                )
            else:
                async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                    response = await client.get(
                        url, params=self._params(), headers=headers,
                    )
        except httpx.TimeoutException:
            logger.error(f"GitHub request timed out for {username}")
            raise ExternalServiceError("GitHub", "timeout")
        except httpx.HTTPError as e:
            logger.error(f"GitHub request failed for {username}: {e}")
            raise ExternalServiceError("GitHub", "connection error")

        if response.status_code != 200:
            logger.info(
                f"GitHub returned {response.status_code} for {username}",
            )
            raise ResourceNotFoundError(
                "GitHub profile", username, message="No Github profile found",
            )
        try:
            return response.json()
        except ValueError:
            logger.error(f"GitHub returned a non-JSON body for {username}")
            raise ExternalServiceError("GitHub", "unreadable response")
