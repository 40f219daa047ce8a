"""GitHub Client — status, transport and body error mapping over httpx.MockTransport."""

import httpx
import pytest

from devlink.core.errors import ExternalServiceError, ResourceNotFoundError
from devlink.infrastructure.github_client import GitHubClient


def _client(handler, **kwargs) -> GitHubClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GitHubClient(http_client=http, **kwargs)


async def test_returns_repositories():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, json=[{"name": "repo1"}])

    repos = await _client(handler).list_recent_repos("octocat")

    assert repos == [{"name": "repo1"}]
    assert seen["url"].path == "/users/octocat/repos"
    assert seen["url"].params["per_page"] == "5"
    assert "client_id" not in seen["url"].params


async def test_sends_credentials_when_configured():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["params"] = request.url.params
        return httpx.Response(200, json=[])

    await _client(handler, client_id="id", client_secret="sec").list_recent_repos("x")
    assert seen["params"]["client_id"] == "id"
    assert seen["params"]["client_secret"] == "sec"


async def test_non_200_is_not_found():
    client = _client(lambda request: httpx.Response(404, json={}))
    with pytest.raises(ResourceNotFoundError) as exc:
        await client.list_recent_repos("nobody-here")
    assert exc.value.message == "No Github profile found"


async def test_transport_error_is_external_service_error():
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(ExternalServiceError):
        await _client(handler).list_recent_repos("octocat")


async def test_timeout_is_external_service_error():
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(ExternalServiceError):
        await _client(handler).list_recent_repos("octocat")


async def test_username_is_a_single_path_segment():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["raw_path"] = request.url.raw_path
        return httpx.Response(200, json=[])

    await _client(handler).list_recent_repos("a/../b")
    assert seen["raw_path"].startswith(b"/users/a%2F..%2Fb/repos")


async def test_non_json_body_is_external_service_error():
    client = _client(lambda request: httpx.Response(200, content=b"<html>"))
    with pytest.raises(ExternalServiceError) as exc:
        await client.list_recent_repos("octocat")
    assert exc.value.message == "GitHub request failed: unreadable response"
