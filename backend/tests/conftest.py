"""
Test configuration and fixtures.
GitHub is faked with httpx.MockTransport; no network access is needed.
"""
import os

# Set test environment before any imports
os.environ["GITHUB_TOKEN"] = "test-token"
os.environ["GITHUB_OWNER"] = "owner"
os.environ["GITHUB_REPO"] = "repo"
os.environ["GITHUB_BRANCH"] = "main"
os.environ["GITHUB_API_URL"] = "https://api.github.com"
os.environ["ENVIRONMENT"] = "test"

import json
import pytest
from typing import AsyncGenerator, Optional

import httpx
from httpx import AsyncClient, ASGITransport

from image_service.config import GitHubProperties
from image_service.services.image_upload_service import ImageUploadService


class FakeGitHub:
    """
    Stand-in for the GitHub contents API.

    Answers GET with probe_status/probe_body and PUT with put_status/put_body,
    and records every request it receives.
    """

    def __init__(self):
        self.probe_status = 404
        self.probe_body: object = {"message": "Not Found"}
        self.put_status = 201
        self.put_body: object = {"content": {"sha": "new-sha"}}
        self.fail_method: Optional[str] = None  # raise a transport error for this method
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == self.fail_method:
            raise httpx.ConnectError("connection refused", request=request)
        if request.method == "GET":
            return httpx.Response(self.probe_status, json=self.probe_body)
        if request.method == "PUT":
            return httpx.Response(self.put_status, json=self.put_body)
        return httpx.Response(405)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def requests_for(self, method: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method]

    @property
    def put_payload(self) -> dict:
        """JSON body of the last PUT."""
        return json.loads(self.requests_for("PUT")[-1].content)


@pytest.fixture
def github_properties() -> GitHubProperties:
    """GitHub coordinates matching the test environment."""
    return GitHubProperties(
        token="test-token",
        owner="owner",
        repo="repo",
        branch="main",
        api_url="https://api.github.com"
    )


@pytest.fixture
def fake_github() -> FakeGitHub:
    """Fresh fake GitHub per test."""
    return FakeGitHub()


@pytest.fixture
def upload_service(github_properties: GitHubProperties, fake_github: FakeGitHub) -> ImageUploadService:
    """Upload service wired to the fake GitHub."""
    return ImageUploadService(github_properties, timeout=5.0, transport=fake_github.transport())


@pytest.fixture
async def client(upload_service: ImageUploadService) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    from image_service.main import app
    from image_service.api.images import get_image_upload_service

    app.dependency_overrides[get_image_upload_service] = lambda: upload_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Clean up overrides
    app.dependency_overrides.clear()
