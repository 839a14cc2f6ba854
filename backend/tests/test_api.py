"""
Tests for API endpoints.
Uses httpx AsyncClient for testing FastAPI routes.
"""
import pytest
from httpx import AsyncClient
from starlette.datastructures import UploadFile

from image_service.services.image_upload_service import MAX_FILE_SIZE


class TestRootEndpoint:
    """Tests for root endpoint."""

    @pytest.mark.asyncio
    async def test_root_returns_info(self, client: AsyncClient):
        """Test root endpoint returns API info."""
        response = await client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Image Service"
        assert data["environment"] == "test"
        assert "version" in data


class TestHealthEndpoint:
    """Tests for image service health."""

    @pytest.mark.asyncio
    async def test_health_is_plain_text(self, client: AsyncClient):
        """Test health returns the liveness marker."""
        response = await client.get("/api/images/health")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Image service is running"


class TestUploadEndpoint:
    """Tests for POST /api/images/upload."""

    @pytest.mark.asyncio
    async def test_upload_success(self, client: AsyncClient, fake_github):
        """Test valid PNG upload returns CDN URL."""
        response = await client.post(
            "/api/images/upload",
            files={"file": ("photo.png", b"\x89PNG" + b"0" * 96, "image/png")}
        )

        assert response.status_code == 200
        data = response.json()
        assert set(data) == {"url", "fileName", "message", "replaced"}
        assert data["replaced"] is False
        assert data["fileName"].endswith(".png")
        assert data["url"] == f"https://cdn.jsdelivr.net/gh/owner/repo@main/images/{data['fileName']}"
        assert data["message"] == "Image uploaded successfully"
        assert "sha" not in fake_github.put_payload

    @pytest.mark.asyncio
    async def test_upload_replaces_existing(self, client: AsyncClient, fake_github):
        """Test existing file sha is forwarded and reported."""
        fake_github.probe_status = 200
        fake_github.probe_body = {"sha": "abc123"}

        response = await client.post(
            "/api/images/upload",
            files={"file": ("photo.gif", b"GIF89a", "image/gif")}
        )

        assert response.status_code == 200
        assert response.json()["replaced"] is True
        assert fake_github.put_payload["sha"] == "abc123"

    @pytest.mark.asyncio
    async def test_upload_invalid_type(self, client: AsyncClient, fake_github):
        """Test text file returns 400 with allowed types."""
        response = await client.post(
            "/api/images/upload",
            files={"file": ("doc.txt", b"hello", "text/plain")}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid file type. Allowed: JPG, PNG, GIF"}
        assert fake_github.requests == []

    @pytest.mark.asyncio
    async def test_upload_empty_file(self, client: AsyncClient, fake_github):
        """Test empty file returns 400."""
        response = await client.post(
            "/api/images/upload",
            files={"file": ("photo.jpg", b"", "image/jpeg")}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "File is empty"}

    @pytest.mark.asyncio
    async def test_upload_oversized_file_read_is_bounded(self, client: AsyncClient, fake_github, monkeypatch):
        """Test a file over 10MB is rejected after reading at most one byte past the limit."""
        read_sizes = []
        original_read = UploadFile.read

        async def recording_read(self, size: int = -1) -> bytes:
            data = await original_read(self, size)
            read_sizes.append(len(data))
            return data

        monkeypatch.setattr(UploadFile, "read", recording_read)

        response = await client.post(
            "/api/images/upload",
            files={"file": ("big.png", b"0" * (MAX_FILE_SIZE + 1024), "image/png")}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "File size exceeds limit of 10MB"}
        assert read_sizes == [MAX_FILE_SIZE + 1]
        assert fake_github.requests == []

    @pytest.mark.asyncio
    async def test_upload_exactly_at_limit(self, client: AsyncClient):
        """Test a file of exactly 10MB is accepted."""
        response = await client.post(
            "/api/images/upload",
            files={"file": ("big.png", b"0" * MAX_FILE_SIZE, "image/png")}
        )

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_upload_missing_file(self, client: AsyncClient):
        """Test request without file field is a validation error."""
        response = await client.post("/api/images/upload")

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_upload_github_failure(self, client: AsyncClient, fake_github):
        """Test GitHub write failure returns 500 with message."""
        fake_github.put_status = 500
        fake_github.put_body = {"message": "Server Error"}

        response = await client.post(
            "/api/images/upload",
            files={"file": ("photo.png", b"data", "image/png")}
        )

        assert response.status_code == 500
        assert response.json()["error"].startswith("Failed to upload image to GitHub")

    @pytest.mark.asyncio
    async def test_upload_unexpected_error(self, client: AsyncClient, upload_service, monkeypatch):
        """Test unexpected exception returns 500 with its message."""
        def boom(request):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(upload_service, "upload_image", boom)

        response = await client.post(
            "/api/images/upload",
            files={"file": ("photo.png", b"data", "image/png")}
        )

        assert response.status_code == 500
        assert response.json() == {"error": "disk on fire"}


class TestCors:
    """Tests for the CORS policy."""

    @pytest.mark.asyncio
    async def test_preflight_localhost_allowed(self, client: AsyncClient):
        """Test preflight from a local dev server is allowed."""
        response = await client.options(
            "/api/images/upload",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Authorization, Content-Type",
            }
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"
        assert response.headers["access-control-allow-credentials"] == "true"
        assert response.headers["access-control-max-age"] == "3600"
        assert "PATCH" in response.headers["access-control-allow-methods"]

    @pytest.mark.asyncio
    async def test_preflight_loopback_ip_allowed(self, client: AsyncClient):
        """Test 127.0.0.1 on any port is allowed."""
        response = await client.options(
            "/api/images/upload",
            headers={
                "Origin": "http://127.0.0.1:8080",
                "Access-Control-Request-Method": "POST",
            }
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://127.0.0.1:8080"

    @pytest.mark.asyncio
    async def test_preflight_other_origin_rejected(self, client: AsyncClient):
        """Test unknown origin gets no CORS grant."""
        response = await client.options(
            "/api/images/upload",
            headers={
                "Origin": "https://evil.example.com",
                "Access-Control-Request-Method": "POST",
            }
        )

        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    @pytest.mark.asyncio
    async def test_preflight_without_port_rejected(self, client: AsyncClient):
        """Test localhost origin must carry an explicit port."""
        response = await client.options(
            "/api/images/upload",
            headers={
                "Origin": "http://localhost",
                "Access-Control-Request-Method": "POST",
            }
        )

        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    @pytest.mark.asyncio
    async def test_simple_request_exposes_headers(self, client: AsyncClient):
        """Test actual response carries exposed headers."""
        response = await client.get(
            "/api/images/health",
            headers={"Origin": "http://localhost:3000"}
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
        assert "Content-Type" in response.headers["access-control-expose-headers"]


class TestMetricsEndpoint:
    """Tests for Prometheus endpoint."""

    @pytest.mark.asyncio
    async def test_metrics_exposes_upload_counters(self, client: AsyncClient):
        """Test upload metrics are registered."""
        await client.get("/api/images/health")
        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "image_uploads_total" in response.text
        assert "http_requests_total" in response.text
