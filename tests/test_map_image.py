"""Tests for the background map image service."""

import httpx
import pytest

from app.services.map_image import MapImageService, image_media_type

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-data"
MAP_URL = "http://map.test/wilderness.png"


def make_service(handler) -> MapImageService:
    """Helper to create a service backed by a mock transport."""
    return MapImageService(url=MAP_URL, transport=httpx.MockTransport(handler))


def png_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png"})


class TestMapImageService:
    """Tests for fetching and reusing the map image."""

    @pytest.mark.anyio
    async def test_fetch_success(self):
        service = make_service(png_handler)
        await service.start()

        image = await service.get_image()
        await service.stop()

        assert image is not None
        assert image.content == PNG_BYTES
        assert image.media_type == "image/png"

    @pytest.mark.anyio
    async def test_successful_image_reused(self):
        """A loaded image should be served without fetching again."""
        calls = []

        def handler(request):
            calls.append(request.url)
            return png_handler(request)

        service = make_service(handler)
        await service.start()
        await service.get_image()
        await service.get_image()
        await service.stop()

        assert len(calls) == 1
        assert service.stats["hits"] == 1
        assert service.stats["misses"] == 1
        assert service.stats["image_loaded"] is True

    @pytest.mark.anyio
    async def test_http_error_returns_none(self):
        service = make_service(lambda request: httpx.Response(404))
        await service.start()

        image = await service.get_image()
        await service.stop()

        assert image is None
        assert service.stats["errors"] == 1

    @pytest.mark.anyio
    async def test_failure_not_remembered(self):
        """After a failure the next call should try again."""
        responses = [httpx.Response(500), httpx.Response(200, content=PNG_BYTES, headers={"content-type": "image/png"})]
        service = make_service(lambda request: responses.pop(0))
        await service.start()

        first = await service.get_image()
        second = await service.get_image()
        await service.stop()

        assert first is None
        assert second is not None

    @pytest.mark.anyio
    async def test_timeout_returns_none(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        service = make_service(handler)
        await service.start()

        assert await service.get_image() is None
        await service.stop()

    @pytest.mark.anyio
    async def test_connection_error_returns_none(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        service = make_service(handler)
        await service.start()

        assert await service.get_image() is None
        await service.stop()

    @pytest.mark.anyio
    async def test_non_image_content_rejected(self):
        service = make_service(
            lambda request: httpx.Response(200, text="<html></html>", headers={"content-type": "text/html"})
        )
        await service.start()

        assert await service.get_image() is None
        await service.stop()

    @pytest.mark.anyio
    async def test_not_started_returns_none(self):
        service = make_service(png_handler)

        assert await service.get_image() is None


class TestImageMediaType:
    """Tests for the content type check shared with the Streamlit dashboard."""

    @pytest.mark.parametrize(
        "content_type,expected",
        [
            ("image/png", "image/png"),
            ("image/jpeg; charset=binary", "image/jpeg"),
            ("text/html; charset=utf-8", None),
            ("application/json", None),
        ],
    )
    def test_media_type(self, content_type, expected):
        response = httpx.Response(200, content=b"body", headers={"content-type": content_type})
        assert image_media_type(response) == expected

    def test_missing_content_type_assumed_png(self):
        response = httpx.Response(200, content=PNG_BYTES)
        assert image_media_type(response) == "image/png"
