"""Wilderness background map image fetching with in-memory reuse."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import httpx

from app.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


@dataclass
class MapImage:
    """Fetched background image bytes."""

    content: bytes
    media_type: str
    fetched_at: datetime


def image_media_type(response: httpx.Response) -> Optional[str]:
    """Media type of an image response, None if the body is not an image."""
    media_type = response.headers.get("content-type", "image/png").split(";")[0].strip()
    return media_type if media_type.startswith("image/") else None


class MapImageService:
    """
    HTTP client for the Wilderness map image.

    Strategy:
    - One successful fetch is reused for the rest of the process
    - Failures are not remembered, the next page load tries again
    - Graceful degradation: callers get None and draw a grid fallback
    """

    def __init__(
        self,
        url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = url or settings.map_image_url
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._image: Optional[MapImage] = None
        self._hits = 0
        self._misses = 0
        self._errors = 0

    async def start(self) -> None:
        """Initialize HTTP client."""
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.map_image_timeout_seconds, connect=5.0),
            follow_redirects=True,
            transport=self._transport,
        )
        logger.info("MapImageService started")

    async def stop(self) -> None:
        """Close HTTP client and log stats."""
        if self._client:
            await self._client.aclose()
            self._client = None
        logger.info(
            f"MapImageService stopped - hits: {self._hits}, "
            f"misses: {self._misses}, errors: {self._errors}"
        )

    @property
    def stats(self) -> dict:
        """Get fetch statistics."""
        return {
            "hits": self._hits,
            "misses": self._misses,
            "errors": self._errors,
            "image_loaded": self._image is not None,
        }

    async def get_image(self) -> Optional[MapImage]:
        """
        Get the background map image.

        Returns:
            MapImage, or None if the image could not be fetched
        """
        if self._image:
            self._hits += 1
            return self._image

        self._misses += 1

        if not self._client:
            logger.warning("Map image HTTP client not initialized")
            return None

        try:
            response = await self._client.get(self._url)
            response.raise_for_status()

            media_type = image_media_type(response)
            if media_type is None:
                self._errors += 1
                logger.warning(
                    f"Map image has unexpected content type: {response.headers.get('content-type')}"
                )
                return None

            self._image = MapImage(
                content=response.content,
                media_type=media_type,
                fetched_at=datetime.now(timezone.utc),
            )
            logger.info(f"Map image loaded ({len(response.content)} bytes)")
            return self._image

        except httpx.TimeoutException:
            self._errors += 1
            logger.warning("Map image fetch timeout")
            return None
        except httpx.HTTPStatusError as e:
            self._errors += 1
            logger.warning(f"Map image fetch error: {e.response.status_code}")
            return None
        except httpx.HTTPError as e:
            self._errors += 1
            logger.warning(f"Map image fetch failed: {e}")
            return None


# Global map image service instance
map_image_service = MapImageService()
