"""OurAirports catalog download.

The full ``airports.csv`` is fetched on every call; nothing is cached.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import aiohttp

from airportfinder.core.errors import DatasetFetchError
from airportfinder.settings.values import PROVIDERS

from .base import HttpProvider

__all__ = ["OurAirportsDataset"]

logger = logging.getLogger(__name__)


class OurAirportsDataset(HttpProvider):
    """Fetch the raw OurAirports CSV text."""

    def __init__(self, url: str = PROVIDERS["dataset"]["url"], **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._url = url

    async def fetch_text(self) -> str:
        """Return the catalog CSV text.

        Raises:
            DatasetFetchError: On transport failure or non-success status.
        """
        start = time.monotonic()
        try:
            async with self._session() as session:
                async with session.get(
                    self._url, headers=self._headers, timeout=self._timeout
                ) as resp:
                    if resp.status != 200:
                        raise DatasetFetchError(
                            f"dataset HTTP {resp.status} from {self._url}"
                        )
                    text = await resp.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DatasetFetchError(f"dataset request failed: {e!r}") from e

        logger.debug(
            "Fetched airport dataset: %d bytes in %.3fs",
            len(text),
            time.monotonic() - start,
        )
        return text

    async def __call__(self) -> str:
        return await self.fetch_text()
