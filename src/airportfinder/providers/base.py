"""Shared aiohttp session handling for provider clients.

A client either reuses a caller-owned ``aiohttp.ClientSession`` (never
closed here; the caller owns its lifecycle) or opens a short-lived session
per request with its own timeout.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import aiohttp

from airportfinder.settings.values import HTTP


class HttpProvider:
    def __init__(
        self,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        timeout_s: float = float(HTTP["timeout_s"]),
        user_agent: str = HTTP["user_agent"],
    ) -> None:
        self._ext_session = session
        self._timeout = aiohttp.ClientTimeout(total=float(timeout_s))
        self._headers = {"User-Agent": user_agent}

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[aiohttp.ClientSession]:
        if self._ext_session is not None:
            yield self._ext_session
            return
        async with aiohttp.ClientSession(timeout=self._timeout) as session:
            yield session
