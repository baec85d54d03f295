"""Module for HttpClient class."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

import aiohttp
from yarl import URL

from .deviceconfig import DeviceConfig
from .exceptions import (
    FritzException,
    TimeoutError,
    _ConnectionError,
)

_LOGGER = logging.getLogger(__name__)


class HttpClient:
    """HttpClient Class."""

    def __init__(self, config: DeviceConfig) -> None:
        self._config = config
        self._client_session: aiohttp.ClientSession | None = None

    @property
    def client(self) -> aiohttp.ClientSession:
        """Return the underlying http client."""
        if self._config.http_client and issubclass(
            self._config.http_client.__class__, aiohttp.ClientSession
        ):
            return self._config.http_client

        if not self._client_session:
            self._client_session = aiohttp.ClientSession()
        return self._client_session

    async def get(
        self,
        url: URL,
        *,
        params: Sequence[tuple[str, str]] | None = None,
    ) -> tuple[int, str]:
        """Send an http get request to the device and return the body as text."""
        _LOGGER.debug("Getting %s", url)
        return await self._request("get", url, params=params)

    async def post(
        self,
        url: URL,
        *,
        data: dict[str, str] | bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> tuple[int, str]:
        """Send an http post request to the device and return the body as text.

        A dict passed as data is sent form encoded.
        """
        _LOGGER.debug("Posting to %s", url)
        return await self._request("post", url, data=data, headers=headers)

    async def _request(self, method: str, url: URL, **kwargs: Any) -> tuple[int, str]:
        if self._config.timeout is None:
            _LOGGER.warning("Request timeout is set to None.")
        client_timeout = aiohttp.ClientTimeout(total=self._config.timeout)

        try:
            resp = await getattr(self.client, method)(
                url,
                timeout=client_timeout,
                **kwargs,
            )
            async with resp:
                response_data = await resp.read()
        except (aiohttp.ServerDisconnectedError, aiohttp.ClientOSError) as ex:
            raise _ConnectionError(
                f"Device connection error: {self._config.host}: {ex}", ex
            ) from ex
        except (aiohttp.ServerTimeoutError, asyncio.TimeoutError) as ex:
            raise TimeoutError(
                "Unable to query the device, "
                + f"timed out: {self._config.host}: {ex}",
                ex,
            ) from ex
        except Exception as ex:
            raise FritzException(
                f"Unable to query the device: {self._config.host}: {ex}", ex
            ) from ex

        text = response_data.decode("utf-8", errors="replace")
        if resp.status != 200:
            _LOGGER.debug(
                "Device %s received status code %s with response %s",
                self._config.host,
                resp.status,
                text,
            )

        return resp.status, text

    async def close(self) -> None:
        """Close the ClientSession."""
        client = self._client_session
        self._client_session = None
        if client:
            await client.close()
