"""High level client for the FRITZ!Box AHA-HTTP interface."""

from __future__ import annotations

import logging
from types import TracebackType

from .command import Command, CommandDispatcher, interpret_response, prepare_command
from .credentials import Credentials
from .deviceconfig import DeviceConfig
from .exceptions import FritzException
from .httpclient import HttpClient
from .session import LockoutCallback, SessionNegotiator, SleepFunc

_LOGGER = logging.getLogger(__name__)


class FritzAha:
    """Log in to a FRITZ!Box and run a single AHA command per query.

    A fresh session id is negotiated for every :meth:`query`, session ids
    are never cached.
    """

    def __init__(
        self,
        config: DeviceConfig,
        *,
        sleep: SleepFunc | None = None,
        on_lockout: LockoutCallback | None = None,
    ) -> None:
        self._config = config
        self._http_client = HttpClient(config)
        self._negotiator = SessionNegotiator(
            self._http_client, config, sleep=sleep, on_lockout=on_lockout
        )
        self._dispatcher = CommandDispatcher(self._http_client, config)

    @property
    def config(self) -> DeviceConfig:
        """Return the configuration of the client."""
        return self._config

    @property
    def host(self) -> str:
        """Return the host of the box."""
        return self._config.host

    async def login(self, credentials: Credentials | None = None) -> str:
        """Log in and return a new session id."""
        credentials = credentials or self._config.credentials
        if credentials is None:
            raise FritzException(f"No credentials given to login to {self.host}")
        return await self._negotiator.create_session(credentials)

    async def query(
        self, command: Command, credentials: Credentials | None = None
    ) -> str:
        """Run the command and return the formatted response."""
        use_celsius = self._config.use_celsius
        prepared = prepare_command(command, use_celsius)

        sid = await self.login(credentials)
        response = await self._dispatcher.execute(sid, prepared)

        return interpret_response(response, prepared.verb, use_celsius)

    async def close(self) -> None:
        """Close the underlying http session."""
        await self._http_client.close()

    async def __aenter__(self) -> FritzAha:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    def __repr__(self) -> str:
        return f"<FritzAha at {self.host}>"
