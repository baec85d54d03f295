"""Session id negotiation with the FRITZ!Box login endpoint.

The login runs in four steps:

1. GET ``/login_sid.lua?version=2`` returns a ``Challenge`` and a
   ``BlockTime``.
2. If ``BlockTime`` is not zero the box refuses login attempts for that many
   seconds, so the negotiator waits it out first.
3. The challenge is solved with the password, see :mod:`fritzaha.challenge`.
4. POST ``username`` and ``response`` to the same endpoint returns the
   ``SID``. A SID of all zeros means the credentials were rejected.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from defusedxml import DefusedXmlException
from defusedxml import ElementTree
from yarl import URL

from .challenge import LoginState, solve
from .credentials import Credentials
from .deviceconfig import DeviceConfig
from .exceptions import (
    AuthenticationError,
    FritzException,
    LoginFailedError,
    StateFetchError,
    SubmitError,
)
from .httpclient import HttpClient

_LOGGER = logging.getLogger(__name__)

LOGIN_SID_PATH = "/login_sid.lua"
LOGIN_SID_QUERY = {"version": "2"}
INVALID_SID = "0000000000000000"

SleepFunc = Callable[[float], Awaitable[None]]
LockoutCallback = Callable[[int], None]


def get_element_text(xml: str, name: str) -> str | None:
    """Return the text of the first element called *name*, or None."""
    root = ElementTree.fromstring(xml)
    if root.tag == name:
        return root.text
    return root.findtext(f".//{name}")


class SessionNegotiator:
    """Obtain a session id from the box.

    *sleep* is awaited to wait out a login block and defaults to
    :func:`asyncio.sleep`. *on_lockout* is called with the number of seconds
    before waiting starts.
    """

    def __init__(
        self,
        http_client: HttpClient,
        config: DeviceConfig,
        *,
        sleep: SleepFunc | None = None,
        on_lockout: LockoutCallback | None = None,
    ) -> None:
        self._http_client = http_client
        self._host = config.host
        self._login_url = config.base_url.with_path(LOGIN_SID_PATH).with_query(
            LOGIN_SID_QUERY
        )
        self._sleep: SleepFunc = sleep if sleep is not None else asyncio.sleep
        self._on_lockout = on_lockout

    @property
    def login_url(self) -> URL:
        """Return the url of the login endpoint."""
        return self._login_url

    async def fetch_login_state(self) -> LoginState:
        """Fetch the current challenge and block time."""
        try:
            status, response = await self._http_client.get(self._login_url)
        except FritzException as ex:
            raise StateFetchError(
                f"Unable to fetch login state from {self._host}: {ex}"
            ) from ex

        if status != 200:
            raise StateFetchError(
                f"Device {self._host} responded with {status} to login state request"
            )

        try:
            challenge = get_element_text(response, "Challenge")
            block_time_text = get_element_text(response, "BlockTime")
        except (ElementTree.ParseError, DefusedXmlException) as ex:
            raise StateFetchError(
                f"Unable to parse login state from {self._host}: {ex}"
            ) from ex

        if not challenge:
            raise StateFetchError(f"Device {self._host} did not return a challenge")

        try:
            block_time = int(block_time_text) if block_time_text else 0
        except ValueError as ex:
            raise StateFetchError(
                f"Device {self._host} returned an invalid block time "
                + f"{block_time_text!r}"
            ) from ex

        _LOGGER.debug(
            "Login state from %s: block time is %s seconds", self._host, block_time
        )
        return LoginState(challenge=challenge.strip(), block_time=block_time)

    async def wait_for_block_time(self, block_time: int) -> None:
        """Wait until the box accepts login attempts again."""
        if block_time <= 0:
            return

        _LOGGER.info("Waiting for %s seconds...", block_time)
        if self._on_lockout:
            self._on_lockout(block_time)
        await self._sleep(block_time)

    async def submit_response(self, username: str, response: str) -> str:
        """Submit the challenge response and return the SID from the box."""
        try:
            status, body = await self._http_client.post(
                self._login_url,
                data={"username": username, "response": response},
            )
        except FritzException as ex:
            raise SubmitError(
                f"Unable to submit login response to {self._host}: {ex}"
            ) from ex

        if status != 200:
            raise SubmitError(
                f"Device {self._host} responded with {status} to login response"
            )

        try:
            sid = get_element_text(body, "SID")
        except (ElementTree.ParseError, DefusedXmlException) as ex:
            raise SubmitError(
                f"Unable to parse login result from {self._host}: {ex}"
            ) from ex

        if not sid:
            raise SubmitError(f"Device {self._host} did not return a SID")

        return sid.strip()

    async def create_session(self, credentials: Credentials) -> str:
        """Log in and return a session id.

        Any failure is raised as :class:`LoginFailedError` with the original
        error as its cause.
        """
        try:
            state = await self.fetch_login_state()
            await self.wait_for_block_time(state.block_time)
            response = solve(state.challenge, credentials.password)

            sid = await self.submit_response(credentials.username, response)
            if sid == INVALID_SID:
                raise AuthenticationError("Wrong username or password")
        except FritzException as ex:
            raise LoginFailedError(f"Failed to login! {ex}", cause=ex) from ex

        _LOGGER.debug("Login to %s successful", self._host)
        return sid
