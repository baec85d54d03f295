"""Configuration for connecting to a FRITZ!Box.

>>> from fritzaha import Command, Credentials, DeviceConfig, FritzAha
>>> config = DeviceConfig(
>>>     host="192.168.178.1",
>>>     credentials=Credentials("fritz1234", "great_password"),
>>> )
>>> async with FritzAha(config) as box:
>>>     print(await box.query(Command.create("gettemperature", ain="087610000434")))
Response: Heater set to 21.5°C

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from aiohttp import ClientSession
from yarl import URL

from .credentials import Credentials

_LOGGER = logging.getLogger(__name__)


@dataclass
class DeviceConfig:
    """Class to represent parameters that determine how to connect to the box."""

    DEFAULT_HOST = "fritz.box"
    DEFAULT_TIMEOUT = 10
    #: IP address or hostname
    host: str = DEFAULT_HOST
    #: Timeout for querying the device
    timeout: int | None = DEFAULT_TIMEOUT
    #: Override the default http port to support port forwarding
    port_override: int | None = None
    #: Credentials used for the login handshake
    credentials: Credentials | None = None
    #: Accept and return Celsius / "ON" / "OFF" instead of the device format
    use_celsius: bool = True

    # compare=False will be excluded from object comparison.
    #: Set a custom http_client for the device to use.
    http_client: ClientSession | None = field(default=None, compare=False)

    @property
    def base_url(self) -> URL:
        """Return the root url of the box."""
        return URL.build(scheme="http", host=self.host, port=self.port_override)
