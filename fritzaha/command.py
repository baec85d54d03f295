"""Commands for the AHA-HTTP interface.

A command is the set of query parameters documented by AVM without the
``sid``, e.g. ``{"switchcmd": "sethkrtsoll", "ain": "087610000434",
"param": "19.5"}``. Parameters are sent in the order given.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from yarl import URL

from .deviceconfig import DeviceConfig
from .exceptions import CommandError, FritzException, MissingParameterError
from .httpclient import HttpClient
from .temperature import to_device_format, to_human_format

_LOGGER = logging.getLogger(__name__)

COMMAND_PATH = "/webservices/homeautoswitch.lua"

VERB_KEY = "switchcmd"
AIN_KEY = "ain"
PARAM_KEY = "param"

SET_TARGET_TEMPERATURE = "sethkrtsoll"
TEMPERATURE_VERBS = frozenset(
    {
        "gettemperature",
        SET_TARGET_TEMPERATURE,
        "gethkrtsoll",
        "gethkrkomfort",
        "gethkrabsenk",
    }
)

RESPONSE_LABEL = "Response: "
TEMPERATURE_LABEL = "Heater set to "
CELSIUS_UNIT = "°C"


@dataclass
class Command:
    """Ordered query parameters of a single AHA command."""

    params: dict[str, str] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        switchcmd: str,
        *,
        ain: str | None = None,
        param: Any = None,
        **extra: Any,
    ) -> Command:
        """Create a command from a verb and its parameters."""
        params: dict[str, Any] = {VERB_KEY: switchcmd}
        if ain is not None:
            params[AIN_KEY] = ain
        if param is not None:
            params[PARAM_KEY] = param
        params.update(extra)
        return cls.from_args(params)

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> Command:
        """Create a command from a mapping, keeping its order."""
        return cls({str(key): str(value) for key, value in args.items()})

    @property
    def verb(self) -> str | None:
        """Return the switchcmd of the command."""
        return self.params.get(VERB_KEY)

    @property
    def ain(self) -> str | None:
        """Return the actor identification number."""
        return self.params.get(AIN_KEY)

    @property
    def param(self) -> str | None:
        """Return the param value."""
        return self.params.get(PARAM_KEY)

    def with_param(self, value: Any) -> Command:
        """Return a copy of the command with param replaced."""
        params = dict(self.params)
        params[PARAM_KEY] = str(value)
        return Command(params)


def prepare_command(command: Command, use_celsius: bool) -> Command:
    """Convert command arguments given in Celsius to the device format.

    Only the target temperature of ``sethkrtsoll`` is converted.
    """
    if command.verb != SET_TARGET_TEMPERATURE or not use_celsius:
        return command

    if command.param is None:
        raise MissingParameterError("No temperature was passed for sethkrtsoll")

    return command.with_param(to_device_format(command.param))


def _format_temperature(value: float | str) -> str:
    if isinstance(value, str):
        return value
    text = f"{value:.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    return text + CELSIUS_UNIT


def interpret_response(response: str, verb: str | None, use_celsius: bool) -> str:
    """Format the raw response of a command for display."""
    if verb in TEMPERATURE_VERBS and use_celsius:
        response = TEMPERATURE_LABEL + _format_temperature(to_human_format(response))

    return RESPONSE_LABEL + response


class CommandDispatcher:
    """Send commands authenticated with a session id."""

    def __init__(self, http_client: HttpClient, config: DeviceConfig) -> None:
        self._http_client = http_client
        self._host = config.host
        self._command_url = config.base_url.with_path(COMMAND_PATH)

    @property
    def command_url(self) -> URL:
        """Return the url of the command endpoint."""
        return self._command_url

    async def execute(self, sid: str, command: Command) -> str:
        """Send the command and return the response text unmodified."""
        params = [("sid", sid), *command.params.items()]
        _LOGGER.debug("%s >> %s", self._host, command)

        try:
            status, response = await self._http_client.get(
                self._command_url, params=params
            )
        except FritzException as ex:
            raise CommandError(f"Failed to send command! {ex}") from ex

        if status != 200:
            raise CommandError(
                f"Failed to send command! Device {self._host} responded with {status}"
            )

        _LOGGER.debug("%s << %s", self._host, response)
        return response
