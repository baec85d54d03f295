"""Python interface for the AHA-HTTP interface of AVM FRITZ!Box routers.

Log in and run a single command::

>>> from fritzaha import Command, Credentials, DeviceConfig, FritzAha
>>> config = DeviceConfig(credentials=Credentials("user", "password"))
>>> async with FritzAha(config) as box:
>>>     print(await box.query(Command.create("getswitchlist")))

Errors are raised as subclasses of `FritzException`. Any failure during the
login is raised as `LoginFailedError` with the underlying error as `cause`.
"""

from fritzaha.challenge import ChallengeKind, LoginState, solve
from fritzaha.client import FritzAha
from fritzaha.command import (
    Command,
    CommandDispatcher,
    interpret_response,
    prepare_command,
)
from fritzaha.credentials import (
    CredentialManager,
    Credentials,
    CredentialStore,
    FileCredentialStore,
    MemoryCredentialStore,
)
from fritzaha.deviceconfig import DeviceConfig
from fritzaha.exceptions import (
    AuthenticationError,
    CommandError,
    FritzException,
    InvalidValueError,
    LoginError,
    LoginFailedError,
    MalformedChallengeError,
    MissingParameterError,
    StateFetchError,
    SubmitError,
    TimeoutError,
)
from fritzaha.session import INVALID_SID, SessionNegotiator
from fritzaha.temperature import to_device_format, to_human_format
from fritzaha.version import __version__

__all__ = [
    "__version__",
    "AuthenticationError",
    "ChallengeKind",
    "Command",
    "CommandDispatcher",
    "CommandError",
    "CredentialManager",
    "Credentials",
    "CredentialStore",
    "DeviceConfig",
    "FileCredentialStore",
    "FritzAha",
    "FritzException",
    "INVALID_SID",
    "InvalidValueError",
    "LoginError",
    "LoginFailedError",
    "LoginState",
    "MalformedChallengeError",
    "MemoryCredentialStore",
    "MissingParameterError",
    "SessionNegotiator",
    "StateFetchError",
    "SubmitError",
    "TimeoutError",
    "interpret_response",
    "prepare_command",
    "solve",
    "to_device_format",
    "to_human_format",
]
