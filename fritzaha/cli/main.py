"""Main module for cli tool."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import asyncclick as click
from rich.logging import RichHandler
from rich.markup import escape
from yarl import URL

from fritzaha.client import FritzAha
from fritzaha.command import AIN_KEY, PARAM_KEY, VERB_KEY, Command
from fritzaha.credentials import (
    DEFAULT_STORE_KEY,
    CredentialManager,
    Credentials,
    FileCredentialStore,
)
from fritzaha.deviceconfig import DeviceConfig

from .common import CatchAllExceptions, echo, error, parse_key_value_pairs

APP_NAME = "fritzaha"
CREDENTIALS_FILE = "credentials.json"
# Added by the Scriptable url scheme, not a command parameter
SCRIPT_NAME_KEY = "scriptName"


@dataclass
class CliState:
    """State shared between the cli group and its commands."""

    config: DeviceConfig
    credential_manager: CredentialManager
    credentials: Credentials | None = None


pass_state = click.make_pass_decorator(CliState)


def default_credentials_file() -> Path:
    """Return the default location of the credentials file."""
    return Path(click.get_app_dir(APP_NAME)) / CREDENTIALS_FILE


@click.group(cls=CatchAllExceptions(click.Group))
@click.option(
    "--host",
    envvar="FRITZ_HOST",
    default=DeviceConfig.DEFAULT_HOST,
    show_default=True,
    help="The host name or IP address of the FRITZ!Box.",
)
@click.option(
    "--port",
    envvar="FRITZ_PORT",
    required=False,
    type=int,
    help="The http port of the FRITZ!Box.",
)
@click.option(
    "--timeout",
    envvar="FRITZ_TIMEOUT",
    default=DeviceConfig.DEFAULT_TIMEOUT,
    type=int,
    show_default=True,
    help="Timeout for device communications.",
)
@click.option(
    "--username",
    default=None,
    required=False,
    envvar="FRITZ_USERNAME",
    help="Username to authenticate to the FRITZ!Box.",
)
@click.option(
    "--password",
    default=None,
    required=False,
    envvar="FRITZ_PASSWORD",
    help="Password to authenticate to the FRITZ!Box.",
)
@click.option(
    "--celsius/--no-celsius",
    envvar="FRITZ_CELSIUS",
    default=True,
    show_default=True,
    help="Use Celsius and ON/OFF instead of the device temperature format.",
)
@click.option(
    "--remember/--no-remember",
    envvar="FRITZ_REMEMBER",
    default=True,
    show_default=True,
    help="Remember credentials between runs. --no-remember deletes them.",
)
@click.option(
    "--credentials-file",
    envvar="FRITZ_CREDENTIALS_FILE",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="File used to remember credentials.",
)
@click.option(
    "-d",
    "--debug",
    envvar="FRITZ_DEBUG",
    default=False,
    is_flag=True,
    help="Print debug output",
)
@click.version_option(package_name="python-fritzaha")
@click.pass_context
async def cli(
    ctx,
    host,
    port,
    timeout,
    username,
    password,
    celsius,
    remember,
    credentials_file,
    debug,
):
    """A tool for sending AHA commands to a FRITZ!Box."""
    # no need to perform any checks if we are just displaying the help
    if "--help" in sys.argv:
        # Context object is required to avoid crashing on sub-groups
        ctx.obj = object()
        return

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(show_time=False)],
    )

    if username and password is None:
        raise click.BadOptionUsage(
            "username", "Using --username requires --password as well"
        )

    credentials = None
    if password is not None:
        credentials = Credentials(username=username or "", password=password)

    store = FileCredentialStore(credentials_file or default_credentials_file())
    ctx.obj = CliState(
        config=DeviceConfig(
            host=host, port_override=port, timeout=timeout, use_celsius=celsius
        ),
        credential_manager=CredentialManager(
            store, DEFAULT_STORE_KEY, remember=remember
        ),
        credentials=credentials,
    )


async def _prompt_credentials() -> Credentials:
    username = await click.prompt("Username", default="", show_default=False)
    password = await click.prompt("Password", hide_input=True)
    return Credentials(username=username, password=password)


async def get_credentials(state: CliState) -> Credentials:
    """Return credentials from the options, the store or a prompt."""
    if state.credentials is not None:
        return state.credentials
    if remembered := state.credential_manager.get_credentials():
        return remembered
    return await _prompt_credentials()


async def _confirm_remember() -> bool:
    try:
        return click.confirm(
            "Do you want to remember your FRITZ!Box credentials?", default=False
        )
    except click.Abort:
        # No input available, e.g. when run from a script
        echo()
        return False


async def run_command(state: CliState, command: Command) -> str:
    """Log in, run the command and print the response.

    The response is printed before asking to remember the credentials.
    """
    credentials = await get_credentials(state)

    def _on_lockout(seconds: int) -> None:
        echo(f"Waiting for {seconds} seconds...")

    async with FritzAha(state.config, on_lockout=_on_lockout) as box:
        response = await box.query(command, credentials)

    echo(escape(response))

    await state.credential_manager.update_stored(credentials, _confirm_remember)
    return response


@cli.command(name="command")
@click.argument("switchcmd")
@click.option("--ain", default=None, help="Actor identification number.")
@click.option("--param", default=None, help="Parameter of the command.")
@click.argument("parameters", nargs=-1)
@pass_state
async def cmd_command(state: CliState, switchcmd, ain, param, parameters):
    """Run an AHA command, extra parameters are given as key=value."""
    args: dict[str, Any] = {VERB_KEY: switchcmd}
    if ain is not None:
        args[AIN_KEY] = ain
    if param is not None:
        args[PARAM_KEY] = param
    args.update(parse_key_value_pairs(parameters))
    return await run_command(state, Command.from_args(args))


@cli.command(name="url")
@click.argument("url")
@pass_state
async def url_command(state: CliState, url):
    """Run the command given as query parameters of an url.

    Accepts urls like scriptable:///run?scriptName=Fritz&switchcmd=..&ain=..
    """
    args: dict[str, Any] = {
        key: value
        for key, value in URL(url).query.items()
        if key != SCRIPT_NAME_KEY
    }
    if not args:
        error("No start arguments were passed in the url")
    if VERB_KEY not in args:
        error(f"The url does not contain a {VERB_KEY} parameter")

    return await run_command(state, Command.from_args(args))


@cli.command()
@pass_state
async def forget(state: CliState):
    """Delete remembered credentials."""
    if state.credential_manager.delete():
        echo("Removed remembered credentials")
    else:
        error("Unable to remove remembered credentials")
