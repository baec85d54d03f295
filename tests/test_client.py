import aiohttp
import pytest

from fritzaha import Command, Credentials, DeviceConfig, FritzAha
from fritzaha.exceptions import (
    AuthenticationError,
    FritzException,
    LoginFailedError,
    MissingParameterError,
)

from .fakefritzbox import MOCK_PWD, MOCK_SID, MOCK_USER


@pytest.mark.asyncio
async def test_set_temperature(mock_fritzbox, config, fake_sleep):
    mock_fritzbox.command_response = "38\n"
    command = Command.create("sethkrtsoll", ain="087610000434", param="19.5")

    async with FritzAha(config, sleep=fake_sleep) as box:
        response = await box.query(command)

    assert response == "Response: Heater set to 19°C"
    assert mock_fritzbox.commands == [
        [
            ("sid", MOCK_SID),
            ("switchcmd", "sethkrtsoll"),
            ("ain", "087610000434"),
            ("param", "39"),
        ]
    ]


@pytest.mark.asyncio
async def test_raw_device_format(mock_fritzbox, config):
    config.use_celsius = False
    mock_fritzbox.command_response = "38\n"
    command = Command.create("sethkrtsoll", ain="087610000434", param="38")

    async with FritzAha(config) as box:
        response = await box.query(command)

    assert response == "Response: 38\n"
    assert mock_fritzbox.commands[0][-1] == ("param", "38")


@pytest.mark.asyncio
async def test_query_passes_through_other_commands(mock_fritzbox, config):
    mock_fritzbox.command_response = "087610000434,087610000435\n"

    async with FritzAha(config) as box:
        response = await box.query(Command.create("getswitchlist"))

    assert response == "Response: 087610000434,087610000435\n"


@pytest.mark.asyncio
async def test_new_session_per_query(mock_fritzbox, config):
    async with FritzAha(config) as box:
        await box.query(Command.create("getswitchlist"))
        await box.query(Command.create("getswitchlist"))

    assert len(mock_fritzbox.login_posts) == 2
    assert len(mock_fritzbox.commands) == 2


@pytest.mark.asyncio
async def test_credentials_argument_overrides_config(mock_fritzbox):
    config = DeviceConfig(
        host="127.0.0.1", credentials=Credentials(MOCK_USER, "wrong")
    )

    async with FritzAha(config) as box:
        assert await box.login(Credentials(MOCK_USER, MOCK_PWD)) == MOCK_SID
        with pytest.raises(LoginFailedError):
            await box.login()


@pytest.mark.asyncio
async def test_login_without_credentials(mock_fritzbox):
    async with FritzAha(DeviceConfig(host="127.0.0.1")) as box:
        with pytest.raises(FritzException, match="No credentials"):
            await box.login()

    assert mock_fritzbox.login_posts == []


@pytest.mark.asyncio
async def test_missing_temperature_before_network(mock_fritzbox, config):
    async with FritzAha(config) as box:
        with pytest.raises(MissingParameterError):
            await box.query(Command.create("sethkrtsoll", ain="087610000434"))

    assert mock_fritzbox.login_posts == []
    assert mock_fritzbox.commands == []


@pytest.mark.asyncio
async def test_failed_login_sends_no_command(mock_fritzbox, config):
    mock_fritzbox.password = "other"

    async with FritzAha(config) as box:
        with pytest.raises(LoginFailedError) as ex:
            await box.query(Command.create("getswitchlist"))

    assert isinstance(ex.value.cause, AuthenticationError)
    assert mock_fritzbox.commands == []


@pytest.mark.asyncio
async def test_close_keeps_shared_session(mock_fritzbox, config):
    session = aiohttp.ClientSession()
    config.http_client = session

    async with FritzAha(config) as box:
        await box.query(Command.create("getswitchlist"))

    assert not session.closed
    await session.close()


@pytest.mark.asyncio
async def test_close_owned_session(mock_fritzbox, config):
    box = FritzAha(config)
    await box.query(Command.create("getswitchlist"))
    session = box._http_client.client

    await box.close()

    assert session.closed
    await box.close()


def test_repr(config):
    assert repr(FritzAha(config)) == "<FritzAha at 127.0.0.1>"
