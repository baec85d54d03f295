import asyncio
import re

import aiohttp
import pytest

from fritzaha.deviceconfig import DeviceConfig
from fritzaha.exceptions import (
    FritzException,
    TimeoutError,
    _ConnectionError,
)
from fritzaha.httpclient import HttpClient


@pytest.mark.parametrize(
    ("error", "error_raises", "error_message"),
    [
        (
            aiohttp.ServerDisconnectedError(),
            _ConnectionError,
            "Device connection error: ",
        ),
        (
            aiohttp.ClientOSError(),
            _ConnectionError,
            "Device connection error: ",
        ),
        (
            aiohttp.ServerTimeoutError(),
            TimeoutError,
            "Unable to query the device, timed out: ",
        ),
        (
            asyncio.TimeoutError(),
            TimeoutError,
            "Unable to query the device, timed out: ",
        ),
        (Exception(), FritzException, "Unable to query the device: "),
    ],
    ids=(
        "ServerDisconnectedError",
        "ClientOSError",
        "ServerTimeoutError",
        "TimeoutError",
        "Exception",
    ),
)
@pytest.mark.parametrize("mock_read", [False, True], ids=("get", "read"))
@pytest.mark.asyncio
async def test_httpclient_errors(mocker, error, error_raises, error_message, mock_read):
    class _mock_response:
        def __init__(self, status, error):
            self.status = status
            self.error = error
            self.call_count = 0

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_t, exc_v, exc_tb):
            pass

        async def read(self):
            self.call_count += 1
            raise self.error

    mock_response = _mock_response(200, error)

    async def _get(url, *_, **__):
        return mock_response

    host = "127.0.0.1"

    side_effect = _get if mock_read else error

    conn = mocker.patch.object(aiohttp.ClientSession, "get", side_effect=side_effect)
    client = HttpClient(DeviceConfig(host))
    full_msg = re.escape(f"{error_message}{host}: {error}")

    with pytest.raises(error_raises, match=error_message) as exc_info:
        await client.get("http://foobar")

    assert re.match(full_msg, exc_info.value.args[0])
    assert exc_info.value.args[1] is error
    if mock_read:
        assert mock_response.call_count == 1
    else:
        assert conn.call_count == 1
    await client.close()


@pytest.mark.asyncio
async def test_post_form_data(mock_fritzbox, config):
    client = HttpClient(config)

    status, text = await client.post(
        config.base_url.with_path("/login_sid.lua").with_query(version="2"),
        data={"username": "user", "response": "abc"},
    )

    assert status == 200
    assert "<SID>0000000000000000</SID>" in text
    assert mock_fritzbox.login_posts == [{"username": "user", "response": "abc"}]
    await client.close()


@pytest.mark.asyncio
async def test_non_200_is_returned(mock_fritzbox, config):
    client = HttpClient(config)

    status, text = await client.get(config.base_url.with_path("/unknown"))

    assert status == 404
    assert text == ""
    await client.close()


@pytest.mark.asyncio
async def test_invalid_utf8_is_replaced(mocker, config):
    class _mock_response:
        status = 200

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_t, exc_v, exc_tb):
            pass

        async def read(self):
            return b"caf\xe9"

    async def _get(url, *_, **__):
        return _mock_response()

    mocker.patch.object(aiohttp.ClientSession, "get", side_effect=_get)
    client = HttpClient(config)

    assert await client.get(config.base_url) == (200, "caf�")
    await client.close()


@pytest.mark.asyncio
async def test_uses_configured_session(mock_fritzbox, config):
    session = aiohttp.ClientSession()
    config.http_client = session
    client = HttpClient(config)

    assert client.client is session
    await client.close()
    assert not session.closed
    await session.close()
