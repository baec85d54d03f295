from __future__ import annotations

import aiohttp
import pytest

from fritzaha import Credentials, DeviceConfig

from .fakefritzbox import MOCK_PWD, MOCK_USER, MockFritzBox


@pytest.fixture
def credentials():
    return Credentials(MOCK_USER, MOCK_PWD)


@pytest.fixture
def config(credentials):
    return DeviceConfig(host="127.0.0.1", credentials=credentials)


@pytest.fixture
def mock_fritzbox(mocker):
    """Patch the aiohttp session to talk to a fake box.

    Tests adjust the returned box to simulate different responses.
    """
    box = MockFritzBox()
    mocker.patch.object(aiohttp.ClientSession, "get", side_effect=box.get)
    mocker.patch.object(aiohttp.ClientSession, "post", side_effect=box.post)
    return box


@pytest.fixture
def sleep_calls():
    return []


@pytest.fixture
def fake_sleep(sleep_calls):
    """Record requested waits instead of sleeping."""

    async def _sleep(seconds):
        sleep_calls.append(seconds)

    return _sleep
