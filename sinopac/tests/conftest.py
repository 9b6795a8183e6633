from unittest import mock

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from sinopac.config import GatewaySettings


@pytest.fixture
def gateway_settings():
    return GatewaySettings(
        account="NA0001_001",
        secrets=("key-data-one", "key-data-two", "key-data-three"),
        mode="test",
        confirmation_url="https://sandbox.sinopac.com/confirm",
        max_retries=10,
        retry_backoff=1,
    )


def make_response(status_code=200, text="", headers=None):
    response = mock.Mock(spec=requests.Response)
    response.status_code = status_code
    response.text = text
    response.headers = CaseInsensitiveDict(headers or {})
    return response


def challenge_response(nonce="nonce-1", status_code=401):
    return make_response(
        status_code=status_code,
        text="Unauthorized",
        headers={"WWW-Authenticate": f'Digest realm="SinoPacWebAPI", nonce="{nonce}", qop="auth"'},
    )


@pytest.fixture(name="make_response")
def make_response_fixture():
    return make_response


@pytest.fixture(name="challenge_response")
def challenge_response_fixture():
    return challenge_response
