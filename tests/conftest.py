"""Shared fixtures: throwaway RSA keys, key files and a scripted HTTP session."""

import json

import pytest
import requests
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

SERVICE_ACCOUNT_EMAIL = "svc@example.iam.gserviceaccount.com"


class FakeSession(requests.Session):
    """Session that replays canned responses instead of hitting the network."""

    def __init__(self, *responses):
        super().__init__()
        self.responses = list(responses)
        self.sent = []

    def send(self, request, **kwargs):
        self.sent.append((request, kwargs))
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def make_response(body, status_code=200):
    response = requests.Response()
    response.status_code = status_code
    text = body if isinstance(body, str) else json.dumps(body)
    response._content = text.encode("utf-8")
    response.encoding = "utf-8"
    return response


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_pem(rsa_key):
    return rsa_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture
def key_data(private_pem):
    return {
        "type": "service_account",
        "project_id": "example",
        "private_key_id": "0123456789abcdef",
        "private_key": private_pem,
        "client_email": SERVICE_ACCOUNT_EMAIL,
        "client_id": "1234567890",
        "auth_uri": "https://accounts.google.com/o/oauth2/auth",
        "token_uri": "https://oauth2.googleapis.com/token",
    }


@pytest.fixture
def key_file(tmp_path, key_data):
    path = tmp_path / "sa-key.json"
    path.write_text(json.dumps(key_data))
    return path


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def response():
    return make_response


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "SATOKEN_CONFIG",
        "SATOKEN_TOKEN_ENDPOINT",
        "SATOKEN_INTROSPECT_ENDPOINT",
        "SATOKEN_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
