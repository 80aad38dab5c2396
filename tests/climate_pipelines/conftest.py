"""Shared fixtures for pipeline tests."""
import pytest
import requests


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, payload=None, status_code=200):
        self._payload = payload
        self.status_code = status_code

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Records GET calls and answers them from a queue of responses."""

    def __init__(self, *responses):
        self.headers = {}
        self.calls = []
        self._responses = list(responses)

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        response = self._responses.pop(0)
        if isinstance(response, requests.RequestException):
            raise response
        return response


@pytest.fixture
def fake_session():
    def _make(*responses):
        return FakeSession(*responses)
    return _make


@pytest.fixture
def fake_response():
    return FakeResponse
