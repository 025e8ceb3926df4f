# Copyright (c) 2026 Beijing Volcano Engine Technology Co., Ltd.
# SPDX-License-Identifier: Apache-2.0

import json

import pytest

from dmquery.filters import ViewRef
from dmquery.transport import Transport, TransportResponse

PROJECT = "test-project"


class _FakeTransport(Transport):
    """Records every call and replays queued responses in order."""

    def __init__(self, responses=None):
        self.calls = []
        self._responses = list(responses or [])
        self.closed = False

    def queue(self, payload, status_code=200):
        text = payload if isinstance(payload, str) else json.dumps(payload)
        self._responses.append(TransportResponse(status_code=status_code, text=text))

    async def send(self, method, path, body, token):
        self.calls.append({"method": method, "path": path, "body": body, "token": token})
        if not self._responses:
            return TransportResponse(status_code=200, text="{}")
        return self._responses.pop(0)

    async def close(self):
        self.closed = True


class _FakeTokenProvider:
    def __init__(self, token="test-token"):
        self.token = token
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        return self.token


@pytest.fixture
def transport():
    return _FakeTransport()


@pytest.fixture
def token_provider():
    return _FakeTokenProvider()


@pytest.fixture
def view():
    return ViewRef("my-space", "Pump", "v1")


@pytest.fixture
def project():
    return PROJECT
