import json

import httpx
import pytest

from holderscan.config import ScanConfig
from holderscan.fetch import OwnersPageSource
from holderscan.scanner import HolderScanner
from holderscan.state import StateStore


class FakeOwnersApi:
    """
    Serves canned bodies in order and records each request it receives.
    A body that is not a str is JSON-encoded; an int is returned as a bare status.
    """

    def __init__(self, *bodies):
        self.bodies = list(bodies)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.bodies:
            raise AssertionError(f"unexpected request: {request.url}")
        body = self.bodies.pop(0)
        if isinstance(body, int):
            return httpx.Response(body, text="error")
        if not isinstance(body, str):
            body = json.dumps(body)
        return httpx.Response(200, text=body)

    @property
    def page_keys(self):
        return [r.url.params.get("pageKey") for r in self.requests]


class SleepRecorder:
    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


@pytest.fixture
def config(tmp_path):
    return ScanConfig(api_key="test-key", data_dir=str(tmp_path / "data"))


@pytest.fixture
def store(config):
    return StateStore(config.state_path, config.holders_path)


@pytest.fixture
def sleep():
    return SleepRecorder()


@pytest.fixture
def run_scan(config, store, sleep):
    """Run one scan against the given canned pages; returns (summary, api)."""

    async def _run(api):
        transport = httpx.MockTransport(api)
        async with httpx.AsyncClient(transport=transport) as client:
            scanner = HolderScanner(config, store, OwnersPageSource(client, config), sleep=sleep)
            return await scanner.run()

    return _run
