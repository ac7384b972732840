import json

import httpx
import pytest

from inference_gateway.core.config import Settings
from inference_gateway.models.catalog import ModelCatalog
from inference_gateway.providers import ProviderManager, ProviderResponse
from inference_gateway.services.gateway import InferenceGateway


class FakeClock:
    """Monotonic clock that only moves when the gateway sleeps"""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeProvider:
    """Records calls and returns a canned ProviderResponse"""

    name = "fake"

    def __init__(self, response: ProviderResponse):
        self.response = response
        self.calls = []

    async def post_json(self, model_id, payload):
        self.calls.append({"kind": "json", "model_id": model_id, "payload": payload})
        return self.response

    async def post_bytes(self, model_id, data, content_type=None):
        self.calls.append(
            {"kind": "bytes", "model_id": model_id, "data": data, "content_type": content_type}
        )
        return self.response


class MockUpstream:
    """httpx.MockTransport handler that keeps every request it answered"""

    def __init__(self, handler):
        self.handler = handler
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def json_bodies(self):
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_provider():
    def _make(content=b"{}", content_type="application/json"):
        return FakeProvider(ProviderResponse(content=content, content_type=content_type))

    return _make


@pytest.fixture
def catalog():
    return ModelCatalog.load()


@pytest.fixture
def settings():
    return Settings(
        huggingface_api_key="hf-test-key",
        openrouter_api_key="or-test-key",
        log_level="DEBUG",
    )


@pytest.fixture
def make_gateway(catalog, settings, fake_clock):
    """Build a gateway whose providers talk to a mock upstream"""

    def _make(handler):
        upstream = MockUpstream(handler)
        client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
        gateway = InferenceGateway(
            catalog,
            ProviderManager(settings, client),
            clock=fake_clock,
            sleep=fake_clock.sleep,
        )
        return gateway, upstream

    return _make
