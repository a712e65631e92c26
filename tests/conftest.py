import json

import httpx
import pytest

from core_dataapi import AsyncDataApiTransport, DataApiTransport, new_async_client, new_client

APP_ID = "data-abcde"
API_KEY = "secret-key"


class DataApiRecorder:
    """httpx.MockTransport handler that records requests and replays queued responses."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._replies: list = []

    def reply(self, status_code: int = 200, *, json_body=None, text: str | None = None) -> "DataApiRecorder":
        if text is not None:
            self._replies.append(httpx.Response(status_code, text=text))
        else:
            self._replies.append(httpx.Response(status_code, json=json_body if json_body is not None else {}))
        return self

    def raise_error(self, error_cls: type[httpx.TransportError]) -> "DataApiRecorder":
        self._replies.append(error_cls)
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self._replies.pop(0) if self._replies else httpx.Response(200, json={})
        if isinstance(reply, type):
            raise reply("simulated failure", request=request)
        return reply

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def recorder():
    return DataApiRecorder()


@pytest.fixture
def client(recorder):
    transport = DataApiTransport(httpx.Client(transport=httpx.MockTransport(recorder)))
    yield new_client(APP_ID, API_KEY, transport=transport)
    transport.close()


@pytest.fixture
def collection(client):
    return client.get_cluster("Cluster0").get_database("shop").get_collection("orders")


@pytest.fixture
def async_client(recorder):
    transport = AsyncDataApiTransport(httpx.AsyncClient(transport=httpx.MockTransport(recorder)))
    return new_async_client(APP_ID, API_KEY, transport=transport)


@pytest.fixture
def async_collection(async_client):
    return async_client.get_cluster("Cluster0").get_database("shop").get_collection("orders")
