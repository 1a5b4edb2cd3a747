import os
from collections.abc import Iterator
from types import SimpleNamespace
from typing import Any
from unittest.mock import patch

import pytest

from waff_client.client import WaffClient
from waff_client.settings.main import ServiceSettings
from waff_client.utilities.request import ServiceRequest

# Keep unit tests independent from a developer's real credentials.
TEST_ENV_DEFAULTS = {
    "WAFF_WSDL_URL": "https://waff.test/Version1_2.asmx?WSDL",
    "WAFF_USERNAME": "",
    "WAFF_PASSWORD": "",
}

for env_key, env_value in TEST_ENV_DEFAULTS.items():
    os.environ[env_key] = env_value

TEST_TOKEN = "token-123"


def envelope(operation: str, value: Any = None, code: int = 0, message: str = "") -> dict[str, Any]:
    """Reply shaped like the service's single-field response wrapper."""
    return {f"{operation}Result": {"ResultCode": code, "ErrorMessage": message, "ReturnValue": value}}


class FakeService:
    """Stand-in for ``zeep.Client.service`` that records calls in order.

    Replies are queued per operation; the last queued reply repeats.
    Operations without a queued reply succeed with ``ReturnValue`` None.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.replies: dict[str, list[Any]] = {"Login": [envelope("Login", TEST_TOKEN)]}

    def reply(self, operation: str, value: Any = None, code: int = 0, message: str = "") -> "FakeService":
        self.replies.setdefault(operation, []).append(envelope(operation, value, code, message))
        return self

    def raise_on(self, operation: str, exc: Exception) -> "FakeService":
        self.replies.setdefault(operation, []).append(exc)
        return self

    def reset(self, operation: str) -> None:
        self.replies.pop(operation, None)

    def operations(self) -> list[str]:
        return [name for name, _ in self.calls]

    def __getattr__(self, operation: str) -> Any:
        if operation.startswith("_"):
            raise AttributeError(operation)

        def method(**params: Any) -> Any:
            self.calls.append((operation, params))
            queue = self.replies.get(operation)
            if not queue:
                return envelope(operation)
            reply = queue.pop(0) if len(queue) > 1 else queue[0]
            if isinstance(reply, Exception):
                raise reply
            return reply

        method.__name__ = operation
        return method


@pytest.fixture
def fake_service() -> FakeService:
    return FakeService()


@pytest.fixture
def settings() -> ServiceSettings:
    return ServiceSettings(wsdl_url="https://waff.test/Version1_2.asmx?WSDL", username="", password="")


@pytest.fixture
def soap_patch(fake_service: FakeService) -> Iterator[Any]:
    """Patch zeep so creating a client returns the fake service."""
    with patch("waff_client.utilities.request.zeep.Client") as mock_client, \
            patch("waff_client.utilities.request.Transport"):
        mock_client.return_value = SimpleNamespace(service=fake_service)
        yield mock_client


@pytest.fixture
def client(soap_patch: Any, fake_service: FakeService, settings: ServiceSettings) -> WaffClient:
    """Logged-in client with the Login call already cleared from the log."""
    waff = WaffClient("user", "secret", settings=settings, request=ServiceRequest(timeout=5))
    fake_service.calls.clear()
    return waff
