import pytest
from fastapi.testclient import TestClient

from linequeue.api.main import get_app
from linequeue.store import QueueStore


@pytest.fixture(scope="function")
def store() -> QueueStore:
    return QueueStore()


@pytest.fixture(scope="function")
def client(store) -> TestClient:
    return TestClient(get_app(store))
