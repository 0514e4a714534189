import asyncio

import pytest

from storage.memory_repository import InMemoryRepository


class FakeProvider:
    def __init__(self, response_text: str):
        self._response_text = response_text
        self.calls = []

    def generate(self, *, system: str, user: str) -> str:
        self.calls.append((system, user))
        return self._response_text


class FailingProvider:
    def __init__(self, exc: Exception):
        self._exc = exc

    def generate(self, *, system: str, user: str) -> str:
        raise self._exc


@pytest.fixture
def fake_provider_factory():
    def _make(response_text: str):
        return FakeProvider(response_text)
    return _make


@pytest.fixture
def failing_provider_factory():
    def _make(exc: Exception):
        return FailingProvider(exc)
    return _make


@pytest.fixture
def repository():
    return InMemoryRepository()


@pytest.fixture
def run():
    """Drive a coroutine to completion from a sync test."""
    return asyncio.run
