"""
Shared pytest fixtures.
"""

import io

import httpx
import pytest

from ionode.commands import CommandDispatcher, CommandParser, CommandRegistry
from ionode.config import ShellConfig
from ionode.shell import Shell


@pytest.fixture
def parser() -> CommandParser:
    return CommandParser()


@pytest.fixture
def registry() -> CommandRegistry:
    """A fresh, empty registry per test."""
    return CommandRegistry()


@pytest.fixture
def dispatcher(registry) -> CommandDispatcher:
    return CommandDispatcher(registry)


@pytest.fixture
def shell_config() -> ShellConfig:
    return ShellConfig(prompt="$ ")


@pytest.fixture
def shell(registry, shell_config) -> Shell:
    return Shell(registry=registry, config=shell_config, stdin=io.StringIO(), stdout=io.StringIO())


@pytest.fixture
def payload() -> bytes:
    return b"x" * 5000


@pytest.fixture
def mock_client(payload):
    """httpx client serving payload at /file and 404 everywhere else."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/file":
            return httpx.Response(
                200, stream=httpx.ByteStream(payload), headers={"Content-Length": str(len(payload))}
            )
        return httpx.Response(404, content=b"not found")

    client = httpx.Client(transport=httpx.MockTransport(handler))
    yield client
    client.close()
