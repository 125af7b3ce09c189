"""Pytest configuration and fixtures."""

import asyncio
import json
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest


def chat_reply(content):
    """Wrap content the way the chat-completions endpoint does."""
    return {"choices": [{"message": {"content": content}}]}


def json_reply(data):
    """Chat reply whose content is a JSON-encoded object."""
    return chat_reply(json.dumps(data))


class FakeFetch:
    """
    Scripted stand-in for the HTTP fetch primitive.

    Each call consumes the next scripted item; the last item repeats once the
    script runs out. Exceptions are raised, awaitables are awaited, anything
    else is returned as the decoded JSON body.
    """

    def __init__(self, *script):
        self.script = list(script)
        self.calls = []

    async def __call__(self, url, payload):
        self.calls.append((url, payload))
        item = self.script.pop(0) if len(self.script) > 1 else self.script[0]
        if isinstance(item, BaseException):
            raise item
        if callable(item):
            return await item()
        return item

    @property
    def call_count(self):
        return len(self.calls)

    @property
    def last_payload(self):
        return self.calls[-1][1]


async def hang():
    """Never answers within any test timeout."""
    await asyncio.sleep(10)
    return chat_reply("too late")


@pytest.fixture
def config():
    """Default translator configuration pointed at a dummy endpoint."""
    from mangatran.utils.config_loader import TranslatorConfig
    return TranslatorConfig(base_url="http://translator.test")


@pytest.fixture
def fast_timeout_config():
    """Configuration whose per-attempt timeout expires almost immediately."""
    from mangatran.utils.config_loader import TranslatorConfig
    return TranslatorConfig(base_url="http://translator.test", timeout=0.05)


@pytest.fixture
def sample_image_data():
    """Tiny base64 payload standing in for a manga page."""
    return "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
