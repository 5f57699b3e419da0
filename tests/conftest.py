"""
Shared fixtures for the translator bot tests.
"""
from unittest.mock import AsyncMock, MagicMock

import pytest

from translator_bot.config import Settings
from translator_bot.dispatcher import TranslationDispatcher
from translator_bot.store import ReferenceStore
from translator_bot.translation import TranslationError


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class StubTranslator:
    """Records every call; returns mapped text or raises when told to"""

    def __init__(self, mapping=None, error=None):
        self.mapping = mapping or {}
        self.error = error
        self.calls = []

    async def translate(self, text, target_language):
        self.calls.append((text, target_language))
        if self.error is not None:
            raise self.error
        return self.mapping.get(text, f"<{target_language}> {text}")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return ReferenceStore(ttl=300, clock=clock)


@pytest.fixture
def translator():
    return StubTranslator({"Hello": "Bonjour", "Hi": "Hallo"})


@pytest.fixture
def failing_translator():
    return StubTranslator(error=TranslationError("FR", "quota exceeded"))


@pytest.fixture
def dispatcher(store, translator):
    return TranslationDispatcher(store, translator, prefix="!translate")


@pytest.fixture
def settings():
    return Settings(discord_token="test_token", deepl_api_key="test_key:fx")


def make_interaction(custom_id=None):
    """Mock discord.Interaction with the reply surface the bot uses"""
    interaction = MagicMock()
    interaction.response.send_message = AsyncMock()
    interaction.response.defer = AsyncMock()
    interaction.edit_original_response = AsyncMock()
    interaction.data = {"custom_id": custom_id} if custom_id is not None else {}
    return interaction


def make_message(content, bot_author=False):
    message = MagicMock()
    message.content = content
    message.author.bot = bot_author
    message.reply = AsyncMock()
    return message


def final_replies(interaction):
    """Number of user-visible final replies an interaction received"""
    return interaction.response.send_message.await_count + interaction.edit_original_response.await_count


def last_content(interaction):
    if interaction.edit_original_response.await_count:
        return interaction.edit_original_response.await_args.kwargs["content"]
    return interaction.response.send_message.await_args.args[0]
