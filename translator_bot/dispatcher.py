import logging
from typing import Optional, Tuple

import discord

from .languages import LANGUAGES, get_language, normalize_code
from .responder import InteractionResponder
from .selection import LanguageSelection, SelectionAction
from .store import ReferenceStore
from .translation import TranslationError

logger = logging.getLogger(__name__)

PICKER_PROMPT = "Choose a language to translate to:"
ACCESS_DENIED = "❌ I cannot access the message content. This might happen if the message is too old."
SESSION_EXPIRED = "❌ Translation session expired. Please try translating the message again."
TRANSLATION_FAILED = "❌ Sorry, there was an error translating the message."
PREFIX_TRANSLATION_FAILED = (
    "❌ Sorry, there was an error translating your message. Please check the language code and try again."
)
PROCESSING_FAILED = "❌ Sorry, there was an error processing your request."


def format_translation(code: str, text: str, separator: str = "\n") -> str:
    return f"Translation ({code}):{separator}{text}"


def usage_hint(prefix: str) -> str:
    return f"Usage: {prefix} [language_code] [text]\nExample: {prefix} FR Hello, how are you?"


def parse_prefix_command(content: str, prefix: str) -> Optional[Tuple[str, str]]:
    """Split ``<prefix> <language> <text...>`` into (language, text).

    Returns None when ``content`` is not a prefix command at all. Either
    element of the tuple may be empty when the user left it out.
    """
    if not content or not content.startswith(prefix):
        return None
    rest = content[len(prefix):]
    # "!translatefoo" is a different word, not this command
    if rest and not rest[0].isspace():
        return None
    parts = rest.strip().split(maxsplit=1)
    language = parts[0] if parts else ""
    text = parts[1].strip() if len(parts) > 1 else ""
    return language, text


def build_language_picker(key: str, timeout: Optional[float] = None) -> discord.ui.View:
    view = discord.ui.View(timeout=timeout)
    for lang in LANGUAGES:
        selection = LanguageSelection(SelectionAction.TRANSLATE, lang.code, key)
        # View lays buttons out five to a row
        view.add_item(
            discord.ui.Button(label=lang.label, style=discord.ButtonStyle.primary, custom_id=selection.encode())
        )
    return view


class TranslationDispatcher:
    """Routes every inbound translation surface to the translator and renders one reply"""

    def __init__(self, store: ReferenceStore, translator, prefix: str = "!translate"):
        self.store = store
        self.translator = translator
        self.prefix = prefix

    async def _translate(self, text: str, code: str) -> Optional[str]:
        try:
            return await self.translator.translate(text, code)
        except TranslationError as e:
            logger.error(f"❌ Translation error ({code}): {e.detail}")
            return None

    async def _guard(self, responder: InteractionResponder, coro):
        try:
            await coro
        except Exception:
            logger.exception("❌ Interaction error")
            await responder.fail(PROCESSING_FAILED)

    # Slash command

    async def handle_translate_command(self, interaction: discord.Interaction, language: str, text: str):
        responder = InteractionResponder(interaction)
        await self._guard(responder, self._translate_command(responder, language, text))
        return responder

    async def _translate_command(self, responder, language, text):
        lang = get_language(language)
        if lang is None:
            codes = ", ".join(l.code for l in LANGUAGES)
            await responder.send(f"❌ Invalid language: `{language}`. Choose one of: {codes}")
            return
        if not text or not text.strip():
            await responder.send("❌ Please provide some text to translate.")
            return

        await responder.defer()
        translated = await self._translate(text, lang.code)
        if translated is None:
            await responder.edit(TRANSLATION_FAILED)
        else:
            await responder.edit(format_translation(lang.code, translated))

    # Message context menu

    async def handle_translate_message(self, interaction: discord.Interaction, message: discord.Message):
        responder = InteractionResponder(interaction)
        await self._guard(responder, self._translate_message(responder, message))
        return responder

    async def _translate_message(self, responder, message):
        content = getattr(message, "content", None)
        if not content:
            await responder.send(ACCESS_DENIED)
            return
        key = self.store.put(content)
        # discord.py forgets the view when the reference would expire
        await responder.send(PICKER_PROMPT, view=build_language_picker(key, timeout=self.store.ttl))

    # Picker buttons

    async def handle_component(self, interaction: discord.Interaction) -> Optional[InteractionResponder]:
        """Handle a picker button click; other components are left alone"""
        data = interaction.data or {}
        selection = LanguageSelection.decode(data.get("custom_id"))
        if selection is None:
            return None
        responder = InteractionResponder(interaction)
        await self._guard(responder, self._translate_selection(responder, selection))
        return responder

    async def _translate_selection(self, responder, selection: LanguageSelection):
        await responder.defer()
        # Taking the entry consumes it whether or not the translation works
        payload = self.store.take(selection.key)
        if payload is None:
            await responder.edit(SESSION_EXPIRED)
            return
        translated = await self._translate(payload, selection.language)
        if translated is None:
            await responder.edit(TRANSLATION_FAILED)
        else:
            await responder.edit(format_translation(selection.language, translated))

    # Legacy text command

    async def handle_prefix_message(self, message: discord.Message) -> bool:
        """Answer a legacy prefix command; returns False when ``message`` is not one"""
        if message.author.bot:
            return False
        parsed = parse_prefix_command(message.content, self.prefix)
        if parsed is None:
            return False

        language, text = parsed
        try:
            content = await self._prefix_reply(language, text)
        except Exception:
            logger.exception("❌ Prefix command error")
            content = PROCESSING_FAILED

        try:
            await message.reply(content)
        except Exception:
            logger.exception("❌ Could not reply to prefix command")
        return True

    async def _prefix_reply(self, language: str, text: str) -> str:
        if not language or not text:
            return usage_hint(self.prefix)
        # Any code the translator accepts is allowed here, not just LANGUAGES
        code = normalize_code(language)
        translated = await self._translate(text, code)
        if translated is None:
            return PREFIX_TRANSLATION_FAILED
        return format_translation(code, translated, separator=" ")
