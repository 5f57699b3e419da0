import logging
import sys

import discord
from discord import app_commands
from discord.ext import commands, tasks

from .cog import invite_url
from .config import ConfigError, Settings, load_settings
from .dispatcher import PROCESSING_FAILED, TranslationDispatcher
from .presence import build_activity
from .store import ReferenceStore
from .translation import DeepLTranslationService

logger = logging.getLogger(__name__)


class TranslatorBot(commands.Bot):
    def __init__(self, settings: Settings, translator=None, store=None):
        # Message Content Intent is required for the prefix command and the context menu
        # Enable it at: https://discord.com/developers/applications
        intents = discord.Intents.default()
        intents.message_content = True
        intents.messages = True
        super().__init__(command_prefix=commands.when_mentioned, intents=intents, help_command=None)

        self.settings = settings
        self.store = store if store is not None else ReferenceStore(ttl=settings.cache_ttl)
        if translator is None:
            translator = DeepLTranslationService(
                settings.deepl_api_key,
                use_free_api=settings.deepl_free_api,
                timeout=settings.translate_timeout,
            )
        self.dispatcher = TranslationDispatcher(self.store, translator, prefix=settings.prefix)
        self._synced = False
        self.tree.error(self.on_app_command_error)

    async def setup_hook(self):
        await self.load_extension("translator_bot.cog")
        self.sweep_references.change_interval(seconds=self.settings.sweep_interval)
        self.update_presence.change_interval(seconds=self.settings.presence_interval)
        self.sweep_references.start()
        self.update_presence.start()

    async def on_ready(self):
        logger.info(f"{self.user} has connected to Discord!")
        logger.info(f"Bot is in {len(self.guilds)} guilds")
        logger.info(f"Invite: {invite_url(self.user.id)}")

        await self.refresh_presence()

        # on_ready fires again after reconnects
        if self._synced:
            return
        try:
            synced = await self.tree.sync()
            self._synced = True
            logger.info(f"✅ Synced {len(synced)} application commands")
            for cmd in synced:
                logger.info(f"  - {cmd.name}")
        except discord.HTTPException as e:
            logger.error(f"❌ Failed to sync commands: {e}")

    async def refresh_presence(self):
        await self.change_presence(activity=build_activity(self.guilds), status=discord.Status.online)

    @tasks.loop(seconds=60)
    async def sweep_references(self):
        self.store.sweep()

    @tasks.loop(seconds=60)
    async def update_presence(self):
        try:
            await self.refresh_presence()
        except Exception as e:
            logger.warning(f"⚠️ Could not update presence: {e}")

    @update_presence.before_loop
    async def before_update_presence(self):
        await self.wait_until_ready()

    async def on_app_command_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        """Errors raised before a command handler gets to reply"""
        logger.error(f"❌ Command error: {error}", exc_info=error)
        try:
            if interaction.response.is_done():
                await interaction.edit_original_response(content=PROCESSING_FAILED)
            else:
                await interaction.response.send_message(PROCESSING_FAILED, ephemeral=True)
        except discord.HTTPException:
            logger.exception("❌ Error handling interaction error")

    async def close(self):
        self.sweep_references.cancel()
        self.update_presence.cancel()
        self.store.clear()
        await super().close()


def main():
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"❌ ERROR: {e}", file=sys.stderr)
        print("Please create a .env file with DISCORD_BOT_TOKEN and DEEPL_API_KEY", file=sys.stderr)
        sys.exit(1)

    bot = TranslatorBot(settings)
    bot.run(settings.discord_token, log_level=logging.getLevelName(settings.log_level), root_logger=True)


if __name__ == "__main__":
    main()
