import logging

import discord
from discord import app_commands
from discord.ext import commands

from .config import Settings
from .dispatcher import TranslationDispatcher
from .languages import LANGUAGES

logger = logging.getLogger(__name__)

INVITE_PERMISSIONS = 274878221312


def invite_url(client_id: int) -> str:
    return (
        f"https://discord.com/api/oauth2/authorize?client_id={client_id}"
        f"&permissions={INVITE_PERMISSIONS}&scope=applications.commands%20bot"
    )


def support_message(settings: Settings) -> str:
    lines = ["🌟 **Need help with the Translation Bot?**", ""]
    if settings.support_server_url:
        lines.append(f"• Join our Support Server: {settings.support_server_url}")
    if settings.support_contact:
        lines.append(f"• Contact the developer: {settings.support_contact}")
    lines.append(f"• Use `{settings.prefix} [language_code] [text]` or `/translate` to translate text")
    lines += ["", "Our support team is always ready to help you!"]
    return "\n".join(lines)


def invite_message(client_id: int) -> str:
    return (
        "🎉 **Invite Translation Bot to your server!**\n\n"
        f"[Click here to invite the bot]({invite_url(client_id)})\n\n"
        "The bot needs the following permissions:\n"
        "• Send Messages\n"
        "• Read Messages/View Channels\n"
        "• Use Application Commands\n\n"
        "Thank you for using Translation Bot! 🌍"
    )


class TranslationCog(commands.Cog):
    """Slash command, message context menu, picker buttons and the legacy prefix command"""

    def __init__(self, bot: commands.Bot, dispatcher: TranslationDispatcher, settings: Settings):
        self.bot = bot
        self.dispatcher = dispatcher
        self.settings = settings
        # Context menus can't be declared as cog methods
        self.translate_message_menu = app_commands.ContextMenu(
            name="Translate Message", callback=self.translate_message
        )
        self.bot.tree.add_command(self.translate_message_menu)

    async def cog_unload(self):
        self.bot.tree.remove_command(self.translate_message_menu.name, type=self.translate_message_menu.type)

    @app_commands.command(name="translate", description="Translate text to another language")
    @app_commands.describe(language="Target language", text="Text to translate")
    @app_commands.choices(language=[app_commands.Choice(name=lang.label, value=lang.code) for lang in LANGUAGES])
    async def translate(self, interaction: discord.Interaction, language: str, text: str):
        await self.dispatcher.handle_translate_command(interaction, language, text)

    async def translate_message(self, interaction: discord.Interaction, message: discord.Message):
        await self.dispatcher.handle_translate_message(interaction, message)

    @app_commands.command(name="support", description="Get support information and join our support server")
    async def support(self, interaction: discord.Interaction):
        await interaction.response.send_message(support_message(self.settings), ephemeral=True)

    @app_commands.command(name="invite", description="Get the bot invitation link")
    async def invite(self, interaction: discord.Interaction):
        client_id = self.bot.application_id or self.bot.user.id
        await interaction.response.send_message(invite_message(client_id), ephemeral=True)

    @commands.Cog.listener()
    async def on_interaction(self, interaction: discord.Interaction):
        if interaction.type is not discord.InteractionType.component:
            return
        await self.dispatcher.handle_component(interaction)

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message):
        await self.dispatcher.handle_prefix_message(message)


async def setup(bot) -> None:
    await bot.add_cog(TranslationCog(bot, bot.dispatcher, bot.settings))
