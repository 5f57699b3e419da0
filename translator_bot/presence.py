from typing import Iterable

import discord


def presence_text(guilds: Iterable[discord.Guild]) -> str:
    guilds = list(guilds)
    user_count = sum(guild.member_count or 0 for guild in guilds)
    return f"{len(guilds)} servers | {user_count} users"


def build_activity(guilds: Iterable[discord.Guild]) -> discord.Activity:
    return discord.Activity(type=discord.ActivityType.watching, name=presence_text(guilds))
