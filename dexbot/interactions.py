"""Adapters for reusing command delivery with Discord interactions."""

from __future__ import annotations

from typing import Optional

import discord


class InteractionContextAdapter:
    """Minimal commands.Context-like adapter for slash interactions."""

    def __init__(self, interaction: discord.Interaction, *, bot: Optional[discord.Client] = None):
        self.interaction = interaction
        self.guild = interaction.guild
        self.channel = interaction.channel
        self.author = interaction.user
        self.bot = bot or interaction.client

    async def reply(self, *args, **kwargs):
        kwargs.pop("mention_author", None)
        kwargs.pop("reference", None)
        if not self.interaction.response.is_done():
            await self.interaction.response.defer()
        return await self.interaction.followup.send(*args, wait=True, **kwargs)

    async def send(self, *args, **kwargs):
        return await self.reply(*args, **kwargs)

    def __repr__(self) -> str:
        return f"<InteractionContextAdapter guild={getattr(self.guild, 'id', None)} user={getattr(self.author, 'id', None)}>"


__all__ = ["InteractionContextAdapter"]
