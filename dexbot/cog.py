"""Discord commands that expose the daily species roll."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Union

import discord
from discord import app_commands
from discord.ext import commands

from .handler import DexHandler
from .interactions import InteractionContextAdapter
from .models import DexAssignment, DexReply, TriggerCommand
from .rendering import build_assignment_message, still_assigned_text
from .triggers import parse_trigger
from .utils import member_profile_name

logger = logging.getLogger("dexbot.cog")

DexContext = Union[commands.Context, InteractionContextAdapter]


class DexCog(commands.Cog):
    """Hands out one species per user per rotation window."""

    def __init__(
        self,
        bot: commands.Bot,
        handler: DexHandler,
        *,
        allowed_channel_ids: Optional[Iterable[int]] = None,
        keyword: Optional[str] = None,
        error_channel_id: int = 0,
    ):
        self.bot = bot
        self.handler = handler
        self.allowed_channel_ids = frozenset(allowed_channel_ids or ())
        self.keyword = (keyword or "").strip() or None
        self.error_channel_id = error_channel_id

    #
    # Channel guard
    #
    def is_allowed_channel(self, channel: Optional[discord.abc.Messageable]) -> bool:
        if not self.allowed_channel_ids:
            return True
        channel_id = getattr(channel, "id", None)
        if channel_id in self.allowed_channel_ids:
            return True
        if isinstance(channel, discord.Thread):
            return channel.parent_id in self.allowed_channel_ids
        return False

    def channel_hint(self) -> str:
        mentions = [f"<#{channel_id}>" for channel_id in sorted(self.allowed_channel_ids)]
        if len(mentions) == 1:
            return f"The dex only answers in {mentions[0]}."
        return f"The dex only answers in {', '.join(mentions[:-1])}, or {mentions[-1]}."

    #
    # Delivery
    #
    async def deliver(self, ctx: DexContext, reply: DexReply) -> bool:
        """Send one reply; failures are reported, never retried."""
        try:
            if isinstance(reply, DexAssignment):
                content, embed = build_assignment_message(reply)
                await ctx.send(
                    content=content,
                    embed=embed,
                    allowed_mentions=discord.AllowedMentions(everyone=False, roles=False, users=True),
                )
            else:
                await ctx.reply(
                    still_assigned_text(reply),
                    mention_author=False,
                    allowed_mentions=discord.AllowedMentions(everyone=False, roles=False, users=True),
                )
        except discord.HTTPException as exc:
            logger.warning(
                "Failed to deliver dex reply (%s) to user %s: %s",
                reply.species_name,
                reply.requester_id,
                exc,
            )
            await self._report_delivery_failure(ctx, reply, exc)
            return False
        return True

    async def _report_delivery_failure(self, ctx: DexContext, reply: DexReply, exc: Exception) -> None:
        if self.error_channel_id <= 0:
            return
        channel = self.bot.get_channel(self.error_channel_id)
        if not isinstance(channel, discord.abc.Messageable):
            logger.warning("Error channel %s is not available.", self.error_channel_id)
            return
        origin = getattr(ctx.channel, "id", "unknown")
        try:
            await channel.send(
                f"Couldn't deliver a dex reply to {reply.requester_mention} in <#{origin}> "
                f"(they are still recorded as {reply.species_name}): {exc}",
                allowed_mentions=discord.AllowedMentions.none(),
            )
        except discord.HTTPException as report_exc:
            logger.error("Failed to report delivery failure to channel %s: %s", self.error_channel_id, report_exc)

    async def _run(self, ctx: DexContext, trigger: TriggerCommand) -> None:
        if not self.is_allowed_channel(ctx.channel):
            logger.debug("Dex request from %s blocked in channel %s", trigger.user_id, trigger.channel_id)
            await ctx.reply(self.channel_hint(), mention_author=False)
            return
        reply = await self.handler.handle(trigger)
        await self.deliver(ctx, reply)

    #
    # Commands
    #
    @commands.command(name="pokeme")
    async def pokeme_command(self, ctx: commands.Context) -> None:
        """Find out which Pokemon you are today."""
        author = ctx.author
        trigger = parse_trigger(
            ctx.message.content,
            author_id=author.id,
            display_name=member_profile_name(author),
            mention=author.mention,
            channel_id=getattr(ctx.channel, "id", None),
            prefix=ctx.prefix or "",
            command=ctx.invoked_with or "pokeme",
            author_is_bot=author.bot,
        )
        if not isinstance(trigger, TriggerCommand):
            logger.debug("Ignoring pokeme invocation: %s", trigger.reason)
            return
        await self._run(ctx, trigger)

    @app_commands.command(name="pokeme", description="Find out which Pokemon you are today.")
    async def slash_pokeme(self, interaction: discord.Interaction) -> None:
        ctx = InteractionContextAdapter(interaction, bot=self.bot)
        user = interaction.user
        trigger = TriggerCommand(
            user_id=user.id,
            display_name=member_profile_name(user),
            mention=user.mention,
            channel_id=interaction.channel_id,
        )
        await self._run(ctx, trigger)

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        if self.keyword is None:
            return
        prefixes = await self.bot.get_prefix(message)
        if isinstance(prefixes, str):
            prefixes = [prefixes]
        if any(prefix and message.content.startswith(prefix) for prefix in prefixes):
            # Prefixed commands go through the command framework.
            return
        trigger = parse_trigger(
            message.content,
            author_id=message.author.id,
            display_name=member_profile_name(message.author),
            mention=message.author.mention,
            channel_id=message.channel.id,
            prefix="",
            keyword=self.keyword,
            author_is_bot=message.author.bot,
        )
        if not isinstance(trigger, TriggerCommand):
            return
        ctx = await self.bot.get_context(message)
        await self._run(ctx, trigger)


async def add_dex_cog(
    bot: commands.Bot,
    handler: DexHandler,
    *,
    allowed_channel_ids: Optional[Iterable[int]] = None,
    keyword: Optional[str] = None,
    error_channel_id: int = 0,
) -> DexCog:
    cog = DexCog(
        bot,
        handler,
        allowed_channel_ids=allowed_channel_ids,
        keyword=keyword,
        error_channel_id=error_channel_id,
    )
    await bot.add_cog(cog)
    logger.info(
        "Dex cog enabled (channels=%s, keyword=%s)",
        ", ".join(str(cid) for cid in sorted(cog.allowed_channel_ids)) or "any",
        cog.keyword or "none",
    )
    return cog


__all__ = ["DexCog", "add_dex_cog"]
