"""Discord message rendering for dex replies."""

from __future__ import annotations

from typing import Tuple

import discord

from .models import DexAssignment, StillAssigned
from .utils import utc_now

DEX_EMBED_COLOR = 0xE3350D


def build_assignment_message(payload: DexAssignment) -> Tuple[str, discord.Embed]:
    """Return the message content and embed announcing a fresh assignment."""
    content = (
        f"**{payload.requester_mention}**:\n"
        f"You are a **{payload.species_name}** (#{payload.padded_id})!"
    )
    embed = discord.Embed(
        title=f"The {payload.genus}" if payload.genus else None,
        description=payload.flavor_text,
        color=DEX_EMBED_COLOR,
        timestamp=utc_now(),
    )
    embed.set_image(url=payload.image_url)
    return content, embed


def still_assigned_text(payload: StillAssigned) -> str:
    """Name the requester in front of the notice, as a plain-text reply."""
    return f"{payload.requester_mention}: {payload.message}"


__all__ = ["DEX_EMBED_COLOR", "build_assignment_message", "still_assigned_text"]
