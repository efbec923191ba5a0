"""Classify incoming chat messages into dex triggers."""

from __future__ import annotations

from typing import Optional

from .models import Trigger, TriggerCommand, Unrecognized


def parse_trigger(
    content: str,
    *,
    author_id: int,
    display_name: str,
    mention: str,
    channel_id: Optional[int] = None,
    prefix: str = "!",
    command: str = "pokeme",
    keyword: Optional[str] = None,
    author_is_bot: bool = False,
) -> Trigger:
    if author_is_bot:
        return Unrecognized("bot author")
    text = (content or "").strip()
    if not text:
        return Unrecognized("empty message")

    trigger = TriggerCommand(
        user_id=author_id,
        display_name=display_name,
        mention=mention,
        channel_id=channel_id,
    )
    if prefix and text.startswith(prefix):
        invoked = text[len(prefix):].split(None, 1)
        if invoked and invoked[0].lower() == command.lower():
            return trigger
        return Unrecognized("other command")
    if keyword and keyword.strip() and keyword.strip().lower() in text.lower():
        return trigger
    return Unrecognized("no trigger")


__all__ = ["parse_trigger"]
