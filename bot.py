import logging
import os
import sys
from pathlib import Path
from typing import Optional

import discord
from discord.ext import commands
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

logging.basicConfig(
    level=os.getenv("DEXBOT_LOG_LEVEL", "INFO"),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("dexbot")

from dexbot.catalog import ENGLISH_LANGUAGE_ID, load_catalog
from dexbot.checkpoint import DEFAULT_RESET_HOUR, next_checkpoint
from dexbot.cog import DexCog, add_dex_cog
from dexbot.errors import DexError
from dexbot.handler import DexHandler, create_handler
from dexbot.override import (
    DEFAULT_OVERRIDE_DAY,
    DEFAULT_OVERRIDE_MONTH,
    DEFAULT_OVERRIDE_SPECIES_ID,
    DateOverride,
    parse_override_date,
)
from dexbot.utils import int_from_env, parse_channel_ids, path_from_env


DISCORD_TOKEN = os.getenv("DISCORD_TOKEN")
DEXBOT_PREFIX = os.getenv("DEXBOT_PREFIX", "!")
DEXBOT_KEYWORD = os.getenv("DEXBOT_KEYWORD", "").strip()
DEXBOT_DATA_DIR = path_from_env("DEXBOT_DATA_DIR") or (BASE_DIR / "pokedex")
DEXBOT_LANGUAGE_ID = int_from_env("DEXBOT_LANGUAGE_ID", ENGLISH_LANGUAGE_ID)
DEXBOT_RESET_HOUR = int_from_env("DEXBOT_RESET_HOUR", DEFAULT_RESET_HOUR)
DEXBOT_OVERRIDE_DATE = os.getenv(
    "DEXBOT_OVERRIDE_DATE",
    f"{DEFAULT_OVERRIDE_MONTH:02d}-{DEFAULT_OVERRIDE_DAY:02d}",
)
DEXBOT_OVERRIDE_SPECIES_ID = int_from_env("DEXBOT_OVERRIDE_SPECIES_ID", DEFAULT_OVERRIDE_SPECIES_ID)
DEXBOT_CHANNEL_IDS = parse_channel_ids(os.getenv("DEXBOT_CHANNEL_IDS", ""))
DEXBOT_ERROR_CHANNEL_ID = int_from_env("DEXBOT_ERROR_CHANNEL_ID", 0)

intents = discord.Intents.default()
intents.message_content = True

HANDLER: Optional[DexHandler] = None
DEX_COG: Optional[DexCog] = None


class DexBot(commands.Bot):
    async def setup_hook(self) -> None:
        await setup_bot_extensions()


bot = DexBot(command_prefix=DEXBOT_PREFIX, intents=intents)


def _build_override() -> Optional[DateOverride]:
    parsed = parse_override_date(DEXBOT_OVERRIDE_DATE)
    if parsed is None:
        return None
    month, day = parsed
    return DateOverride(month=month, day=day, species_id=DEXBOT_OVERRIDE_SPECIES_ID)


def build_handler() -> DexHandler:
    startup_logger = logging.getLogger("dexbot.startup")
    startup_logger.info("Processing CSV files in %s....", DEXBOT_DATA_DIR)
    catalog = load_catalog(DEXBOT_DATA_DIR, language_id=DEXBOT_LANGUAGE_ID)
    handler = create_handler(
        catalog,
        reset_hour=DEXBOT_RESET_HOUR,
        override=_build_override(),
    )
    startup_logger.info("Done processing CSV files. Connecting to discord.")
    return handler


async def setup_bot_extensions() -> None:
    global DEX_COG
    if HANDLER is None:
        raise RuntimeError("Dex handler not configured. Call build_handler first.")
    DEX_COG = await add_dex_cog(
        bot,
        HANDLER,
        allowed_channel_ids=DEXBOT_CHANNEL_IDS,
        keyword=DEXBOT_KEYWORD,
        error_channel_id=DEXBOT_ERROR_CHANNEL_ID,
    )
    try:
        await bot.tree.sync()
    except discord.HTTPException as exc:
        logger.warning("Failed to sync application commands: %s", exc)


@bot.event
async def on_ready():
    logger.info("Logged in as %s (id=%s)", bot.user, bot.user.id if bot.user else "unknown")
    if HANDLER is not None:
        logger.info(
            "Current rotation started %s; next reset at %s.",
            HANDLER.ledger.epoch.isoformat(),
            next_checkpoint(HANDLER.clock(), reset_hour=HANDLER.reset_hour).isoformat(),
        )
    if DEXBOT_CHANNEL_IDS:
        logger.info("Dex channels: %s", ", ".join(str(cid) for cid in sorted(DEXBOT_CHANNEL_IDS)))
    else:
        logger.info("Dex answers in every channel it can read.")


@bot.event
async def on_command_error(ctx: commands.Context, error: commands.CommandError):
    if isinstance(error, commands.CommandNotFound):
        return
    logger.error(
        "Command %s failed for %s: %s",
        getattr(ctx.command, "qualified_name", "unknown"),
        getattr(ctx.author, "id", "unknown"),
        error,
        exc_info=error,
    )


def main():
    global HANDLER
    if not DISCORD_TOKEN:
        raise RuntimeError("DISCORD_TOKEN is not set.")
    try:
        HANDLER = build_handler()
    except (DexError, ValueError) as exc:
        logging.getLogger("dexbot.startup").error("Startup aborted: %s", exc)
        raise SystemExit(1) from exc
    bot.run(DISCORD_TOKEN)


if __name__ == "__main__":
    main()
