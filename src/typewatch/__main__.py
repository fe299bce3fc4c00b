import asyncio
import logging
import sys
import time

import discord
from discord.ext import commands
from dotenv import load_dotenv

from typewatch import settings

load_dotenv()

logger = logging.getLogger("typewatch")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _configure_logging() -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    log_file = settings.get_log_file()
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(level=settings.get_log_level(), format=LOG_FORMAT, handlers=handlers)


def _build_bot() -> commands.Bot:
    intents = discord.Intents.none()
    intents.guilds = True
    intents.guild_typing = True
    intents.guild_messages = True
    intents.message_content = True
    bot = commands.Bot(command_prefix=commands.when_mentioned, intents=intents, help_command=None)

    @bot.event
    async def on_ready():
        logger.info("Ready! Logged in as %s (ID: %s)", bot.user, bot.user.id)

    return bot


async def main(token: str) -> None:
    bot = _build_bot()
    async with bot:
        await bot.load_extension("typewatch.cogs.typing_tracker")
        logger.info("starting bot")
        await bot.start(token)


def run() -> None:
    _configure_logging()
    logger.info("Started logging")

    token = settings.get_token()
    if token is None:
        logger.error("No Discord token specified!")
        sys.exit(1)

    # Robust launcher: retry on transient connect errors (e.g., gateway timeouts)
    while True:
        try:
            asyncio.run(main(token))
            break  # Normal exit
        except discord.LoginFailure:
            logger.error("Discord rejected the token; not retrying")
            sys.exit(1)
        except Exception as e:  # noqa: BLE001
            logger.exception("Bot crashed during startup/connect; retrying in 5s: %s", e)
            time.sleep(5)


if __name__ == "__main__":
    run()
