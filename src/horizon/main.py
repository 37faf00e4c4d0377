"""
Horizon Discord Bot
===================

Community bot for the Horizon server: swear filter and flagged-message
review, reaction roles, e-class subscriptions and PDF merging.
"""

import os
import sys
from pathlib import Path

def resolve_base_dir() -> Path:
    """Determine the base directory of the project.

    Resolution order:
    1. HORIZON_HOME environment variable, if set.
    2. If running in a frozen context (e.g., PyInstaller), the executable's directory.
    3. Otherwise, the repository root (grandparent of the package directory).
    """
    if env_home := os.getenv("HORIZON_HOME"):
        return Path(env_home).resolve()

    if getattr(sys, "frozen", False):
        return Path(sys.argv[0]).resolve().parent

    return Path(__file__).resolve().parents[2]

BASE_DIR = resolve_base_dir()
os.chdir(BASE_DIR)

import asyncio
import discord
from dotenv import load_dotenv

from horizon.bot.session import BotSession
from horizon.database.database import get_db
from horizon.util.logger import get_logger, handle_exception


logger = get_logger("main")


def load_environment() -> str:
    """Load environment variables and return the Discord bot token.

    Raises
    ------
    SystemExit
        If the required ``DISCORD_BOT_TOKEN`` variable is missing.
    """
    load_dotenv(dotenv_path=BASE_DIR / ".env")
    token = os.getenv("DISCORD_BOT_TOKEN")
    if not token:
        logger.critical("'DISCORD_BOT_TOKEN' environment variable not set. Bot cannot start.")
        sys.exit(1)
    return token


def build_intents() -> discord.Intents:
    """Intents for guild messages (with content), reactions and members."""
    intents = discord.Intents.default()
    intents.message_content = True
    intents.guilds = True
    intents.messages = True
    intents.reactions = True
    intents.members = True
    return intents


def load_cogs(discord_bot_instance: discord.Bot, session: BotSession) -> None:
    """Register all cogs with the bot."""
    from horizon.bot.cogs import events_listener, general_cmds, message_listener, reaction_listener, setup_cmds

    events_listener.setup(discord_bot_instance, session)
    message_listener.setup(discord_bot_instance, session)
    reaction_listener.setup(discord_bot_instance, session)
    setup_cmds.setup(discord_bot_instance, session)
    general_cmds.setup(discord_bot_instance)

    logger.info("All cogs loaded successfully.")


def create_bot() -> tuple[discord.Bot, BotSession]:
    """Instantiate the bot and its session, and register all cogs."""
    bot = discord.Bot(intents=build_intents())
    session = BotSession.create(bot)
    load_cogs(bot, session)
    return bot, session


async def shutdown_runtime(bot: discord.Bot | None = None) -> None:
    """Close the Discord connection and the database."""
    if bot is not None and not bot.is_closed():
        try:
            await bot.close()
        except Exception as exc:
            logger.exception("Error while closing the Discord bot: %s", exc)

    await get_db().shutdown()
    logger.info("Shutdown complete.")


async def async_main() -> int:
    """Bootstrap the database and the bot, returning an exit code."""
    token = load_environment()

    logger.info("Initializing database...")
    if not await get_db().initialize():
        logger.critical("Failed to initialize database, bot cannot start.")
        return 1

    try:
        bot, _session = create_bot()
    except Exception as exc:
        logger.critical("Failed to initialize Discord bot: %s", exc)
        await shutdown_runtime()
        return 1

    exit_code = 0
    logger.info("Attempting to connect to Discord…")
    try:
        await bot.start(token)
    except asyncio.CancelledError:
        logger.info("Discord bot start cancelled; shutting down")
    except discord.LoginFailure as exc:
        logger.critical("Discord rejected the bot token: %s", exc)
        exit_code = 1
    except Exception as exc:
        logger.critical("Discord bot runtime error: %s", exc)
        exit_code = 1
    finally:
        await shutdown_runtime(bot)

    return exit_code


def main() -> int:
    """Entrypoint running the bot and returning the process exit code."""
    sys.excepthook = handle_exception
    logger.info("Starting Horizon…")
    try:
        return asyncio.run(async_main())
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user.")
        return 0
    except SystemExit as exit_exc:
        code = exit_exc.code
        if isinstance(code, int):
            return code
        return 1


if __name__ == "__main__":
    sys.exit(main())
