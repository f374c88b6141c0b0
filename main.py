from __future__ import annotations

import asyncio

import uvloop
from aiohttp import web
from loguru import logger

from amic_invisible.core.config import ConfigurationError, GameConfig, Settings, load_game_config, load_settings
from amic_invisible.core.logging import setup_logging
from amic_invisible.services import game_flow
from amic_invisible.services.game_flow import GameContext
from amic_invisible.services.lookup import ParticipantDirectory
from amic_invisible.services.notifier import Notifier, build_sender
from amic_invisible.storage import DataStore
from amic_invisible.web import CONTEXT_KEY, create_app
from amic_invisible.web.templates import load_templates


def load_context(settings: Settings) -> GameContext:
    try:
        config = load_game_config(settings.config_file)
    except ConfigurationError as exc:
        logger.error("Could not load config: {error}", error=str(exc))
        config = GameConfig(people=())

    logger.debug("Total people in config: {count}", count=len(config.people))

    return GameContext(
        config=config,
        store=DataStore(settings.data_dir),
        directory=ParticipantDirectory(config.people),
        public_url=settings.public_url,
        link_path_prefix=settings.link_path_prefix,
    )


async def on_startup(app: web.Application) -> None:
    logger.info("server starting...")

    context = app[CONTEXT_KEY]
    notifier = Notifier(build_sender(context.config), dry_run=context.config.skip_sms)
    await asyncio.to_thread(game_flow.bootstrap, context, notifier)


async def on_shutdown(app: web.Application) -> None:
    logger.info("server stopped")


async def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_path)

    app = create_app(load_context(settings), load_templates(settings.templates_dir))
    app.on_startup.append(on_startup)
    app.on_cleanup.append(on_shutdown)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, settings.host, settings.port)
    await site.start()
    logger.info("Listening at http://{host}:{port}", host=settings.host, port=settings.port)

    try:
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()


if __name__ == "__main__":
    uvloop.run(main())
