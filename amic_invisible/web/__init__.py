from __future__ import annotations

from aiohttp import web

from amic_invisible.services.game_flow import GameContext
from amic_invisible.web.handlers import index_handler, personal_link_handler
from amic_invisible.web.keys import CONTEXT_KEY, TEMPLATES_KEY
from amic_invisible.web.templates import Templates


def create_app(context: GameContext, templates: Templates) -> web.Application:
    app = web.Application()
    app[CONTEXT_KEY] = context
    app[TEMPLATES_KEY] = templates

    app.router.add_get("/", index_handler)
    app.router.add_get(f"/{context.link_path_prefix}/{{link_id}}", personal_link_handler)
    return app


__all__ = ["CONTEXT_KEY", "TEMPLATES_KEY", "create_app"]
