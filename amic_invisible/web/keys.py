from aiohttp import web

from amic_invisible.services.game_flow import GameContext
from amic_invisible.web.templates import Templates

CONTEXT_KEY = web.AppKey("context", GameContext)
TEMPLATES_KEY = web.AppKey("templates", Templates)
