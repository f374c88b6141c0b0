from __future__ import annotations

from aiohttp import web
from loguru import logger

from amic_invisible.services import lookup
from amic_invisible.web.keys import CONTEXT_KEY, TEMPLATES_KEY
from amic_invisible.web.templates import render_assignment, render_error
from amic_invisible.web.utils import log_handler_exception

WRONG_LINK = "T'has equivocat de link! Torna a mirar el missatge del WhatsApp."
INVALID_LINK = "Aquest link no és vàlid. Assegura't de copiar-lo sencer!"
NOT_STARTED = "El joc encara no ha sigut inicialitzat."
ASSIGNMENTS_PENDING = "Les assignacions encara no estan preparades."
ASSIGNMENT_MISSING = "No hem trobat la teua assignació. Contacta amb l'organitzador."
LOOKUP_FAILED = "Hi ha hagut un error buscant les dades."

UNINITIALIZED_MESSAGES = {
    lookup.UninitializedState.NOT_STARTED: NOT_STARTED,
    lookup.UninitializedState.ASSIGNMENTS_PENDING: ASSIGNMENTS_PENDING,
}


def error_response(request: web.Request, message: str) -> web.Response:
    html = render_error(request.app[TEMPLATES_KEY].error, message)
    return web.Response(text=html, status=400, content_type="text/html")


async def index_handler(request: web.Request) -> web.Response:
    return error_response(request, WRONG_LINK)


async def personal_link_handler(request: web.Request) -> web.Response:
    link_id = request.match_info["link_id"]
    context = request.app[CONTEXT_KEY]
    logger.bind(link_id=link_id).debug("Request for id: {link_id}", link_id=link_id)

    try:
        resolution = lookup.resolve_link(context.store, context.directory, link_id)
    except lookup.UninitializedState as exc:
        return error_response(request, UNINITIALIZED_MESSAGES[exc.reason])
    except lookup.InvalidLink:
        return error_response(request, INVALID_LINK)
    except lookup.AssignmentMissing:
        logger.bind(link_id=link_id).warning("No assignment stored for a known link")
        return error_response(request, ASSIGNMENT_MISSING)
    except lookup.DataIntegrityError as exc:
        logger.bind(link_id=link_id, token=exc.token).error(
            "Stored hash {token} does not match any configured participant", token=exc.token
        )
        return error_response(request, LOOKUP_FAILED)
    except Exception as exc:
        log_handler_exception("personal_link", link_id, exc)
        return error_response(request, LOOKUP_FAILED)

    html = render_assignment(
        request.app[TEMPLATES_KEY].assignment,
        self_name=resolution.self_name,
        target_name=resolution.target_name,
    )
    return web.Response(text=html, content_type="text/html")
