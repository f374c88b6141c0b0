from __future__ import annotations

from loguru import logger


def log_handler_exception(action: str, link_id: str | None, error: Exception) -> None:
    logger.bind(action=action, link_id=link_id).exception(
        "Handler error: {error}", error=str(error)
    )
