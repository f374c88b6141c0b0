from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import List, Optional, Sequence

from loguru import logger

from amic_invisible.core.config import ConfigurationError, GameConfig, validate_game_config
from amic_invisible.services.assignment import build_circle, is_single_cycle, shuffle
from amic_invisible.services.hashing import hash_name
from amic_invisible.services.lookup import ParticipantDirectory
from amic_invisible.services.notifier import Delivery, NotificationReport, Notifier
from amic_invisible.storage import Assignment, CorruptRecordError, DataStore, LinkEntry


@dataclass(frozen=True)
class GameContext:
    config: GameConfig
    store: DataStore
    directory: ParticipantDirectory
    public_url: str
    link_path_prefix: str


@dataclass(frozen=True)
class Initialization:
    links: List[LinkEntry]
    assignments_created: bool


@dataclass(frozen=True)
class GenerationResult:
    links: List[LinkEntry]
    assignments: List[Assignment]
    report: Optional[NotificationReport]


def build_link_url(public_url: str, link_path_prefix: str, link_id: str) -> str:
    return f"{public_url.rstrip('/')}/{link_path_prefix.strip('/')}/{link_id}"


def initialize_once(store: DataStore, tokens: Sequence[str], assignments: Sequence[Assignment]) -> Initialization:
    """Persist links and assignments, each only if its record is still absent.

    The links returned are the stored ones, which may predate this call. The
    assignment record is only written once the stored links have been read
    back, so a damaged links record leaves the game regenerable.
    """
    if store.links.exists():
        logger.debug("Links record already exists, keeping it")
    else:
        entries = [LinkEntry(id=str(uuid.uuid4()), person=token) for token in tokens]
        if store.save_links(entries):
            logger.debug("Links saved to {path}", path=store.links.path)

    links = store.load_links() or []

    created = False
    if store.assignments.exists():
        logger.debug("Assignments record already exists, keeping it")
    elif store.save_assignments(assignments):
        created = True
        logger.debug("Assignments saved to {path}", path=store.assignments.path)
    else:
        logger.info("Another process stored the assignments first")

    return Initialization(links=links, assignments_created=created)


def build_deliveries(context: GameContext, links: Sequence[LinkEntry]) -> List[Delivery]:
    deliveries = []
    for entry in links:
        person = context.directory.find(entry.person)
        if person is None:
            logger.bind(token=entry.person).error("No participant found for hash {token}", token=entry.person)
            continue
        url = build_link_url(context.public_url, context.link_path_prefix, entry.id)
        deliveries.append(Delivery(name=person.name, phone=person.phone, url=url))
    return deliveries


def generate_game(context: GameContext, notifier: Notifier, seed: Optional[int] = None) -> GenerationResult:
    validate_game_config(context.config)

    people = shuffle(context.config.people, seed=seed)
    tokens = [hash_name(person.name) for person in people]
    assignments = build_circle(tokens)

    logger.debug("Total participants: {count}", count=len(tokens))
    logger.debug("Total assignments: {count}", count=len(assignments))

    initialization = initialize_once(context.store, tokens, assignments)

    # only the process that wrote the assignments notifies
    report = None
    if initialization.assignments_created:
        report = notifier.notify_all(build_deliveries(context, initialization.links))

    return GenerationResult(
        links=initialization.links,
        assignments=context.store.load_assignments() or [],
        report=report,
    )


def bootstrap(context: GameContext, notifier: Notifier, seed: Optional[int] = None) -> Optional[GenerationResult]:
    """Run the one-time generation when no assignment record exists yet.

    Any failure here is logged and leaves the game as it is on disk; the web
    server keeps serving regardless.
    """
    result = None
    try:
        if context.store.assignments.exists():
            logger.info("Assignments already exist in {path}, skipping generation", path=context.store.data_dir)
            if not is_single_cycle(context.store.load_assignments() or []):
                logger.warning("Stored assignments do not form a single gift circle")
        else:
            result = generate_game(context, notifier, seed=seed)
    except ConfigurationError as exc:
        logger.error("Cannot start the Secret Santa: {error}", error=str(exc))
    except Exception as exc:
        logger.bind(data_dir=str(context.store.data_dir)).exception(
            "Secret Santa generation failed: {error}", error=str(exc)
        )

    dump_links(context)
    return result


def dump_links(context: GameContext) -> List[str]:
    try:
        links = context.store.load_links()
    except (CorruptRecordError, OSError) as exc:
        logger.bind(path=str(context.store.links.path)).exception(
            "Cannot read links: {error}", error=str(exc)
        )
        return []

    if links is None:
        logger.warning("No links generated yet")
        return []

    rows = []
    for entry in links:
        person = context.directory.find(entry.person)
        if person:
            url = build_link_url(context.public_url, context.link_path_prefix, entry.id)
            rows.append((person.name, person.phone, url))

    rows.sort(key=lambda row: row[0].casefold())
    lines = [f"{name} ({phone or '-'}) {url}" for name, phone, url in rows]
    logger.info(
        "Amic Invisible links:\n{lines}\nTotal: {count} participants",
        lines="\n".join(lines),
        count=len(rows),
    )
    return lines
