from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple

from dotenv import load_dotenv

load_dotenv()

PACKAGE_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "web" / "pages"


class ConfigurationError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    config_file: str
    public_url: str
    host: str
    port: int
    data_dir: str
    link_path_prefix: str
    templates_dir: str
    log_level: str
    log_path: str


@dataclass(frozen=True)
class Participant:
    name: str
    phone: Optional[str] = None


@dataclass(frozen=True)
class TwilioCredentials:
    account_sid: str
    auth_token: str
    from_number: str


@dataclass(frozen=True)
class GameConfig:
    people: Tuple[Participant, ...]
    skip_sms: bool = False
    twilio: Optional[TwilioCredentials] = None


def load_settings() -> Settings:
    config_file = os.getenv("CONFIG_FILE", "./test_config.json")
    public_url = os.getenv("PUBLIC_URL", "http://localhost:3000")
    host = os.getenv("HOST", "0.0.0.0")
    port = os.getenv("PORT", "3000")
    data_dir = os.getenv("DATA_DIR", "./data")
    link_path_prefix = os.getenv("LINK_PATH_PREFIX", "qui-hem-toca-a-mi").strip("/")
    templates_dir = os.getenv("TEMPLATES_DIR", str(PACKAGE_TEMPLATES_DIR))
    log_level = os.getenv("LOG_LEVEL", "INFO")
    log_path = os.getenv("LOG_PATH", "logs/amic_invisible.log")

    if not port.isdigit():
        raise ValueError(f"PORT must be a number, got {port!r}.")
    if not link_path_prefix:
        raise ValueError("LINK_PATH_PREFIX must not be empty.")

    return Settings(
        config_file=config_file,
        public_url=public_url.rstrip("/"),
        host=host,
        port=int(port),
        data_dir=data_dir,
        link_path_prefix=link_path_prefix,
        templates_dir=templates_dir,
        log_level=log_level,
        log_path=log_path,
    )


def _parse_participant(raw: Any) -> Participant:
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Each person must be an object, got {raw!r}.")
    name = str(raw.get("name") or "").strip()
    phone = str(raw.get("phone") or "").strip() or None
    return Participant(name=name, phone=phone)


def _parse_twilio(raw: Any) -> Optional[TwilioCredentials]:
    if not raw:
        return None
    if not isinstance(raw, dict):
        raise ConfigurationError("The twilio section must be an object.")
    return TwilioCredentials(
        account_sid=str(raw.get("accountSid") or ""),
        auth_token=str(raw.get("authToken") or ""),
        from_number=str(raw.get("fromNumber") or ""),
    )


def parse_game_config(raw: Any) -> GameConfig:
    if not isinstance(raw, dict):
        raise ConfigurationError("The config file must contain a JSON object.")

    people = raw.get("people") or []
    if not isinstance(people, list):
        raise ConfigurationError("The people entry must be a list.")

    return GameConfig(
        people=tuple(_parse_participant(person) for person in people),
        skip_sms=bool(raw.get("skipSms", False)),
        twilio=_parse_twilio(raw.get("twilio")),
    )


def load_game_config(path: str) -> GameConfig:
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigurationError(f"Config file {path} does not exist.") from exc
    except OSError as exc:
        raise ConfigurationError(f"Config file {path} cannot be read: {exc}") from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Config file {path} is not valid UTF-8 JSON: {exc}") from exc
    return parse_game_config(raw)


def validate_game_config(config: GameConfig) -> None:
    """Reject configurations the assignment circle cannot be built from.

    Phone numbers are only required when messages are really sent.
    """
    if len(config.people) < 2:
        raise ConfigurationError("At least 2 people are required for the Secret Santa.")

    if any(not person.name for person in config.people):
        raise ConfigurationError('Every person needs a "name".')

    if not config.skip_sms and any(not person.phone for person in config.people):
        raise ConfigurationError('Every person needs a "phone" when SMS delivery is enabled.')

    seen = set()
    duplicates = set()
    for person in config.people:
        if person.name in seen:
            duplicates.add(person.name)
        seen.add(person.name)
    if duplicates:
        raise ConfigurationError("Duplicate names in config: " + ", ".join(sorted(duplicates)))

    if not config.skip_sms:
        twilio = config.twilio
        if not twilio or not (twilio.account_sid and twilio.auth_token and twilio.from_number):
            raise ConfigurationError(
                "Twilio credentials (accountSid, authToken, fromNumber) are required "
                "unless skipSms is true."
            )
